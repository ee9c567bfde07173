from enum import Enum


class CrudOperation(Enum):
    SAVE = "save"
    FIND_BY_ID = "find_by_id"
    FIND_ALL = "find_all"
    COUNT = "count"
    DELETE_ONE = "delete_one"
    DELETE_MANY = "delete_many"
    UPDATE = "update"
