from datetime import datetime, timezone
from typing import Any

from peopledb.crud import CrudOperation, CrudRepository, sql
from peopledb.person.model import Person

SAVE_PERSON_SQL = """
    INSERT INTO people (first_name, last_name, dob, salary)
    VALUES (%s, %s, %s, %s)
    RETURNING id
"""
FIND_BY_ID_SQL = "SELECT * FROM people WHERE id = %s"
FIND_ALL_SQL = "SELECT * FROM people"
SELECT_COUNT_SQL = "SELECT COUNT(*) FROM people"
DELETE_BY_ID_SQL = "DELETE FROM people WHERE id = %s"
DELETE_BY_ID_IN_SQL = "DELETE FROM people WHERE id IN (:ids)"
UPDATE_BY_ID_SQL = """
    UPDATE people
    SET first_name = %s, last_name = %s, dob = %s, salary = %s
    WHERE id = %s
"""


def to_utc_timestamp(dob: datetime) -> datetime:
    """Convert an aware datetime to the naive UTC value stored in people.dob."""
    if dob.tzinfo is None:
        raise ValueError(f"dob must be timezone-aware, got {dob.isoformat()}")
    return dob.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_timestamp(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


class PeopleRepository(CrudRepository[Person]):
    """
    Repository for the people table.

    Statement text is declared on the hooks; the generic engine in
    CrudRepository does the rest.
    """

    @sql(SAVE_PERSON_SQL, CrudOperation.SAVE)
    def params_for_save(self, entity: Person) -> tuple:
        return (
            entity.first_name,
            entity.last_name,
            to_utc_timestamp(entity.dob),
            entity.salary,
        )

    @sql(UPDATE_BY_ID_SQL, CrudOperation.UPDATE)
    def params_for_update(self, entity: Person) -> tuple:
        return (
            entity.first_name,
            entity.last_name,
            to_utc_timestamp(entity.dob),
            entity.salary,
        )

    @sql(FIND_BY_ID_SQL, CrudOperation.FIND_BY_ID)
    @sql(FIND_ALL_SQL, CrudOperation.FIND_ALL)
    @sql(SELECT_COUNT_SQL, CrudOperation.COUNT)
    @sql(DELETE_BY_ID_SQL, CrudOperation.DELETE_ONE)
    @sql(DELETE_BY_ID_IN_SQL, CrudOperation.DELETE_MANY)
    def extract_entity(self, row: dict[str, Any]) -> Person:
        return Person(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            dob=from_utc_timestamp(row["dob"]),
            salary=row["salary"],
        )
