"""
Generic CRUD engine.

Concrete repositories subclass CrudRepository, attach statement text with
the ``sql`` decorator, and implement the three row-mapping hooks.
"""

from peopledb.crud.directive import Directive, sql
from peopledb.crud.identity import get_identity, identity_field, set_identity
from peopledb.crud.operation import CrudOperation
from peopledb.crud.repository import CrudRepository
from peopledb.crud.resolver import StatementResolver

__all__ = [
    "CrudOperation",
    "CrudRepository",
    "Directive",
    "StatementResolver",
    "get_identity",
    "identity_field",
    "set_identity",
    "sql",
]
