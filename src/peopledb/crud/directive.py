"""
Declarative statement text for repository methods.

A repository attaches SQL to any of its methods with the ``sql`` decorator.
The decorator is stackable, so one method can carry statements for several
operations:

    @sql("SELECT * FROM people WHERE id = %s", CrudOperation.FIND_BY_ID)
    @sql("SELECT COUNT(*) FROM people", CrudOperation.COUNT)
    def extract_entity(self, row): ...
"""

from dataclasses import dataclass
from typing import Callable, Iterator

from peopledb.crud.operation import CrudOperation

DIRECTIVES_ATTR = "__sql_directives__"


@dataclass(frozen=True)
class Directive:
    statement: str
    operation: CrudOperation


def sql(statement: str, operation: CrudOperation) -> Callable:
    """Attach ``statement`` to the decorated method as the SQL for ``operation``."""

    def decorator(func):
        # Decorators apply bottom-up; prepend so source order is kept
        existing = getattr(func, DIRECTIVES_ATTR, ())
        setattr(func, DIRECTIVES_ATTR, (Directive(statement, operation),) + existing)
        return func

    return decorator


def declared_directives(repository_type: type) -> Iterator[Directive]:
    """
    Yield every directive declared on a repository class.

    The most-derived class is scanned first, then its bases in MRO order.
    Within a class, methods are visited in definition order.
    """
    for klass in repository_type.__mro__:
        for member in vars(klass).values():
            func = getattr(member, "__func__", member)
            yield from getattr(func, DIRECTIVES_ATTR, ())
