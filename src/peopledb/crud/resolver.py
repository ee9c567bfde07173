from functools import lru_cache
from typing import Callable

from peopledb.crud.directive import declared_directives
from peopledb.crud.operation import CrudOperation


@lru_cache(maxsize=None)
def find_directive(repository_type: type, operation: CrudOperation) -> str | None:
    """Return the first directive statement declared for ``operation``, or None."""
    for directive in declared_directives(repository_type):
        if directive.operation is operation:
            return directive.statement
    return None


class StatementResolver:
    """
    Resolves the SQL text a repository uses for each operation.

    A declared directive always wins. Without one, the default supplier is
    called on every resolution and its result is returned verbatim, empty
    string included. Directives never change after class creation, so the
    directive lookup is cached per (repository type, operation).
    """

    def __init__(self, repository_type: type):
        self.repository_type = repository_type

    def resolve(self, operation: CrudOperation, default_supplier: Callable[[], str]) -> str:
        statement = find_directive(self.repository_type, operation)
        if statement is None:
            return default_supplier()
        return statement
