"""
Exceptions raised by the peopledb data-access layer.

Driver faults are never retried here. They are wrapped in one of these
types and chained with ``raise ... from`` so the original psycopg error
stays available on ``__cause__``.
"""


class PeopleDbError(Exception):
    """Base class for all peopledb errors."""


class ConfigurationError(PeopleDbError):
    """Raised when an entity type does not declare exactly one identity field."""


class DataAccessError(PeopleDbError):
    """Raised when a statement cannot be executed against the store."""

    def __init__(self, message: str, statement: str | None = None):
        self.statement = statement
        super().__init__(message)


class SaveError(PeopleDbError):
    """Raised when an entity could not be inserted."""

    def __init__(self, entity, message: str = None):
        self.entity = entity
        super().__init__(message or f"Tried to save entity: {entity!r}")
