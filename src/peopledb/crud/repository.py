import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Sequence, TypeVar

from peopledb.crud.identity import get_identity, identity_field_name, set_identity
from peopledb.crud.operation import CrudOperation
from peopledb.crud.resolver import StatementResolver
from peopledb.db import Executor
from peopledb.exceptions import DataAccessError, SaveError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CrudRepository(ABC, Generic[T]):
    """
    Generic save/find/count/delete/update for one entity type.

    Subclasses supply the statement text (through ``@sql`` directives or
    by overriding the ``*_sql`` defaults) and map entities to parameters
    and rows back to entities. The executor is caller-owned; this class
    never commits, rolls back or caches anything between calls.
    """

    IDS_PLACEHOLDER = ":ids"

    def __init__(self, executor: Executor):
        self.executor = executor
        self.resolver = StatementResolver(type(self))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def save(self, entity: T) -> T:
        """
        Insert the entity and write the generated identity back into it.

        Returns the same instance. Any failure while binding or executing
        the insert raises SaveError chained to the underlying fault.
        """
        # Fails with ConfigurationError before anything is written
        identity_field_name(type(entity))

        query = self.resolver.resolve(CrudOperation.SAVE, self.save_sql)
        try:
            row = self.executor.insert(query, tuple(self.params_for_save(entity)))
        except Exception as e:
            raise SaveError(entity) from e

        if not row:
            raise SaveError(entity, f"No generated key returned when saving {entity!r}")

        set_identity(entity, next(iter(row.values())))
        logger.info("Saved %r", entity)
        return entity

    def find_by_id(self, entity_id: int) -> Optional[T]:
        """Return the entity with this identity, or None if there is none."""
        query = self.resolver.resolve(CrudOperation.FIND_BY_ID, self.find_by_id_sql)
        row = self.executor.fetch_one(query, (entity_id,))
        if row is None:
            return None
        return self.extract_entity(row)

    def find_all(self) -> list[T]:
        """Return every entity, in the order the statement yields them."""
        query = self.resolver.resolve(CrudOperation.FIND_ALL, self.find_all_sql)
        return [self.extract_entity(row) for row in self.executor.fetch_all(query)]

    def count(self) -> int:
        query = self.resolver.resolve(CrudOperation.COUNT, self.count_sql)
        value = self.executor.fetch_scalar(query)
        return int(value) if value is not None else 0

    def delete(self, *entities: T) -> None:
        """
        Delete one or more saved entities.

        A single entity is deleted with the DELETE_ONE statement. Two or
        more are deleted together by one DELETE_MANY statement whose
        ``:ids`` placeholder is replaced with their comma-joined identities.
        """
        if not entities:
            return
        if len(entities) == 1:
            self._delete_one(entities[0])
        else:
            self._delete_many(entities)

    def update(self, entity: T) -> None:
        """
        Write all non-identity columns of a saved entity.

        The identity is bound after the parameters from params_for_update,
        so the UPDATE statement must end with ``WHERE id = %s``. Matching
        zero rows is not an error.
        """
        entity_id = self._require_identity(entity)
        query = self.resolver.resolve(CrudOperation.UPDATE, self.update_sql)
        params = tuple(self.params_for_update(entity)) + (entity_id,)
        affected = self.executor.execute(query, params)
        if affected == 0:
            logger.debug("Update of %s id=%s matched no rows", type(entity).__name__, entity_id)

    def _delete_one(self, entity: T) -> None:
        entity_id = self._require_identity(entity)
        query = self.resolver.resolve(CrudOperation.DELETE_ONE, self.delete_sql)
        affected = self.executor.execute(query, (entity_id,))
        logger.debug("Records affected: %d", affected)

    def _delete_many(self, entities: Sequence[T]) -> None:
        ids = ",".join(str(self._require_identity(entity)) for entity in entities)
        query = self.resolver.resolve(CrudOperation.DELETE_MANY, self.delete_in_sql)
        if query and self.IDS_PLACEHOLDER not in query:
            raise DataAccessError(
                f"DELETE_MANY statement has no {self.IDS_PLACEHOLDER} placeholder",
                statement=query,
            )
        affected = self.executor.execute_text(query.replace(self.IDS_PLACEHOLDER, ids))
        logger.debug("Records affected: %d", affected)

    @staticmethod
    def _require_identity(entity: T) -> int:
        entity_id = get_identity(entity)
        if entity_id is None:
            raise ValueError(f"{type(entity).__name__} has no identity; save it first")
        return int(entity_id)

    # ------------------------------------------------------------------
    # Default statements, used only when no directive is declared
    # ------------------------------------------------------------------

    def _no_statement(self, operation: CrudOperation) -> str:
        logger.warning(
            "No %s statement declared on %s", operation.name, type(self).__name__
        )
        return ""

    def save_sql(self) -> str:
        """Return an INSERT ending in ``RETURNING id``."""
        return self._no_statement(CrudOperation.SAVE)

    def find_by_id_sql(self) -> str:
        """Return a SELECT with one ``%s`` parameter bound to the identity."""
        return self._no_statement(CrudOperation.FIND_BY_ID)

    def find_all_sql(self) -> str:
        return self._no_statement(CrudOperation.FIND_ALL)

    def count_sql(self) -> str:
        return self._no_statement(CrudOperation.COUNT)

    def delete_sql(self) -> str:
        return self._no_statement(CrudOperation.DELETE_ONE)

    def delete_in_sql(self) -> str:
        """Return a DELETE like ``DELETE FROM people WHERE id IN (:ids)``."""
        return self._no_statement(CrudOperation.DELETE_MANY)

    def update_sql(self) -> str:
        return self._no_statement(CrudOperation.UPDATE)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def params_for_save(self, entity: T) -> Sequence[Any]:
        """Positional parameters for the SAVE statement."""

    @abstractmethod
    def params_for_update(self, entity: T) -> Sequence[Any]:
        """Positional parameters for every UPDATE placeholder except the trailing identity."""

    @abstractmethod
    def extract_entity(self, row: dict[str, Any]) -> T:
        """Build an entity from one result row."""
