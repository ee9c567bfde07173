"""
Database connection and statement execution.

Provides connection management for psycopg and the Executor, the
transactional executor every repository runs its statements through.
An Executor wraps exactly one caller-owned connection; it never commits,
rolls back or closes it.

For testing, use set_connection_override() to inject a connection
that will be used instead of creating new ones. This enables
transaction rollback between tests.
"""

import logging
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.rows import dict_row

from peopledb.config import config
from peopledb.exceptions import DataAccessError

logger = logging.getLogger(__name__)

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of creating new ones.

    Used by test fixtures to ensure all database operations run
    within a single transaction that can be rolled back.

    Args:
        conn: The connection to use for all subsequent operations
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Connection Management
# =============================================================================


@contextmanager
def get_connection():
    """
    Context manager for database connections.

    In normal operation:
        - Opens a new connection
        - Commits on successful exit
        - Rolls back on exception
        - Closes connection when done

    With override set (testing):
        - Returns the override connection
        - Does NOT commit, rollback, or close
        - Caller (test fixture) manages the transaction

    Usage:
        with get_connection() as conn:
            repo = PeopleRepository(Executor(conn))
    """
    if _connection_override is not None:
        yield _connection_override
        return

    conn = psycopg.connect(config.database_url)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def get_cursor():
    """
    Context manager for a cursor with dict rows.

    Convenience wrapper for ad hoc SQL outside a repository.

    Usage:
        with get_cursor() as cur:
            cur.execute("SELECT * FROM people")
            rows = cur.fetchall()  # List of dicts
    """
    with get_connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            yield cur


# =============================================================================
# Executor
# =============================================================================


class Executor:
    """
    Runs parameterized statements against a single connection.

    Statements use psycopg's ``%s`` positional placeholders. Every cursor
    is opened in a ``with`` block so it is released on success and failure
    alike. Driver errors surface as DataAccessError.
    """

    def __init__(self, connection: psycopg.Connection):
        self.connection = connection

    @contextmanager
    def _cursor(self, query: str, row_factory=None):
        if not query:
            raise DataAccessError("No statement available to execute", statement=query)
        try:
            with self.connection.cursor(row_factory=row_factory) as cur:
                yield cur
        except psycopg.Error as e:
            raise DataAccessError(str(e), statement=query) from e

    def insert(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        """
        Execute an INSERT and return the first generated-key row.

        The statement is expected to end in a RETURNING clause; without one
        there is nothing to read back and None is returned.
        """
        with self._cursor(query, row_factory=dict_row) as cur:
            cur.execute(query, params)
            logger.debug("Records affected: %d", cur.rowcount)
            if cur.description is None:
                return None
            return cur.fetchone()

    def fetch_one(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        """
        Execute a query and return a single row as dict.

        Returns:
            Dict of column names to values, or None if no row found
        """
        with self._cursor(query, row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchone()

    def fetch_all(self, query: str, params: tuple = None) -> list[dict[str, Any]]:
        """
        Execute a query and return all rows as list of dicts.

        Rows keep the order the store returned them in.
        """
        with self._cursor(query, row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def fetch_scalar(self, query: str, params: tuple = None) -> Any:
        """Execute a query and return the first column of the first row, or None."""
        with self._cursor(query) as cur:
            cur.execute(query, params)
            row = cur.fetchone()
            return row[0] if row else None

    def execute(self, query: str, params: tuple = None) -> int:
        """
        Execute a command and return the number of affected rows.

        Use for UPDATE and DELETE statements.
        """
        with self._cursor(query) as cur:
            cur.execute(query, params)
            return cur.rowcount

    def execute_text(self, query: str) -> int:
        """
        Execute fully rendered statement text with no parameters.

        Only for statements whose values were substituted by the caller,
        such as the id list of a batch delete.
        """
        with self._cursor(query) as cur:
            cur.execute(query)
            return cur.rowcount
