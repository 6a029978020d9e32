"""
Base Repository - Learning Scores
learning_scores/repositories/base.py

Base repository class with Snowflake connection management and common utilities.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from learning_scores.core.exceptions import (
    DatabaseConnectionException,
    RepositoryException,
)
from learning_scores.services.snowflake import get_snowflake_connection


class BaseRepository:
    """Base repository with Snowflake connection management."""

    @contextmanager
    def get_connection(self) -> Generator[snowflake.connector.SnowflakeConnection, None, None]:
        """Context manager for Snowflake connections."""
        conn = None
        try:
            conn = get_snowflake_connection()
            yield conn
        except InterfaceError as e:
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}")
        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self, dict_cursor: bool = True) -> Generator[Any, None, None]:
        """Context manager for Snowflake cursors with automatic connection cleanup."""
        with self.get_connection() as conn:
            cursor = conn.cursor(DictCursor) if dict_cursor else conn.cursor()
            try:
                yield cursor
            finally:
                cursor.close()

    def execute_query(
        self,
        sql: str,
        params: Optional[tuple] = None,
        fetch_one: bool = False,
        fetch_all: bool = False,
        commit: bool = False,
    ) -> Optional[Any]:
        """
        Execute a SQL query with error handling.

        Args:
            sql: SQL query string
            params: Query parameters
            fetch_one: Return single row
            fetch_all: Return all rows
            commit: Commit transaction after execution

        Returns:
            Query results or None
        """
        with self.get_cursor() as cursor:
            try:
                cursor.execute(sql, params or ())

                if commit:
                    cursor.connection.commit()

                if fetch_one:
                    return cursor.fetchone()
                elif fetch_all:
                    return cursor.fetchall()

                return cursor.rowcount

            except ProgrammingError as e:
                raise RepositoryException(f"Query error: {e}")
            except DatabaseError as e:
                raise RepositoryException(f"Database error: {e}")

    def row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row (uppercase keys) to lowercase dict."""
        if row is None:
            return {}
        return {k.lower(): v for k, v in row.items()}
