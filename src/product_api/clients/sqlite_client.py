import logging
import sqlite3
from decimal import Decimal
from sqlite3 import Connection

logger = logging.getLogger(__name__)

# Prices are bound as text so DECIMAL columns keep their exact value on insert
sqlite3.register_adapter(Decimal, str)


class SqliteClient:
    """SQLite database client owning one short-lived connection.

    Meant to be used as a context manager around a single statement so the
    connection is released on every exit path.
    """

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        self._connection = sqlite3.connect(self.connection_string)
        self._connection.row_factory = sqlite3.Row

    @property
    def connection(self) -> Connection:
        """Get the database connection."""
        return self._connection

    def execute_query(self, query: str, params=None) -> list:
        """Execute a query and return all result rows."""
        logger.debug("Executing query: %s", query)
        cursor = self._connection.cursor()
        try:
            cursor.execute(query, params or ())
            return cursor.fetchall()
        finally:
            cursor.close()

    def execute_non_query(self, statement: str, params=None) -> int:
        """Execute a write statement, commit it, and return the affected row count."""
        logger.debug("Executing statement: %s", statement)
        cursor = self._connection.cursor()
        try:
            cursor.execute(statement, params or ())
            self._connection.commit()
            return cursor.rowcount
        finally:
            cursor.close()

    def close(self):
        """Close the database connection."""
        self._connection.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()
        return False
