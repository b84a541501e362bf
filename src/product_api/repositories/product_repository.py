"""Data-access gateway for the Products table.

Every operation opens its own connection, runs exactly one parameterized
statement and closes the connection again, whether the statement succeeds
or raises. Store faults (sqlite3.Error) are not caught here.
"""

import logging
from typing import List, Optional

from ..clients import SqliteClient
from ..models import Product, product_from_row

logger = logging.getLogger(__name__)

# SQL statements
CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS Products (
    Id INTEGER PRIMARY KEY AUTOINCREMENT,
    Name TEXT,
    Description TEXT,
    Price DECIMAL(18,2),
    Category TEXT
)
"""

SELECT_ALL_SQL = "SELECT * FROM Products"
SELECT_BY_ID_SQL = "SELECT * FROM Products WHERE Id = ?"
INSERT_SQL = "INSERT INTO Products (Name, Description, Price, Category) VALUES (?, ?, ?, ?)"
UPDATE_SQL = "UPDATE Products SET Name = ?, Description = ?, Price = ?, Category = ? WHERE Id = ?"
DELETE_SQL = "DELETE FROM Products WHERE Id = ?"


class ProductRepository:
    """Translates Product operations into SQL against the configured store."""

    def __init__(self, connection_string: str):
        """Initialize the repository.

        Args:
            connection_string: SQLite database path (or URI) for the store.
        """
        self._connection_string = connection_string

    def _connect(self) -> SqliteClient:
        return SqliteClient(self._connection_string)

    def ensure_schema(self) -> None:
        """Create the Products table if it doesn't exist."""
        with self._connect() as client:
            client.execute_non_query(CREATE_TABLE_SQL)
        logger.debug("Products table initialized")

    def list_all(self) -> List[Product]:
        """Return every product in store order; an empty table yields an empty list."""
        with self._connect() as client:
            rows = client.execute_query(SELECT_ALL_SQL)
        return [product_from_row(row) for row in rows]

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Look up one product.

        Returns:
            The matching Product, or None when no row has this id.
        """
        with self._connect() as client:
            rows = client.execute_query(SELECT_BY_ID_SQL, (product_id,))

        if not rows:
            return None
        return product_from_row(rows[0])

    def create(self, product: Product) -> int:
        """Insert a product, ignoring its id.

        The store assigns the id; it is not read back.

        Returns:
            Number of rows affected.
        """
        with self._connect() as client:
            return client.execute_non_query(
                INSERT_SQL,
                (product.name, product.description, product.price, product.category),
            )

    def update(self, product: Product) -> int:
        """Overwrite every column of the row keyed by product.id.

        Returns:
            Number of rows affected; 0 when the id does not exist.
        """
        with self._connect() as client:
            return client.execute_non_query(
                UPDATE_SQL,
                (product.name, product.description, product.price, product.category, product.id),
            )

    def delete(self, product_id: int) -> int:
        """Delete the row keyed by product_id.

        Returns:
            Number of rows affected; 0 when the id does not exist.
        """
        with self._connect() as client:
            return client.execute_non_query(DELETE_SQL, (product_id,))
