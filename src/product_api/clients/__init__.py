"""Client modules for the relational store."""

from product_api.clients.sqlite_client import SqliteClient

__all__ = ["SqliteClient"]
