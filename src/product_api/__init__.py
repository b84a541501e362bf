"""Product API: CRUD service over a single Products table."""

__version__ = "1.0.0"
