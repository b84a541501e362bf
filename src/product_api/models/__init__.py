"""Data models module."""

from product_api.models.product import Product, product_from_row

__all__ = ["Product", "product_from_row"]
