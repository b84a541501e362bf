"""API controllers."""

from product_api.api.controller.products_controller import router as products_router

__all__ = ["products_router"]
