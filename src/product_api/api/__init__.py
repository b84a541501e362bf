"""FastAPI application setup."""

import logging
import sqlite3
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from product_api.api.controller import products_router
from product_api.config import AppConfig, get_config
from product_api.repositories import ProductRepository

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration; the lazily loaded singleton when omitted.
    """
    config = config or get_config()

    app = FastAPI(
        title="Product API",
        description="CRUD API for the Products catalogue",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    repository = ProductRepository(config.database.connection_string)
    repository.ensure_schema()
    app.state.product_repository = repository

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed bodies and path parameters answer 400 rather than 422."""
        # The rejected input is left out, NaN or Infinity cannot be encoded as JSON
        errors = [{key: value for key, value in error.items() if key != "input"} for error in exc.errors()]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(errors)},
        )

    @app.exception_handler(sqlite3.Error)
    async def store_exception_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
        logger.error(f"Store error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
        )

    app.include_router(products_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
