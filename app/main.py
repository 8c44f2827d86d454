"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.dependencies import get_catalog
from app.api.v1.router import api_router
from app.config import settings
from app.core.catalog import PerformerCatalog
from app.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    setup_logging(debug=settings.debug)

    if getattr(app.state, "catalog", None) is None:
        app.state.catalog = PerformerCatalog.from_path(settings.catalog_path)

    logger.info(
        "Starting live listing service",
        extra={
            "environment": settings.environment,
            "version": settings.app_version,
            "catalog_size": len(app.state.catalog),
            "upstream_configured": bool(settings.crak_token and settings.crak_api_key),
        },
    )

    yield

    logger.info("Shutting down live listing service")


def create_app(catalog: PerformerCatalog | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Passing ``catalog`` skips loading it from ``settings.catalog_path``.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Live performer listing filtered against a curated catalog",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.catalog = catalog

    app.add_middleware(
        cast(Any, CORSMiddleware),
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get(
        "/health",
        summary="Health check",
        description="Return service health status, version and catalog size.",
    )
    async def health_check(request: Request) -> dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "catalogSize": len(get_catalog(request)),
        }

    return app


app = create_app()
