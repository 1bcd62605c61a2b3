"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import RedisError

from src.api.routes import include_api_routes
from src.config import settings
from src.services.catalog.snapshot_store import CatalogSnapshotStore
from src.services.clients.supabase_client import get_catalog_backend
from src.services.storage.redis_client import get_redis_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    if settings.is_production:
        # A deploy may change the catalog schema, so drop the cached snapshot.
        try:
            await CatalogSnapshotStore(get_redis_client()).clear()
            logger.info("Cleared cached catalog snapshot for production startup")
        except RedisError:
            logger.exception("Failed clearing cached catalog snapshot on startup")
    else:
        logger.info("Keeping cached catalog snapshot in development mode")

    yield

    backend = get_catalog_backend()
    if backend is not None:
        await backend.aclose()
        logger.info("Closed catalog backend client")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="PrepFox Storefront",
        description="Faceted catalog browsing for the PrepFox store",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
