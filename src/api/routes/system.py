"""System-level routes such as health checks."""

from __future__ import annotations

import logging
from typing import Annotated

import redis.asyncio as redis
from fastapi import APIRouter, Depends
from redis.exceptions import RedisError

from src.config import settings
from src.services.clients.supabase_client import BackendDependency
from src.services.storage.redis_client import get_redis_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "PrepFox storefront catalog"}


@router.get("/health")
async def health_check(
    backend: BackendDependency,
    client: Annotated[redis.Redis, Depends(get_redis_client)],
) -> dict[str, str]:
    """Health check endpoint with backend and Redis connectivity checks."""

    if backend is None:
        backend_status = "not-configured"
    else:
        backend_status = "connected" if await backend.ping() else "disconnected"

    try:
        await client.ping()
        redis_status = "connected"
    except RedisError:
        logger.debug("Redis ping failed during health check")
        redis_status = "disconnected"

    return {
        "status": "healthy",
        "backend": backend_status,
        "redis": redis_status,
        "environment": settings.ENVIRONMENT,
    }
