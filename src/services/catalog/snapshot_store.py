"""Redis-backed persistence for catalog snapshots and saved filter states."""

from __future__ import annotations

import logging

import redis.asyncio as redis
from pydantic import ValidationError

from src.config import settings
from src.models.catalog import CatalogSnapshot
from src.models.filters import FilterState

logger = logging.getLogger(__name__)


class CatalogSnapshotStore:
    """Wrapper around Redis caching the last materialized catalog."""

    def __init__(self, client: redis.Redis):
        self._client = client
        self._key = settings.CATALOG_SNAPSHOT_KEY
        self._ttl = settings.CATALOG_SNAPSHOT_TTL_SECONDS

    async def save(self, snapshot: CatalogSnapshot) -> None:
        await self._client.set(self._key, snapshot.model_dump_json(), ex=self._ttl)

    async def fetch(self) -> CatalogSnapshot | None:
        raw = await self._client.get(self._key)
        if not raw:
            return None
        return CatalogSnapshot.model_validate_json(raw)

    async def clear(self) -> None:
        await self._client.delete(self._key)


class FilterStateStore:
    """Per-session saved filter selections, the server-side 'remember my filters'."""

    def __init__(self, client: redis.Redis):
        self._client = client
        self._prefix = settings.FILTER_STATE_KEY_PREFIX
        self._ttl = settings.FILTER_STATE_TTL_SECONDS

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def save(self, session_id: str, filters: FilterState) -> None:
        await self._client.set(
            self._key(session_id), filters.model_dump_json(), ex=self._ttl
        )

    async def fetch(self, session_id: str) -> FilterState | None:
        raw = await self._client.get(self._key(session_id))
        if not raw:
            return None
        try:
            return FilterState.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding unreadable filters for session %s: %s", session_id, exc
            )
            await self._client.delete(self._key(session_id))
            return None

    async def delete(self, session_id: str) -> bool:
        removed = await self._client.delete(self._key(session_id))
        return bool(removed)
