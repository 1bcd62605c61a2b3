"""Materialize the catalog snapshot the browsing engine works against."""

from __future__ import annotations

import logging

from pydantic import ValidationError
from redis.exceptions import RedisError

from src.models.catalog import CatalogSnapshot
from src.services.catalog.facets import derive_facets
from src.services.catalog.snapshot_store import CatalogSnapshotStore
from src.services.clients.supabase_client import BackendError, CatalogBackend

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Serve the cached snapshot, fetching from the backend when needed.

    Facets are derived once per backend fetch and stored alongside the
    products, so filter changes never recompute them.
    """

    def __init__(
        self,
        backend: CatalogBackend | None,
        store: CatalogSnapshotStore,
    ) -> None:
        self._backend = backend
        self._store = store

    async def load(self, *, force: bool = False) -> CatalogSnapshot:
        if not force:
            cached = await self._fetch_cached()
            if cached is not None:
                logger.debug(
                    "Serving cached catalog snapshot (%d products)", len(cached.products)
                )
                return cached

        if self._backend is None:
            logger.warning("No catalog backend configured; serving an empty catalog")
            return CatalogSnapshot()

        try:
            products = await self._backend.fetch_products()
            categories = await self._backend.fetch_categories()
        except BackendError:
            logger.exception("Failed to fetch catalog from backend")
            return CatalogSnapshot()

        snapshot = CatalogSnapshot(
            products=products,
            categories=categories,
            facets=derive_facets(products),
        )
        logger.info(
            "Loaded catalog snapshot with %d products and %d categories",
            len(products),
            len(categories),
        )

        try:
            await self._store.save(snapshot)
        except RedisError as exc:
            logger.warning("Could not cache catalog snapshot: %s", exc)
        return snapshot

    async def _fetch_cached(self) -> CatalogSnapshot | None:
        try:
            return await self._store.fetch()
        except RedisError as exc:
            logger.warning("Catalog cache unavailable: %s", exc)
            return None
        except ValidationError as exc:
            logger.warning("Discarding unreadable catalog snapshot: %s", exc)
            await self._discard_cached()
            return None

    async def _discard_cached(self) -> None:
        try:
            await self._store.clear()
        except RedisError as exc:
            logger.warning("Could not clear catalog snapshot: %s", exc)
