"""Hosted backend client abstractions and the Supabase REST implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any

import httpx
from fastapi import Depends
from pydantic import ValidationError

from src.config import settings
from src.models.catalog import Category, Product

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """Raised when the hosted backend cannot serve a request."""


class CatalogBackend(ABC):
    """Remote collaborator owning the catalog, carts and wishlists."""

    @abstractmethod
    async def fetch_products(self) -> list[Product]:
        """Return every active, public product ordered featured first, then by name."""

    @abstractmethod
    async def fetch_categories(self) -> list[Category]:
        """Return the active categories in their configured display order."""

    @abstractmethod
    async def add_to_cart(self, user_id: str, product_id: str, quantity: int = 1) -> None:
        """Insert a cart line for the user."""

    @abstractmethod
    async def toggle_wishlist(self, user_id: str, product_id: str) -> bool:
        """Flip wishlist membership and return True when the product is now wishlisted."""

    @abstractmethod
    async def ping(self) -> bool:
        """Return True when the backend answers."""

    async def aclose(self) -> None:
        """Release network resources held by the backend."""


class SupabaseCatalogClient(CatalogBackend):
    """Catalog backend talking to the Supabase PostgREST API over httpx."""

    def __init__(
        self,
        *,
        url: str,
        key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url or not key:
            raise ValueError("Supabase URL and key are required to initialize the client")

        headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        self._client = httpx.AsyncClient(
            base_url=url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def fetch_products(self) -> list[Product]:
        rows = await self._select(
            settings.PRODUCTS_TABLE,
            {
                "status": "eq.active",
                "visibility": "eq.public",
                "order": "featured.desc,name.asc",
            },
        )
        return _parse_rows(Product, rows, settings.PRODUCTS_TABLE)

    async def fetch_categories(self) -> list[Category]:
        rows = await self._select(
            settings.CATEGORIES_TABLE,
            {"is_active": "eq.true", "order": "sort_order.asc"},
        )
        return _parse_rows(Category, rows, settings.CATEGORIES_TABLE)

    async def add_to_cart(self, user_id: str, product_id: str, quantity: int = 1) -> None:
        await self._request(
            "POST",
            settings.CART_TABLE,
            json={"user_id": user_id, "product_id": product_id, "quantity": quantity},
        )

    async def toggle_wishlist(self, user_id: str, product_id: str) -> bool:
        match = {"user_id": f"eq.{user_id}", "product_id": f"eq.{product_id}"}
        existing = await self._select(settings.WISHLIST_TABLE, {**match, "select": "id"})
        if existing:
            await self._request("DELETE", settings.WISHLIST_TABLE, params=match)
            return False

        await self._request(
            "POST",
            settings.WISHLIST_TABLE,
            json={"user_id": user_id, "product_id": product_id},
        )
        return True

    async def ping(self) -> bool:
        try:
            await self._select(settings.CATEGORIES_TABLE, {"select": "id", "limit": "1"})
        except BackendError:
            return False
        return True

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        query = {"select": "*", **params}
        response = await self._request("GET", table, params=query)
        try:
            return response.json()
        except ValueError as exc:
            raise BackendError(f"Supabase returned a non-JSON body for {table}") from exc

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method,
                f"/rest/v1/{table}",
                params=params,
                json=json,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise BackendError(f"Supabase {method} on {table} failed: {exc}") from exc
        return response


def _parse_rows(model: type[Any], rows: list[dict[str, Any]], table: str) -> list[Any]:
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed %s row %s: %s", table, row.get("id"), exc.errors()
            )
    return parsed


_catalog_backend: CatalogBackend | None = None


def _initialize_backend() -> CatalogBackend | None:
    if not settings.backend_configured:
        logger.warning("SUPABASE_URL or SUPABASE_KEY not set; catalog backend disabled")
        return None

    return SupabaseCatalogClient(
        url=settings.SUPABASE_URL,
        key=settings.SUPABASE_KEY,
        timeout=settings.SUPABASE_TIMEOUT_SECONDS,
    )


_catalog_backend = _initialize_backend()


def get_catalog_backend() -> CatalogBackend | None:
    """FastAPI dependency returning the configured catalog backend if any."""

    return _catalog_backend


BackendDependency = Annotated[CatalogBackend | None, Depends(get_catalog_backend)]
