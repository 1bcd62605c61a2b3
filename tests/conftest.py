"""Pytest configuration and fixtures for the storefront catalog service."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import fakeredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.models.catalog import Category, Product
from src.services.clients.supabase_client import (
    BackendError,
    CatalogBackend,
    get_catalog_backend,
)
from src.services.storage.redis_client import get_redis_client


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


def make_product(product_id: str, **overrides) -> Product:
    """Build a product with sensible defaults for the fields a test ignores."""
    data = {
        "id": product_id,
        "name": product_id,
        "description": "",
        "price": 10.0,
        "category": "General",
        "in_stock": True,
        "featured": False,
    }
    data.update(overrides)
    return Product(**data)


class StubBackend(CatalogBackend):
    """In-memory backend recording side effects instead of calling Supabase."""

    def __init__(
        self,
        products: list[Product] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        self.products = list(products or [])
        self.categories = list(categories or [])
        self.fail = False
        self.fetch_count = 0
        self.cart: list[tuple[str, str, int]] = []
        self.wishlist: set[tuple[str, str]] = set()

    async def fetch_products(self) -> list[Product]:
        await asyncio.sleep(0)
        if self.fail:
            raise BackendError("backend down")
        self.fetch_count += 1
        return list(self.products)

    async def fetch_categories(self) -> list[Category]:
        if self.fail:
            raise BackendError("backend down")
        return list(self.categories)

    async def add_to_cart(self, user_id: str, product_id: str, quantity: int = 1) -> None:
        if self.fail:
            raise BackendError("backend down")
        self.cart.append((user_id, product_id, quantity))

    async def toggle_wishlist(self, user_id: str, product_id: str) -> bool:
        if self.fail:
            raise BackendError("backend down")
        entry = (user_id, product_id)
        if entry in self.wishlist:
            self.wishlist.remove(entry)
            return False
        self.wishlist.add(entry)
        return True

    async def ping(self) -> bool:
        return not self.fail


@pytest.fixture()
def product_factory():
    """Expose the product builder to tests."""
    return make_product


@pytest.fixture()
def catalog() -> list[Product]:
    """A small storefront catalog covering every facet."""
    return [
        make_product(
            "lamp",
            name="Aurora Floor Lamp",
            description="Brushed brass floor lamp",
            price=199.99,
            sale_price=149.99,
            category="Lighting",
            subcategory="Floor Lamps",
            brand="Aurora",
            featured=True,
            tags=("living room", "brass"),
            rating_average=4.6,
            material="Brass",
            color="Gold",
            created_at=datetime(2024, 3, 1, tzinfo=UTC),
        ),
        make_product(
            "desk",
            name="oak desk",
            description="Solid oak writing desk",
            price=420.0,
            category="Furniture",
            brand="Northwood",
            tags=("office",),
            rating_average=4.0,
            material="Oak",
            color="Natural",
            created_at=datetime(2024, 5, 10, tzinfo=UTC),
        ),
        make_product(
            "chair",
            name="Bistro Chair",
            description="Stackable metal chair",
            price=89.0,
            category="Furniture",
            brand="Northwood",
            in_stock=False,
            rating_average=3.5,
            material="Steel",
            color="Black",
        ),
        make_product(
            "candle",
            name="Cedar Candle",
            description="Hand-poured soy candle",
            price=24.0,
            category="Decor",
            featured=True,
            tags=("gift",),
            color="White",
            created_at=datetime(2023, 11, 20, tzinfo=UTC),
        ),
    ]


@pytest.fixture()
def categories() -> list[Category]:
    return [
        Category(id="cat-1", name="Lighting", slug="lighting", sort_order=1),
        Category(id="cat-2", name="Furniture", slug="furniture", sort_order=2),
        Category(id="cat-3", name="Decor", slug="decor", sort_order=3),
    ]


@pytest.fixture()
def backend(catalog, categories):
    """Provide a stub backend and route the app's dependency to it."""
    from src.main import app

    stub = StubBackend(catalog, categories)
    app.dependency_overrides[get_catalog_backend] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_catalog_backend, None)


@pytest_asyncio.fixture()
async def redis_client():
    """Provide a fake Redis client for each test."""
    from src.main import app

    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    app.dependency_overrides[get_redis_client] = lambda: client
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()
        app.dependency_overrides.pop(get_redis_client, None)


@pytest_asyncio.fixture()
async def client(redis_client, backend):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from src.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
