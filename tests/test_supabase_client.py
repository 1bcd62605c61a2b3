"""Tests for the Supabase REST client using a mocked transport."""

from __future__ import annotations

import json

import httpx
import pytest

from src.services.cart import add_to_cart, toggle_wishlist
from src.services.clients.supabase_client import BackendError, SupabaseCatalogClient

PRODUCT_ROW = {
    "id": "prod-1",
    "name": "Aurora Floor Lamp",
    "description": None,
    "price": 199.99,
    "sale_price": 149.99,
    "category": "Lighting",
    "brand": "Aurora",
    "in_stock": True,
    "featured": True,
    "tags": None,
    "rating_average": 4.5,
    "created_at": "2024-03-01T10:00:00+00:00",
    "status": "active",
    "visibility": "public",
    "currency": "USD",
}


class _Recorder:
    """Collects requests and answers from a table of canned responses."""

    def __init__(self, responses):
        self.requests: list[httpx.Request] = []
        self._responses = responses

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._responses.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "not found"})
        return handler(request)


def _client(recorder: _Recorder) -> SupabaseCatalogClient:
    return SupabaseCatalogClient(
        url="https://example.supabase.co",
        key="anon-key",
        transport=httpx.MockTransport(recorder),
    )


def test_requires_credentials():
    with pytest.raises(ValueError):
        SupabaseCatalogClient(url="", key="anon-key")


@pytest.mark.asyncio
async def test_fetch_products_filters_active_public_rows():
    recorder = _Recorder(
        {
            ("GET", "/rest/v1/store_products"): lambda request: httpx.Response(
                200, json=[PRODUCT_ROW, {"id": "broken", "name": "No price"}]
            )
        }
    )

    products = await _client(recorder).fetch_products()

    params = recorder.requests[0].url.params
    assert params["status"] == "eq.active"
    assert params["visibility"] == "eq.public"
    assert params["order"] == "featured.desc,name.asc"
    assert recorder.requests[0].headers["apikey"] == "anon-key"
    assert [product.id for product in products] == ["prod-1"]
    assert products[0].description == ""
    assert products[0].tags == ()
    assert products[0].effective_price == 149.99


@pytest.mark.asyncio
async def test_fetch_categories_orders_by_sort_order():
    recorder = _Recorder(
        {
            ("GET", "/rest/v1/store_categories"): lambda request: httpx.Response(
                200,
                json=[{"id": "c1", "name": "Lighting", "slug": "lighting", "sort_order": 1}],
            )
        }
    )

    categories = await _client(recorder).fetch_categories()

    params = recorder.requests[0].url.params
    assert params["is_active"] == "eq.true"
    assert params["order"] == "sort_order.asc"
    assert categories[0].slug == "lighting"


@pytest.mark.asyncio
async def test_http_errors_become_backend_errors():
    recorder = _Recorder(
        {
            ("GET", "/rest/v1/store_products"): lambda request: httpx.Response(
                500, json={"message": "boom"}
            )
        }
    )

    with pytest.raises(BackendError):
        await _client(recorder).fetch_products()


@pytest.mark.asyncio
async def test_add_to_cart_posts_line():
    recorder = _Recorder(
        {("POST", "/rest/v1/cart_items"): lambda request: httpx.Response(201, json=[])}
    )

    await _client(recorder).add_to_cart("user-1", "prod-1", 2)

    body = json.loads(recorder.requests[0].content)
    assert body == {"user_id": "user-1", "product_id": "prod-1", "quantity": 2}


@pytest.mark.asyncio
async def test_toggle_wishlist_inserts_when_absent():
    recorder = _Recorder(
        {
            ("GET", "/rest/v1/wishlist_items"): lambda request: httpx.Response(200, json=[]),
            ("POST", "/rest/v1/wishlist_items"): lambda request: httpx.Response(201, json=[]),
        }
    )

    assert await _client(recorder).toggle_wishlist("user-1", "prod-1") is True
    assert [request.method for request in recorder.requests] == ["GET", "POST"]


@pytest.mark.asyncio
async def test_toggle_wishlist_deletes_when_present():
    recorder = _Recorder(
        {
            ("GET", "/rest/v1/wishlist_items"): lambda request: httpx.Response(
                200, json=[{"id": "w1"}]
            ),
            ("DELETE", "/rest/v1/wishlist_items"): lambda request: httpx.Response(204),
        }
    )

    assert await _client(recorder).toggle_wishlist("user-1", "prod-1") is False
    delete = recorder.requests[1]
    assert delete.url.params["user_id"] == "eq.user-1"
    assert delete.url.params["product_id"] == "eq.prod-1"


@pytest.mark.asyncio
async def test_ping_reports_failures():
    recorder = _Recorder({})

    assert await _client(recorder).ping() is False


@pytest.mark.asyncio
async def test_side_effects_swallow_backend_errors():
    recorder = _Recorder({})
    client = _client(recorder)

    assert await add_to_cart(client, "user-1", "prod-1") is False
    assert await toggle_wishlist(client, "user-1", "prod-1") is None


@pytest.mark.asyncio
async def test_null_flags_and_sort_order_keep_rows():
    recorder = _Recorder(
        {
            ("GET", "/rest/v1/store_products"): lambda request: httpx.Response(
                200,
                json=[
                    {
                        "id": "p1",
                        "name": "Lamp",
                        "price": 10,
                        "category": "Lighting",
                        "in_stock": None,
                        "featured": None,
                    }
                ],
            ),
            ("GET", "/rest/v1/store_categories"): lambda request: httpx.Response(
                200,
                json=[{"id": "c1", "name": "Lighting", "slug": "lighting", "sort_order": None}],
            ),
        }
    )
    client = _client(recorder)

    products = await client.fetch_products()
    categories = await client.fetch_categories()

    assert [product.id for product in products] == ["p1"]
    assert products[0].in_stock is False
    assert products[0].featured is False
    assert [category.id for category in categories] == ["c1"]
    assert categories[0].sort_order == 0


@pytest.mark.asyncio
async def test_non_json_body_becomes_backend_error():
    recorder = _Recorder(
        {
            ("GET", "/rest/v1/store_products"): lambda request: httpx.Response(
                200, text="<html>maintenance</html>"
            )
        }
    )

    with pytest.raises(BackendError):
        await _client(recorder).fetch_products()


@pytest.mark.asyncio
async def test_aclose_closes_http_client():
    client = _client(_Recorder({}))

    await client.aclose()

    assert client._client.is_closed
