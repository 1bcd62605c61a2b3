"""Routes for browsing the storefront catalog."""

from __future__ import annotations

import logging
from typing import Annotated

import redis.asyncio as redis
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from src.config import settings
from src.models.catalog import CatalogSnapshot, Category, FacetOptions
from src.models.filters import FilterState
from src.models.storefront import CatalogView, SavedFilters, SearchSuggestions
from src.services.catalog.browser import browse
from src.services.catalog.facets import suggest_search_terms
from src.services.catalog.filtering import reset_filters
from src.services.catalog.loader import CatalogLoader
from src.services.catalog.snapshot_store import CatalogSnapshotStore, FilterStateStore
from src.services.clients.supabase_client import BackendDependency
from src.services.storage.redis_client import get_redis_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])

RedisDependency = Annotated[redis.Redis, Depends(get_redis_client)]


def _get_snapshot_store(client: RedisDependency) -> CatalogSnapshotStore:
    return CatalogSnapshotStore(client)


def _get_filter_store(client: RedisDependency) -> FilterStateStore:
    return FilterStateStore(client)


def _build_loader(
    backend: BackendDependency,
    store: Annotated[CatalogSnapshotStore, Depends(_get_snapshot_store)],
) -> CatalogLoader:
    return CatalogLoader(backend, store)


LoaderDependency = Annotated[CatalogLoader, Depends(_build_loader)]
FilterStoreDependency = Annotated[FilterStateStore, Depends(_get_filter_store)]


async def _current_snapshot(loader: LoaderDependency) -> CatalogSnapshot:
    return await loader.load()


SnapshotDependency = Annotated[CatalogSnapshot, Depends(_current_snapshot)]


@router.get(
    "/products",
    response_model=CatalogView,
    summary="Filter, sort and paginate the catalog",
)
async def list_products(
    snapshot: SnapshotDependency,
    search: str | None = None,
    category: str | None = None,
    brand: str | None = None,
    price_min: Annotated[str | None, Query(alias="priceMin")] = None,
    price_max: Annotated[str | None, Query(alias="priceMax")] = None,
    rating: str | None = None,
    in_stock: Annotated[str | None, Query(alias="inStock")] = None,
    featured: str | None = None,
    material: str | None = None,
    color: str | None = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[
        int, Query(alias="pageSize", ge=1, le=settings.MAX_PAGE_SIZE)
    ] = settings.STORE_PAGE_SIZE,
) -> CatalogView:
    """Query parameters use the same encoding as shareable storefront URLs."""

    raw = {
        "search": search,
        "category": category,
        "brand": brand,
        "priceMin": price_min,
        "priceMax": price_max,
        "rating": rating,
        "inStock": in_stock,
        "featured": featured,
        "material": material,
        "color": color,
        "sortBy": sort_by,
    }
    params = {key: value for key, value in raw.items() if value is not None}
    filters = FilterState.from_query_params(params, reset_filters(snapshot.facets))
    return browse(snapshot, filters, page=page, page_size=page_size)


@router.get("/facets", response_model=FacetOptions, summary="Filterable catalog values")
async def get_facets(snapshot: SnapshotDependency) -> FacetOptions:
    return snapshot.facets


@router.get(
    "/categories",
    response_model=list[Category],
    summary="Active categories in display order",
)
async def get_categories(snapshot: SnapshotDependency) -> list[Category]:
    return snapshot.categories


@router.get(
    "/suggestions",
    response_model=SearchSuggestions,
    summary="Autocomplete suggestions for the search box",
)
async def get_suggestions(
    snapshot: SnapshotDependency,
    q: str = "",
) -> SearchSuggestions:
    suggestions = suggest_search_terms(
        q,
        snapshot.facets,
        snapshot.categories,
        limit=settings.SEARCH_SUGGESTION_LIMIT,
    )
    return SearchSuggestions(query=q, suggestions=suggestions)


@router.get(
    "/filters/default",
    response_model=FilterState,
    summary="Filter state produced by 'clear filters'",
)
async def get_default_filters(snapshot: SnapshotDependency) -> FilterState:
    return reset_filters(snapshot.facets)


@router.get(
    "/filters/saved/{session_id}",
    response_model=SavedFilters,
    summary="Fetch a shopper's saved filters",
)
async def get_saved_filters(
    session_id: str,
    store: FilterStoreDependency,
) -> SavedFilters:
    filters = await store.fetch(session_id)
    if filters is None:
        raise HTTPException(status_code=404, detail="No saved filters for session")
    return SavedFilters(session_id=session_id, filters=filters)


@router.put(
    "/filters/saved/{session_id}",
    response_model=SavedFilters,
    summary="Save a shopper's filters",
)
async def save_filters(
    session_id: str,
    filters: Annotated[FilterState, Body()],
    store: FilterStoreDependency,
) -> SavedFilters:
    await store.save(session_id, filters)
    logger.debug("Saved filters for session %s", session_id)
    return SavedFilters(session_id=session_id, filters=filters)


@router.delete(
    "/filters/saved/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Forget a shopper's saved filters",
)
async def delete_saved_filters(
    session_id: str,
    store: FilterStoreDependency,
) -> Response:
    if not await store.delete(session_id):
        raise HTTPException(status_code=404, detail="No saved filters for session")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/refresh", summary="Reload the catalog from the backend")
async def refresh_catalog(loader: LoaderDependency) -> dict[str, int | str]:
    snapshot = await loader.load(force=True)
    return {
        "status": "refreshed",
        "products": len(snapshot.products),
        "categories": len(snapshot.categories),
    }
