"""Compose filtering, sorting and pagination into a single browse view."""

from __future__ import annotations

from src.models.catalog import CatalogSnapshot
from src.models.filters import FilterState
from src.models.storefront import CatalogView
from src.services.catalog.filtering import apply_filters, count_active_filters
from src.services.catalog.pagination import DEFAULT_PAGE_SIZE, paginate
from src.services.catalog.sorting import sort_products


def browse(
    snapshot: CatalogSnapshot,
    filters: FilterState,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> CatalogView:
    """Run one browse request against an already materialized catalog."""
    matching = apply_filters(snapshot.products, filters)
    ordered = sort_products(matching, filters.sort_by)
    return CatalogView(
        page=paginate(ordered, page=page, page_size=page_size),
        facets=snapshot.facets,
        filters=filters,
        active_filter_count=count_active_filters(filters, snapshot.facets),
    )
