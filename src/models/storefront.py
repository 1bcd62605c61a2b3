"""Request and response schemas for the storefront API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from src.models.catalog import FacetOptions, Product
from src.models.filters import FilterState


class ProductPage(BaseModel):
    """One page of an ordered product listing."""

    items: list[Product] = Field(default_factory=list)
    page: int = 1
    page_size: int
    total_items: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False


class CatalogView(BaseModel):
    """Everything a listing screen needs to render one browse request."""

    page: ProductPage
    facets: FacetOptions
    filters: FilterState
    active_filter_count: int = Field(
        0,
        description="Number of applied filters, for the 'N filters applied' badge",
    )


class SearchSuggestions(BaseModel):
    """Autocomplete candidates for the search box."""

    query: str
    suggestions: list[str] = Field(default_factory=list)


class SavedFilters(BaseModel):
    """A shopper's persisted filter selections."""

    session_id: str
    filters: FilterState


class CartItemRequest(BaseModel):
    """Payload for POST /cart/items."""

    user_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class WishlistToggleRequest(BaseModel):
    """Payload for POST /wishlist/toggle."""

    user_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)


class SideEffectAccepted(BaseModel):
    """Acknowledgement returned once a cart or wishlist update is scheduled."""

    status: Literal["accepted"] = "accepted"
    product_id: str
