"""Catalog domain models shared by the browsing engine and the API."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MAX_PRICE = 1000.0
"""Upper price bound offered when the catalog is empty."""


class Category(BaseModel):
    """A named grouping of products coming from the hosted backend."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier of the category")
    name: str
    slug: str
    parent_id: str | None = Field(
        None,
        description="Identifier of the parent category for nested groupings",
    )
    description: str | None = None
    sort_order: int = 0

    @field_validator("sort_order", mode="before")
    @classmethod
    def _default_sort_order(cls, value: object) -> object:
        return 0 if value is None else value


class Product(BaseModel):
    """A sellable catalog item. Read-only from the engine's point of view."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque product identifier")
    name: str
    description: str = ""
    price: float = Field(..., ge=0)
    sale_price: float | None = Field(None, ge=0)
    category: str
    subcategory: str | None = None
    brand: str | None = None
    in_stock: bool = True
    featured: bool = False
    tags: tuple[str, ...] = ()
    rating_average: float | None = Field(None, ge=0, le=5)
    material: str | None = None
    color: str | None = None
    created_at: datetime | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("in_stock", "featured", mode="before")
    @classmethod
    def _null_flag(cls, value: object) -> object:
        return False if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _empty_tags(cls, value: object) -> object:
        return () if value is None else value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def effective_price(self) -> float:
        """Sale price when present, otherwise the list price."""
        if self.sale_price is not None:
            return self.sale_price
        return self.price


class FacetOptions(BaseModel):
    """Filterable values present in the whole (unfiltered) catalog."""

    model_config = ConfigDict(frozen=True)

    categories: tuple[str, ...] = ()
    brands: tuple[str, ...] = ()
    materials: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()
    max_price: float = DEFAULT_MAX_PRICE


class CatalogSnapshot(BaseModel):
    """A complete materialized copy of the catalog plus its derived facets."""

    products: list[Product] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    facets: FacetOptions = Field(default_factory=FacetOptions)
    loaded_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the snapshot was fetched from the backend",
    )

    @property
    def is_empty(self) -> bool:
        return not self.products
