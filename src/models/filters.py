"""Shopper filter selections and their URL query-parameter encoding."""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.catalog import DEFAULT_MAX_PRICE

ALL_CATEGORIES = "all"
"""Category sentinel meaning no category restriction."""

MultiValueFacet = Literal["brands", "materials", "colors"]

_MULTI_VALUE_PARAMS: dict[MultiValueFacet, str] = {
    "brands": "brand",
    "materials": "material",
    "colors": "color",
}


class SortKey(StrEnum):
    """Orderings offered by the storefront."""

    FEATURED = "featured"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NEWEST = "newest"
    NAME = "name"

    @classmethod
    def parse(cls, value: SortKey | str | None) -> SortKey:
        """Return the matching key; unrecognized values fall back to ``name``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.NAME


class FilterState(BaseModel):
    """Immutable snapshot of the shopper's facet selections.

    Updates never mutate an instance; use :meth:`updated`, :meth:`toggle` or
    :meth:`without` to derive a new state.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    search: str = ""
    category: str = ALL_CATEGORIES
    brands: frozenset[str] = frozenset()
    price_range: tuple[float, float] = (0.0, DEFAULT_MAX_PRICE)
    min_rating: float = Field(0.0, ge=0, le=5)
    in_stock_only: bool = False
    featured_only: bool = False
    sort_by: SortKey = SortKey.FEATURED
    materials: frozenset[str] = frozenset()
    colors: frozenset[str] = frozenset()

    @field_validator("price_range")
    @classmethod
    def _ordered_range(cls, value: tuple[float, float]) -> tuple[float, float]:
        lower, upper = value
        if lower > upper:
            return (upper, lower)
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def _known_sort_key(cls, value: Any) -> SortKey:
        return SortKey.parse(value)

    @property
    def price_min(self) -> float:
        return self.price_range[0]

    @property
    def price_max(self) -> float:
        return self.price_range[1]

    def updated(self, **changes: Any) -> FilterState:
        """Return a validated copy with ``changes`` applied."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)

    def toggle(self, facet: MultiValueFacet, value: str) -> FilterState:
        """Add ``value`` to a multi-value facet, or remove it if already selected."""
        current: frozenset[str] = getattr(self, facet)
        if value in current:
            return self.updated(**{facet: current - {value}})
        return self.updated(**{facet: current | {value}})

    def without(self, facet: MultiValueFacet, value: str) -> FilterState:
        """Drop a single selected value from a multi-value facet."""
        current: frozenset[str] = getattr(self, facet)
        return self.updated(**{facet: current - {value}})

    def to_query_params(self, defaults: FilterState | None = None) -> dict[str, str]:
        """Encode the non-default selections as URL query parameters."""
        base = defaults or FilterState()
        params: dict[str, str] = {}

        if self.search != base.search:
            params["search"] = self.search
        if self.category != base.category:
            params["category"] = self.category
        for facet, key in _MULTI_VALUE_PARAMS.items():
            values = getattr(self, facet)
            if values != getattr(base, facet):
                params[key] = ",".join(sorted(values))
        if self.price_range != base.price_range:
            params["priceMin"] = _format_number(self.price_min)
            params["priceMax"] = _format_number(self.price_max)
        if self.min_rating != base.min_rating:
            params["rating"] = _format_number(self.min_rating)
        if self.in_stock_only != base.in_stock_only:
            params["inStock"] = _format_bool(self.in_stock_only)
        if self.featured_only != base.featured_only:
            params["featured"] = _format_bool(self.featured_only)
        if self.sort_by != base.sort_by:
            params["sortBy"] = self.sort_by.value
        return params

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, str],
        defaults: FilterState | None = None,
    ) -> FilterState:
        """Decode URL query parameters on top of ``defaults``.

        Missing keys keep their default value. The price range only applies
        when both bounds are present, and malformed numbers are ignored.
        """
        base = defaults or cls()
        changes: dict[str, Any] = {}

        if "search" in params:
            changes["search"] = params["search"]
        if params.get("category"):
            changes["category"] = params["category"]
        for facet, key in _MULTI_VALUE_PARAMS.items():
            if key in params:
                changes[facet] = frozenset(_split_csv(params[key]))

        price_min = _parse_number(params.get("priceMin"))
        price_max = _parse_number(params.get("priceMax"))
        if price_min is not None and price_max is not None:
            changes["price_range"] = (price_min, price_max)

        rating = _parse_number(params.get("rating"))
        if rating is not None and 0 <= rating <= 5:
            changes["min_rating"] = rating
        if "inStock" in params:
            changes["in_stock_only"] = params["inStock"] == "true"
        if "featured" in params:
            changes["featured_only"] = params["featured"] == "true"
        if params.get("sortBy"):
            changes["sort_by"] = SortKey.parse(params["sortBy"])

        return base.updated(**changes)


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_number(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _format_bool(value: bool) -> str:
    return "true" if value else "false"
