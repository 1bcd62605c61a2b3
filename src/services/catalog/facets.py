"""Facet extraction over the full, unfiltered catalog."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from src.models.catalog import DEFAULT_MAX_PRICE, Category, FacetOptions, Product

PRICE_STEP = 100


def derive_facets(products: Sequence[Product]) -> FacetOptions:
    """Collect the distinct filterable values present in ``products``.

    Absent or empty brand/material/color values are skipped. The price ceiling
    is the highest list price rounded up to the next multiple of ``PRICE_STEP``,
    or ``DEFAULT_MAX_PRICE`` for an empty catalog.
    """
    if not products:
        return FacetOptions(max_price=DEFAULT_MAX_PRICE)

    highest = max(product.price for product in products)
    return FacetOptions(
        categories=_distinct(product.category for product in products),
        brands=_distinct(product.brand for product in products),
        materials=_distinct(product.material for product in products),
        colors=_distinct(product.color for product in products),
        max_price=float(math.ceil(highest / PRICE_STEP) * PRICE_STEP),
    )


def suggest_search_terms(
    query: str,
    facets: FacetOptions,
    categories: Iterable[Category] = (),
    limit: int = 5,
) -> list[str]:
    """Brand values, then category names, that contain ``query``."""
    needle = query.strip().lower()
    if not needle or limit <= 0:
        return []

    matches = [brand for brand in facets.brands if needle in brand.lower()]
    matches.extend(
        category.name for category in categories if needle in category.name.lower()
    )
    return list(dict.fromkeys(matches))[:limit]


def _distinct(values: Iterable[str | None]) -> tuple[str, ...]:
    return tuple(sorted({value for value in values if value}))
