"""Orderings applied to a filtered product listing."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from src.models.catalog import Product
from src.models.filters import SortKey

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def sort_products(products: Sequence[Product], sort_key: SortKey | str) -> list[Product]:
    """Return a new list ordered by ``sort_key``; the input is left untouched.

    Sorting is stable, so products that compare equal keep their input order.
    """
    key = SortKey.parse(sort_key)

    if key is SortKey.PRICE_LOW:
        return sorted(products, key=lambda product: product.effective_price)
    if key is SortKey.PRICE_HIGH:
        return sorted(products, key=lambda product: product.effective_price, reverse=True)
    if key is SortKey.RATING:
        return sorted(products, key=lambda product: product.rating_average or 0.0, reverse=True)
    if key is SortKey.NEWEST:
        return sorted(products, key=lambda product: product.created_at or EPOCH, reverse=True)
    if key is SortKey.FEATURED:
        return sorted(products, key=lambda product: (not product.featured, name_key(product)))
    return sorted(products, key=name_key)


def name_key(product: Product) -> tuple[str, str]:
    """Case-insensitive alphabetical key, falling back to the raw name."""
    return (product.name.casefold(), product.name)
