"""Page slicing for ordered product listings."""

from __future__ import annotations

import math
from collections.abc import Sequence

from src.models.catalog import Product
from src.models.storefront import ProductPage

DEFAULT_PAGE_SIZE = 12


def paginate(
    products: Sequence[Product],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ProductPage:
    """Return the requested page, clamping ``page`` into the valid range."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total_items = len(products)
    total_pages = math.ceil(total_items / page_size)
    current = min(max(page, 1), max(total_pages, 1))
    offset = (current - 1) * page_size

    return ProductPage(
        items=list(products[offset : offset + page_size]),
        page=current,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        has_next=current < total_pages,
        has_previous=current > 1,
    )
