"""Predicate engine deciding which products satisfy a filter state."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from src.models.catalog import FacetOptions, Product
from src.models.filters import ALL_CATEGORIES, FilterState, SortKey

Predicate = Callable[[Product, FilterState], bool]


def apply_filters(products: Sequence[Product], filters: FilterState) -> list[Product]:
    """Return the products passing every active predicate, in input order."""
    return [
        product
        for product in products
        if all(predicate(product, filters) for predicate in PREDICATES)
    ]


def count_active_filters(filters: FilterState, facets: FacetOptions) -> int:
    """Number of applied filters; each selected brand/material/color counts once."""
    count = 0
    if filters.search:
        count += 1
    if filters.category != ALL_CATEGORIES:
        count += 1
    count += len(filters.brands)
    if filters.price_range != (0, facets.max_price):
        count += 1
    if filters.min_rating > 0:
        count += 1
    if filters.in_stock_only:
        count += 1
    if filters.featured_only:
        count += 1
    count += len(filters.materials)
    count += len(filters.colors)
    return count


def reset_filters(facets: FacetOptions) -> FilterState:
    """Fresh default selections spanning the current catalog's price range."""
    return FilterState(
        search="",
        category=ALL_CATEGORIES,
        price_range=(0.0, facets.max_price),
        min_rating=0.0,
        in_stock_only=False,
        featured_only=False,
        sort_by=SortKey.FEATURED,
    )


def matches_search(product: Product, filters: FilterState) -> bool:
    if not filters.search:
        return True
    needle = filters.search.lower()
    haystacks = [product.name, product.description, *product.tags]
    if product.brand:
        haystacks.append(product.brand)
    return any(needle in text.lower() for text in haystacks)


def matches_category(product: Product, filters: FilterState) -> bool:
    if filters.category == ALL_CATEGORIES:
        return True
    return filters.category in (product.category, product.subcategory)


def matches_brand(product: Product, filters: FilterState) -> bool:
    return _in_selection(product.brand, filters.brands)


def matches_price(product: Product, filters: FilterState) -> bool:
    return filters.price_min <= product.effective_price <= filters.price_max


def matches_rating(product: Product, filters: FilterState) -> bool:
    if filters.min_rating == 0:
        return True
    if product.rating_average is None:
        return False
    return product.rating_average >= filters.min_rating


def matches_stock(product: Product, filters: FilterState) -> bool:
    return not filters.in_stock_only or product.in_stock


def matches_featured(product: Product, filters: FilterState) -> bool:
    return not filters.featured_only or product.featured


def matches_material(product: Product, filters: FilterState) -> bool:
    return _in_selection(product.material, filters.materials)


def matches_color(product: Product, filters: FilterState) -> bool:
    return _in_selection(product.color, filters.colors)


def _in_selection(value: str | None, selected: frozenset[str]) -> bool:
    # An empty selection places no restriction.
    if not selected:
        return True
    return value is not None and value in selected


PREDICATES: tuple[Predicate, ...] = (
    matches_search,
    matches_category,
    matches_brand,
    matches_price,
    matches_rating,
    matches_stock,
    matches_featured,
    matches_material,
    matches_color,
)
