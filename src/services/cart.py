"""Fire-and-forget cart and wishlist updates run as background tasks."""

from __future__ import annotations

import logging

from src.services.clients.supabase_client import BackendError, CatalogBackend

logger = logging.getLogger(__name__)


async def add_to_cart(
    backend: CatalogBackend,
    user_id: str,
    product_id: str,
    quantity: int = 1,
) -> bool:
    """Add a product to the user's cart; failures are logged and reported as False."""

    try:
        await backend.add_to_cart(user_id, product_id, quantity)
    except BackendError as exc:
        logger.warning(
            "Failed to add product %s to cart for user %s: %s", product_id, user_id, exc
        )
        return False

    logger.info(
        "Added product %s (qty=%d) to cart for user %s", product_id, quantity, user_id
    )
    return True


async def toggle_wishlist(backend: CatalogBackend, user_id: str, product_id: str) -> bool | None:
    """Flip wishlist membership; returns the new membership or None on failure."""

    try:
        wishlisted = await backend.toggle_wishlist(user_id, product_id)
    except BackendError as exc:
        logger.warning(
            "Failed to toggle wishlist for product %s (user %s): %s",
            product_id,
            user_id,
            exc,
        )
        return None

    logger.info(
        "Product %s %s wishlist of user %s",
        product_id,
        "added to" if wishlisted else "removed from",
        user_id,
    )
    return wishlisted
