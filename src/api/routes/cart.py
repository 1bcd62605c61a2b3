"""Routes scheduling cart and wishlist updates on the hosted backend."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, HTTPException, status

from src.models.storefront import (
    CartItemRequest,
    SideEffectAccepted,
    WishlistToggleRequest,
)
from src.services import cart
from src.services.clients.supabase_client import BackendDependency, CatalogBackend

router = APIRouter(tags=["cart"])


def _require_backend(backend: CatalogBackend | None) -> CatalogBackend:
    if backend is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog backend is not configured",
        )
    return backend


@router.post(
    "/cart/items",
    response_model=SideEffectAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Add a product to the shopper's cart",
)
async def add_cart_item(
    payload: CartItemRequest,
    background_tasks: BackgroundTasks,
    backend: BackendDependency,
) -> SideEffectAccepted:
    background_tasks.add_task(
        cart.add_to_cart,
        _require_backend(backend),
        payload.user_id,
        payload.product_id,
        payload.quantity,
    )
    return SideEffectAccepted(product_id=payload.product_id)


@router.post(
    "/wishlist/toggle",
    response_model=SideEffectAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Add or remove a product from the shopper's wishlist",
)
async def toggle_wishlist_item(
    payload: WishlistToggleRequest,
    background_tasks: BackgroundTasks,
    backend: BackendDependency,
) -> SideEffectAccepted:
    background_tasks.add_task(
        cart.toggle_wishlist,
        _require_backend(backend),
        payload.user_id,
        payload.product_id,
    )
    return SideEffectAccepted(product_id=payload.product_id)
