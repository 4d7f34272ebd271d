from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.errors import commerce_error_response
from app.api.schemas import (
    CartItemRequest,
    CartLineResponse,
    CartResponse,
    CartUpdateResponse,
    SuccessResponse,
)
from app.commerce.cart.service import CartService
from app.commerce.errors import CommerceError
from app.db.session import SessionLocal
from app.services.actor_auth import get_current_actor_id

router = APIRouter(tags=["cart"])


@router.get("/cart", response_model=CartResponse)
async def get_cart(
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> CartResponse | JSONResponse:
    try:
        async with SessionLocal.begin() as session:
            lines = await CartService.get_cart(session, actor_id=actor_id)
    except CommerceError as exc:
        return commerce_error_response(exc)

    return CartResponse(
        items=[
            CartLineResponse(
                product_id=line.product_id,
                title=line.title,
                quantity=line.quantity,
                price=line.price,
                currency=line.currency,
                store_id=line.store_id,
                store_name=line.store_name,
                store_slug=line.store_slug,
                added_at=line.added_at,
            )
            for line in lines
        ]
    )


@router.post("/cart", response_model=CartUpdateResponse)
async def add_to_cart(
    payload: CartItemRequest,
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> CartUpdateResponse | JSONResponse:
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await CartService.add_to_cart(
                session,
                actor_id=actor_id,
                product_id=payload.product_id,
                quantity=payload.quantity,
                now_utc=now_utc,
            )
    except CommerceError as exc:
        return commerce_error_response(exc)

    return CartUpdateResponse(product_id=result.product_id, quantity=result.quantity)


@router.delete("/cart", response_model=SuccessResponse)
async def remove_from_cart(
    product_id: UUID | None = Query(default=None, alias="productId"),
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> SuccessResponse | JSONResponse:
    try:
        async with SessionLocal.begin() as session:
            await CartService.remove_from_cart(session, actor_id=actor_id, product_id=product_id)
    except CommerceError as exc:
        return commerce_error_response(exc)

    return SuccessResponse()
