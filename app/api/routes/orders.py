from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.errors import commerce_error_response
from app.api.schemas import (
    OrderLineResponse,
    OrderListResponse,
    OrderSummaryResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    SuccessResponse,
    UpdateOrderStatusRequest,
)
from app.commerce.errors import CommerceError
from app.commerce.orders.errors import OrderItemCreationError
from app.commerce.orders.service import OrderService
from app.commerce.orders.types import OrderSummary
from app.db.session import SessionLocal
from app.services.actor_auth import get_current_actor_id

router = APIRouter(tags=["orders"])
logger = structlog.get_logger(__name__)


def _as_order_list(orders: list[OrderSummary]) -> OrderListResponse:
    return OrderListResponse(
        orders=[
            OrderSummaryResponse(
                id=order.order_id,
                order_number=order.order_number,
                status=order.status,
                total=order.total,
                created_at=order.created_at,
                products=[
                    OrderLineResponse(
                        product_id=line.product_id,
                        title=line.title,
                        quantity=line.quantity,
                        price_at_purchase=line.price_at_purchase,
                    )
                    for line in order.products
                ],
            )
            for order in orders
        ]
    )


@router.post("/orders", response_model=PlaceOrderResponse)
async def place_order(
    payload: PlaceOrderRequest,
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> PlaceOrderResponse | JSONResponse:
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await OrderService.place_order(
                session,
                actor_id=actor_id,
                shipping_address=payload.shipping_address,
                shipping_method=payload.shipping_method,
                phone=payload.phone,
                now_utc=now_utc,
            )
    except OrderItemCreationError as exc:
        logger.error(
            "order_item_creation_failed",
            order_id=str(exc.order_id),
            detail=exc.detail,
        )
        return commerce_error_response(exc)
    except CommerceError as exc:
        return commerce_error_response(exc)

    return PlaceOrderResponse(
        order_id=result.order_id,
        order_number=result.order_number,
        total=result.total,
    )


@router.get("/orders/recent", response_model=OrderListResponse)
async def list_recent_orders(
    limit: int | None = Query(default=None),
    status: str | None = Query(default=None),
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> OrderListResponse | JSONResponse:
    try:
        async with SessionLocal.begin() as session:
            orders = await OrderService.list_recent_orders(
                session,
                actor_id=actor_id,
                limit=limit,
                status=status,
            )
    except CommerceError as exc:
        return commerce_error_response(exc)

    return _as_order_list(orders)


@router.get("/seller/orders", response_model=OrderListResponse)
async def list_seller_orders(
    limit: int | None = Query(default=None),
    status: str | None = Query(default=None),
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> OrderListResponse | JSONResponse:
    try:
        async with SessionLocal.begin() as session:
            orders = await OrderService.list_seller_orders(
                session,
                actor_id=actor_id,
                limit=limit,
                status=status,
            )
    except CommerceError as exc:
        return commerce_error_response(exc)

    return _as_order_list(orders)


@router.patch("/orders/{order_id}", response_model=SuccessResponse)
async def update_order_status(
    order_id: UUID,
    payload: UpdateOrderStatusRequest,
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> SuccessResponse | JSONResponse:
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            await OrderService.update_order_status(
                session,
                actor_id=actor_id,
                order_id=order_id,
                status=payload.status,
                now_utc=now_utc,
            )
    except CommerceError as exc:
        return commerce_error_response(exc)

    return SuccessResponse()
