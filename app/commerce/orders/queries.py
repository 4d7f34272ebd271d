from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.commerce.buyers import ensure_buyer_profile
from app.commerce.errors import ForbiddenError, UnauthorizedError
from app.db.models.order_items import OrderItem
from app.db.models.orders import Order
from app.db.repo.order_items_repo import OrderItemsRepo
from app.db.repo.orders_repo import OrdersRepo
from app.db.repo.products_repo import ProductsRepo
from app.db.repo.stores_repo import StoresRepo

from .constants import (
    ORDER_STATUSES,
    RECENT_ORDERS_DEFAULT_LIMIT,
    RECENT_ORDERS_MAX_LIMIT,
    UNKNOWN_PRODUCT_TITLE,
)
from .errors import InvalidOrderStatusError
from .types import OrderLineView, OrderSummary


def _resolve_limit(limit: int | None) -> int:
    if limit is None:
        return RECENT_ORDERS_DEFAULT_LIMIT
    return max(1, min(RECENT_ORDERS_MAX_LIMIT, int(limit)))


def _resolve_status(status: str | None) -> str | None:
    if not status:
        return None
    if status not in ORDER_STATUSES:
        raise InvalidOrderStatusError
    return status


async def _summarize(session: AsyncSession, orders: Sequence[Order]) -> list[OrderSummary]:
    if not orders:
        return []

    items = await OrderItemsRepo.list_for_orders(session, [order.id for order in orders])
    product_ids = sorted({item.product_id for item in items if item.product_id is not None})
    titles = await ProductsRepo.get_titles(session, product_ids)

    items_by_order: dict[UUID, list[OrderItem]] = defaultdict(list)
    for item in items:
        items_by_order[item.order_id].append(item)

    return [
        OrderSummary(
            order_id=order.id,
            order_number=order.order_number,
            status=order.status,
            total=order.total,
            created_at=order.created_at,
            products=[
                OrderLineView(
                    product_id=item.product_id,
                    title=titles.get(item.product_id, UNKNOWN_PRODUCT_TITLE)
                    if item.product_id is not None
                    else UNKNOWN_PRODUCT_TITLE,
                    quantity=item.quantity,
                    price_at_purchase=item.price_at_purchase,
                )
                for item in items_by_order.get(order.id, [])
            ],
        )
        for order in orders
    ]


async def list_recent_orders(
    session: AsyncSession,
    *,
    actor_id: UUID | None,
    limit: int | None = None,
    status: str | None = None,
) -> list[OrderSummary]:
    if actor_id is None:
        raise UnauthorizedError
    resolved_status = _resolve_status(status)

    await ensure_buyer_profile(session, buyer_id=actor_id)
    orders = await OrdersRepo.list_for_buyer(
        session,
        buyer_id=actor_id,
        limit=_resolve_limit(limit),
        status=resolved_status,
    )
    return await _summarize(session, orders)


async def list_seller_orders(
    session: AsyncSession,
    *,
    actor_id: UUID | None,
    limit: int | None = None,
    status: str | None = None,
) -> list[OrderSummary]:
    if actor_id is None:
        raise UnauthorizedError
    resolved_status = _resolve_status(status)

    store = await StoresRepo.get_by_seller_id(session, actor_id)
    if store is None:
        raise ForbiddenError

    orders = await OrdersRepo.list_for_store(
        session,
        store_id=store.id,
        limit=_resolve_limit(limit),
        status=resolved_status,
    )
    return await _summarize(session, orders)
