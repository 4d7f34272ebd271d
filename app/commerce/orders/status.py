from __future__ import annotations

from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.commerce.errors import ForbiddenError, UnauthorizedError
from app.db.repo.orders_repo import OrdersRepo
from app.db.repo.stores_repo import StoresRepo

from .constants import ORDER_STATUSES
from .errors import InvalidOrderStatusError, OrderNotFoundError

logger = structlog.get_logger(__name__)


async def update_order_status(
    session: AsyncSession,
    *,
    actor_id: UUID | None,
    order_id: UUID,
    status: str | None,
    now_utc: datetime,
) -> None:
    """Seller-side status change. Any listed status is accepted from any other."""
    if actor_id is None:
        raise UnauthorizedError

    store = await StoresRepo.get_by_seller_id(session, actor_id)
    if store is None:
        raise ForbiddenError

    if status not in ORDER_STATUSES:
        raise InvalidOrderStatusError

    order = await OrdersRepo.get_by_id(session, order_id)
    if order is None or not await OrdersRepo.contains_store_products(
        session,
        order_id=order_id,
        store_id=store.id,
    ):
        raise OrderNotFoundError

    previous_status = order.status
    await OrdersRepo.update_status(session, order_id=order_id, status=status, now_utc=now_utc)
    logger.info(
        "order_status_updated",
        order_id=str(order_id),
        store_id=str(store.id),
        previous_status=previous_status,
        status=status,
    )
