from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.order_items import OrderItem


class OrderItemsRepo:
    @staticmethod
    async def create_many(session: AsyncSession, *, items: Sequence[OrderItem]) -> list[OrderItem]:
        session.add_all(items)
        await session.flush()
        return list(items)

    @staticmethod
    async def list_for_orders(session: AsyncSession, order_ids: Sequence[UUID]) -> list[OrderItem]:
        if not order_ids:
            return []
        stmt = select(OrderItem).where(OrderItem.order_id.in_(order_ids))
        result = await session.execute(stmt)
        return list(result.scalars().all())
