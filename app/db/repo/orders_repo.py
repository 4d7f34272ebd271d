from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.order_items import OrderItem
from app.db.models.orders import Order
from app.db.models.products import Product


class OrdersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, order_id: UUID) -> Order | None:
        return await session.get(Order, order_id)

    @staticmethod
    async def create(session: AsyncSession, *, order: Order) -> Order:
        session.add(order)
        await session.flush()
        return order

    @staticmethod
    async def delete_by_id(session: AsyncSession, order_id: UUID) -> int:
        result = await session.execute(delete(Order).where(Order.id == order_id))
        return int(result.rowcount or 0)

    @staticmethod
    async def list_for_buyer(
        session: AsyncSession,
        *,
        buyer_id: UUID,
        limit: int,
        status: str | None = None,
    ) -> list[Order]:
        stmt = select(Order).where(Order.buyer_id == buyer_id)
        if status is not None:
            stmt = stmt.where(Order.status == status)
        stmt = stmt.order_by(Order.created_at.desc()).limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_for_store(
        session: AsyncSession,
        *,
        store_id: UUID,
        limit: int,
        status: str | None = None,
    ) -> list[Order]:
        store_order_ids = (
            select(OrderItem.order_id)
            .join(Product, Product.id == OrderItem.product_id)
            .where(Product.store_id == store_id)
        )
        stmt = select(Order).where(Order.id.in_(store_order_ids))
        if status is not None:
            stmt = stmt.where(Order.status == status)
        stmt = stmt.order_by(Order.created_at.desc()).limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def contains_store_products(
        session: AsyncSession,
        *,
        order_id: UUID,
        store_id: UUID,
    ) -> bool:
        stmt = (
            select(OrderItem.id)
            .join(Product, Product.id == OrderItem.product_id)
            .where(OrderItem.order_id == order_id, Product.store_id == store_id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def update_status(
        session: AsyncSession,
        *,
        order_id: UUID,
        status: str,
        now_utc: datetime,
    ) -> bool:
        stmt = update(Order).where(Order.id == order_id).values(status=status, updated_at=now_utc)
        result = await session.execute(stmt)
        return bool(result.rowcount)
