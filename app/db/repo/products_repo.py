from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.products import Product


class ProductsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, product_id: UUID) -> Product | None:
        return await session.get(Product, product_id)

    @staticmethod
    async def get_active_by_id(session: AsyncSession, product_id: UUID) -> Product | None:
        stmt = select(Product).where(Product.id == product_id, Product.status == "active")
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_titles(session: AsyncSession, product_ids: Sequence[UUID]) -> dict[UUID, str]:
        if not product_ids:
            return {}
        stmt = select(Product.id, Product.title).where(Product.id.in_(product_ids))
        result = await session.execute(stmt)
        return {product_id: title for product_id, title in result.all()}

    @staticmethod
    async def decrement_stock(
        session: AsyncSession,
        *,
        product_id: UUID,
        quantity: int,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            update(Product)
            .where(Product.id == product_id, Product.stock_quantity >= quantity)
            .values(
                stock_quantity=Product.stock_quantity - quantity,
                updated_at=now_utc,
            )
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    async def set_promotion_window(
        session: AsyncSession,
        *,
        product_id: UUID,
        starts_at: datetime | None,
        ends_at: datetime | None,
        now_utc: datetime,
    ) -> bool:
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(
                is_promoted=starts_at is not None,
                promoted_start_date=starts_at,
                promoted_end_date=ends_at,
                updated_at=now_utc,
            )
        )
        result = await session.execute(stmt)
        return bool(result.rowcount)
