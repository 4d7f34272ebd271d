from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.cart_items import CartItem
from app.db.models.products import Product
from app.db.models.stores import Store


class CartRepo:
    @staticmethod
    async def list_lines_for_checkout(
        session: AsyncSession,
        buyer_id: UUID,
    ) -> list[tuple[CartItem, Product]]:
        # Product rows stay locked until the order transaction ends.
        stmt = (
            select(CartItem, Product)
            .join(Product, Product.id == CartItem.product_id)
            .where(CartItem.buyer_id == buyer_id)
            .order_by(CartItem.created_at.asc())
            .with_for_update(of=Product)
        )
        result = await session.execute(stmt)
        return [(cart_item, product) for cart_item, product in result.all()]

    @staticmethod
    async def list_lines_for_display(
        session: AsyncSession,
        buyer_id: UUID,
    ) -> list[tuple[CartItem, Product, Store]]:
        stmt = (
            select(CartItem, Product, Store)
            .join(Product, Product.id == CartItem.product_id)
            .join(Store, Store.id == Product.store_id)
            .where(CartItem.buyer_id == buyer_id)
            .order_by(CartItem.created_at.desc())
        )
        result = await session.execute(stmt)
        return [(cart_item, product, store) for cart_item, product, store in result.all()]

    @staticmethod
    async def upsert_line(
        session: AsyncSession,
        *,
        buyer_id: UUID,
        product_id: UUID,
        quantity: int,
        now_utc: datetime,
    ) -> CartItem:
        stmt = (
            pg_insert(CartItem)
            .values(
                id=uuid4(),
                buyer_id=buyer_id,
                product_id=product_id,
                quantity=quantity,
                created_at=now_utc,
                updated_at=now_utc,
            )
            .on_conflict_do_update(
                constraint="uq_cart_items_buyer_product",
                set_={"quantity": quantity, "updated_at": now_utc},
            )
            .returning(CartItem)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    async def delete_line(session: AsyncSession, *, buyer_id: UUID, product_id: UUID) -> int:
        stmt = delete(CartItem).where(
            CartItem.buyer_id == buyer_id,
            CartItem.product_id == product_id,
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)

    @staticmethod
    async def clear_for_buyer(session: AsyncSession, buyer_id: UUID) -> int:
        stmt = delete(CartItem).where(CartItem.buyer_id == buyer_id)
        result = await session.execute(stmt)
        return int(result.rowcount or 0)
