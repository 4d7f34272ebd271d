from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from app.db.models.buyer_profiles import BuyerProfile
from app.db.models.cart_items import CartItem
from app.db.models.products import Product
from app.db.models.promotion_pricing import PromotionPricing
from app.db.models.stores import Store
from app.db.models.user_credits import UserCredits
from app.db.session import SessionLocal

UTC = timezone.utc


def utc_now() -> datetime:
    return datetime.now(UTC)


async def create_store_with_products(
    *,
    seller_id: UUID,
    products: list[tuple[str, str, int]],
) -> list[UUID]:
    store_id = uuid4()
    product_ids: list[UUID] = []
    async with SessionLocal.begin() as session:
        session.add(
            Store(
                id=store_id,
                seller_id=seller_id,
                name=f"Store {store_id.hex[:6]}",
                slug=f"store-{store_id.hex[:12]}",
            )
        )
        await session.flush()
        for title, price, stock_quantity in products:
            product = Product(
                id=uuid4(),
                store_id=store_id,
                title=title,
                price=Decimal(price),
                stock_quantity=stock_quantity,
                status="active",
            )
            session.add(product)
            product_ids.append(product.id)
    return product_ids


async def fill_cart(*, buyer_id: UUID, lines: list[tuple[UUID, int]]) -> None:
    async with SessionLocal.begin() as session:
        session.add(BuyerProfile(id=buyer_id))
        await session.flush()
        for product_id, quantity in lines:
            session.add(CartItem(id=uuid4(), buyer_id=buyer_id, product_id=product_id, quantity=quantity))


async def seed_credits(*, user_id: UUID, balance: str, price_per_day: str = "10") -> None:
    async with SessionLocal.begin() as session:
        session.add(UserCredits(user_id=user_id, balance=Decimal(balance)))
        session.add(PromotionPricing(price_per_day=Decimal(price_per_day), min_days=1, max_days=30))
