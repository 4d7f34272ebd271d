from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from app.commerce.orders.errors import InsufficientStockError, OrderItemCreationError
from app.commerce.orders.service import OrderService
from app.db.models.cart_items import CartItem
from app.db.models.order_items import OrderItem
from app.db.models.orders import Order
from app.db.models.products import Product
from app.db.repo.order_items_repo import OrderItemsRepo
from app.db.session import SessionLocal
from tests.integration.marketplace_fixtures import create_store_with_products, fill_cart, utc_now


async def _place(buyer_id):
    async with SessionLocal.begin() as session:
        return await OrderService.place_order(
            session,
            actor_id=buyer_id,
            shipping_address="7 Rue de la Liberte, Casablanca",
            shipping_method=None,
            phone=None,
            now_utc=utc_now(),
        )


@pytest.mark.asyncio
async def test_place_order_persists_order_items_and_decrements_stock() -> None:
    buyer_id = uuid4()
    rug_id, lamp_id = await create_store_with_products(
        seller_id=uuid4(),
        products=[("Rug", "100.00", 5), ("Lamp", "50.00", 2)],
    )
    await fill_cart(buyer_id=buyer_id, lines=[(rug_id, 2), (lamp_id, 1)])

    result = await _place(buyer_id)

    async with SessionLocal() as session:
        order = await session.get(Order, result.order_id)
        items = list((await session.execute(select(OrderItem).where(OrderItem.order_id == order.id))).scalars())
        stock = dict((await session.execute(select(Product.id, Product.stock_quantity))).all())
        cart_count = await session.scalar(select(func.count()).select_from(CartItem))

    assert order is not None
    assert order.order_number == result.order_number
    assert order.total == Decimal("250.00")
    assert sorted(item.price_at_purchase for item in items) == [Decimal("50.00"), Decimal("100.00")]
    assert stock == {rug_id: 3, lamp_id: 1}
    assert cart_count == 0


@pytest.mark.asyncio
async def test_insufficient_stock_writes_nothing() -> None:
    buyer_id = uuid4()
    (vase_id,) = await create_store_with_products(seller_id=uuid4(), products=[("Vase", "40.00", 1)])
    await fill_cart(buyer_id=buyer_id, lines=[(vase_id, 2)])

    with pytest.raises(InsufficientStockError):
        await _place(buyer_id)

    async with SessionLocal() as session:
        order_count = await session.scalar(select(func.count()).select_from(Order))
        stock = await session.scalar(select(Product.stock_quantity).where(Product.id == vase_id))

    assert order_count == 0
    assert stock == 1


@pytest.mark.asyncio
async def test_item_failure_leaves_no_order(monkeypatch) -> None:
    buyer_id = uuid4()
    (bowl_id,) = await create_store_with_products(seller_id=uuid4(), products=[("Bowl", "20.00", 3)])
    await fill_cart(buyer_id=buyer_id, lines=[(bowl_id, 1)])

    async def _broken_create_many(session, *, items):
        for item in items:
            item.order_id = uuid4()
        session.add_all(items)
        await session.flush()

    monkeypatch.setattr(OrderItemsRepo, "create_many", _broken_create_many)

    with pytest.raises(OrderItemCreationError):
        await _place(buyer_id)

    async with SessionLocal() as session:
        order_count = await session.scalar(select(func.count()).select_from(Order))
        stock = await session.scalar(select(Product.stock_quantity).where(Product.id == bowl_id))

    assert order_count == 0
    assert stock == 3
