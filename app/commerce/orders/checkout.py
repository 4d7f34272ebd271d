from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.commerce.buyers import ensure_buyer_profile
from app.commerce.errors import UnauthorizedError, ValidationError
from app.core.order_numbers import generate_order_number
from app.db.models.order_items import OrderItem
from app.db.models.orders import ORDER_NUMBER_CONSTRAINT, Order
from app.db.repo.cart_repo import CartRepo
from app.db.repo.order_items_repo import OrderItemsRepo
from app.db.repo.orders_repo import OrdersRepo
from app.db.repo.products_repo import ProductsRepo

from .constants import (
    DEFAULT_PAYMENT_METHOD,
    DEFAULT_SHIPPING_METHOD,
    FLAT_SHIPPING_COST,
    FLAT_TAX,
    INITIAL_ORDER_STATUS,
    ORDER_NUMBER_MAX_ATTEMPTS,
    ORDERABLE_PRODUCT_STATUS,
)
from .errors import (
    EmptyCartError,
    InsufficientStockError,
    OrderCreationError,
    OrderItemCreationError,
    ProductUnavailableError,
)
from .types import CheckoutLine, CheckoutTotals, PlaceOrderResult

logger = structlog.get_logger(__name__)


def _is_order_number_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return ORDER_NUMBER_CONSTRAINT in message or "orders.order_number" in message


def compute_totals(lines: Sequence[CheckoutLine]) -> CheckoutTotals:
    subtotal = sum((line.line_total for line in lines), Decimal("0"))
    shipping_cost = FLAT_SHIPPING_COST
    tax = FLAT_TAX
    return CheckoutTotals(
        subtotal=subtotal,
        shipping_cost=shipping_cost,
        tax=tax,
        total=subtotal + shipping_cost + tax,
    )


def validate_lines(lines: Sequence[CheckoutLine]) -> None:
    for line in lines:
        if line.product_status != ORDERABLE_PRODUCT_STATUS:
            raise ProductUnavailableError(product_id=line.product_id, title=line.title)
        if line.stock_quantity < line.quantity:
            raise InsufficientStockError(
                product_id=line.product_id,
                title=line.title,
                requested=line.quantity,
                available=line.stock_quantity,
            )


async def _load_checkout_lines(session: AsyncSession, *, buyer_id: UUID) -> list[CheckoutLine]:
    try:
        rows = await CartRepo.list_lines_for_checkout(session, buyer_id)
    except SQLAlchemyError as exc:
        logger.warning("checkout_cart_load_failed", buyer_id=str(buyer_id), exc_info=exc)
        raise EmptyCartError from exc

    if not rows:
        raise EmptyCartError

    return [
        CheckoutLine(
            product_id=product.id,
            title=product.title,
            quantity=cart_item.quantity,
            unit_price=product.price,
            stock_quantity=product.stock_quantity,
            product_status=product.status,
        )
        for cart_item, product in rows
    ]


async def _create_order(
    session: AsyncSession,
    *,
    buyer_id: UUID,
    totals: CheckoutTotals,
    shipping_method: str,
    shipping_address: str,
    phone: str | None,
    now_utc: datetime,
) -> Order:
    for attempt in range(1, ORDER_NUMBER_MAX_ATTEMPTS + 1):
        order = Order(
            id=uuid4(),
            buyer_id=buyer_id,
            order_number=generate_order_number(now_utc=now_utc),
            status=INITIAL_ORDER_STATUS,
            payment_method=DEFAULT_PAYMENT_METHOD,
            shipping_method=shipping_method,
            shipping_address=shipping_address,
            contact_phone=phone,
            subtotal=totals.subtotal,
            shipping_cost=totals.shipping_cost,
            tax=totals.tax,
            total=totals.total,
            created_at=now_utc,
            updated_at=now_utc,
        )
        try:
            async with session.begin_nested():
                await OrdersRepo.create(session, order=order)
        except IntegrityError as exc:
            if not _is_order_number_conflict(exc):
                logger.error("order_create_failed", buyer_id=str(buyer_id), exc_info=exc)
                raise OrderCreationError from exc
            logger.warning(
                "order_number_collision",
                buyer_id=str(buyer_id),
                order_number=order.order_number,
                attempt=attempt,
            )
            continue
        except SQLAlchemyError as exc:
            logger.error("order_create_failed", buyer_id=str(buyer_id), exc_info=exc)
            raise OrderCreationError from exc
        return order

    logger.error(
        "order_number_attempts_exhausted",
        buyer_id=str(buyer_id),
        attempts=ORDER_NUMBER_MAX_ATTEMPTS,
    )
    raise OrderCreationError


async def _delete_order(session: AsyncSession, *, order_id: UUID) -> None:
    try:
        async with session.begin_nested():
            await OrdersRepo.delete_by_id(session, order_id)
    except SQLAlchemyError as exc:
        logger.error("order_rollback_failed", order_id=str(order_id), exc_info=exc)


async def _create_order_items(
    session: AsyncSession,
    *,
    order: Order,
    lines: Sequence[CheckoutLine],
) -> None:
    # Prices come from the checkout snapshot so later price edits never touch history.
    items = [
        OrderItem(
            id=uuid4(),
            order_id=order.id,
            product_id=line.product_id,
            quantity=line.quantity,
            price_at_purchase=line.unit_price,
        )
        for line in lines
    ]
    try:
        async with session.begin_nested():
            await OrderItemsRepo.create_many(session, items=items)
    except SQLAlchemyError as exc:
        logger.error(
            "order_items_create_failed",
            order_id=str(order.id),
            order_number=order.order_number,
            items=len(items),
            exc_info=exc,
        )
        await _delete_order(session, order_id=order.id)
        raise OrderItemCreationError(
            order_id=order.id,
            detail=str(getattr(exc, "orig", None) or exc),
        ) from exc


async def _decrement_stock(
    session: AsyncSession,
    *,
    order_id: UUID,
    lines: Sequence[CheckoutLine],
    now_utc: datetime,
) -> None:
    for line in lines:
        try:
            async with session.begin_nested():
                decremented = await ProductsRepo.decrement_stock(
                    session,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    now_utc=now_utc,
                )
        except SQLAlchemyError as exc:
            logger.warning(
                "order_stock_decrement_failed",
                order_id=str(order_id),
                product_id=str(line.product_id),
                quantity=line.quantity,
                exc_info=exc,
            )
            continue
        if not decremented:
            logger.warning(
                "order_stock_decrement_skipped",
                order_id=str(order_id),
                product_id=str(line.product_id),
                quantity=line.quantity,
            )


async def _clear_cart(session: AsyncSession, *, buyer_id: UUID, order_id: UUID) -> None:
    try:
        async with session.begin_nested():
            await CartRepo.clear_for_buyer(session, buyer_id)
    except SQLAlchemyError as exc:
        logger.warning(
            "order_cart_clear_failed",
            buyer_id=str(buyer_id),
            order_id=str(order_id),
            exc_info=exc,
        )


async def place_order(
    session: AsyncSession,
    *,
    actor_id: UUID | None,
    shipping_address: str | None,
    shipping_method: str | None,
    phone: str | None,
    now_utc: datetime,
) -> PlaceOrderResult:
    if actor_id is None:
        raise UnauthorizedError
    address = (shipping_address or "").strip()
    if not address:
        raise ValidationError("Shipping address is required")

    await ensure_buyer_profile(session, buyer_id=actor_id)

    lines = await _load_checkout_lines(session, buyer_id=actor_id)
    validate_lines(lines)
    totals = compute_totals(lines)

    order = await _create_order(
        session,
        buyer_id=actor_id,
        totals=totals,
        shipping_method=(shipping_method or "").strip() or DEFAULT_SHIPPING_METHOD,
        shipping_address=address,
        phone=(phone or "").strip() or None,
        now_utc=now_utc,
    )
    await _create_order_items(session, order=order, lines=lines)
    await _decrement_stock(session, order_id=order.id, lines=lines, now_utc=now_utc)
    await _clear_cart(session, buyer_id=actor_id, order_id=order.id)

    logger.info(
        "order_placed",
        buyer_id=str(actor_id),
        order_id=str(order.id),
        order_number=order.order_number,
        items=len(lines),
        total=str(totals.total),
    )
    return PlaceOrderResult(order_id=order.id, order_number=order.order_number, total=totals.total)
