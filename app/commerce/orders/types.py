from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True, slots=True)
class CheckoutLine:
    product_id: UUID
    title: str
    quantity: int
    unit_price: Decimal
    stock_quantity: int
    product_status: str

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True, slots=True)
class CheckoutTotals:
    subtotal: Decimal
    shipping_cost: Decimal
    tax: Decimal
    total: Decimal


@dataclass(slots=True)
class PlaceOrderResult:
    order_id: UUID
    order_number: str
    total: Decimal


@dataclass(slots=True)
class OrderLineView:
    product_id: UUID | None
    title: str
    quantity: int
    price_at_purchase: Decimal


@dataclass(slots=True)
class OrderSummary:
    order_id: UUID
    order_number: str
    status: str
    total: Decimal
    created_at: datetime
    products: list[OrderLineView] = field(default_factory=list)
