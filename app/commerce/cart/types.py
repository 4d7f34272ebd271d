from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(slots=True)
class CartLineView:
    product_id: UUID
    title: str
    quantity: int
    price: Decimal
    currency: str
    store_id: UUID
    store_name: str
    store_slug: str
    added_at: datetime


@dataclass(slots=True)
class CartLineUpdate:
    product_id: UUID
    quantity: int
