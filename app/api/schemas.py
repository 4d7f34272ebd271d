from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlaceOrderRequest(CamelModel):
    shipping_address: str | None = None
    shipping_method: str | None = None
    phone: str | None = None


class PlaceOrderResponse(CamelModel):
    success: bool = True
    order_id: UUID
    order_number: str
    total: Decimal


class OrderLineResponse(CamelModel):
    product_id: UUID | None
    title: str
    quantity: int
    price_at_purchase: Decimal


class OrderSummaryResponse(CamelModel):
    id: UUID
    order_number: str
    status: str
    total: Decimal
    created_at: datetime
    products: list[OrderLineResponse]


class OrderListResponse(CamelModel):
    orders: list[OrderSummaryResponse]


class UpdateOrderStatusRequest(CamelModel):
    status: str | None = None


class SuccessResponse(CamelModel):
    success: bool = True


class CartItemRequest(CamelModel):
    product_id: UUID | None = None
    quantity: int | None = 1


class CartLineResponse(CamelModel):
    product_id: UUID
    title: str
    quantity: int
    price: Decimal
    currency: str
    store_id: UUID
    store_name: str
    store_slug: str
    added_at: datetime


class CartResponse(CamelModel):
    items: list[CartLineResponse]


class CartUpdateResponse(CamelModel):
    success: bool = True
    product_id: UUID
    quantity: int


class PromoteRequest(CamelModel):
    days: int | None = None


class PromoteResponse(CamelModel):
    success: bool = True
    new_balance: Decimal
    promoted_until: datetime
    cost: Decimal


class PromotionPricingResponse(CamelModel):
    price_per_day: Decimal
    min_days: int
    max_days: int


class CreditBalanceResponse(CamelModel):
    balance: Decimal


class CreditPackageResponse(CamelModel):
    id: int
    name: str
    credits_amount: Decimal
    bonus_credits: Decimal
    total_credits: Decimal
    price: Decimal


class CreditPackageListResponse(CamelModel):
    packages: list[CreditPackageResponse]


class CreditPurchaseRequest(CamelModel):
    package_id: int | None = None


class CreditPurchaseResponse(CamelModel):
    success: bool = True
    credits_added: Decimal
    new_balance: Decimal
