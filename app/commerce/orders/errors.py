from __future__ import annotations

from uuid import UUID

from app.commerce.errors import CommerceError, NotFoundError, ValidationError


class CheckoutError(CommerceError):
    default_message = "Failed to place order"


class EmptyCartError(CheckoutError):
    default_message = "Cart is empty"


class ProductUnavailableError(CheckoutError):
    def __init__(self, *, product_id: UUID, title: str) -> None:
        self.product_id = product_id
        self.title = title
        super().__init__(f"Product {title} is no longer available")


class InsufficientStockError(CheckoutError):
    def __init__(self, *, product_id: UUID, title: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.title = title
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock for {title}")


class OrderCreationError(CheckoutError):
    default_message = "Failed to create order"


class OrderItemCreationError(CheckoutError):
    default_message = "Failed to create order items"

    def __init__(self, *, order_id: UUID, detail: str | None = None) -> None:
        self.order_id = order_id
        self.detail = detail
        super().__init__()


class OrderNotFoundError(NotFoundError):
    default_message = "Order not found"


class InvalidOrderStatusError(ValidationError):
    default_message = "Invalid status"
