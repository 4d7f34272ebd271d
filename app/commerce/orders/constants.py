from __future__ import annotations

from decimal import Decimal

ORDER_NUMBER_MAX_ATTEMPTS = 3
DEFAULT_SHIPPING_METHOD = "Amana"
DEFAULT_PAYMENT_METHOD = "cod"
INITIAL_ORDER_STATUS = "pending"
ORDER_STATUSES: tuple[str, ...] = (
    "pending",
    "paid",
    "confirmed",
    "shipped",
    "delivered",
    "cancelled",
)
ORDERABLE_PRODUCT_STATUS = "active"

# Placeholders until carrier rates and VAT rules exist.
FLAT_SHIPPING_COST = Decimal("0")
FLAT_TAX = Decimal("0")

RECENT_ORDERS_DEFAULT_LIMIT = 10
RECENT_ORDERS_MAX_LIMIT = 50
UNKNOWN_PRODUCT_TITLE = "Unknown Product"
