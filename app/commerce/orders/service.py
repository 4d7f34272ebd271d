from __future__ import annotations

from .checkout import compute_totals, place_order, validate_lines
from .queries import list_recent_orders, list_seller_orders
from .status import update_order_status


class OrderService:
    compute_totals = staticmethod(compute_totals)
    validate_lines = staticmethod(validate_lines)
    place_order = staticmethod(place_order)
    list_recent_orders = staticmethod(list_recent_orders)
    list_seller_orders = staticmethod(list_seller_orders)
    update_order_status = staticmethod(update_order_status)


__all__ = ["OrderService"]
