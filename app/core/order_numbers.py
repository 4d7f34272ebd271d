from __future__ import annotations

import secrets
from datetime import datetime, timezone

ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ORDER_NUMBER_PREFIX = "ORD"


def generate_order_number(*, length: int = 6, now_utc: datetime | None = None) -> str:
    """Builds a human-facing order number such as ``ORD-261019-7KQ2MX``.

    The date segment keeps numbers sortable for support staff; the random
    suffix avoids ambiguous glyphs (0/O, 1/I). Uniqueness is not guaranteed
    here and is enforced by the ``uq_orders_order_number`` constraint.
    """
    if length <= 0:
        raise ValueError("length must be positive")
    moment = now_utc or datetime.now(timezone.utc)
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(length))
    return f"{ORDER_NUMBER_PREFIX}-{moment:%y%m%d}-{suffix}"
