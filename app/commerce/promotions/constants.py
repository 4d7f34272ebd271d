from __future__ import annotations

from decimal import Decimal

DEFAULT_PRICE_PER_DAY = Decimal("10")
DEFAULT_MIN_DAYS = 1
DEFAULT_MAX_DAYS = 30
PROMOTION_SPEND_TRANSACTION = "promotion_spend"
