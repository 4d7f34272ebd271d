from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(slots=True)
class PromotionResult:
    new_balance: Decimal
    promoted_until: datetime
    cost: Decimal


@dataclass(frozen=True, slots=True)
class PromotionPricingView:
    price_per_day: Decimal
    min_days: int
    max_days: int
