from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class CreditPackageView:
    package_id: int
    name: str
    credits_amount: Decimal
    bonus_credits: Decimal
    price: Decimal

    @property
    def total_credits(self) -> Decimal:
        return self.credits_amount + self.bonus_credits


@dataclass(slots=True)
class CreditPurchaseResult:
    package_id: int
    credits_added: Decimal
    new_balance: Decimal
