from __future__ import annotations

from decimal import Decimal

from app.commerce.errors import CommerceError, ConfigurationError, ValidationError


class PromotionError(CommerceError):
    default_message = "Failed to promote product"


class PromotionDurationError(ValidationError):
    def __init__(self, *, min_days: int | None = None, max_days: int | None = None) -> None:
        self.min_days = min_days
        self.max_days = max_days
        if min_days is None or max_days is None:
            super().__init__("Valid number of days is required")
        else:
            super().__init__(f"Promotion duration must be between {min_days} and {max_days} days")


class PromotionPricingMissingError(ConfigurationError):
    default_message = "Promotion pricing not configured"


class InsufficientCreditsError(PromotionError):
    def __init__(self, *, required: Decimal, available: Decimal) -> None:
        self.required = required
        self.available = available
        super().__init__("Insufficient credits")


class PromotionApplyError(PromotionError):
    """Credits were debited but the product could not be flagged as promoted."""

    default_message = "Failed to enable promotion"

    def __init__(self, *, new_balance: Decimal) -> None:
        self.new_balance = new_balance
        super().__init__()
