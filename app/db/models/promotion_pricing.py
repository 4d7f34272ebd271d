from __future__ import annotations

from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Integer, Numeric, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.models.base import Base


class PromotionPricing(Base):
    __tablename__ = "promotion_pricing"
    __table_args__ = (
        CheckConstraint("price_per_day > 0", name="price_per_day_positive"),
        CheckConstraint("min_days >= 1 AND max_days >= min_days", name="day_bounds"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    price_per_day: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    min_days: Mapped[int] = mapped_column(Integer, nullable=False)
    max_days: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
