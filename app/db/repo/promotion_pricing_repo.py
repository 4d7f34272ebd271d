from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.promotion_pricing import PromotionPricing


class PromotionPricingRepo:
    @staticmethod
    async def get_active(session: AsyncSession) -> PromotionPricing | None:
        stmt = (
            select(PromotionPricing)
            .where(PromotionPricing.is_active.is_(True))
            .order_by(PromotionPricing.id.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
