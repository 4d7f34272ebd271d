from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.buyer_profiles import BuyerProfile


class BuyerProfilesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, buyer_id: UUID) -> BuyerProfile | None:
        return await session.get(BuyerProfile, buyer_id)

    @staticmethod
    async def create(session: AsyncSession, *, buyer_id: UUID) -> BuyerProfile:
        profile = BuyerProfile(id=buyer_id)
        session.add(profile)
        await session.flush()
        return profile
