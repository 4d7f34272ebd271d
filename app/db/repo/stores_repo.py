from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.stores import Store


class StoresRepo:
    @staticmethod
    async def get_by_seller_id(session: AsyncSession, seller_id: UUID) -> Store | None:
        stmt = select(Store).where(Store.seller_id == seller_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
