from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.credit_packages import CreditPackage
from app.db.models.credit_transactions import CreditTransaction
from app.db.models.user_credits import UserCredits


class CreditsRepo:
    @staticmethod
    async def get_balance(session: AsyncSession, user_id: UUID) -> UserCredits | None:
        return await session.get(UserCredits, user_id)

    @staticmethod
    async def get_balance_for_update(session: AsyncSession, user_id: UUID) -> UserCredits | None:
        stmt = select(UserCredits).where(UserCredits.user_id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create_balance(
        session: AsyncSession,
        *,
        user_id: UUID,
        balance: Decimal = Decimal("0"),
    ) -> UserCredits:
        credits = UserCredits(user_id=user_id, balance=balance)
        session.add(credits)
        await session.flush()
        return credits

    @staticmethod
    async def create_transaction(
        session: AsyncSession,
        *,
        transaction: CreditTransaction,
    ) -> CreditTransaction:
        session.add(transaction)
        await session.flush()
        return transaction

    @staticmethod
    async def list_active_packages(session: AsyncSession) -> list[CreditPackage]:
        stmt = (
            select(CreditPackage)
            .where(CreditPackage.is_active.is_(True))
            .order_by(CreditPackage.order_index.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_active_package(session: AsyncSession, package_id: int) -> CreditPackage | None:
        stmt = select(CreditPackage).where(
            CreditPackage.id == package_id,
            CreditPackage.is_active.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
