from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.commerce.errors import UnauthorizedError
from app.db.models.user_credits import UserCredits
from app.db.repo.credits_repo import CreditsRepo

from .errors import CreditPackageNotFoundError
from .ledger import record_credit_transaction
from .types import CreditPackageView, CreditPurchaseResult

logger = structlog.get_logger(__name__)

PURCHASE_TRANSACTION = "purchase"


async def _get_or_create_balance(
    session: AsyncSession,
    *,
    user_id: UUID,
    for_update: bool = False,
) -> UserCredits:
    if for_update:
        credits = await CreditsRepo.get_balance_for_update(session, user_id)
    else:
        credits = await CreditsRepo.get_balance(session, user_id)
    if credits is None:
        credits = await CreditsRepo.create_balance(session, user_id=user_id)
    return credits


class CreditsService:
    @staticmethod
    async def get_balance(session: AsyncSession, *, actor_id: UUID | None) -> Decimal:
        if actor_id is None:
            raise UnauthorizedError
        credits = await _get_or_create_balance(session, user_id=actor_id)
        return credits.balance

    @staticmethod
    async def list_packages(session: AsyncSession) -> list[CreditPackageView]:
        packages = await CreditsRepo.list_active_packages(session)
        return [
            CreditPackageView(
                package_id=package.id,
                name=package.name,
                credits_amount=package.credits_amount,
                bonus_credits=package.bonus_credits,
                price=package.price,
            )
            for package in packages
        ]

    @staticmethod
    async def purchase_package(
        session: AsyncSession,
        *,
        actor_id: UUID | None,
        package_id: int | None,
        now_utc: datetime,
    ) -> CreditPurchaseResult:
        """Credits the package amount plus bonus. Payment capture happens upstream."""
        if actor_id is None:
            raise UnauthorizedError
        if package_id is None:
            raise CreditPackageNotFoundError

        package = await CreditsRepo.get_active_package(session, package_id)
        if package is None:
            raise CreditPackageNotFoundError

        credits_added = package.credits_amount + package.bonus_credits
        credits = await _get_or_create_balance(session, user_id=actor_id, for_update=True)
        credits.balance = credits.balance + credits_added
        credits.updated_at = now_utc
        await session.flush()

        await record_credit_transaction(
            session,
            user_id=actor_id,
            amount=credits_added,
            transaction_type=PURCHASE_TRANSACTION,
            description=f"Purchased {package.name}",
            now_utc=now_utc,
        )
        logger.info(
            "credits_purchased",
            user_id=str(actor_id),
            package_id=package.id,
            credits_added=str(credits_added),
            new_balance=str(credits.balance),
        )
        return CreditPurchaseResult(
            package_id=package.id,
            credits_added=credits_added,
            new_balance=credits.balance,
        )
