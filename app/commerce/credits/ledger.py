from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.credit_transactions import CreditTransaction
from app.db.repo.credits_repo import CreditsRepo

logger = structlog.get_logger(__name__)


async def record_credit_transaction(
    session: AsyncSession,
    *,
    user_id: UUID,
    amount: Decimal,
    transaction_type: str,
    description: str,
    now_utc: datetime,
    product_id: UUID | None = None,
    promotion_duration_days: int | None = None,
) -> bool:
    """Appends an audit row. Never raises: the balance row is the ledger of record."""
    transaction = CreditTransaction(
        user_id=user_id,
        amount=amount,
        transaction_type=transaction_type,
        description=description,
        product_id=product_id,
        promotion_duration_days=promotion_duration_days,
        created_at=now_utc,
    )
    try:
        async with session.begin_nested():
            await CreditsRepo.create_transaction(session, transaction=transaction)
    except SQLAlchemyError as exc:
        logger.warning(
            "credit_transaction_record_failed",
            user_id=str(user_id),
            transaction_type=transaction_type,
            amount=str(amount),
            exc_info=exc,
        )
        return False
    return True
