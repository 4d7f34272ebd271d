from __future__ import annotations

from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.buyer_profiles_repo import BuyerProfilesRepo

logger = structlog.get_logger(__name__)


async def ensure_buyer_profile(session: AsyncSession, *, buyer_id: UUID) -> bool:
    """Creates the buyer profile on first use.

    A missing row is the only trigger for creation; lookup errors propagate.
    Creation is best-effort: a failure is logged and reported as ``False``.
    """
    if await BuyerProfilesRepo.get_by_id(session, buyer_id) is not None:
        return True

    try:
        async with session.begin_nested():
            await BuyerProfilesRepo.create(session, buyer_id=buyer_id)
    except SQLAlchemyError as exc:
        logger.warning("buyer_profile_create_failed", buyer_id=str(buyer_id), exc_info=exc)
        return False

    logger.info("buyer_profile_created", buyer_id=str(buyer_id))
    return True
