from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.commerce.credits.ledger import record_credit_transaction
from app.commerce.errors import ForbiddenError, UnauthorizedError
from app.db.models.products import Product
from app.db.repo.credits_repo import CreditsRepo
from app.db.repo.products_repo import ProductsRepo
from app.db.repo.promotion_pricing_repo import PromotionPricingRepo
from app.db.repo.stores_repo import StoresRepo

from .constants import (
    DEFAULT_MAX_DAYS,
    DEFAULT_MIN_DAYS,
    DEFAULT_PRICE_PER_DAY,
    PROMOTION_SPEND_TRANSACTION,
)
from .errors import (
    InsufficientCreditsError,
    PromotionApplyError,
    PromotionDurationError,
    PromotionPricingMissingError,
)
from .types import PromotionPricingView, PromotionResult

logger = structlog.get_logger(__name__)


async def _get_owned_product(
    session: AsyncSession,
    *,
    actor_id: UUID | None,
    product_id: UUID,
) -> Product:
    if actor_id is None:
        raise UnauthorizedError

    store = await StoresRepo.get_by_seller_id(session, actor_id)
    if store is None:
        raise ForbiddenError

    product = await ProductsRepo.get_by_id(session, product_id)
    if product is None or product.store_id != store.id:
        raise ForbiddenError("Product not found or forbidden")
    return product


class PromotionService:
    @staticmethod
    async def get_pricing(session: AsyncSession) -> PromotionPricingView:
        pricing = await PromotionPricingRepo.get_active(session)
        if pricing is None:
            return PromotionPricingView(
                price_per_day=DEFAULT_PRICE_PER_DAY,
                min_days=DEFAULT_MIN_DAYS,
                max_days=DEFAULT_MAX_DAYS,
            )
        return PromotionPricingView(
            price_per_day=pricing.price_per_day,
            min_days=pricing.min_days,
            max_days=pricing.max_days,
        )

    @staticmethod
    async def promote_product(
        session: AsyncSession,
        *,
        actor_id: UUID | None,
        product_id: UUID,
        days: int | None,
        now_utc: datetime,
    ) -> PromotionResult:
        """Debits credits and flags the product as promoted for ``days`` days.

        The debit is final once written: an audit-row failure is only logged,
        and a failed promotion-window write raises ``PromotionApplyError``
        without refunding.
        """
        await _get_owned_product(session, actor_id=actor_id, product_id=product_id)
        if days is None or days < 1:
            raise PromotionDurationError

        pricing = await PromotionPricingRepo.get_active(session)
        if pricing is None:
            logger.error("promotion_pricing_missing", product_id=str(product_id))
            raise PromotionPricingMissingError
        if days < pricing.min_days or days > pricing.max_days:
            raise PromotionDurationError(min_days=pricing.min_days, max_days=pricing.max_days)

        cost = pricing.price_per_day * days
        credits = await CreditsRepo.get_balance_for_update(session, actor_id)
        balance = credits.balance if credits is not None else Decimal("0")
        if credits is None or balance < cost:
            raise InsufficientCreditsError(required=cost, available=balance)

        new_balance = balance - cost
        credits.balance = new_balance
        credits.updated_at = now_utc
        await session.flush()

        await record_credit_transaction(
            session,
            user_id=actor_id,
            amount=-cost,
            transaction_type=PROMOTION_SPEND_TRANSACTION,
            description=f"Promoted product for {days} day(s)",
            product_id=product_id,
            promotion_duration_days=days,
            now_utc=now_utc,
        )

        promoted_until = now_utc + timedelta(days=days)
        try:
            async with session.begin_nested():
                applied = await ProductsRepo.set_promotion_window(
                    session,
                    product_id=product_id,
                    starts_at=now_utc,
                    ends_at=promoted_until,
                    now_utc=now_utc,
                )
        except SQLAlchemyError as exc:
            logger.error(
                "promotion_apply_failed",
                user_id=str(actor_id),
                product_id=str(product_id),
                debited=str(cost),
                exc_info=exc,
            )
            raise PromotionApplyError(new_balance=new_balance) from exc
        if not applied:
            logger.error(
                "promotion_apply_failed",
                user_id=str(actor_id),
                product_id=str(product_id),
                debited=str(cost),
            )
            raise PromotionApplyError(new_balance=new_balance)

        logger.info(
            "product_promoted",
            user_id=str(actor_id),
            product_id=str(product_id),
            days=days,
            cost=str(cost),
            promoted_until=promoted_until.isoformat(),
        )
        return PromotionResult(new_balance=new_balance, promoted_until=promoted_until, cost=cost)

    @staticmethod
    async def unpromote_product(
        session: AsyncSession,
        *,
        actor_id: UUID | None,
        product_id: UUID,
        now_utc: datetime,
    ) -> None:
        # Unpromoting never refunds; sellers are warned before confirming.
        await _get_owned_product(session, actor_id=actor_id, product_id=product_id)
        await ProductsRepo.set_promotion_window(
            session,
            product_id=product_id,
            starts_at=None,
            ends_at=None,
            now_utc=now_utc,
        )
        logger.info("product_unpromoted", user_id=str(actor_id), product_id=str(product_id))
