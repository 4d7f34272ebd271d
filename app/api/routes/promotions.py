from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.errors import commerce_error_response
from app.api.schemas import (
    PromoteRequest,
    PromoteResponse,
    PromotionPricingResponse,
    SuccessResponse,
)
from app.commerce.errors import CommerceError
from app.commerce.promotions.errors import PromotionApplyError
from app.commerce.promotions.service import PromotionService
from app.db.session import SessionLocal
from app.services.actor_auth import get_current_actor_id

router = APIRouter(tags=["promotions"])


@router.post("/products/{product_id}/promote", response_model=PromoteResponse)
async def promote_product(
    product_id: UUID,
    payload: PromoteRequest,
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> PromoteResponse | JSONResponse:
    now_utc = datetime.now(timezone.utc)
    apply_error: PromotionApplyError | None = None
    try:
        async with SessionLocal.begin() as session:
            try:
                result = await PromotionService.promote_product(
                    session,
                    actor_id=actor_id,
                    product_id=product_id,
                    days=payload.days,
                    now_utc=now_utc,
                )
            except PromotionApplyError as exc:
                # The debit and its audit row stay committed.
                apply_error = exc
    except CommerceError as exc:
        return commerce_error_response(exc)

    if apply_error is not None:
        return commerce_error_response(apply_error)

    return PromoteResponse(
        new_balance=result.new_balance,
        promoted_until=result.promoted_until,
        cost=result.cost,
    )


@router.delete("/products/{product_id}/promote", response_model=SuccessResponse)
async def unpromote_product(
    product_id: UUID,
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> SuccessResponse | JSONResponse:
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            await PromotionService.unpromote_product(
                session,
                actor_id=actor_id,
                product_id=product_id,
                now_utc=now_utc,
            )
    except CommerceError as exc:
        return commerce_error_response(exc)

    return SuccessResponse()


@router.get("/promotion/pricing", response_model=PromotionPricingResponse)
async def get_promotion_pricing() -> PromotionPricingResponse:
    async with SessionLocal.begin() as session:
        pricing = await PromotionService.get_pricing(session)

    return PromotionPricingResponse(
        price_per_day=pricing.price_per_day,
        min_days=pricing.min_days,
        max_days=pricing.max_days,
    )
