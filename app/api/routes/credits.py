from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.errors import commerce_error_response
from app.api.schemas import (
    CreditBalanceResponse,
    CreditPackageListResponse,
    CreditPackageResponse,
    CreditPurchaseRequest,
    CreditPurchaseResponse,
)
from app.commerce.credits.service import CreditsService
from app.commerce.errors import CommerceError
from app.db.session import SessionLocal
from app.services.actor_auth import get_current_actor_id

router = APIRouter(tags=["credits"])


@router.get("/credits/balance", response_model=CreditBalanceResponse)
async def get_balance(
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> CreditBalanceResponse | JSONResponse:
    try:
        async with SessionLocal.begin() as session:
            balance = await CreditsService.get_balance(session, actor_id=actor_id)
    except CommerceError as exc:
        return commerce_error_response(exc)

    return CreditBalanceResponse(balance=balance)


@router.get("/credits/packages", response_model=CreditPackageListResponse)
async def list_packages() -> CreditPackageListResponse:
    async with SessionLocal.begin() as session:
        packages = await CreditsService.list_packages(session)

    return CreditPackageListResponse(
        packages=[
            CreditPackageResponse(
                id=package.package_id,
                name=package.name,
                credits_amount=package.credits_amount,
                bonus_credits=package.bonus_credits,
                total_credits=package.total_credits,
                price=package.price,
            )
            for package in packages
        ]
    )


@router.post("/credits/purchase", response_model=CreditPurchaseResponse)
async def purchase_package(
    payload: CreditPurchaseRequest,
    actor_id: UUID | None = Depends(get_current_actor_id),
) -> CreditPurchaseResponse | JSONResponse:
    now_utc = datetime.now(timezone.utc)
    try:
        async with SessionLocal.begin() as session:
            result = await CreditsService.purchase_package(
                session,
                actor_id=actor_id,
                package_id=payload.package_id,
                now_utc=now_utc,
            )
    except CommerceError as exc:
        return commerce_error_response(exc)

    return CreditPurchaseResponse(credits_added=result.credits_added, new_balance=result.new_balance)
