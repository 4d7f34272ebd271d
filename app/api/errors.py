from __future__ import annotations

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from app.commerce.errors import (
    CommerceError,
    ConfigurationError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from app.commerce.promotions.errors import InsufficientCreditsError, PromotionApplyError

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_code_for(exc: CommerceError) -> int:
    if isinstance(exc, UnauthorizedError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, ForbiddenError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConfigurationError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    content: dict[str, Any] = {"error": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def commerce_error_response(exc: CommerceError) -> JSONResponse:
    if isinstance(exc, InsufficientCreditsError):
        return error_response(
            status_code_for(exc),
            exc.message,
            required=str(exc.required),
            available=str(exc.available),
        )
    if isinstance(exc, PromotionApplyError):
        return error_response(status_code_for(exc), exc.message, newBalance=str(exc.new_balance))
    return error_response(status_code_for(exc), exc.message)
