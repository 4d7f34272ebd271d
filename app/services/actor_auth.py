from __future__ import annotations

from uuid import UUID

import jwt
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_actor_id(
    token: str | None,
    *,
    secret: str,
    algorithm: str,
    audience: str | None = None,
) -> UUID | None:
    """Returns the token subject as a UUID, or None for any unusable token."""
    if not token or not secret:
        return None

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except jwt.PyJWTError as exc:
        logger.info("actor_token_rejected", reason=type(exc).__name__)
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str):
        return None
    try:
        return UUID(subject)
    except ValueError:
        return None


async def get_current_actor_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UUID | None:
    if credentials is None:
        return None
    settings = get_settings()
    return decode_actor_id(
        credentials.credentials,
        secret=settings.auth_jwt_secret,
        algorithm=settings.auth_jwt_algorithm,
        audience=settings.auth_jwt_audience,
    )
