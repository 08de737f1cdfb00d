"""
Authentication for SkillMatch.

Sign-in is handled by an external identity provider, which issues a signed
JWT. The token arrives either as a Bearer header (API clients) or in the
session cookie (browsers). We only verify it and make sure the caller has
a User row; there are no passwords or sessions stored here.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
import structlog
from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_session
from app.core.errors import AuthenticationError
from app.models.user import User
from app.repositories.users import UserRepository

log = structlog.get_logger()

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)

ASYMMETRIC_PREFIXES = ("RS", "ES", "PS", "Ed")


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------

def _verification_key() -> str:
    settings = get_settings()
    if settings.auth_jwt_algorithm.startswith(ASYMMETRIC_PREFIXES):
        return settings.auth_jwt_public_key
    return settings.auth_jwt_secret


def create_session_token(
    user_id: str,
    *,
    expires_delta: timedelta | None = None,
    signing_key: str | None = None,
    **claims: Any,
) -> str:
    """Mint a session token the way the identity provider does.

    Used by tests and local tooling; production tokens come from the provider.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": user_id,
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=1)),
        "jti": str(uuid.uuid4()),
    }
    if settings.auth_jwt_audience:
        payload["aud"] = settings.auth_jwt_audience
    if settings.auth_jwt_issuer:
        payload["iss"] = settings.auth_jwt_issuer
    payload.update({k: v for k, v in claims.items() if v is not None})
    return jwt.encode(
        payload,
        signing_key or settings.auth_jwt_secret,
        algorithm=settings.auth_jwt_algorithm,
    )


def decode_session_token(token: str) -> dict:
    """Decode and verify a session token. Raises jwt.PyJWTError on failure."""
    settings = get_settings()
    options = {"require": ["sub", "exp"], "verify_aud": bool(settings.auth_jwt_audience)}
    return jwt.decode(
        token,
        _verification_key(),
        algorithms=[settings.auth_jwt_algorithm],
        audience=settings.auth_jwt_audience,
        issuer=settings.auth_jwt_issuer,
        options=options,
    )


def _extract_token(request: Request, authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith("Bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    return request.cookies.get(get_settings().auth_session_cookie)


# ---------------------------------------------------------------------------
# Authentication dependencies
# ---------------------------------------------------------------------------

async def get_current_user(
    request: Request,
    authorization: Optional[str] = Depends(api_key_header),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Resolve the caller, creating their User row on first sight."""
    token = _extract_token(request, authorization)
    if not token:
        raise AuthenticationError("Unauthorized")

    try:
        claims = decode_session_token(token)
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid or expired session")

    user_id = str(claims["sub"])
    users = UserRepository(session)
    user, created = await users.get_or_create(
        user_id,
        email=claims.get("email"),
        first_name=claims.get("given_name"),
        last_name=claims.get("family_name"),
        image_url=claims.get("picture"),
    )
    if created:
        await session.commit()
        log.info("user.created", user_id=user_id)

    structlog.contextvars.bind_contextvars(user_id=user_id)
    request.state.user = user
    return user
