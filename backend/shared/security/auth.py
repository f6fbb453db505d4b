"""
JWT bearer authentication for customers and administrators.

Tokens are HS256, signed with JWT_SECRET, and carry sub (user id as a
string), role and email next to iss/aud/iat/exp/jti. Guests send no
Authorization header at all; a header that is present must be valid.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Header, HTTPException, status

from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET, settings
from shared.utils.exceptions import ForbiddenError

logger = get_logger(__name__)

ALGORITHM = "HS256"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign an access token. ttl_seconds defaults to
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES; a negative value yields an
    already-expired token.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60
    issued_at = int(time.time())
    claims = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
        "type": "access",
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=ALGORITHM)


def sign_user_token(user_id: int, role: str, email: str) -> str:
    return sign_jwt({"sub": str(user_id), "role": role, "email": email})


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Decode and check a token.

    Raises:
        HTTPException: 401 for bad signature, expiry, wrong audience or
            issuer, and for claims this API cannot act on.
    """
    try:
        claims = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning("JWT validation failed", error=str(e))
        raise _unauthorized("Invalid token")

    if claims.get("type") != "access":
        raise _unauthorized("Invalid token: invalid type claim")
    if not str(claims.get("sub", "")).isdigit():
        raise _unauthorized("Invalid token: malformed subject claim")
    if claims.get("role") not in Roles.ALL:
        raise _unauthorized("Invalid token: unknown role")
    return claims


def get_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise _unauthorized("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise _unauthorized("Invalid Authorization header format. Expected: Bearer <token>")
    return token.strip()


# FastAPI dependencies


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    Claims of the authenticated caller.

        @router.get("/orders/me")
        def my_orders(ctx = Depends(current_user_context)):
            user_id = int(ctx["sub"])
    """
    return verify_jwt(get_bearer_token(authorization))


def optional_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any] | None:
    """None for guests; an invalid header is still a 401."""
    if not authorization:
        return None
    return verify_jwt(get_bearer_token(authorization))


def require_roles(ctx: dict[str, Any], allowed: list[str]) -> None:
    if ctx.get("role") not in allowed:
        raise ForbiddenError(user_id=ctx.get("sub"), required=allowed)


def require_admin(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    ctx = current_user_context(authorization)
    require_roles(ctx, [Roles.ADMIN])
    return ctx


def user_id_from(ctx: dict[str, Any] | None) -> int | None:
    """User id claim as int, None for guests."""
    return int(ctx["sub"]) if ctx else None
