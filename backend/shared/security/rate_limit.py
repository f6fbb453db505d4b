"""
Rate limiting utilities using slowapi.
Protects the public write endpoints (order placement, login) from abuse.

Usage:
    from shared.security.rate_limit import limiter

    @router.post("/login")
    @limiter.limit(settings.login_rate_limit)
    def login(request: Request, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

# Limiter keyed on client IP. Disabled in test mode so suites can hammer endpoints.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled and not settings.is_test,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom handler for rate limit exceeded errors.
    Returns a JSON response in the same {message} shape as other errors.
    """
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "message": "Rate limit exceeded. Please try again later.",
            "limit": str(exc.detail),
        },
    )
