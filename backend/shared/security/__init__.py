"""
Security module: Authentication, password hashing, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    sign_user_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    optional_user_context,
    require_roles,
    require_admin,
    user_id_from,
)
from shared.security.password import hash_password, verify_password
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "sign_jwt",
    "sign_user_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "optional_user_context",
    "require_roles",
    "require_admin",
    "user_id_from",
    # password
    "hash_password",
    "verify_password",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]
