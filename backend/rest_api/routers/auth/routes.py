"""
Authentication router.
Handles registration, login and the current user.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.services.domain import UserService
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context, sign_user_token, user_id_from
from shared.security.rate_limit import limiter
from shared.utils.schemas import LoginRequest, LoginResponse, RegisterRequest, UserOutput


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _login_response(user: User) -> LoginResponse:
    return LoginResponse(
        access_token=sign_user_token(user.id, user.role, user.email),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserOutput.model_validate(user),
    )


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Create a customer account and log it in.

    Returns 409 if the email is already registered.
    """
    user = UserService(db).register(body.email, body.password, body.name, phone=body.phone)
    return _login_response(user)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate and return a bearer token.

    The access token contains:
    - sub: user ID
    - role: customer | admin
    - email: user's email
    """
    user = UserService(db).authenticate(body.email, body.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return _login_response(user)


@router.get("/me", response_model=UserOutput)
def me(ctx: dict = Depends(current_user_context), db: Session = Depends(get_db)) -> User:
    """Get the authenticated user's profile."""
    return UserService(db).get_user(user_id_from(ctx))
