"""
Reviews router.
Guests and logged-in customers can rate menu items.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.models import Review
from rest_api.services.domain import ReviewService
from shared.infrastructure.db import get_db
from shared.security.auth import optional_user_context, user_id_from
from shared.utils.schemas import ReviewCreate, ReviewOutput


router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", response_model=ReviewOutput, status_code=status.HTTP_201_CREATED)
def create_review(
    body: ReviewCreate,
    db: Session = Depends(get_db),
    ctx: dict | None = Depends(optional_user_context),
) -> Review:
    """
    Rate a menu item from 1 to 5.

    The item's average rating and review count are recomputed in the
    same transaction.
    """
    return ReviewService(db).create_review(body, user_id=user_id_from(ctx))
