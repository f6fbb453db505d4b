"""
Promo codes router.

Public validation (a read-only preview used by the checkout form) and
admin management of codes.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.models import PromoCode
from rest_api.routers._common import Pagination, get_pagination
from rest_api.services.domain import PromoCodeService
from shared.infrastructure.db import get_db
from shared.security.auth import require_admin
from shared.utils.schemas import (
    PromoCodeCreate,
    PromoCodeOutput,
    PromoValidationOutput,
    ValidatePromoRequest,
)


router = APIRouter(prefix="/api/promo-codes", tags=["promo-codes"])


@router.post("/validate", response_model=PromoValidationOutput)
def validate_promo_code(body: ValidatePromoRequest, db: Session = Depends(get_db)) -> PromoValidationOutput:
    """
    Check a code against an order total.

    Always 200: a rejected code comes back as valid=false with the
    reason in message. Never consumes a use.
    """
    result = PromoCodeService(db).validate(body.code, body.order_total)
    return PromoValidationOutput(
        valid=result.valid,
        discount=result.discount,
        message=result.message,
    )


@router.get("", response_model=list[PromoCodeOutput])
def list_promo_codes(
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> list[PromoCode]:
    return list(PromoCodeService(db).list_codes(limit=pagination.limit, offset=pagination.offset))


@router.post("", response_model=PromoCodeOutput, status_code=status.HTTP_201_CREATED)
def create_promo_code(
    body: PromoCodeCreate,
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> PromoCode:
    """Create a code. Codes are stored upper-case; duplicates return 409."""
    return PromoCodeService(db).create(body)


@router.post("/{promo_id}/deactivate", response_model=PromoCodeOutput)
def deactivate_promo_code(
    promo_id: int,
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> PromoCode:
    return PromoCodeService(db).deactivate(promo_id)
