"""
Promo Code Domain Service.

Validation (read-only preview), redemption during order creation,
and admin management of codes.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import PromoCode
from rest_api.repositories import PromoCodeRepository, RepositoryFilters, normalize_code
from rest_api.services.domain.pricing import (
    USAGE_LIMIT_REACHED,
    PromoValidationResult,
    evaluate_promo_code,
)
from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import DuplicateEntityError, NotFoundError, PromoCodeError
from shared.utils.schemas import PromoCodeCreate

logger = get_logger(__name__)


class PromoCodeService:
    """
    Domain service for promo codes.

    validate() never changes used_count. redeem_for_order() is the only
    path that consumes a use and it does not commit: the order
    transaction owns the commit.
    """

    def __init__(self, db: Session):
        self._db = db
        self._repo = PromoCodeRepository(db)

    def validate(
        self,
        code: str,
        order_total: int,
        now: datetime | None = None,
    ) -> PromoValidationResult:
        """Preview a code against an order total without consuming it."""
        promo = self._repo.find_by_code(code)
        result = evaluate_promo_code(promo, order_total, now)
        logger.debug(
            "Promo code validated",
            code=normalize_code(code),
            valid=result.valid,
            reason=None if result.valid else result.message,
        )
        return result

    def redeem_for_order(self, code: str, order_total: int) -> tuple[str, int]:
        """
        Validate and consume one use of a code for an order being created.

        Returns:
            (canonical code, discount in cents)

        Raises:
            PromoCodeError: with the validation message when the code is
                rejected, or when the last use was taken concurrently.
        """
        result = self.validate(code, order_total)
        if not result.valid or result.promo is None:
            raise PromoCodeError(result.message, code=normalize_code(code))

        promo = result.promo
        if not self._repo.redeem(promo.id):
            raise PromoCodeError(USAGE_LIMIT_REACHED, code=promo.code)

        logger.info("Promo code redeemed", code=promo.code, discount=result.discount)
        return promo.code, result.discount or 0

    # =========================================================================
    # Admin operations
    # =========================================================================

    def create(self, data: PromoCodeCreate) -> PromoCode:
        code = normalize_code(data.code)
        if self._repo.find_by_code(code):
            raise DuplicateEntityError("Promo code", code)

        promo = PromoCode(
            code=code,
            discount_type=data.discount_type,
            discount_value=data.discount_value,
            minimum_order=data.minimum_order,
            max_uses=data.max_uses,
            expires_at=data.expires_at,
            is_active=data.is_active,
        )
        try:
            self._repo.save(promo)
            safe_commit(self._db)
        except IntegrityError:
            # Lost a race with a concurrent create of the same code
            self._db.rollback()
            raise DuplicateEntityError("Promo code", code)
        self._db.refresh(promo)

        logger.info("Promo code created", code=code, discount_type=promo.discount_type)
        return promo

    def list_codes(self, limit: int = Limits.DEFAULT_PAGE_SIZE, offset: int = 0) -> Sequence[PromoCode]:
        return self._repo.find_all(RepositoryFilters(limit=limit, offset=offset))

    def deactivate(self, promo_id: int) -> PromoCode:
        promo = self._repo.find_by_id(promo_id)
        if not promo:
            raise NotFoundError("Promo code", promo_id)

        promo.is_active = False
        safe_commit(self._db)
        self._db.refresh(promo)

        logger.info("Promo code deactivated", code=promo.code)
        return promo
