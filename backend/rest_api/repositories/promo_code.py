"""
PromoCode Repository - Lookup and atomic redemption of promo codes.
"""

from sqlalchemy import Select, select, update, or_

from rest_api.models import PromoCode
from .base import BaseRepository


def normalize_code(code: str) -> str:
    """Canonical form of a promo code: trimmed and upper-cased."""
    return code.strip().upper()


class PromoCodeRepository(BaseRepository[PromoCode]):
    """
    Repository for PromoCode entities.
    Deactivated codes are still returned; callers report them as inactive.
    """

    @property
    def model(self) -> type[PromoCode]:
        return PromoCode

    def _base_query(self) -> Select:
        return select(PromoCode).order_by(PromoCode.created_at.desc(), PromoCode.id.desc())

    def find_by_code(self, code: str) -> PromoCode | None:
        """Case-insensitive lookup."""
        return self._db.scalar(select(PromoCode).where(PromoCode.code == normalize_code(code)))

    def redeem(self, promo_id: int) -> bool:
        """
        Consume one use of the code.

        Single conditional UPDATE: concurrent redemptions can never push
        used_count past max_uses. Returns False when no use was left.
        """
        result = self._db.execute(
            update(PromoCode)
            .where(
                PromoCode.id == promo_id,
                or_(PromoCode.max_uses.is_(None), PromoCode.used_count < PromoCode.max_uses),
            )
            .values(used_count=PromoCode.used_count + 1)
        )
        return result.rowcount == 1
