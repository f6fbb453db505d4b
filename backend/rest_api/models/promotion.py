"""
Promotion Models: PromoCode.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, BigIntPK


class PromoCode(Base):
    """
    Discount token redeemable at checkout.

    code is stored upper-case and looked up case-insensitively.
    used_count only ever grows; redemption is a conditional UPDATE
    so it never passes max_uses.
    """

    __tablename__ = "promo_code"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    discount_type: Mapped[str] = mapped_column(String(16), nullable=False)  # percentage | fixed
    discount_value: Mapped[int] = mapped_column(Integer, nullable=False)
    minimum_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_uses: Mapped[Optional[int]] = mapped_column(Integer)
    used_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("discount_value >= 0", name="chk_promo_code_value_non_negative"),
        CheckConstraint("minimum_order >= 0", name="chk_promo_code_minimum_non_negative"),
        CheckConstraint("used_count >= 0", name="chk_promo_code_used_non_negative"),
        CheckConstraint(
            "max_uses IS NULL OR used_count <= max_uses", name="chk_promo_code_usage_cap"
        ),
    )

    def __repr__(self) -> str:
        return f"<PromoCode(code='{self.code}', used={self.used_count}/{self.max_uses})>"
