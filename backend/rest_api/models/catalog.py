"""
Catalog Models: MenuItem.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import AuditMixin, Base, BigIntPK


class MenuItem(AuditMixin, Base):
    """
    A dish on the menu. Prices are in cents.

    average_rating, total_reviews and order_count are derived counters
    maintained by the review and order services.
    Inherits: is_active, created_at, updated_at, deleted_at from AuditMixin.
    """

    __tablename__ = "menu_item"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    is_available: Mapped[bool] = mapped_column(default=True, nullable=False)

    average_rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    order_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("price >= 0", name="chk_menu_item_price_non_negative"),
        CheckConstraint("order_count >= 0", name="chk_menu_item_order_count_non_negative"),
        Index("ix_menu_item_active_category", "is_active", "category"),
    )
