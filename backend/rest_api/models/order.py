"""
Order Models: Order, OrderItem.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus, PaymentStatus

from .base import Base, BigIntPK, utcnow

if TYPE_CHECKING:
    from .catalog import MenuItem
    from .user import User


class Order(Base):
    """
    A customer order. Amounts are in cents and
    final_amount = total_amount - discount_amount.

    Orders are never deleted; only status transitions mutate them.
    """

    __tablename__ = "customer_order"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    # Null for guest checkouts
    user_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("app_user.id"), index=True
    )
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(Text)

    status: Mapped[str] = mapped_column(
        String(32), default=OrderStatus.RECEIVED, nullable=False, index=True
    )
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    discount_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    final_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    # Canonical (upper-case) code string, kept even if the promo is later deactivated
    promo_code: Mapped[Optional[str]] = mapped_column(String(50))

    payment_method: Mapped[str] = mapped_column(String(16), nullable=False)
    payment_status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=PaymentStatus.PENDING
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)
    can_cancel: Mapped[bool] = mapped_column(default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        CheckConstraint("discount_amount >= 0", name="chk_order_discount_non_negative"),
        CheckConstraint("discount_amount <= total_amount", name="chk_order_discount_le_total"),
        CheckConstraint(
            "final_amount = total_amount - discount_amount", name="chk_order_final_amount"
        ),
        Index("ix_order_user_created", "user_id", "created_at"),
    )

    # Relationships
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id"
    )
    user: Mapped[Optional["User"]] = relationship()

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', final_amount={self.final_amount})>"


class OrderItem(Base):
    """
    A single line of an order.
    Stores the unit price at the time of order for historical accuracy.
    """

    __tablename__ = "order_item"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("customer_order.id"), nullable=False, index=True
    )
    menu_item_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("menu_item.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_item_quantity_positive"),
        CheckConstraint("price >= 0", name="chk_order_item_price_non_negative"),
    )

    # Relationships
    order: Mapped["Order"] = relationship(back_populates="items")
    menu_item: Mapped["MenuItem"] = relationship()

    @property
    def line_total(self) -> int:
        return self.price * self.quantity
