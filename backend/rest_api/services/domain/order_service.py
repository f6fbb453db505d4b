"""
Order Domain Service.

Handles order creation (pricing, promo redemption, line items, counters)
as one transaction, status transitions through the lifecycle state
machine, and cancellation.
"""

from typing import Sequence

from sqlalchemy.orm import Session

from rest_api.models import Order, OrderItem
from rest_api.models.base import utcnow
from rest_api.repositories import (
    MenuItemRepository,
    OrderFilters,
    OrderRepository,
)
from rest_api.services.domain.order_lifecycle import can_cancel, ensure_transition
from rest_api.services.domain.pricing import LineRequest, price_line_items
from rest_api.services.domain.promo_code_service import PromoCodeService
from shared.config.constants import Limits, OrderStatus, PaymentStatus
from shared.config.logging import orders_logger as logger, mask_email, mask_phone
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    InvalidTransitionError,
    OrderNotCancellableError,
    OrderNotFoundError,
)
from shared.utils.schemas import CreateOrderRequest


class OrderService:
    """
    Domain service for Order operations.

    Every write either commits completely or rolls back completely.
    Broadcasting and simulated progression are the caller's concern.
    """

    def __init__(self, db: Session):
        self._db = db
        self._orders = OrderRepository(db)
        self._menu = MenuItemRepository(db)
        self._promos = PromoCodeService(db)

    def create_order(self, request: CreateOrderRequest, user_id: int | None = None) -> Order:
        """
        Place a new order.

        Steps, all in one transaction:
        1. price every line against the current catalog
        2. validate and redeem the promo code, if any
        3. insert the order as 'received'
        4. insert the line items with their captured prices
        5. bump each menu item's order_count

        Raises:
            MenuItemNotFoundError: unknown or deleted menu item
            PromoCodeError: promo code rejected or exhausted
        """
        try:
            catalog = self._menu.find_catalog([line.menu_item_id for line in request.items])
            priced = price_line_items(
                (LineRequest(line.menu_item_id, line.quantity) for line in request.items),
                catalog,
            )
            total_amount = priced.total_amount

            promo_code = None
            discount_amount = 0
            if request.promo_code and request.promo_code.strip():
                promo_code, discount_amount = self._promos.redeem_for_order(
                    request.promo_code, total_amount
                )

            order = Order(
                user_id=user_id,
                customer_name=request.customer_name.strip(),
                address=request.address.strip(),
                phone=request.phone.strip(),
                email=str(request.email) if request.email else None,
                status=OrderStatus.RECEIVED,
                total_amount=total_amount,
                discount_amount=discount_amount,
                final_amount=total_amount - discount_amount,
                promo_code=promo_code,
                payment_method=request.payment_method,
                payment_status=PaymentStatus.PENDING,
                notes=request.notes,
                can_cancel=True,
            )
            self._db.add(order)
            self._db.flush()

            for line in priced.lines:
                self._db.add(
                    OrderItem(
                        order_id=order.id,
                        menu_item_id=line.menu_item_id,
                        quantity=line.quantity,
                        price=line.price,
                    )
                )

            for line in priced.lines:
                self._menu.increment_order_count(line.menu_item_id, line.quantity)

            safe_commit(self._db)
        except Exception:
            self._db.rollback()
            raise

        logger.info(
            "Order created",
            order_id=order.id,
            user_id=user_id,
            email=mask_email(order.email) if order.email else None,
            phone=mask_phone(order.phone),
            items=len(priced.lines),
            total_amount=total_amount,
            discount_amount=discount_amount,
            promo_code=promo_code,
        )
        return self.require_order(order.id)

    def get_order(self, order_id: int) -> Order | None:
        """Order with items, each joined to its current menu item row."""
        return self._orders.find_by_id(order_id)

    def require_order(self, order_id: int) -> Order:
        order = self.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def update_order_status(self, order_id: int, new_status: str) -> Order:
        """
        Move an order to new_status.

        The row is re-read under lock and the transition is checked
        against the current status, so a terminal order stays terminal.

        Raises:
            OrderNotFoundError: no such order
            InvalidTransitionError: move not allowed from the current status
        """
        order = self._orders.find_for_update(order_id)
        if order is None:
            self._db.rollback()
            raise OrderNotFoundError(order_id)

        previous = order.status
        try:
            ensure_transition(previous, new_status, order_id=order_id)
        except InvalidTransitionError:
            self._db.rollback()
            raise

        order.status = new_status
        order.can_cancel = can_cancel(new_status)
        order.updated_at = utcnow()
        safe_commit(self._db)

        logger.info(
            "Order status updated",
            order_id=order_id,
            from_status=previous,
            to_status=new_status,
        )
        return self.require_order(order_id)

    def cancel_order(self, order_id: int) -> Order:
        """
        Cancel an order that is still 'received'.

        Raises:
            OrderNotFoundError: no such order
            OrderNotCancellableError: the order already moved on
        """
        order = self.require_order(order_id)
        if not order.can_cancel:
            raise OrderNotCancellableError(order_id, order.status)

        try:
            return self.update_order_status(order_id, OrderStatus.CANCELLED)
        except InvalidTransitionError as e:
            # Advanced between the read and the locked re-read
            raise OrderNotCancellableError(order_id, e.from_status)

    def list_orders(
        self,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
        status: str | None = None,
    ) -> Sequence[Order]:
        """All orders, newest first."""
        return self._orders.find_all(OrderFilters(limit=limit, offset=offset, status=status))

    def list_user_orders(self, user_id: int, limit: int = Limits.DEFAULT_PAGE_SIZE) -> Sequence[Order]:
        """Orders placed by one user, newest first."""
        return self._orders.find_for_user(user_id, limit=limit)
