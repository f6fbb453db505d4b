"""
Tests for OrderService: atomic creation, promo redemption,
status transitions and cancellation.
"""

import pytest
from sqlalchemy import select

from rest_api.models import MenuItem, Order, OrderItem, PromoCode
from rest_api.services.domain import OrderService
from shared.utils.exceptions import (
    InvalidTransitionError,
    MenuItemNotFoundError,
    OrderNotCancellableError,
    OrderNotFoundError,
    PromoCodeError,
)
from shared.utils.schemas import CreateOrderRequest


def make_request(items, **overrides) -> CreateOrderRequest:
    data = {
        "customer_name": "Ada Lovelace",
        "address": "12 Analytical Engine Way",
        "phone": "555-0100",
        "email": "ada@example.com",
        "payment_method": "cash",
        "items": [{"menu_item_id": item_id, "quantity": qty} for item_id, qty in items],
    }
    data.update(overrides)
    return CreateOrderRequest(**data)


class TestCreateOrder:
    """Test order placement."""

    def test_creates_received_order_with_captured_prices(self, db_session, seed_menu):
        pizza, fries = seed_menu["pizza"], seed_menu["fries"]

        order = OrderService(db_session).create_order(make_request([(pizza.id, 2), (fries.id, 1)]))

        assert order.status == "received"
        assert order.can_cancel is True
        assert order.total_amount == 1299 * 2 + 699
        assert order.discount_amount == 0
        assert order.final_amount == order.total_amount
        assert order.payment_status == "pending"
        assert [(line.menu_item_id, line.quantity, line.price) for line in order.items] == [
            (pizza.id, 2, 1299),
            (fries.id, 1, 699),
        ]

    def test_increments_order_count_by_quantity(self, db_session, seed_menu):
        pizza = seed_menu["pizza"]

        OrderService(db_session).create_order(make_request([(pizza.id, 3)]))
        db_session.expire_all()

        assert db_session.get(MenuItem, pizza.id).order_count == 3

    def test_get_order_matches_created_order(self, db_session, seed_menu):
        service = OrderService(db_session)
        created = service.create_order(
            make_request([(seed_menu["pizza"].id, 1), (seed_menu["burger"].id, 2)])
        )

        fetched = service.get_order(created.id)

        assert len(fetched.items) == len(created.items) == 2
        assert fetched.final_amount == created.final_amount
        assert fetched.items[0].menu_item.name == "Margherita Pizza"

    def test_records_user_id(self, db_session, seed_menu, seed_customer_user):
        order = OrderService(db_session).create_order(
            make_request([(seed_menu["pizza"].id, 1)]), user_id=seed_customer_user.id
        )
        assert order.user_id == seed_customer_user.id

    def test_unknown_menu_item_writes_nothing(self, db_session, seed_menu):
        with pytest.raises(MenuItemNotFoundError):
            OrderService(db_session).create_order(make_request([(seed_menu["pizza"].id, 1), (999, 1)]))

        assert db_session.scalars(select(Order)).all() == []
        assert db_session.scalars(select(OrderItem)).all() == []
        assert db_session.get(MenuItem, seed_menu["pizza"].id).order_count == 0

    def test_soft_deleted_item_cannot_be_ordered(self, db_session, seed_menu):
        fries = seed_menu["fries"]
        fries.soft_delete()
        db_session.commit()

        with pytest.raises(MenuItemNotFoundError):
            OrderService(db_session).create_order(make_request([(fries.id, 1)]))


class TestCreateOrderWithPromo:
    """Test promo redemption inside order creation."""

    def test_fixed_promo_applied_and_redeemed_once(self, db_session, seed_menu, seed_promo_codes):
        order = OrderService(db_session).create_order(
            make_request([(seed_menu["pizza"].id, 2)], promo_code="save3")
        )

        assert order.total_amount == 2598
        assert order.discount_amount == 300
        assert order.final_amount == 2298
        assert order.promo_code == "SAVE3"

        db_session.expire_all()
        assert db_session.get(PromoCode, seed_promo_codes["SAVE3"].id).used_count == 1

    def test_percentage_promo(self, db_session, seed_menu, seed_promo_codes):
        order = OrderService(db_session).create_order(
            make_request([(seed_menu["pizza"].id, 1)], promo_code="TENOFF")
        )
        assert order.discount_amount == 129
        assert order.final_amount == 1299 - 129

    def test_exhausted_promo_aborts_creation(self, db_session, seed_menu, seed_promo_codes):
        with pytest.raises(PromoCodeError) as exc_info:
            OrderService(db_session).create_order(
                make_request([(seed_menu["pizza"].id, 1)], promo_code="ONCE")
            )

        assert exc_info.value.detail == "Promo code usage limit reached"
        assert db_session.scalars(select(Order)).all() == []
        db_session.expire_all()
        assert db_session.get(MenuItem, seed_menu["pizza"].id).order_count == 0

    def test_invalid_promo_aborts_creation(self, db_session, seed_menu):
        with pytest.raises(PromoCodeError) as exc_info:
            OrderService(db_session).create_order(
                make_request([(seed_menu["pizza"].id, 1)], promo_code="NOPE")
            )
        assert exc_info.value.detail == "Invalid promo code"

    def test_minimum_order_rejected(self, db_session, seed_menu, seed_promo_codes):
        with pytest.raises(PromoCodeError) as exc_info:
            OrderService(db_session).create_order(
                make_request([(seed_menu["fries"].id, 1)], promo_code="TENOFF")
            )
        assert exc_info.value.detail == "Minimum order amount is $10.00"

    def test_last_use_cannot_be_redeemed_twice(self, db_session, seed_menu):
        db_session.add(PromoCode(code="LAST", discount_type="fixed", discount_value=100, max_uses=1))
        db_session.commit()
        service = OrderService(db_session)

        service.create_order(make_request([(seed_menu["pizza"].id, 1)], promo_code="LAST"))
        with pytest.raises(PromoCodeError):
            service.create_order(make_request([(seed_menu["pizza"].id, 1)], promo_code="LAST"))

        db_session.expire_all()
        promo = db_session.scalar(select(PromoCode).where(PromoCode.code == "LAST"))
        assert promo.used_count == 1

    def test_blank_promo_is_ignored(self, db_session, seed_menu):
        order = OrderService(db_session).create_order(
            make_request([(seed_menu["pizza"].id, 1)], promo_code="   ")
        )
        assert order.promo_code is None
        assert order.discount_amount == 0


class TestStatusUpdates:
    """Test status transitions and cancellation."""

    @pytest.fixture
    def order(self, db_session, seed_menu):
        return OrderService(db_session).create_order(make_request([(seed_menu["pizza"].id, 1)]))

    def test_forward_update(self, db_session, order):
        updated = OrderService(db_session).update_order_status(order.id, "preparing")

        assert updated.status == "preparing"
        assert updated.can_cancel is False
        assert updated.updated_at is not None

    def test_admin_can_skip_to_delivered(self, db_session, order):
        updated = OrderService(db_session).update_order_status(order.id, "delivered")
        assert updated.status == "delivered"

    def test_backward_move_rejected(self, db_session, order):
        service = OrderService(db_session)
        service.update_order_status(order.id, "out_for_delivery")

        with pytest.raises(InvalidTransitionError):
            service.update_order_status(order.id, "preparing")

        assert service.get_order(order.id).status == "out_for_delivery"

    def test_missing_order(self, db_session):
        with pytest.raises(OrderNotFoundError):
            OrderService(db_session).update_order_status(404, "preparing")

    def test_cancel_received_order(self, db_session, order):
        cancelled = OrderService(db_session).cancel_order(order.id)

        assert cancelled.status == "cancelled"
        assert cancelled.can_cancel is False

    def test_cancelled_order_stays_cancelled(self, db_session, order):
        service = OrderService(db_session)
        service.cancel_order(order.id)

        with pytest.raises(InvalidTransitionError):
            service.update_order_status(order.id, "preparing")
        assert service.get_order(order.id).status == "cancelled"

    def test_cancel_out_for_delivery_fails_and_keeps_status(self, db_session, order):
        service = OrderService(db_session)
        service.update_order_status(order.id, "out_for_delivery")

        with pytest.raises(OrderNotCancellableError) as exc_info:
            service.cancel_order(order.id)

        assert exc_info.value.detail == "Order cannot be cancelled"
        assert service.get_order(order.id).status == "out_for_delivery"

    def test_cancel_missing_order(self, db_session):
        with pytest.raises(OrderNotFoundError):
            OrderService(db_session).cancel_order(12345)

    def test_price_change_does_not_touch_existing_order(self, db_session, seed_menu, order):
        pizza = db_session.get(MenuItem, seed_menu["pizza"].id)
        pizza.price = 1599
        db_session.commit()

        fetched = OrderService(db_session).get_order(order.id)

        assert fetched.items[0].price == 1299
        assert fetched.total_amount == 1299
        assert fetched.items[0].menu_item.price == 1599


class TestListOrders:
    def test_newest_first_and_status_filter(self, db_session, seed_menu, seed_customer_user):
        service = OrderService(db_session)
        first = service.create_order(make_request([(seed_menu["pizza"].id, 1)]), user_id=seed_customer_user.id)
        second = service.create_order(make_request([(seed_menu["fries"].id, 1)]))
        service.cancel_order(first.id)

        assert [o.id for o in service.list_orders()] == [second.id, first.id]
        assert [o.id for o in service.list_orders(status="cancelled")] == [first.id]
        assert [o.id for o in service.list_user_orders(seed_customer_user.id)] == [first.id]
