"""
Tests for line pricing, discount computation and promo code evaluation.
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from rest_api.services.domain.pricing import (
    APPLIED,
    EXPIRED_CODE,
    INACTIVE_CODE,
    INVALID_CODE,
    USAGE_LIMIT_REACHED,
    LineRequest,
    compute_discount,
    evaluate_promo_code,
    minimum_order_message,
    price_line_items,
)
from shared.utils.exceptions import MenuItemNotFoundError


NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_promo(**overrides):
    data = {
        "code": "SAVE3",
        "discount_type": "fixed",
        "discount_value": 300,
        "minimum_order": 0,
        "max_uses": None,
        "used_count": 0,
        "expires_at": None,
        "is_active": True,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


CATALOG = {
    1: SimpleNamespace(id=1, price=1299),
    2: SimpleNamespace(id=2, price=699),
}


class TestPriceLineItems:
    """Test resolving order lines against the catalog."""

    def test_total_is_sum_of_price_times_quantity(self):
        priced = price_line_items([LineRequest(1, 2), LineRequest(2, 1)], CATALOG)

        assert priced.total_amount == 1299 * 2 + 699
        assert [line.price for line in priced.lines] == [1299, 699]

    def test_unknown_item_raises_with_its_id(self):
        with pytest.raises(MenuItemNotFoundError) as exc_info:
            price_line_items([LineRequest(1, 1), LineRequest(42, 1)], CATALOG)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Menu item 42 not found"

    def test_captured_price_is_independent_of_later_catalog_changes(self):
        catalog = {1: SimpleNamespace(id=1, price=1299)}
        priced = price_line_items([LineRequest(1, 2)], catalog)

        catalog[1].price = 1599

        assert priced.lines[0].price == 1299
        assert priced.total_amount == 2598


class TestComputeDiscount:
    """Test discount arithmetic and clamping."""

    def test_percentage_floors(self):
        assert compute_discount("percentage", 15, 999) == 149

    def test_fixed(self):
        assert compute_discount("fixed", 300, 2598) == 300

    def test_fixed_is_clamped_to_order_total(self):
        assert compute_discount("fixed", 5000, 1299) == 1299

    def test_percentage_over_100_is_clamped(self):
        assert compute_discount("percentage", 150, 1000) == 1000

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            compute_discount("bogo", 1, 1000)


class TestEvaluatePromoCode:
    """Test the ordered promo validation rules."""

    def test_missing_code(self):
        result = evaluate_promo_code(None, 2598, NOW)
        assert not result.valid
        assert result.message == INVALID_CODE

    def test_inactive_code(self):
        result = evaluate_promo_code(make_promo(is_active=False), 2598, NOW)
        assert result.message == INACTIVE_CODE

    def test_expired_code(self):
        result = evaluate_promo_code(make_promo(expires_at=NOW - timedelta(days=1)), 2598, NOW)
        assert result.message == EXPIRED_CODE

    def test_expiry_at_exactly_now_is_expired(self):
        result = evaluate_promo_code(make_promo(expires_at=NOW), 2598, NOW)
        assert result.message == EXPIRED_CODE

    def test_naive_expiry_is_treated_as_utc(self):
        naive_future = (NOW + timedelta(hours=1)).replace(tzinfo=None)
        result = evaluate_promo_code(make_promo(expires_at=naive_future), 2598, NOW)
        assert result.valid

    def test_usage_limit_reached(self):
        result = evaluate_promo_code(make_promo(max_uses=1, used_count=1), 2598, NOW)
        assert result.message == USAGE_LIMIT_REACHED

    def test_minimum_order(self):
        result = evaluate_promo_code(make_promo(minimum_order=3000), 2598, NOW)
        assert not result.valid
        assert result.message == "Minimum order amount is $30.00"
        assert result.message == minimum_order_message(3000)

    def test_inactive_wins_over_expired(self):
        promo = make_promo(is_active=False, expires_at=NOW - timedelta(days=1))
        assert evaluate_promo_code(promo, 2598, NOW).message == INACTIVE_CODE

    def test_expired_wins_over_usage_limit(self):
        promo = make_promo(expires_at=NOW - timedelta(days=1), max_uses=1, used_count=1)
        assert evaluate_promo_code(promo, 2598, NOW).message == EXPIRED_CODE

    def test_valid_fixed_code(self):
        result = evaluate_promo_code(make_promo(), 2598, NOW)

        assert result.valid
        assert result.discount == 300
        assert result.message == APPLIED
        assert 2598 - result.discount == 2298
