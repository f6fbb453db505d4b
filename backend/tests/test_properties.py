"""
Property-based tests with Hypothesis.

Pricing and lifecycle rules are pure functions, so they are checked
over generated inputs instead of hand-picked cases.
"""

from dataclasses import dataclass

from hypothesis import assume, given, settings, strategies as st

from rest_api.services.domain.order_lifecycle import can_transition, progress_index
from rest_api.services.domain.pricing import (
    LineRequest,
    compute_discount,
    evaluate_promo_code,
    price_line_items,
)
from shared.config.constants import DiscountType, OrderStatus


@dataclass
class _Item:
    id: int
    price: int


@dataclass
class _Promo:
    code: str = "PROP"
    discount_type: str = DiscountType.FIXED
    discount_value: int = 0
    minimum_order: int = 0
    max_uses: int | None = None
    used_count: int = 0
    expires_at: None = None
    is_active: bool = True


lines_strategy = st.lists(
    st.tuples(st.integers(min_value=0, max_value=50_000), st.integers(min_value=1, max_value=99)),
    min_size=1,
    max_size=10,
)


class TestPricingProperties:
    """Property-based tests for order pricing."""

    @given(lines=lines_strategy)
    @settings(max_examples=50)
    def test_total_is_sum_of_price_times_quantity(self, lines):
        """Property: total_amount = sum(price * quantity)."""
        catalog = {i: _Item(id=i, price=price) for i, (price, _) in enumerate(lines, start=1)}
        requests = [LineRequest(menu_item_id=i, quantity=qty) for i, (_, qty) in enumerate(lines, start=1)]

        priced = price_line_items(requests, catalog)

        assert priced.total_amount == sum(price * qty for price, qty in lines)
        assert [line.price for line in priced.lines] == [price for price, _ in lines]

    @given(
        discount_type=st.sampled_from(DiscountType.ALL),
        value=st.integers(min_value=0, max_value=200_000),
        total=st.integers(min_value=0, max_value=500_000),
    )
    @settings(max_examples=100)
    def test_discount_is_clamped_to_total(self, discount_type, value, total):
        """Property: 0 <= discount <= total, so the final amount is never negative."""
        if discount_type == DiscountType.PERCENTAGE:
            assume(value <= 100)

        discount = compute_discount(discount_type, value, total)

        assert 0 <= discount <= total
        assert total - discount >= 0

    @given(
        value=st.integers(min_value=0, max_value=100),
        total=st.integers(min_value=0, max_value=500_000),
    )
    @settings(max_examples=50)
    def test_percentage_discount_floors(self, value, total):
        """Property: percentage discounts round down to whole cents."""
        assert compute_discount(DiscountType.PERCENTAGE, value, total) == (total * value) // 100

    @given(
        minimum=st.integers(min_value=0, max_value=10_000),
        total=st.integers(min_value=0, max_value=20_000),
    )
    @settings(max_examples=50)
    def test_minimum_order_threshold(self, minimum, total):
        """Property: a code is valid exactly when the total reaches its minimum."""
        result = evaluate_promo_code(_Promo(discount_value=100, minimum_order=minimum), total)

        assert result.valid == (total >= minimum)
        if result.valid:
            assert result.discount == min(100, total)
        else:
            assert result.discount is None


class TestLifecycleProperties:
    """Property-based tests for the order state machine."""

    @given(
        current=st.sampled_from(OrderStatus.ALL),
        target=st.sampled_from(OrderStatus.ALL),
    )
    def test_non_cancel_transitions_only_move_forward(self, current, target):
        """Property: every allowed non-cancel move advances the progression."""
        assume(target != OrderStatus.CANCELLED)

        if can_transition(current, target):
            assert progress_index(target) > progress_index(current)

    @given(
        terminal=st.sampled_from(sorted(OrderStatus.TERMINAL)),
        target=st.sampled_from(OrderStatus.ALL),
    )
    def test_terminal_states_have_no_exits(self, terminal, target):
        """Property: delivered and cancelled are final."""
        assert not can_transition(terminal, target)
