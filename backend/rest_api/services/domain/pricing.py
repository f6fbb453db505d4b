"""
Pricing and promo code evaluation.

Pure functions: no session, no writes. Everything here works on
already-loaded rows so it can be unit tested without a database.

Amounts are integer cents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Mapping, Protocol

from shared.config.constants import DiscountType
from shared.utils.exceptions import MenuItemNotFoundError


class PricedMenuItem(Protocol):
    id: int
    price: int


class PromoRecord(Protocol):
    code: str
    discount_type: str
    discount_value: int
    minimum_order: int
    max_uses: int | None
    used_count: int
    expires_at: datetime | None
    is_active: bool


# Validation messages shown to customers
INVALID_CODE = "Invalid promo code"
INACTIVE_CODE = "Promo code is inactive"
EXPIRED_CODE = "Promo code has expired"
USAGE_LIMIT_REACHED = "Promo code usage limit reached"
APPLIED = "Promo code applied successfully"


def minimum_order_message(minimum_order: int) -> str:
    return f"Minimum order amount is ${minimum_order / 100:.2f}"


@dataclass(frozen=True)
class LineRequest:
    menu_item_id: int
    quantity: int


@dataclass(frozen=True)
class PricedLine:
    """A resolved order line with the unit price captured now."""

    menu_item_id: int
    quantity: int
    price: int

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


@dataclass(frozen=True)
class PricedOrder:
    lines: list[PricedLine] = field(default_factory=list)

    @property
    def total_amount(self) -> int:
        return sum(line.line_total for line in self.lines)


@dataclass(frozen=True)
class PromoValidationResult:
    valid: bool
    message: str
    discount: int | None = None
    promo: PromoRecord | None = None


def price_line_items(
    requests: Iterable[LineRequest],
    catalog: Mapping[int, PricedMenuItem],
) -> PricedOrder:
    """
    Resolve each requested line against the catalog.

    Raises:
        MenuItemNotFoundError: for the first id missing from the catalog.
            Nothing is priced when any line is unknown.
    """
    lines = []
    for request in requests:
        item = catalog.get(request.menu_item_id)
        if item is None:
            raise MenuItemNotFoundError(request.menu_item_id)
        lines.append(
            PricedLine(menu_item_id=item.id, quantity=request.quantity, price=item.price)
        )
    return PricedOrder(lines=lines)


def compute_discount(discount_type: str, discount_value: int, order_total: int) -> int:
    """
    Discount in cents, clamped to [0, order_total].

    percentage: floor(order_total * value / 100); fixed: value.
    """
    if discount_type == DiscountType.PERCENTAGE:
        discount = order_total * discount_value // 100
    elif discount_type == DiscountType.FIXED:
        discount = discount_value
    else:
        raise ValueError(f"Unknown discount type: {discount_type}")
    return max(0, min(discount, order_total))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def evaluate_promo_code(
    promo: PromoRecord | None,
    order_total: int,
    now: datetime | None = None,
) -> PromoValidationResult:
    """
    Check a promo code against an order total.

    Rules are applied in a fixed order and the first failure wins.
    Read-only: redemption is a separate step.
    """
    if promo is None:
        return PromoValidationResult(valid=False, message=INVALID_CODE)

    if not promo.is_active:
        return PromoValidationResult(valid=False, message=INACTIVE_CODE)

    now = _as_utc(now or datetime.now(timezone.utc))
    if promo.expires_at is not None and _as_utc(promo.expires_at) <= now:
        return PromoValidationResult(valid=False, message=EXPIRED_CODE)

    if promo.max_uses is not None and promo.used_count >= promo.max_uses:
        return PromoValidationResult(valid=False, message=USAGE_LIMIT_REACHED)

    if order_total < promo.minimum_order:
        return PromoValidationResult(
            valid=False, message=minimum_order_message(promo.minimum_order)
        )

    discount = compute_discount(promo.discount_type, promo.discount_value, order_total)
    return PromoValidationResult(valid=True, message=APPLIED, discount=discount, promo=promo)
