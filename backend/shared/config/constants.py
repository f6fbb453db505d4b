"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, OrderStatus, ORDER_TRANSITIONS

    if status == OrderStatus.RECEIVED:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "admin"
    CUSTOMER: Final[str] = "customer"

    ALL: Final[list[str]] = [ADMIN, CUSTOMER]


# =============================================================================
# Entity Status Constants
# =============================================================================


class OrderStatus:
    """Order status constants."""

    RECEIVED: Final[str] = "received"
    PREPARING: Final[str] = "preparing"
    OUT_FOR_DELIVERY: Final[str] = "out_for_delivery"
    DELIVERED: Final[str] = "delivered"
    CANCELLED: Final[str] = "cancelled"

    ALL: Final[list[str]] = [RECEIVED, PREPARING, OUT_FOR_DELIVERY, DELIVERED, CANCELLED]
    # Fixed display order of the non-cancelled path
    PROGRESSION: Final[list[str]] = [RECEIVED, PREPARING, OUT_FOR_DELIVERY, DELIVERED]
    # Steps driven by the status simulator after creation
    SIMULATED: Final[list[str]] = [PREPARING, OUT_FOR_DELIVERY, DELIVERED]
    TERMINAL: Final[frozenset[str]] = frozenset({DELIVERED, CANCELLED})
    CANCELLABLE: Final[frozenset[str]] = frozenset({RECEIVED})


class DiscountType:
    """Promo code discount type constants."""

    PERCENTAGE: Final[str] = "percentage"
    FIXED: Final[str] = "fixed"

    ALL: Final[list[str]] = [PERCENTAGE, FIXED]


class PaymentMethod:
    """Payment method constants. No real settlement happens for either."""

    CASH: Final[str] = "cash"
    CARD: Final[str] = "card"

    ALL: Final[list[str]] = [CASH, CARD]


class PaymentStatus:
    """Payment status constants."""

    PENDING: Final[str] = "pending"


# =============================================================================
# Status Transitions
# =============================================================================

# Valid order status transitions (from -> [allowed to states])
# Forward moves along the progression may skip steps (admin override).
ORDER_TRANSITIONS: Final[dict[str, list[str]]] = {
    OrderStatus.RECEIVED: [
        OrderStatus.PREPARING,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    ],
    OrderStatus.PREPARING: [OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED],
    OrderStatus.OUT_FOR_DELIVERY: [OrderStatus.DELIVERED],
    OrderStatus.DELIVERED: [],  # Terminal state
    OrderStatus.CANCELLED: [],  # Terminal state
}


# =============================================================================
# Event Types (for WebSocket)
# =============================================================================


class EventType:
    """WebSocket event type constants."""

    ORDER_UPDATE: Final[str] = "orderUpdate"


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # Quantity limits
    MIN_QUANTITY: Final[int] = 1
    MAX_QUANTITY: Final[int] = 99

    # Price limits (in cents)
    MIN_PRICE_CENTS: Final[int] = 0
    MAX_PRICE_CENTS: Final[int] = 100_000_00  # $100,000

    # Rating limits
    MIN_RATING: Final[int] = 1
    MAX_RATING: Final[int] = 5

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_NOTES_LENGTH: Final[int] = 500
    MAX_COMMENT_LENGTH: Final[int] = 1000
    MAX_PROMO_CODE_LENGTH: Final[int] = 50
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200

    # Dashboard
    POPULAR_ITEMS_LIMIT: Final[int] = 5
    RECENT_ORDERS_LIMIT: Final[int] = 10
