"""
Order lifecycle state machine.

received -> preparing -> out_for_delivery -> delivered, with forward
skips allowed, plus received -> cancelled. delivered and cancelled
are terminal.
"""

from shared.config.constants import ORDER_TRANSITIONS, OrderStatus
from shared.utils.exceptions import InvalidTransitionError


def can_transition(current: str, target: str) -> bool:
    return target in ORDER_TRANSITIONS.get(current, [])


def ensure_transition(current: str, target: str, order_id: int | None = None) -> None:
    """
    Raises:
        InvalidTransitionError: if the move is not allowed.
    """
    if not can_transition(current, target):
        raise InvalidTransitionError("order", current, target, order_id=order_id)


def can_cancel(status: str) -> bool:
    """Only orders still in 'received' can be cancelled."""
    return status in OrderStatus.CANCELLABLE


def is_terminal(status: str) -> bool:
    return status in OrderStatus.TERMINAL


def progress_index(status: str) -> int:
    """Position in the display progression; -1 for cancelled."""
    try:
        return OrderStatus.PROGRESSION.index(status)
    except ValueError:
        return -1
