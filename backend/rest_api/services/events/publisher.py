"""
Order update publisher.

Serializes orders with the same OrderOutput schema the REST API returns
and pushes them through the broadcast hub.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shared.config.constants import EventType
from shared.config.logging import get_logger
from shared.utils.schemas import OrderOutput

if TYPE_CHECKING:
    from rest_api.models import Order
    from ws_gateway.connection_manager import ConnectionManager

logger = get_logger(__name__)


def build_order_event(order: Order) -> dict[str, Any]:
    """
    {"type": "orderUpdate", "order": {...camelCase...}}

    Must be called while the order's session is open.
    """
    return {
        "type": EventType.ORDER_UPDATE,
        "order": OrderOutput.model_validate(order).model_dump(mode="json", by_alias=True),
    }


async def publish_event(hub: ConnectionManager, event: dict[str, Any]) -> int:
    """
    Broadcast a prebuilt event. Never raises: a failed broadcast must
    not undo or abort the update that triggered it.

    Returns:
        Number of subscribers reached.
    """
    order_id = event.get("order", {}).get("id")
    try:
        sent = await hub.broadcast(event)
    except Exception as e:
        logger.error(
            "Failed to broadcast order update",
            order_id=order_id,
            error=str(e),
            exc_info=True,
        )
        return 0

    logger.debug(
        "Order update broadcast",
        order_id=order_id,
        status=event.get("order", {}).get("status"),
        clients=sent,
    )
    return sent
