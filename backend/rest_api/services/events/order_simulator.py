"""
Order status progression simulator.

Stands in for a kitchen/dispatch system: after an order is created it
moves to preparing, out_for_delivery and delivered at base_delay x1,
x2 and x3.

Each firing opens its own session, re-reads the order and asks the
state machine whether the move is still legal. A cancelled or
admin-advanced order is skipped, never overwritten.
"""

from __future__ import annotations

import asyncio
from contextlib import AbstractContextManager
from functools import partial
from typing import TYPE_CHECKING, Any, Callable

from sqlalchemy.orm import Session

from rest_api.services.domain.order_lifecycle import can_transition
from rest_api.services.domain.order_service import OrderService
from rest_api.services.events.publisher import build_order_event, publish_event
from rest_api.services.events.scheduler import Scheduler
from shared.config.constants import OrderStatus
from shared.config.logging import orders_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db_context
from shared.utils.exceptions import InvalidTransitionError

if TYPE_CHECKING:
    from ws_gateway.connection_manager import ConnectionManager

SessionFactory = Callable[[], AbstractContextManager[Session]]


class OrderProgressSimulator:
    def __init__(
        self,
        scheduler: Scheduler,
        hub: ConnectionManager,
        session_factory: SessionFactory = get_db_context,
        base_delay: float | None = None,
        enabled: bool | None = None,
    ):
        self._scheduler = scheduler
        self._hub = hub
        self._session_factory = session_factory
        self._base_delay = settings.order_status_base_delay if base_delay is None else base_delay
        self._enabled = settings.simulate_order_progress if enabled is None else enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def start(self, order_id: int) -> bool:
        """
        Schedule the simulated progression of a new order.
        Returns False when simulation is disabled (test mode or config).
        """
        if not self._enabled:
            return False

        for step, status in enumerate(OrderStatus.SIMULATED, start=1):
            self._scheduler.schedule(self._base_delay * step, partial(self.advance, order_id, status))

        logger.debug("Order progression scheduled", order_id=order_id, base_delay=self._base_delay)
        return True

    async def advance(self, order_id: int, target: str) -> bool:
        """
        One scheduled firing. Returns True when the order moved and the
        update was broadcast. Errors are logged, never raised.
        """
        try:
            event = await asyncio.to_thread(self._apply, order_id, target)
        except Exception as e:
            logger.error(
                "Simulated status update failed",
                order_id=order_id,
                target=target,
                error=str(e),
                exc_info=True,
            )
            return False

        if event is None:
            return False

        await publish_event(self._hub, event)
        return True

    def _apply(self, order_id: int, target: str) -> dict[str, Any] | None:
        with self._session_factory() as db:
            service = OrderService(db)
            order = service.get_order(order_id)
            if order is None:
                logger.warning("Simulated update for missing order", order_id=order_id)
                return None

            if not can_transition(order.status, target):
                logger.info(
                    "Skipping simulated transition",
                    order_id=order_id,
                    current=order.status,
                    target=target,
                )
                return None

            try:
                updated = service.update_order_status(order_id, target)
            except InvalidTransitionError:
                # Changed between the read and the locked re-read
                return None

            return build_order_event(updated)
