"""
Orders router.

Order placement (guests or logged-in customers), lookup, cancellation,
and admin status management. Every committed change is broadcast to
WebSocket subscribers after the response is produced.
"""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status
from sqlalchemy.orm import Session

from rest_api.models import Order
from rest_api.routers._common import (
    Pagination,
    get_broadcast_hub,
    get_order_simulator,
    get_pagination,
)
from rest_api.services.domain import OrderService
from rest_api.services.events import OrderProgressSimulator, build_order_event, publish_event
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.auth import (
    current_user_context,
    optional_user_context,
    require_admin,
    user_id_from,
)
from shared.security.rate_limit import limiter
from shared.utils.schemas import (
    CancelOrderResponse,
    CreateOrderRequest,
    OrderOutput,
    OrderStatusValue,
    UpdateOrderStatusRequest,
)
from ws_gateway.connection_manager import ConnectionManager


router = APIRouter(prefix="/api/orders", tags=["orders"])


async def _announce_new_order(
    hub: ConnectionManager,
    simulator: OrderProgressSimulator,
    event: dict[str, Any],
    order_id: int,
) -> None:
    """Broadcast the creation event, then start simulated progression."""
    await publish_event(hub, event)
    simulator.start(order_id)


# =============================================================================
# Customer endpoints
# =============================================================================


@router.post("", response_model=OrderOutput, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.order_rate_limit)
def create_order(
    request: Request,
    body: CreateOrderRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict | None = Depends(optional_user_context),
    hub: ConnectionManager = Depends(get_broadcast_hub),
    simulator: OrderProgressSimulator = Depends(get_order_simulator),
) -> Order:
    """
    Place an order.

    Prices are captured from the current menu. A promo code, if given,
    is validated and redeemed in the same transaction: an invalid code
    fails the whole order with 400 and nothing is written.
    """
    order = OrderService(db).create_order(body, user_id=user_id_from(ctx))
    background_tasks.add_task(_announce_new_order, hub, simulator, build_order_event(order), order.id)
    return order


@router.get("/me", response_model=list[OrderOutput])
def list_my_orders(
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    ctx: dict = Depends(current_user_context),
) -> list[Order]:
    """Orders placed by the authenticated user, newest first."""
    return list(OrderService(db).list_user_orders(user_id_from(ctx), limit=limit))


@router.get("/{order_id}", response_model=OrderOutput)
def get_order(order_id: int, db: Session = Depends(get_db)) -> Order:
    """Order with its line items and their menu items."""
    return OrderService(db).require_order(order_id)


@router.post("/{order_id}/cancel", response_model=CancelOrderResponse)
def cancel_order(
    order_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    hub: ConnectionManager = Depends(get_broadcast_hub),
) -> CancelOrderResponse:
    """
    Cancel an order that has not started preparation.

    Returns 400 "Order cannot be cancelled" once the order moved past
    'received'.
    """
    order = OrderService(db).cancel_order(order_id)
    background_tasks.add_task(publish_event, hub, build_order_event(order))
    return CancelOrderResponse(order=OrderOutput.model_validate(order))


# =============================================================================
# Admin endpoints
# =============================================================================


@router.get("", response_model=list[OrderOutput])
def list_orders(
    status_filter: OrderStatusValue | None = Query(default=None, alias="status"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> list[Order]:
    """All orders, newest first, optionally filtered by status."""
    return list(
        OrderService(db).list_orders(
            limit=pagination.limit,
            offset=pagination.offset,
            status=status_filter,
        )
    )


@router.put("/{order_id}/status", response_model=OrderOutput)
def update_order_status(
    order_id: int,
    body: UpdateOrderStatusRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
    hub: ConnectionManager = Depends(get_broadcast_hub),
) -> Order:
    """
    Move an order along its lifecycle.

    Forward moves may skip steps. Backwards moves and moves out of
    delivered/cancelled are rejected with 400.
    """
    order = OrderService(db).update_order_status(order_id, body.status)
    background_tasks.add_task(publish_event, hub, build_order_event(order))
    return order
