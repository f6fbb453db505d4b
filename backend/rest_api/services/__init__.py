"""
Services module for business logic.

- domain/: Application services (pricing, orders, promo codes, menu, reviews)
- events/: Order update broadcast and simulated status progression

Usage:
    from rest_api.services.domain import OrderService
    service = OrderService(db)
    order = service.create_order(request)
"""

from .domain import (
    AnalyticsService,
    MenuService,
    OrderService,
    PromoCodeService,
    ReviewService,
    UserService,
)

from .events import (
    AsyncioScheduler,
    OrderProgressSimulator,
    Scheduler,
    build_order_event,
    publish_event,
)

__all__ = [
    # Domain services
    "AnalyticsService",
    "MenuService",
    "OrderService",
    "PromoCodeService",
    "ReviewService",
    "UserService",
    # Events
    "AsyncioScheduler",
    "OrderProgressSimulator",
    "Scheduler",
    "build_order_event",
    "publish_event",
]
