"""
Domain Services - Application Layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access and own the transaction.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import OrderService

    # In router
    service = OrderService(db)
    order = service.cancel_order(order_id)
"""

from .analytics_service import AnalyticsService
from .menu_service import MenuService
from .order_service import OrderService
from .promo_code_service import PromoCodeService
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    "AnalyticsService",
    "MenuService",
    "OrderService",
    "PromoCodeService",
    "ReviewService",
    "UserService",
]
