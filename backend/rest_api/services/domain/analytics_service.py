"""
Analytics Domain Service.

Read-only dashboard summary for administrators.
"""

from sqlalchemy.orm import Session

from rest_api.repositories import MenuItemRepository, OrderRepository
from shared.config.constants import Limits
from shared.utils.schemas import (
    DashboardOutput,
    OrderSummaryOutput,
    PopularItemOutput,
)


class AnalyticsService:
    def __init__(self, db: Session):
        self._orders = OrderRepository(db)
        self._menu = MenuItemRepository(db)

    def dashboard(self) -> DashboardOutput:
        """
        Revenue counts every order that was not cancelled, including
        orders still in progress.
        """
        by_status = self._orders.count_by_status()
        popular = self._menu.find_popular(Limits.POPULAR_ITEMS_LIMIT)
        recent = self._orders.find_recent(Limits.RECENT_ORDERS_LIMIT)

        return DashboardOutput(
            total_revenue=self._orders.total_revenue(),
            total_orders=sum(by_status.values()),
            orders_by_status=by_status,
            popular_items=[PopularItemOutput.model_validate(item) for item in popular],
            recent_orders=[OrderSummaryOutput.model_validate(order) for order in recent],
        )
