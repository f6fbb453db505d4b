"""
Order Repository - Data access for orders and their line items.
Eager loading prevents N+1 queries when serializing items.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, select, func
from sqlalchemy.orm import selectinload, joinedload

from rest_api.models import Order, OrderItem
from shared.config.constants import OrderStatus
from .base import BaseRepository, RepositoryFilters


@dataclass
class OrderFilters(RepositoryFilters):
    """Filters specific to orders."""

    status: str | None = None
    user_id: int | None = None


class OrderRepository(BaseRepository[Order]):
    """
    Repository for Order entities.

    Guarantees eager loading of:
    - items -> menu_item (current catalog row, soft-deleted or not)
    """

    @property
    def model(self) -> type[Order]:
        return Order

    def _base_query(self) -> Select:
        return (
            select(Order)
            .options(selectinload(Order.items).joinedload(OrderItem.menu_item))
            .order_by(Order.created_at.desc(), Order.id.desc())
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply order-specific filters."""
        if not isinstance(filters, OrderFilters):
            filters = OrderFilters(**filters.__dict__)

        if filters.status:
            query = query.where(Order.status == filters.status)
        if filters.user_id is not None:
            query = query.where(Order.user_id == filters.user_id)

        return query

    def find_for_update(self, order_id: int) -> Order | None:
        """
        Re-read the order row holding a row lock until commit.
        No eager joins: FOR UPDATE cannot apply to the nullable side of an outer join.
        SQLite renders no lock clause.
        """
        query = (
            select(Order)
            .where(Order.id == order_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self._db.scalar(query)

    def find_for_user(self, user_id: int, limit: int = 50) -> Sequence[Order]:
        """Orders placed by a registered user, newest first."""
        return self.find_all(OrderFilters(user_id=user_id, limit=limit))

    def find_recent(self, limit: int) -> Sequence[Order]:
        return self.find_all(OrderFilters(limit=limit))

    def count_by_status(self) -> dict[str, int]:
        """Number of orders per status, with zero for absent statuses."""
        rows = self._db.execute(
            select(Order.status, func.count()).group_by(Order.status)
        ).all()
        counts = {status: 0 for status in OrderStatus.ALL}
        counts.update({status: count for status, count in rows})
        return counts

    def total_revenue(self) -> int:
        """Sum of final amounts of every order that was not cancelled."""
        query = select(func.coalesce(func.sum(Order.final_amount), 0)).where(
            Order.status != OrderStatus.CANCELLED
        )
        return int(self._db.scalar(query) or 0)
