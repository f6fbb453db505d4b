"""
MenuItem Repository - Data access for the menu catalog.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, select, update, or_

from rest_api.models import MenuItem
from .base import BaseRepository, RepositoryFilters


def escape_like_pattern(term: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class MenuItemFilters(RepositoryFilters):
    """Filters specific to menu items."""

    category: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    available_only: bool = False


class MenuItemRepository(BaseRepository[MenuItem]):
    """Repository for MenuItem entities. Soft-deleted items are hidden by default."""

    @property
    def model(self) -> type[MenuItem]:
        return MenuItem

    def _base_query(self) -> Select:
        return select(MenuItem).order_by(MenuItem.category, MenuItem.name, MenuItem.id)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply menu-specific filters."""
        if not isinstance(filters, MenuItemFilters):
            filters = MenuItemFilters(**filters.__dict__)

        if filters.category:
            query = query.where(MenuItem.category.ilike(escape_like_pattern(filters.category), escape="\\"))

        if filters.search:
            pattern = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(
                or_(
                    MenuItem.name.ilike(pattern, escape="\\"),
                    MenuItem.description.ilike(pattern, escape="\\"),
                )
            )

        if filters.min_price is not None:
            query = query.where(MenuItem.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(MenuItem.price <= filters.max_price)

        if filters.available_only:
            query = query.where(MenuItem.is_available.is_(True))

        return query

    def find_catalog(self, menu_item_ids: list[int]) -> dict[int, MenuItem]:
        """Load the referenced items in one query, keyed by id."""
        return {item.id: item for item in self.find_by_ids(sorted(set(menu_item_ids)))}

    def increment_order_count(self, menu_item_id: int, quantity: int) -> None:
        """Atomic counter bump, evaluated by the database."""
        self._db.execute(
            update(MenuItem)
            .where(MenuItem.id == menu_item_id)
            .values(order_count=MenuItem.order_count + quantity)
        )

    def distinct_categories(self) -> list[str]:
        query = (
            select(MenuItem.category)
            .where(MenuItem.is_active.is_(True))
            .distinct()
            .order_by(MenuItem.category)
        )
        return list(self._db.execute(query).scalars().all())

    def find_popular(self, limit: int) -> Sequence[MenuItem]:
        """Active items ranked by units ordered."""
        query = (
            select(MenuItem)
            .where(MenuItem.is_active.is_(True))
            .order_by(MenuItem.order_count.desc(), MenuItem.id)
            .limit(limit)
        )
        return self._db.execute(query).scalars().all()
