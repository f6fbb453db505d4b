"""
Review Repository - Reviews and per-item rating aggregates.
"""

from typing import Sequence

from sqlalchemy import Select, select, func

from rest_api.models import Review
from .base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review entities."""

    @property
    def model(self) -> type[Review]:
        return Review

    def _base_query(self) -> Select:
        return select(Review).order_by(Review.created_at.desc(), Review.id.desc())

    def find_for_menu_item(self, menu_item_id: int, limit: int = 50) -> Sequence[Review]:
        """Reviews of a menu item, newest first."""
        query = self._base_query().where(Review.menu_item_id == menu_item_id).limit(limit)
        return self._db.execute(query).scalars().all()

    def rating_stats(self, menu_item_id: int) -> tuple[float, int]:
        """(mean rating, review count) for a menu item; (0.0, 0) without reviews."""
        avg, count = self._db.execute(
            select(func.avg(Review.rating), func.count(Review.id)).where(
                Review.menu_item_id == menu_item_id
            )
        ).one()
        return float(avg or 0.0), int(count or 0)
