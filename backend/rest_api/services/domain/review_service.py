"""
Review Domain Service.

Stores reviews and keeps each menu item's average_rating and
total_reviews in step with its reviews.
"""

from typing import Sequence

from sqlalchemy.orm import Session

from rest_api.models import Review
from rest_api.repositories import MenuItemRepository, OrderRepository, ReviewRepository
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import ReviewCreate

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, db: Session):
        self._db = db
        self._reviews = ReviewRepository(db)
        self._menu = MenuItemRepository(db)
        self._orders = OrderRepository(db)

    def create_review(self, data: ReviewCreate, user_id: int | None = None) -> Review:
        """
        Insert a review and recompute the item's rating aggregate
        in the same transaction.

        Raises:
            NotFoundError: unknown (or deleted) menu item
            ValidationError: order_id given but the order does not contain the item
        """
        item = self._menu.find_by_id(data.menu_item_id)
        if not item:
            raise NotFoundError("Menu item", data.menu_item_id)

        if data.order_id is not None:
            order = self._orders.find_by_id(data.order_id)
            if not order:
                raise NotFoundError("Order", data.order_id)
            if all(line.menu_item_id != item.id for line in order.items):
                raise ValidationError(
                    "Order does not contain this menu item",
                    order_id=data.order_id,
                    menu_item_id=item.id,
                )

        try:
            review = Review(
                menu_item_id=item.id,
                user_id=user_id,
                order_id=data.order_id,
                rating=data.rating,
                comment=data.comment.strip() if data.comment else None,
            )
            self._db.add(review)
            self._db.flush()

            average, count = self._reviews.rating_stats(item.id)
            item.average_rating = round(average, 2)
            item.total_reviews = count

            safe_commit(self._db)
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(review)

        logger.info(
            "Review created",
            menu_item_id=item.id,
            rating=review.rating,
            average_rating=item.average_rating,
            total_reviews=item.total_reviews,
        )
        return review

    def list_for_item(self, menu_item_id: int, limit: int = 50) -> Sequence[Review]:
        if not self._menu.find_by_id(menu_item_id):
            raise NotFoundError("Menu item", menu_item_id)
        return self._reviews.find_for_menu_item(menu_item_id, limit=limit)
