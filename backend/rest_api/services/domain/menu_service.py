"""
Menu Domain Service.

Catalog browsing and admin CRUD over menu items. Deleting an item is a
soft delete: it disappears from the menu and can no longer be ordered,
but historical order lines still join to it.
"""

from typing import Sequence

from sqlalchemy.orm import Session

from rest_api.models import MenuItem
from rest_api.repositories import MenuItemFilters, MenuItemRepository
from shared.config.logging import admin_logger as logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import MenuItemCreate, MenuItemUpdate


class MenuService:
    """
    Service for menu management.

    Business rules:
    - Prices are integer cents and never negative
    - Price edits never touch existing order lines
    - Soft delete keeps the row for order history
    """

    def __init__(self, db: Session):
        self._db = db
        self._repo = MenuItemRepository(db)

    def list_items(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Sequence[MenuItem]:
        if min_price is not None and max_price is not None and min_price > max_price:
            raise ValidationError("min_price cannot be greater than max_price")

        filters = MenuItemFilters(
            category=category,
            search=search,
            min_price=min_price,
            max_price=max_price,
            limit=limit,
            offset=offset,
        )
        return self._repo.find_all(filters)

    def get_item(self, menu_item_id: int) -> MenuItem:
        item = self._repo.find_by_id(menu_item_id)
        if not item:
            raise NotFoundError("Menu item", menu_item_id)
        return item

    def categories(self) -> list[str]:
        """Distinct categories of the visible menu, alphabetically."""
        return self._repo.distinct_categories()

    def create_item(self, data: MenuItemCreate) -> MenuItem:
        item = MenuItem(**data.model_dump())
        self._repo.save(item)
        safe_commit(self._db)
        self._db.refresh(item)

        logger.info("Menu item created", menu_item_id=item.id, name=item.name, price=item.price)
        return item

    def update_item(self, menu_item_id: int, data: MenuItemUpdate) -> MenuItem:
        item = self.get_item(menu_item_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field != "image_url":
                continue
            setattr(item, field, value)

        safe_commit(self._db)
        self._db.refresh(item)

        logger.info("Menu item updated", menu_item_id=item.id, fields=sorted(changes))
        return item

    def delete_item(self, menu_item_id: int) -> None:
        item = self.get_item(menu_item_id)
        item.soft_delete()
        safe_commit(self._db)

        logger.info("Menu item deleted", menu_item_id=menu_item_id)
