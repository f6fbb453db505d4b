"""
Menu router.

Public browsing of the menu and admin management of menu items.
Thin controller: all business logic lives in MenuService.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from rest_api.models import MenuItem, Review
from rest_api.routers._common import Pagination, get_pagination
from rest_api.services.domain import MenuService, ReviewService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.security.auth import require_admin
from shared.utils.schemas import MenuItemCreate, MenuItemOutput, MenuItemUpdate, ReviewOutput


router = APIRouter(prefix="/api/menu", tags=["menu"])


# =============================================================================
# Public endpoints
# =============================================================================


@router.get("", response_model=list[MenuItemOutput])
def list_menu_items(
    category: str | None = None,
    search: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    min_price: int | None = Query(default=None, ge=0, alias="minPrice"),
    max_price: int | None = Query(default=None, ge=0, alias="maxPrice"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
) -> list[MenuItem]:
    """
    List the active menu, grouped by category then name.

    Filters: category (exact), search (name or description, case-insensitive),
    price range in cents.
    """
    return list(
        MenuService(db).list_items(
            category=category,
            search=search,
            min_price=min_price,
            max_price=max_price,
            limit=pagination.limit,
            offset=pagination.offset,
        )
    )


@router.get("/categories", response_model=list[str])
def list_categories(db: Session = Depends(get_db)) -> list[str]:
    """Distinct categories of the active menu."""
    return MenuService(db).categories()


@router.get("/{menu_item_id}", response_model=MenuItemOutput)
def get_menu_item(menu_item_id: int, db: Session = Depends(get_db)) -> MenuItem:
    return MenuService(db).get_item(menu_item_id)


@router.get("/{menu_item_id}/reviews", response_model=list[ReviewOutput])
def list_menu_item_reviews(
    menu_item_id: int,
    limit: int = Query(default=50, ge=1, le=Limits.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
) -> list[Review]:
    """Reviews of one menu item, newest first."""
    return list(ReviewService(db).list_for_item(menu_item_id, limit=limit))


# =============================================================================
# Admin endpoints
# =============================================================================


@router.post("", response_model=MenuItemOutput, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    body: MenuItemCreate,
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> MenuItem:
    return MenuService(db).create_item(body)


@router.put("/{menu_item_id}", response_model=MenuItemOutput)
def update_menu_item(
    menu_item_id: int,
    body: MenuItemUpdate,
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> MenuItem:
    """
    Partial update. Price changes apply to new orders only; existing
    order lines keep the price captured when they were placed.
    """
    return MenuService(db).update_item(menu_item_id, body)


@router.delete("/{menu_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    menu_item_id: int,
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> Response:
    """Soft delete: hidden from the menu, kept for order history."""
    MenuService(db).delete_item(menu_item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
