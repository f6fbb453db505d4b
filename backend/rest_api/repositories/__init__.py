"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from rest_api.repositories import OrderRepository

    repo = OrderRepository(db)
    order = repo.find_by_id(123)
    recent = repo.find_recent(limit=10)
"""

from .base import BaseRepository, RepositoryFilters
from .menu_item import MenuItemRepository, MenuItemFilters
from .order import OrderRepository, OrderFilters
from .promo_code import PromoCodeRepository, normalize_code
from .review import ReviewRepository
from .user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # Menu
    "MenuItemRepository",
    "MenuItemFilters",
    # Order
    "OrderRepository",
    "OrderFilters",
    # Promo code
    "PromoCodeRepository",
    "normalize_code",
    # Review
    "ReviewRepository",
    # User
    "UserRepository",
]
