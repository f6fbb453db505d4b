"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and AuditMixin
- user: User
- catalog: MenuItem
- order: Order, OrderItem
- promotion: PromoCode
- review: Review
"""

# Base classes
from .base import Base, AuditMixin

# Accounts
from .user import User

# Catalog (menu)
from .catalog import MenuItem

# Orders
from .order import Order, OrderItem

# Promotions
from .promotion import PromoCode

# Reviews
from .review import Review

__all__ = [
    "Base",
    "AuditMixin",
    "User",
    "MenuItem",
    "Order",
    "OrderItem",
    "PromoCode",
    "Review",
]
