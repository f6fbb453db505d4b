"""
Catalog routers.
- /api/menu/* - Menu browsing and admin menu management
- /api/reviews - Menu item reviews
"""

from .menu import router as menu_router
from .reviews import router as reviews_router

__all__ = ["menu_router", "reviews_router"]
