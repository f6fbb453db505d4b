"""
Admin API router - combines the admin-only sub-routers.

Menu, order status and promo code administration live beside their
public counterparts and are guarded per endpoint with require_admin.

- analytics: Dashboard summary

All routes are prefixed with /api
"""

from fastapi import APIRouter

from .analytics import router as analytics_router


router = APIRouter(prefix="/api")

router.include_router(analytics_router)

__all__ = ["router"]
