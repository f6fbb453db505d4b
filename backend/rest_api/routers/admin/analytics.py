"""
Analytics endpoints for the admin dashboard.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.services.domain import AnalyticsService
from shared.infrastructure.db import get_db
from shared.security.auth import require_admin
from shared.utils.schemas import DashboardOutput


router = APIRouter(prefix="/analytics", tags=["admin-analytics"])


@router.get("/dashboard", response_model=DashboardOutput)
def get_dashboard(
    db: Session = Depends(get_db),
    ctx: dict = Depends(require_admin),
) -> DashboardOutput:
    """
    Summary for administrators:
    - totalRevenue: final amounts of all orders that were not cancelled
    - totalOrders and ordersByStatus
    - popularItems: top menu items by units ordered
    - recentOrders: latest orders
    """
    return AnalyticsService(db).dashboard()
