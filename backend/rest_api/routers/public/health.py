"""
Health check endpoints for the REST API.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from rest_api.routers._common import get_broadcast_hub
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from ws_gateway.connection_manager import ConnectionManager

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check(hub: ConnectionManager = Depends(get_broadcast_hub)):
    """
    Basic health check endpoint.
    Returns service status and the number of live WebSocket subscribers.
    """
    return {
        "status": "healthy",
        "service": "orderflow-api",
        "environment": settings.environment,
        "connections": hub.total_connections,
    }


@router.get("/health/detailed")
def detailed_health_check(
    db: Session = Depends(get_db),
    hub: ConnectionManager = Depends(get_broadcast_hub),
):
    """
    Health check that also verifies database connectivity.
    Returns 503 Service Unavailable if the database is down.
    """
    checks = {
        "service": "orderflow-api",
        "environment": settings.environment,
        "dependencies": {},
        "websocket": hub.get_stats(),
    }

    try:
        db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
        checks["status"] = "healthy"
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": str(e)}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=503)

    return checks
