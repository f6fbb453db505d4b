"""
REST API main application.
Entry point for the FastAPI server (HTTP API and the /ws order stream).
"""

from fastapi import FastAPI

from rest_api.core.cors import configure_cors
from rest_api.core.exception_handlers import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.admin import router as admin_router
from rest_api.routers.auth import router as auth_router
from rest_api.routers.catalog import menu_router, reviews_router
from rest_api.routers.orders import router as orders_router
from rest_api.routers.promotions import router as promotions_router
from rest_api.routers.public import health_router
from shared.config.settings import settings
from shared.security.rate_limit import limiter
from ws_gateway.routes import router as ws_router


# Create FastAPI application
app = FastAPI(
    title="OrderFlow REST API",
    description="Food ordering API: menu, orders, promo codes, reviews and live order tracking",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter

register_exception_handlers(app)
register_middlewares(app)
configure_cors(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(menu_router)
app.include_router(reviews_router)
app.include_router(orders_router)
app.include_router(promotions_router)
app.include_router(admin_router)
app.include_router(ws_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
