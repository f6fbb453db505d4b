"""
Application lifespan: schema, seed data and the process-wide
broadcast hub / status simulator.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from rest_api.models import Base
from rest_api.seed import seed
from rest_api.services.events import AsyncioScheduler, OrderProgressSimulator
from shared.config.logging import rest_api_logger as logger, setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal, engine
from ws_gateway.connection_manager import ConnectionManager


def _check_configuration() -> None:
    """Refuse to start in production with default secrets."""
    problems = settings.validate_production_secrets()
    for problem in problems:
        logger.error("Configuration error: %s", problem)
    if problems:
        raise RuntimeError("Insecure production configuration: " + "; ".join(problems))
    if settings.jwt_secret == "dev-secret-change-me-in-production":
        logger.warning("Using the development JWT secret")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    _check_configuration()
    logger.info("Starting REST API", port=settings.rest_api_port, env=settings.environment)

    Base.metadata.create_all(bind=engine)
    if settings.seed_on_startup and not settings.is_test:
        with SessionLocal() as db:
            seed(db)

    hub = ConnectionManager()
    scheduler = AsyncioScheduler()
    app.state.broadcast_hub = hub
    app.state.order_scheduler = scheduler
    app.state.order_simulator = OrderProgressSimulator(scheduler, hub)
    logger.info(
        "Order simulator ready",
        enabled=settings.simulate_order_progress,
        base_delay=settings.order_status_base_delay,
    )

    yield

    # Pending simulated transitions are dropped, not resumed on restart
    cancelled = await scheduler.shutdown()
    closed = await hub.shutdown()
    logger.info("REST API stopped", cancelled_transitions=cancelled, closed_connections=closed)
