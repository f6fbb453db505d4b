"""
Engine and session factory (SQLAlchemy 2.0).

Request handlers get a session per request through get_db(); background
work (status simulator, CLI, startup seeding) opens its own with
get_db_context().
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from shared.config.settings import DATABASE_URL


def _engine_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        # (2 * cores) + 1, capped at 20
        "pool_size": min((os.cpu_count() or 4) * 2 + 1, 20),
        "max_overflow": 15,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency; the session is closed when the response is sent."""
    with SessionLocal() as db:
        yield db


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
        with get_db_context() as db:
            OrderService(db).update_order_status(order_id, "preparing")
    """
    with SessionLocal() as db:
        yield db


def safe_commit(db: Session) -> None:
    """Commit, rolling back before re-raising if the commit fails."""
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
