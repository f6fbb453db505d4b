"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before any application module reads settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"

from contextlib import contextmanager
from typing import Any, Awaitable, Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.websockets import WebSocketState

from rest_api.main import app
from rest_api.models import Base, MenuItem, PromoCode, User
from rest_api.services.events import OrderProgressSimulator
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.password import hash_password
from ws_gateway.connection_manager import ConnectionManager


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def testing_session_context():
    """Session factory for code that opens its own sessions (simulator)."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# Fakes
# =============================================================================


class FakeScheduler:
    """Records scheduled callbacks; runs them only when asked."""

    def __init__(self):
        self.scheduled: list[tuple[float, Callable[[], Awaitable[Any]]]] = []

    def schedule(self, delay: float, callback: Callable[[], Awaitable[Any]]) -> None:
        self.scheduled.append((delay, callback))

    @property
    def delays(self) -> list[float]:
        return [delay for delay, _ in self.scheduled]

    async def run_next(self) -> Any:
        """Run the earliest pending callback."""
        self.scheduled.sort(key=lambda entry: entry[0])
        _, callback = self.scheduled.pop(0)
        return await callback()

    async def run_all(self) -> list[Any]:
        results = []
        while self.scheduled:
            results.append(await self.run_next())
        return results


class FakeWebSocket:
    """Minimal stand-in for starlette's WebSocket used by ConnectionManager."""

    def __init__(self, fail_on_send: bool = False):
        self.client_state = WebSocketState.CONNECTING
        self.application_state = WebSocketState.CONNECTING
        self.sent: list[dict] = []
        self.closed_with: int | None = None
        self.fail_on_send = fail_on_send

    async def accept(self) -> None:
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_json(self, data: dict) -> None:
        if self.fail_on_send:
            raise RuntimeError("socket broken")
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.closed_with = code
        self.client_state = WebSocketState.DISCONNECTED
        self.application_state = WebSocketState.DISCONNECTED


# =============================================================================
# Database and client
# =============================================================================


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()


@pytest.fixture
def hub():
    return ConnectionManager(accept_timeout=1.0)


@pytest.fixture
def simulator(fake_scheduler, hub):
    """Enabled simulator driven by the fake scheduler."""
    return OrderProgressSimulator(
        fake_scheduler,
        hub,
        session_factory=testing_session_context,
        base_delay=10.0,
        enabled=True,
    )


# =============================================================================
# Seed data
# =============================================================================


@pytest.fixture
def seed_menu(db_session):
    """Three menu items: pizza 1299, burger 1099, fries 699."""
    items = [
        MenuItem(
            name="Margherita Pizza",
            description="Classic tomato sauce, fresh mozzarella, and basil.",
            price=1299,
            category="Pizza",
        ),
        MenuItem(
            name="Classic Cheeseburger",
            description="Juicy beef patty, cheddar, lettuce, tomato, house sauce.",
            price=1099,
            category="Burger",
        ),
        MenuItem(
            name="Truffle Fries",
            description="Crispy fries tossed with truffle oil and parmesan.",
            price=699,
            category="Sides",
        ),
    ]
    db_session.add_all(items)
    db_session.commit()
    for item in items:
        db_session.refresh(item)
    return {"pizza": items[0], "burger": items[1], "fries": items[2]}


@pytest.fixture
def seed_promo_codes(db_session):
    """A fixed, a percentage and an exhausted code."""
    codes = [
        PromoCode(code="SAVE3", discount_type="fixed", discount_value=300),
        PromoCode(code="TENOFF", discount_type="percentage", discount_value=10, minimum_order=1000),
        PromoCode(code="ONCE", discount_type="fixed", discount_value=100, max_uses=1, used_count=1),
    ]
    db_session.add_all(codes)
    db_session.commit()
    for code in codes:
        db_session.refresh(code)
    return {code.code: code for code in codes}


def _create_user(db_session, email: str, password: str, name: str, role: str):
    user = User(email=email, password=hash_password(password), name=name, role=role)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def seed_admin_user(db_session):
    """Create an admin user for testing authenticated endpoints."""
    return _create_user(db_session, "admin@test.com", "testpass123", "Test Admin", Roles.ADMIN)


@pytest.fixture
def seed_customer_user(db_session):
    return _create_user(db_session, "customer@test.com", "customer123", "Test Customer", Roles.CUSTOMER)


def _login(client, email: str, password: str) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client, seed_admin_user):
    """Get admin authentication headers for API calls."""
    return _login(client, "admin@test.com", "testpass123")


@pytest.fixture
def customer_auth_headers(client, seed_customer_user):
    """Get customer authentication headers for API calls."""
    return _login(client, "customer@test.com", "customer123")


def _order_payload(items: list[tuple[int, int]], **overrides) -> dict:
    """Valid camelCase order body for the given (menu_item_id, quantity) pairs."""
    payload = {
        "customerName": "Ada Lovelace",
        "address": "12 Analytical Engine Way",
        "phone": "555-0100",
        "email": "ada@example.com",
        "paymentMethod": "cash",
        "items": [{"menuItemId": item_id, "quantity": qty} for item_id, qty in items],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_order_payload():
    return _order_payload


@pytest.fixture
def make_websocket():
    return FakeWebSocket
