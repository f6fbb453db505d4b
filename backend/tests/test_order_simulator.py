"""
Tests for the simulated order progression and the asyncio scheduler.
"""

import asyncio

import pytest

from rest_api.models import Order
from rest_api.services.domain import OrderService
from rest_api.services.events import AsyncioScheduler, OrderProgressSimulator
from shared.utils.schemas import CreateOrderRequest


def place_order(db_session, menu_item_id: int) -> Order:
    request = CreateOrderRequest(
        customer_name="Grace Hopper",
        address="1 Compiler Ct",
        phone="555-0199",
        payment_method="card",
        items=[{"menu_item_id": menu_item_id, "quantity": 1}],
    )
    return OrderService(db_session).create_order(request)


def current_status(db_session, order_id: int) -> str:
    db_session.expire_all()
    return db_session.get(Order, order_id).status


class TestSimulatorScheduling:
    """Test what start() schedules."""

    def test_schedules_three_steps_at_multiples_of_base_delay(self, simulator, fake_scheduler):
        assert simulator.start(1) is True
        assert fake_scheduler.delays == [10.0, 20.0, 30.0]

    def test_disabled_simulator_schedules_nothing(self, fake_scheduler, hub):
        simulator = OrderProgressSimulator(fake_scheduler, hub, enabled=False)

        assert simulator.start(1) is False
        assert fake_scheduler.scheduled == []

    def test_disabled_in_test_environment_by_default(self, fake_scheduler, hub):
        assert OrderProgressSimulator(fake_scheduler, hub).enabled is False


class TestSimulatorFiring:
    """Test scheduled firings against the database."""

    @pytest.mark.asyncio
    async def test_full_progression(self, db_session, seed_menu, simulator, fake_scheduler):
        order = place_order(db_session, seed_menu["pizza"].id)
        simulator.start(order.id)

        results = await fake_scheduler.run_all()

        assert results == [True, True, True]
        assert current_status(db_session, order.id) == "delivered"

    @pytest.mark.asyncio
    async def test_cancelled_order_is_never_resurrected(self, db_session, seed_menu, simulator, fake_scheduler):
        order = place_order(db_session, seed_menu["pizza"].id)
        simulator.start(order.id)
        OrderService(db_session).cancel_order(order.id)

        results = await fake_scheduler.run_all()

        assert results == [False, False, False]
        assert current_status(db_session, order.id) == "cancelled"

    @pytest.mark.asyncio
    async def test_admin_advanced_order_skips_stale_steps(self, db_session, seed_menu, simulator, fake_scheduler):
        order = place_order(db_session, seed_menu["pizza"].id)
        simulator.start(order.id)
        OrderService(db_session).update_order_status(order.id, "out_for_delivery")

        results = await fake_scheduler.run_all()

        # preparing and out_for_delivery are stale, delivered still applies
        assert results == [False, False, True]
        assert current_status(db_session, order.id) == "delivered"

    @pytest.mark.asyncio
    async def test_missing_order_is_skipped(self, db_session, simulator):
        assert await simulator.advance(999, "preparing") is False

    @pytest.mark.asyncio
    async def test_each_step_is_broadcast(self, db_session, seed_menu, simulator, fake_scheduler, hub, make_websocket):
        ws = make_websocket()
        await hub.connect(ws)
        order = place_order(db_session, seed_menu["pizza"].id)
        simulator.start(order.id)

        await fake_scheduler.run_all()

        assert [frame["order"]["status"] for frame in ws.sent] == [
            "preparing",
            "out_for_delivery",
            "delivered",
        ]
        assert all(frame["type"] == "orderUpdate" for frame in ws.sent)
        assert ws.sent[0]["order"]["id"] == order.id
        assert ws.sent[-1]["order"]["canCancel"] is False

    @pytest.mark.asyncio
    async def test_session_failure_is_logged_not_raised(self, fake_scheduler, hub):
        def broken_factory():
            raise RuntimeError("database unavailable")

        simulator = OrderProgressSimulator(fake_scheduler, hub, session_factory=broken_factory, enabled=True)

        assert await simulator.advance(1, "preparing") is False


class TestAsyncioScheduler:
    """Test the production scheduler."""

    @pytest.mark.asyncio
    async def test_runs_callback_after_delay(self):
        scheduler = AsyncioScheduler()
        fired = asyncio.Event()

        async def callback():
            fired.set()

        scheduler.schedule(0.01, callback)
        await asyncio.wait_for(fired.wait(), timeout=1.0)

        assert fired.is_set()

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_affect_others(self):
        scheduler = AsyncioScheduler()
        fired = asyncio.Event()

        async def failing():
            raise RuntimeError("boom")

        async def succeeding():
            fired.set()

        scheduler.schedule(0, failing)
        scheduler.schedule(0.01, succeeding)
        await asyncio.wait_for(fired.wait(), timeout=1.0)

        assert fired.is_set()

    @pytest.mark.asyncio
    async def test_shutdown_cancels_pending_tasks(self):
        scheduler = AsyncioScheduler()
        fired = []

        async def callback():
            fired.append(True)

        scheduler.schedule(60, callback)
        scheduler.schedule(60, callback)

        assert scheduler.pending == 2
        assert await scheduler.shutdown() == 2
        assert scheduler.pending == 0
        assert fired == []

    @pytest.mark.asyncio
    async def test_schedule_after_shutdown_is_dropped(self):
        scheduler = AsyncioScheduler()
        await scheduler.shutdown()

        async def callback():
            pass

        scheduler.schedule(0, callback)
        assert scheduler.pending == 0
