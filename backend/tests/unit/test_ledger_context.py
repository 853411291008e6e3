"""Unit tests for the LedgerContext startup sequence and change broadcasting."""

import asyncio
import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ledger.application.interfaces import KeyValueStore
from ledger.application.schemas import ClientCreate, OrderCreate
from ledger.application.services import ChangeBroadcaster
from ledger.infrastructure.context import LedgerContext
from ledger.infrastructure.persistence import CLIENTS_KEY, ORDERS_KEY, JsonLedgerPersistence

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, entries: dict[str, bytes] | None = None):
        self.entries = dict(entries or {})

    async def get(self, key: str) -> bytes | None:
        return self.entries.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self.entries[key] = value

    async def remove(self, key: str) -> None:
        self.entries.pop(key, None)


def _context(entries: dict[str, bytes] | None = None) -> LedgerContext:
    return LedgerContext(
        JsonLedgerPersistence(MemoryKeyValueStore(entries)),
        tz=timezone.utc,
        clock=lambda: NOW,
    )


@pytest.mark.asyncio
async def test_store_is_unavailable_before_start():
    context = _context()
    with pytest.raises(RuntimeError):
        context.store


@pytest.mark.asyncio
async def test_start_loads_state_and_computes_dashboard():
    today_ms = int(NOW.timestamp() * 1000)
    entries = {
        CLIENTS_KEY: json.dumps([{"id": "c1", "name": "Ana", "createdAt": 1000}]).encode(),
        ORDERS_KEY: json.dumps(
            [
                {
                    "id": "o1",
                    "clientId": "c1",
                    "details": "bread",
                    "amount": 50,
                    "paymentMethod": "cash",
                    "paymentStatus": "paid",
                    "orderStage": "pending",
                    "createdAt": today_ms,
                }
            ]
        ).encode(),
    }
    context = _context(entries)

    await context.start()

    assert [c.id for c in context.store.list_clients()] == ["c1"]
    assert context.latest_dashboard.today_revenue == Decimal("50.00")
    assert context.load_warnings == []


@pytest.mark.asyncio
async def test_start_survives_corrupt_entry():
    context = _context({ORDERS_KEY: b"garbage"})
    await context.start()

    assert context.store.list_orders() == []
    assert [w.entry for w in context.load_warnings] == [ORDERS_KEY]


@pytest.mark.asyncio
async def test_mutations_refresh_dashboard_and_publish_event():
    context = _context()
    await context.start()

    events = context.broadcaster.subscribe()
    pending = asyncio.ensure_future(events.__anext__())
    await asyncio.sleep(0)

    client = await context.store.add_client(ClientCreate(name="Ana"))
    await context.store.add_order(
        OrderCreate(
            client_id=client.id,
            details="cake",
            amount=Decimal("20"),
            payment_method="app",
            payment_status="deferred",
        )
    )

    first = await pending
    assert first.startswith("event: data_changed\n")
    assert json.loads(first.split("data: ", 1)[1])["change"] == "client_added"
    assert context.latest_dashboard.total_unpaid == Decimal("20.00")

    second = await events.__anext__()
    assert json.loads(second.split("data: ", 1)[1])["total_unpaid"] == "20.00"

    await context.stop()
    with pytest.raises(StopAsyncIteration):
        await events.__anext__()


@pytest.mark.asyncio
async def test_broadcaster_drops_subscribers_that_fall_behind():
    broadcaster = ChangeBroadcaster(max_pending=2)
    events = broadcaster.subscribe()
    pending = asyncio.ensure_future(events.__anext__())
    await asyncio.sleep(0)
    assert broadcaster.subscriber_count == 1

    for index in range(4):
        broadcaster.publish("data_changed", {"n": index})

    assert broadcaster.subscriber_count == 0
    first = await pending
    assert '"n": 0' in first
    with pytest.raises(StopAsyncIteration):
        while True:
            await events.__anext__()
