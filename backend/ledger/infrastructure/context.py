"""Ledger application context — owns the record store for one running instance.

Startup sequence (``LedgerContext.start``):
    1. load persisted clients and orders (corrupt entries come back empty)
    2. build the RecordStore and SnapshotService around them
    3. compute the initial dashboard
    4. notify listeners once with a ``loaded`` change

After that, every store mutation recomputes the dashboard and publishes a
``data_changed`` event through the ChangeBroadcaster.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone, tzinfo

from ledger.application.interfaces import LedgerPersistence
from ledger.application.services import (
    ChangeBroadcaster,
    RecordStore,
    SnapshotService,
    compute_dashboard,
)
from ledger.domain.entities import DashboardSummary
from ledger.domain.exceptions import CorruptionWarning

logger = logging.getLogger(__name__)

DATA_CHANGED_EVENT = "data_changed"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LedgerContext:
    """Constructed once at startup and handed to every consumer by reference."""

    def __init__(
        self,
        persistence: LedgerPersistence,
        *,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = _utc_now,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ):
        self._persistence = persistence
        self._tz = tz
        self._clock = clock
        self._on_close = on_close
        self._store: RecordStore | None = None
        self._snapshots: SnapshotService | None = None
        self.broadcaster = ChangeBroadcaster()
        self.load_warnings: list[CorruptionWarning] = []
        self.latest_dashboard: DashboardSummary | None = None

    @property
    def store(self) -> RecordStore:
        if self._store is None:
            raise RuntimeError("LedgerContext.start() has not been called")
        return self._store

    @property
    def snapshots(self) -> SnapshotService:
        if self._snapshots is None:
            raise RuntimeError("LedgerContext.start() has not been called")
        return self._snapshots

    async def start(self) -> None:
        state = await self._persistence.load()
        self.load_warnings = state.warnings
        for warning in state.warnings:
            logger.warning("Persisted data was not readable: %s", warning)

        self._store = RecordStore(
            self._persistence, clients=state.clients, orders=state.orders
        )
        self._snapshots = SnapshotService(self._store)

        self.latest_dashboard = self.dashboard()
        self._store.subscribe(self._on_change)
        self._publish("loaded")
        logger.info(
            "Ledger ready: %d clients, %d orders",
            len(state.clients),
            len(state.orders),
        )

    async def stop(self) -> None:
        self.broadcaster.shutdown()
        if self._on_close is not None:
            await self._on_close()

    def dashboard(self) -> DashboardSummary:
        """Dashboard for the current orders as of now."""
        return compute_dashboard(self.store.list_orders(), self._clock(), self._tz)

    async def _on_change(self, change: str) -> None:
        self.latest_dashboard = self.dashboard()
        self._publish(change)

    def _publish(self, change: str) -> None:
        summary = self.latest_dashboard
        payload = {"change": change}
        if summary is not None:
            payload.update(
                total_paid=str(summary.total_paid),
                total_unpaid=str(summary.total_unpaid),
                today_revenue=str(summary.today_revenue),
            )
        self.broadcaster.publish(DATA_CHANGED_EVENT, payload)
