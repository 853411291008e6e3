"""Import/export engine — portable JSON snapshots of the whole ledger.

Export format::

    {"version": "1.0", "exportDate": "<ISO-8601>", "clients": [...], "orders": [...]}

An import is validated completely before anything is touched; a rejected
snapshot leaves the ledger exactly as it was. Referential integrity is not
re-checked after an import: orders pointing at unknown clients are kept and
reported as orphans.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from ledger.application.services.record_store import RecordStore
from ledger.domain.entities import Client, ImportMode, ImportResult, Order
from ledger.domain.exceptions import (
    ImportInProgressError,
    InvalidFormatError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = "1.0"
REQUIRED_CLIENT_FIELDS = ("id", "name", "createdAt")
REQUIRED_ORDER_FIELDS = (
    "id",
    "clientId",
    "details",
    "amount",
    "paymentMethod",
    "paymentStatus",
    "orderStage",
    "createdAt",
)

TextReader = Callable[[], Awaitable[str | bytes]]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _check_entries(kind: str, entries: list[Any], required: tuple[str, ...]) -> None:
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise InvalidFormatError(f"{kind} #{index} is not an object")
        missing = [name for name in required if name not in entry]
        if missing:
            raise InvalidFormatError(f"{kind} #{index} is missing {', '.join(missing)}")
        if not isinstance(entry["id"], str):
            raise InvalidFormatError(f"{kind} #{index} has a non-string id")


def validate_snapshot(data: Any) -> None:
    """Reject anything that is not a complete, importable snapshot.

    Checks run in order: the snapshot is an object; ``clients`` and
    ``orders`` are arrays; every client and every order carries its
    required fields and a string ``id``. Raises InvalidFormatError on the
    first failure.
    """
    if not isinstance(data, dict):
        raise InvalidFormatError("snapshot must be a JSON object")
    for key in ("clients", "orders"):
        if not isinstance(data.get(key), list):
            raise InvalidFormatError(f"'{key}' must be present and be an array")
    _check_entries("client", data["clients"], REQUIRED_CLIENT_FIELDS)
    _check_entries("order", data["orders"], REQUIRED_ORDER_FIELDS)


def parse_snapshot_text(raw: str | bytes) -> dict[str, Any]:
    """Decode and validate snapshot file contents."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise InvalidFormatError("file is not UTF-8 text")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidFormatError(f"file is not valid JSON ({exc.msg})")
    validate_snapshot(data)
    return data


class SnapshotService:
    """Exports the ledger and imports snapshots into it, one import at a time."""

    def __init__(
        self,
        store: RecordStore,
        *,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._store = store
        self._clock = clock
        self._import_in_flight = False

    @property
    def import_in_progress(self) -> bool:
        return self._import_in_flight

    # ── Export ───────────────────────────────────────────────────────

    def export_snapshot(self) -> dict[str, Any]:
        return {
            "version": SNAPSHOT_VERSION,
            "exportDate": _iso_timestamp(self._clock()),
            "clients": [c.to_dict() for c in self._store.list_clients()],
            "orders": [o.to_dict() for o in self._store.list_orders()],
        }

    def export_json(self) -> str:
        return json.dumps(self.export_snapshot(), indent=2, ensure_ascii=False)

    def export_filename(self) -> str:
        millis = int(self._clock().timestamp() * 1000)
        return f"client-order-backup-{millis}.json"

    # ── Import ───────────────────────────────────────────────────────

    async def import_snapshot(
        self, read_text: TextReader, mode: ImportMode | str
    ) -> ImportResult:
        """Read a snapshot through ``read_text`` and commit it wholesale.

        Raises ImportInProgressError while a previous import is still
        running, and InvalidFormatError (with no change to the ledger) when
        the contents are not a valid snapshot.
        """
        try:
            mode = ImportMode(mode)
        except ValueError:
            raise ValidationError("mode", "must be 'replace' or 'merge'")

        if self._import_in_flight:
            raise ImportInProgressError()

        self._import_in_flight = True
        try:
            data = parse_snapshot_text(await read_text())
            clients = [Client.from_dict(entry) for entry in data["clients"]]
            orders = [Order.from_dict(entry) for entry in data["orders"]]

            if mode is ImportMode.REPLACE:
                clients_added, orders_added = await self._store.replace_all(clients, orders)
            else:
                clients_added, orders_added = await self._store.merge(clients, orders)
            result = ImportResult(
                mode=mode,
                clients_added=clients_added,
                orders_added=orders_added,
                clients_skipped=len(clients) - clients_added,
                orders_skipped=len(orders) - orders_added,
            )
        finally:
            self._import_in_flight = False

        result.orphan_orders = self._store.count_orphan_orders()
        if result.orphan_orders:
            logger.warning(
                "Ledger holds %d orders without a matching client after import",
                result.orphan_orders,
            )
        logger.info(
            "Imported snapshot (%s): +%d clients, +%d orders, skipped %d/%d",
            mode.value,
            result.clients_added,
            result.orders_added,
            result.clients_skipped,
            result.orders_skipped,
        )
        return result
