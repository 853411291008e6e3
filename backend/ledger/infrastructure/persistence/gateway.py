"""Persistence gateway — the ledger's collections as JSON in a key-value store.

Two entries are kept:
    clientsDB  — JSON array of client objects
    ordersDB   — JSON array of order objects

A missing entry loads as an empty collection. An entry that cannot be
decoded also loads as empty, with a CorruptionWarning returned to the
caller instead of an exception.
"""

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from ledger.application.interfaces import KeyValueStore, LedgerPersistence
from ledger.domain.entities import Client, LoadedState, Order
from ledger.domain.exceptions import CorruptionWarning

logger = logging.getLogger(__name__)

CLIENTS_KEY = "clientsDB"
ORDERS_KEY = "ordersDB"

RecordT = TypeVar("RecordT", Client, Order)


def _encode(records: list[Client] | list[Order]) -> bytes:
    payload = [record.to_dict() for record in records]
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _decode(
    raw: bytes, build: Callable[[dict[str, Any]], RecordT]
) -> list[RecordT]:
    """Parse an entry; raises ValueError describing what is wrong with it."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ValueError(f"not UTF-8 ({exc.reason})") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"not JSON ({exc.msg} at position {exc.pos})") from exc

    if not isinstance(data, list):
        raise ValueError(f"expected an array, found {type(data).__name__}")

    records = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"item #{index} is not an object")
        try:
            records.append(build(entry))
        except KeyError as exc:
            raise ValueError(f"item #{index} is missing {exc.args[0]}") from exc
    return records


class JsonLedgerPersistence(LedgerPersistence):
    """Reads and writes both collections through a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def load(self) -> LoadedState:
        state = LoadedState()
        state.clients = await self._load_entry(CLIENTS_KEY, Client.from_dict, state.warnings)
        state.orders = await self._load_entry(ORDERS_KEY, Order.from_dict, state.warnings)
        logger.info(
            "Loaded ledger: %d clients, %d orders", len(state.clients), len(state.orders)
        )
        return state

    async def save(self, clients: list[Client], orders: list[Order]) -> None:
        await self._store.set_many(
            {
                CLIENTS_KEY: _encode(clients),
                ORDERS_KEY: _encode(orders),
            }
        )

    async def _load_entry(
        self,
        key: str,
        build: Callable[[dict[str, Any]], RecordT],
        warnings: list[CorruptionWarning],
    ) -> list[RecordT]:
        raw = await self._store.get(key)
        if raw is None:
            return []
        try:
            return _decode(raw, build)
        except ValueError as exc:
            warning = CorruptionWarning(key, str(exc))
            logger.warning("%s — starting with an empty collection", warning)
            warnings.append(warning)
            return []
