"""Application service owning the in-memory clients and orders.

The record store is the single source of truth for the running ledger. It
validates every mutation, enforces cascade delete from clients to orders,
writes through the persistence port after each change and then tells its
listeners that the data changed. Readers only ever get copies.
"""

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable, Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from ledger.application.interfaces import LedgerPersistence
from ledger.application.schemas.client import ClientCreate, ClientUpdate
from ledger.application.schemas.order import OrderCreate, OrderUpdate
from ledger.application.services.id_generator import current_millis, generate_id
from ledger.domain.entities import (
    Client,
    Order,
    OrderStage,
    PaymentMethod,
    PaymentStatus,
)
from ledger.domain.exceptions import NotFoundError, StorageFullError, ValidationError

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str], Awaitable[None]]

UNKNOWN_CLIENT_NAME = "Unknown Client"
_CENT = Decimal("0.01")

RecordT = TypeVar("RecordT", Client, Order)


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must not be empty")
    return value.strip()


def _optional_text(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _validate_amount(value: Any) -> float:
    """Accept a non-negative finite number and round it to cents."""
    if isinstance(value, bool) or value is None:
        raise ValidationError("amount", "must be a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("amount", "must be a number")
    if not amount.is_finite():
        raise ValidationError("amount", "must be a finite number")
    if amount < 0:
        raise ValidationError("amount", "must not be negative")
    return float(amount.quantize(_CENT, rounding=ROUND_HALF_UP))


def _unique_by_id(records: Iterable[RecordT], taken: set[str]) -> list[RecordT]:
    """Records whose id is not in ``taken``, first occurrence wins; updates ``taken``."""
    unique = []
    for record in records:
        if record.id in taken:
            continue
        taken.add(record.id)
        unique.append(record)
    return unique


def _enum_value(enum_cls: type[Enum], field: str, value: Any) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(field, f"must be one of: {allowed}")


class RecordStore:
    """Holds the ledger's clients and orders and guards their invariants.

    Every mutating method persists through ``persistence`` before returning.
    A ``StorageFullError`` during that write is logged and kept in
    ``last_storage_error``; the in-memory change stands regardless.
    Mutations are serialised, so saves land in the order the changes were
    made.
    """

    def __init__(
        self,
        persistence: LedgerPersistence,
        *,
        clients: Iterable[Client] = (),
        orders: Iterable[Order] = (),
        clock: Callable[[], int] = current_millis,
        id_factory: Callable[[], str] = generate_id,
    ):
        self._persistence = persistence
        self._clients: list[Client] = list(clients)
        self._orders: list[Order] = list(orders)
        self._clock = clock
        self._id_factory = id_factory
        self._issued_ids: set[str] = {c.id for c in self._clients} | {
            o.id for o in self._orders
        }
        self._listeners: list[ChangeListener] = []
        self._lock = asyncio.Lock()
        self.last_storage_error: StorageFullError | None = None

    # ── Notifications ────────────────────────────────────────────────

    def subscribe(self, listener: ChangeListener) -> None:
        """Register an async callback run with the change kind after each mutation.

        Listeners run while the mutation still holds the store, so they may
        read it but must not mutate it.
        """
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ── Queries ──────────────────────────────────────────────────────

    def list_clients(self) -> list[Client]:
        return copy.deepcopy(self._clients)

    def list_orders(self) -> list[Order]:
        return copy.deepcopy(self._orders)

    def list_orders_for_client(self, client_id: str) -> list[Order]:
        return copy.deepcopy([o for o in self._orders if o.client_id == client_id])

    def find_client_by_id(self, client_id: str) -> Client | None:
        client = self._find_client(client_id)
        return copy.deepcopy(client) if client else None

    def find_order_by_id(self, order_id: str) -> Order | None:
        order = self._find_order(order_id)
        return copy.deepcopy(order) if order else None

    def client_name_for(self, order: Order) -> str:
        """Display name of the order's client, or a placeholder for orphans."""
        client = self._find_client(order.client_id)
        return client.name if client else UNKNOWN_CLIENT_NAME

    def count_orphan_orders(self) -> int:
        """Orders whose client is not in the ledger (only imports create these)."""
        client_ids = {c.id for c in self._clients}
        return sum(1 for o in self._orders if o.client_id not in client_ids)

    # ── Client mutations ─────────────────────────────────────────────

    async def add_client(self, data: ClientCreate) -> Client:
        async with self._lock:
            client = Client(
                id=self._new_id(),
                name=_require_text("name", data.name),
                phone=_optional_text(data.phone),
                created_at=self._clock(),
            )
            self._clients.append(client)
            logger.debug("Added client %s", client.id)
            await self._commit("client_added")
            return copy.deepcopy(client)

    async def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        async with self._lock:
            index = self._client_index(client_id)
            name = _require_text("name", data.name)

            current = self._clients[index]
            updated = Client(
                id=current.id,
                name=name,
                phone=_optional_text(data.phone),
                created_at=current.created_at,
                extra=current.extra,
            )
            self._clients[index] = updated
            logger.debug("Updated client %s", client_id)
            await self._commit("client_updated")
            return copy.deepcopy(updated)

    async def delete_client(self, client_id: str) -> int:
        """Delete a client and every order placed by it.

        Returns the number of orders removed along with the client.
        """
        async with self._lock:
            index = self._client_index(client_id)
            del self._clients[index]

            remaining = [o for o in self._orders if o.client_id != client_id]
            cascaded = len(self._orders) - len(remaining)
            self._orders = remaining
            logger.debug("Deleted client %s with %d orders", client_id, cascaded)
            await self._commit("client_deleted")
            return cascaded

    # ── Order mutations ──────────────────────────────────────────────

    async def add_order(self, data: OrderCreate) -> Order:
        async with self._lock:
            fields = self._validated_order_fields(data)
            order = Order(id=self._new_id(), created_at=self._clock(), **fields)
            self._orders.append(order)
            logger.debug("Added order %s for client %s", order.id, order.client_id)
            await self._commit("order_added")
            return copy.deepcopy(order)

    async def update_order(self, order_id: str, data: OrderUpdate) -> Order:
        async with self._lock:
            index = self._order_index(order_id)
            fields = self._validated_order_fields(data)

            current = self._orders[index]
            updated = Order(
                id=current.id,
                created_at=current.created_at,
                extra=current.extra,
                **fields,
            )
            self._orders[index] = updated
            logger.debug("Updated order %s", order_id)
            await self._commit("order_updated")
            return copy.deepcopy(updated)

    async def delete_order(self, order_id: str) -> None:
        async with self._lock:
            index = self._order_index(order_id)
            del self._orders[index]
            logger.debug("Deleted order %s", order_id)
            await self._commit("order_deleted")

    # ── Bulk operations (import) ─────────────────────────────────────

    async def replace_all(
        self, clients: list[Client], orders: list[Order]
    ) -> tuple[int, int]:
        """Discard both collections and take the given ones as they are.

        When a collection repeats an id only its first record is kept.
        Returns how many clients and orders the ledger now holds.
        """
        async with self._lock:
            self._clients = _unique_by_id(clients, set())
            self._orders = _unique_by_id(orders, set())
            self._issued_ids.update(c.id for c in self._clients)
            self._issued_ids.update(o.id for o in self._orders)
            await self._commit("replaced")
            return len(self._clients), len(self._orders)

    async def merge(
        self, clients: list[Client], orders: list[Order]
    ) -> tuple[int, int]:
        """Append records whose ids are not already present.

        Existing records are never overwritten, and an id repeated within
        ``clients`` or ``orders`` is appended once. Returns how many clients
        and orders were appended.
        """
        async with self._lock:
            new_clients = _unique_by_id(clients, {c.id for c in self._clients})
            new_orders = _unique_by_id(orders, {o.id for o in self._orders})

            self._clients.extend(new_clients)
            self._orders.extend(new_orders)
            self._issued_ids.update(c.id for c in new_clients)
            self._issued_ids.update(o.id for o in new_orders)
            await self._commit("merged")
            return len(new_clients), len(new_orders)

    # ── Internals ────────────────────────────────────────────────────

    def _new_id(self) -> str:
        new_id = self._id_factory()
        while new_id in self._issued_ids:
            new_id = self._id_factory()
        self._issued_ids.add(new_id)
        return new_id

    def _find_client(self, client_id: str) -> Client | None:
        return next((c for c in self._clients if c.id == client_id), None)

    def _find_order(self, order_id: str) -> Order | None:
        return next((o for o in self._orders if o.id == order_id), None)

    def _client_index(self, client_id: str) -> int:
        for index, client in enumerate(self._clients):
            if client.id == client_id:
                return index
        raise NotFoundError("Client", client_id)

    def _order_index(self, order_id: str) -> int:
        for index, order in enumerate(self._orders):
            if order.id == order_id:
                return index
        raise NotFoundError("Order", order_id)

    def _validated_order_fields(self, data: OrderCreate) -> dict[str, Any]:
        if not isinstance(data.client_id, str) or self._find_client(data.client_id) is None:
            raise ValidationError("client_id", f"client '{data.client_id}' does not exist")
        return {
            "client_id": data.client_id,
            "details": _require_text("details", data.details),
            "amount": _validate_amount(data.amount),
            "payment_method": _enum_value(PaymentMethod, "payment_method", data.payment_method),
            "payment_status": _enum_value(PaymentStatus, "payment_status", data.payment_status),
            "order_stage": _enum_value(OrderStage, "order_stage", data.order_stage),
        }

    async def _commit(self, change: str) -> None:
        try:
            await self._persistence.save(self._clients, self._orders)
        except StorageFullError as exc:
            logger.warning("Change '%s' kept in memory only: %s", change, exc)
            self.last_storage_error = exc
        else:
            self.last_storage_error = None

        for listener in list(self._listeners):
            try:
                await listener(change)
            except Exception:
                logger.exception("Change listener failed for '%s'", change)
