"""Domain entities for loading, exporting and importing whole ledgers."""

from dataclasses import dataclass, field
from enum import Enum

from ledger.domain.entities.client import Client
from ledger.domain.entities.order import Order
from ledger.domain.exceptions import CorruptionWarning


class ImportMode(str, Enum):
    """How an imported snapshot is combined with the current ledger."""

    REPLACE = "replace"
    MERGE = "merge"


@dataclass
class LoadedState:
    """Collections read back from the durable store at startup."""

    clients: list[Client] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
    warnings: list[CorruptionWarning] = field(default_factory=list)


@dataclass
class ImportResult:
    """Outcome of a committed import."""

    mode: ImportMode
    clients_added: int = 0
    orders_added: int = 0
    clients_skipped: int = 0  # id already present or repeated in the snapshot
    orders_skipped: int = 0
    orphan_orders: int = 0    # orders whose client is not in the ledger
