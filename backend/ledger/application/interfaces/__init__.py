from .key_value_store import KeyValueStore
from .ledger_persistence import LedgerPersistence

__all__ = [
    "KeyValueStore",
    "LedgerPersistence",
]
