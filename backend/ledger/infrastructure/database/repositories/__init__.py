from .ledger_entry_repository import SQLAlchemyKeyValueStore

__all__ = [
    "SQLAlchemyKeyValueStore",
]
