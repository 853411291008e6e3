from .ledger_entry import LedgerEntryModel

__all__ = [
    "LedgerEntryModel",
]
