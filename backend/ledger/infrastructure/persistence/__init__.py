from .gateway import CLIENTS_KEY, ORDERS_KEY, JsonLedgerPersistence

__all__ = [
    "CLIENTS_KEY",
    "ORDERS_KEY",
    "JsonLedgerPersistence",
]
