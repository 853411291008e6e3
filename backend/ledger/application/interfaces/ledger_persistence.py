"""Abstract interface (port) for persisting the client and order collections."""

from abc import ABC, abstractmethod

from ledger.domain.entities import Client, LoadedState, Order


class LedgerPersistence(ABC):
    """Port the record store writes through after every mutation."""

    @abstractmethod
    async def load(self) -> LoadedState:
        """Read both collections. Corrupt entries come back empty with a warning."""
        ...

    @abstractmethod
    async def save(self, clients: list[Client], orders: list[Order]) -> None:
        """Write both collections. Raises StorageFullError if the medium refuses."""
        ...
