"""Abstract interface (port) for the durable key-value byte store."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Port for a small persistent byte store scoped to one ledger instance.

    Implemented in the infrastructure layer. Writes that the medium rejects
    (quota exceeded, medium unavailable) raise ``StorageFullError``.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None when the key is absent."""
        ...

    @abstractmethod
    async def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete ``key``. Removing an absent key is not an error."""
        ...

    async def set_many(self, items: dict[str, bytes]) -> None:
        """Store several entries. Adapters may override to write them atomically."""
        for key, value in items.items():
            await self.set(key, value)
