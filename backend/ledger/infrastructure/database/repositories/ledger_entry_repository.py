"""Durable key-value store backed by a SQLAlchemy table."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger.application.interfaces import KeyValueStore
from ledger.domain.exceptions import StorageFullError
from ledger.infrastructure.database.models import LedgerEntryModel

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port on the ``ledger_entries`` table.

    Each call runs in its own session and transaction. ``set_many`` writes
    all entries in one transaction. The total size of all values is capped
    at ``quota_bytes``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        quota_bytes: int,
    ):
        self._session_factory = session_factory
        self._quota_bytes = quota_bytes

    async def get(self, key: str) -> bytes | None:
        async with self._session_factory() as session:
            model = await session.get(LedgerEntryModel, key)
            return model.value if model else None

    async def set(self, key: str, value: bytes) -> None:
        await self.set_many({key: value})

    async def set_many(self, items: dict[str, bytes]) -> None:
        try:
            async with self._session_factory() as session:
                await self._check_quota(session, items)
                now = datetime.now(timezone.utc)
                for key, value in items.items():
                    model = await session.get(LedgerEntryModel, key)
                    if model is None:
                        session.add(LedgerEntryModel(key=key, value=value, updated_at=now))
                    else:
                        model.value = value
                        model.updated_at = now
                await session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Ledger entry write failed: %s", exc)
            raise StorageFullError(f"Database rejected the write: {exc}") from exc
        logger.debug("Wrote %d ledger entries", len(items))

    async def remove(self, key: str) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(LedgerEntryModel).where(LedgerEntryModel.key == key))
            await session.commit()

    async def _check_quota(self, session: AsyncSession, items: dict[str, bytes]) -> None:
        stmt = select(func.coalesce(func.sum(func.length(LedgerEntryModel.value)), 0)).where(
            LedgerEntryModel.key.not_in(list(items))
        )
        others = (await session.execute(stmt)).scalar_one()
        total = int(others) + sum(len(value) for value in items.values())
        if total > self._quota_bytes:
            raise StorageFullError(
                f"Storage quota exceeded: {total} bytes needed, {self._quota_bytes} allowed"
            )
