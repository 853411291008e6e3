"""Wiring — builds the ledger context at startup and hands it to FastAPI endpoints."""

import logging

from fastapi import Request

from ledger.application.interfaces import KeyValueStore
from ledger.application.services import RecordStore, SnapshotService
from ledger.config import Settings
from ledger.infrastructure.context import LedgerContext
from ledger.infrastructure.database import Base, create_engine, create_session_factory
from ledger.infrastructure.database.repositories import SQLAlchemyKeyValueStore
from ledger.infrastructure.persistence import JsonLedgerPersistence
from ledger.infrastructure.storage.local_directory_store import LocalDirectoryKeyValueStore

logger = logging.getLogger(__name__)


async def build_ledger_context(settings: Settings) -> LedgerContext:
    """Create the durable store named by ``settings.storage_backend`` and wrap it."""
    backend = settings.storage_backend.strip().lower()
    on_close = None

    if backend == "directory":
        kv_store: KeyValueStore = LocalDirectoryKeyValueStore(
            settings.data_dir, quota_bytes=settings.storage_quota_bytes
        )
    elif backend == "sqlite":
        engine = create_engine(settings.database_url, echo=False)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        kv_store = SQLAlchemyKeyValueStore(
            create_session_factory(engine), quota_bytes=settings.storage_quota_bytes
        )
        on_close = engine.dispose
    else:
        raise ValueError(
            f"Unknown storage_backend '{settings.storage_backend}' (use 'sqlite' or 'directory')"
        )

    logger.info("Using '%s' durable store", backend)
    return LedgerContext(
        JsonLedgerPersistence(kv_store),
        tz=settings.dashboard_timezone(),
        on_close=on_close,
    )


def get_ledger_context(request: Request) -> LedgerContext:
    """FastAPI dependency — the context built in the application lifespan."""
    return request.app.state.ledger


def get_record_store(request: Request) -> RecordStore:
    return get_ledger_context(request).store


def get_snapshot_service(request: Request) -> SnapshotService:
    return get_ledger_context(request).snapshots
