"""Durable key-value store kept as one file per key in a local directory.

Storage layout:
    <data_dir>/<key>.json      — one entry per file (``clientsDB.json``, ``ordersDB.json``)

Writes go to a temporary file first and are moved into place, so a crash
never leaves a half-written entry behind.
"""

import logging
import os
import re
from collections.abc import Collection
from pathlib import Path

from ledger.application.interfaces import KeyValueStore
from ledger.domain.exceptions import StorageFullError

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


def _sanitise(name: str, max_len: int = 64) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


class LocalDirectoryKeyValueStore(KeyValueStore):
    """Infrastructure adapter for a directory-backed key-value store."""

    def __init__(self, data_dir: str | Path, quota_bytes: int):
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._quota_bytes = quota_bytes

    def _path_for(self, key: str) -> Path:
        return self._data_dir / f"{_sanitise(key)}{_SUFFIX}"

    async def get(self, key: str) -> bytes | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    async def set(self, key: str, value: bytes) -> None:
        path = self._path_for(key)
        self._check_quota(exclude=(path,), incoming=len(value))

        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_bytes(value)
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            logger.warning("Could not write %s: %s", path, exc)
            raise StorageFullError(f"Could not write entry '{key}': {exc}") from exc
        logger.debug("Stored entry %s (%d bytes)", path.name, len(value))

    async def set_many(self, items: dict[str, bytes]) -> None:
        excluded = {self._path_for(key) for key in items}
        self._check_quota(exclude=excluded, incoming=sum(len(v) for v in items.values()))
        for key, value in items.items():
            await self.set(key, value)

    async def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def _check_quota(self, *, exclude: Collection[Path], incoming: int) -> None:
        used = sum(
            entry.stat().st_size
            for entry in self._data_dir.glob(f"*{_SUFFIX}")
            if entry not in exclude
        )
        if used + incoming > self._quota_bytes:
            raise StorageFullError(
                f"Storage quota exceeded: {used + incoming} bytes needed, "
                f"{self._quota_bytes} allowed"
            )
