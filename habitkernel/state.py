"""Process-wide registry wiring for the HTTP app."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from sqlalchemy.engine import make_url

from habitkernel.config import settings
from habitkernel.db import make_engine
from habitkernel.tracker.registry import HabitRegistry
from habitkernel.tracker.storage import FileStorage, KeyValueStorage, MemoryStorage, SqlStorage
from habitkernel.tracker.sync import PersistenceSync

logger = logging.getLogger(__name__)


def make_storage(backend: str | None = None) -> KeyValueStorage:
    backend = backend or settings.storage_backend
    if backend == "memory":
        return MemoryStorage()
    if backend == "sql":
        url = make_url(settings.database_url)
        if url.get_backend_name() == "sqlite" and url.database:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return SqlStorage(make_engine(), key=settings.storage_key)
    if backend != "file":
        logger.warning("Unknown storage backend %r, using file", backend)
    return FileStorage(settings.storage_path)


@lru_cache
def get_registry() -> HabitRegistry:
    sync = PersistenceSync(make_storage(), retries=settings.save_retries)
    return HabitRegistry.hydrate(sync)
