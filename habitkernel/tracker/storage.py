"""Key-value persistence collaborators.

Each backend holds one opaque blob: `load()` returns the last saved bytes
(None when nothing was saved) and `save()` reports success as a bool.
Backends never raise on I/O failure; they log and degrade.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from sqlalchemy import Column, Engine, LargeBinary, MetaData, String, Table, select
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def load(self) -> bytes | None: ...

    def save(self, data: bytes) -> bool: ...


class MemoryStorage:
    """In-process storage. `fail_saves` simulates write failures."""

    def __init__(self, data: bytes | None = None, fail_saves: int = 0):
        self.data = data
        self.fail_saves = fail_saves
        self.save_calls = 0

    def load(self) -> bytes | None:
        return self.data

    def save(self, data: bytes) -> bool:
        self.save_calls += 1
        if self.fail_saves > 0:
            self.fail_saves -= 1
            return False
        self.data = data
        return True


class FileStorage:
    """Single-file storage; writes land in a temp file then replace the target."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> bytes | None:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Could not read %s: %s", self.path, exc)
            return None

    def save(self, data: bytes) -> bool:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.error("Could not write %s: %s", self.path, exc)
            return False
        return True


metadata = MetaData()

habit_state = Table(
    "habit_state",
    metadata,
    Column("key", String(64), primary_key=True),
    Column("value", LargeBinary, nullable=False),
)


class SqlStorage:
    """One row of the `habit_state` table, addressed by `key`."""

    def __init__(self, engine: Engine, key: str = "habits"):
        self.engine = engine
        self.key = key
        self._ready = False

    def _ensure_table(self) -> None:
        if not self._ready:
            metadata.create_all(self.engine, tables=[habit_state])
            self._ready = True

    def load(self) -> bytes | None:
        try:
            self._ensure_table()
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(habit_state.c.value).where(habit_state.c.key == self.key)
                ).first()
        except SQLAlchemyError as exc:
            logger.warning("Could not read habit state %r: %s", self.key, exc)
            return None
        return None if row is None else bytes(row[0])

    def save(self, data: bytes) -> bool:
        try:
            self._ensure_table()
            with self.engine.begin() as conn:
                updated = conn.execute(
                    habit_state.update().where(habit_state.c.key == self.key).values(value=data)
                )
                if updated.rowcount == 0:
                    conn.execute(habit_state.insert().values(key=self.key, value=data))
        except SQLAlchemyError as exc:
            logger.error("Could not write habit state %r: %s", self.key, exc)
            return False
        return True
