"""Persistence sync — full-state JSON snapshots over a key-value storage."""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from habitkernel.tracker.models import Habit
from habitkernel.tracker.storage import KeyValueStorage

logger = logging.getLogger(__name__)

_habit_list = TypeAdapter(list[Habit])


def dump(habits: Iterable[Habit]) -> bytes:
    """Serialize the whole collection (camelCase field names)."""
    return _habit_list.dump_json(list(habits), by_alias=True)


def parse(raw: bytes) -> list[Habit]:
    """Deserialize a snapshot. Raises ValidationError on malformed data.

    Later records reusing an earlier `id` are dropped.
    """
    habits: list[Habit] = []
    seen: set[str] = set()
    for habit in _habit_list.validate_json(raw):
        if habit.id in seen:
            logger.warning("Dropping duplicate habit id %r", habit.id)
            continue
        seen.add(habit.id)
        habits.append(habit)
    return habits


class PersistenceSync:
    """Loads the registry at startup and overwrites it after each mutation."""

    def __init__(self, storage: KeyValueStorage, retries: int = 1):
        self.storage = storage
        self.retries = max(retries, 0)

    def load(self) -> list[Habit]:
        """Stored habits, or an empty list when absent or malformed."""
        raw = self.storage.load()
        if raw is None:
            logger.info("No saved habits, starting empty")
            return []
        try:
            habits = parse(raw)
        except ValidationError as exc:
            logger.warning("Saved habits are malformed, starting empty: %s", exc)
            return []
        logger.info("Loaded %d habits", len(habits))
        return habits

    def save(self, habits: Iterable[Habit]) -> bool:
        """Write the full collection, retrying failed writes `retries` times.

        Returns False when every attempt failed.
        """
        data = dump(habits)
        for attempt in range(self.retries + 1):
            if self.storage.save(data):
                return True
            logger.warning("Saving habits failed (attempt %d)", attempt + 1)
        logger.error("Habits not saved after %d attempts", self.retries + 1)
        return False
