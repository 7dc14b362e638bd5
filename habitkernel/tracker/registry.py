"""Habit registry — the single owner and writer of habit state.

Every mutation builds a new snapshot, persists the full collection, then
notifies subscribers with the new state.
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import date, datetime, timezone
from typing import Callable, Iterable

from habitkernel.tracker.days import day_key
from habitkernel.tracker.ledger import toggle_completion
from habitkernel.tracker.models import HABIT_COLORS, Habit
from habitkernel.tracker.sync import PersistenceSync

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[Habit, ...]], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class HabitRegistry:
    def __init__(
        self,
        sync: PersistenceSync,
        habits: Iterable[Habit] = (),
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self.sync = sync
        self._habits: list[Habit] = list(habits)
        self._rng = rng or random.Random()
        self._clock = clock or _utcnow
        self._id_factory = id_factory or _new_id
        self._listeners: list[Listener] = []
        self.unsaved_changes = False

    @classmethod
    def hydrate(cls, sync: PersistenceSync, **kwargs) -> HabitRegistry:
        """Build a registry from whatever the storage currently holds."""
        return cls(sync, sync.load(), **kwargs)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> tuple[Habit, ...]:
        return tuple(self._habits)

    def get(self, habit_id: str) -> Habit | None:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state-change callback. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, name: str, description: str = "") -> Habit | None:
        """Add a habit. Returns None (and changes nothing) for a blank name."""
        if not name.strip():
            logger.debug("Rejected habit with empty name")
            return None

        habit = Habit(
            id=self._unique_id(),
            name=name,
            description=description,
            color_tag=self._rng.choice(HABIT_COLORS),
            created_at=self._clock(),
        )
        self._habits.append(habit)
        logger.info("Created habit %s (%s)", habit.id, habit.name)
        self._commit()
        return habit

    def toggle(self, habit_id: str, day: date) -> Habit | None:
        """Flip one day's flag. Unknown ids are ignored and return None."""
        for index, habit in enumerate(self._habits):
            if habit.id == habit_id:
                break
        else:
            logger.debug("Toggle ignored, no habit %s", habit_id)
            return None

        updated = toggle_completion(habit, day)
        self._habits[index] = updated
        logger.debug("Toggled %s on %s -> %s", habit_id, day_key(day), updated.completions[day])
        self._commit()
        return updated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _unique_id(self) -> str:
        taken = {h.id for h in self._habits}
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        return new_id

    def _commit(self) -> None:
        self.unsaved_changes = not self.sync.save(self._habits)
        state = self.list()
        for listener in list(self._listeners):
            listener(state)
