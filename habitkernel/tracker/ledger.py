"""Completion ledger — per-habit day → completed mapping."""

from __future__ import annotations

from datetime import date

from habitkernel.tracker.models import Habit


def is_completed(habit: Habit, day: date) -> bool:
    return habit.completions.get(day, False)


def toggle_completion(habit: Habit, day: date) -> Habit:
    """Return a new snapshot with `day` flipped (absent counts as False).

    Applying it twice restores the flag, though the day stays recorded.
    """
    completions = dict(habit.completions)
    completions[day] = not completions.get(day, False)
    return habit.model_copy(update={"completions": completions})
