"""Pure stateless analytics over habits — math only, never raises."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from habitkernel.tracker.days import shift_day
from habitkernel.tracker.ledger import is_completed
from habitkernel.tracker.models import DashboardStats, DayStatus, Habit
from habitkernel.tracker.window import get_recent_days

STREAK_LOOKBACK_DAYS = 365


def get_streak(habit: Habit, reference: date, lookback: int = STREAK_LOOKBACK_DAYS) -> int:
    """Consecutive completed days ending at `reference` (inclusive).

    Walks backward one day at a time and stops at the first day that is
    not completed, or after `lookback` days.
    """
    streak = 0
    day = reference
    for _ in range(lookback):
        if not is_completed(habit, day):
            break
        streak += 1
        if day == date.min:
            break
        day = shift_day(day, -1)
    return streak


def get_completion_rate(habit: Habit) -> int:
    """Percent (0–100) of recorded days that were completed.

    Only days with an explicit entry count, not every day since creation.
    Returns 0 when nothing has been recorded.
    """
    values = list(habit.completions.values())
    if not values:
        return 0
    done = sum(1 for v in values if v)
    return round_half_up(100 * done / len(values))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (builtin round is banker's)."""
    return int(value + 0.5)


def completed_count(habits: Iterable[Habit], day: date) -> int:
    return sum(1 for h in habits if is_completed(h, day))


def best_streak(
    habits: Iterable[Habit],
    reference: date,
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Longest current streak across habits. 0 for no habits."""
    return max((get_streak(h, reference, lookback) for h in habits), default=0)


def recent_statuses(habit: Habit, reference: date, n: int = 7) -> list[DayStatus]:
    """Recent-days window annotated with this habit's completion flags."""
    return [
        DayStatus(**d.model_dump(), completed=is_completed(habit, d.day))
        for d in get_recent_days(reference, n)
    ]


def dashboard_stats(
    habits: Sequence[Habit],
    today: date,
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> DashboardStats:
    return DashboardStats(
        day=today,
        total_habits=len(habits),
        completed_today=completed_count(habits, today),
        best_streak=best_streak(habits, today, lookback),
    )
