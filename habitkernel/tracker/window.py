"""Recent-days window for display binding."""

from __future__ import annotations

from datetime import date

from habitkernel.tracker.days import shift_day
from habitkernel.tracker.models import DayDescriptor


def get_recent_days(reference: date, n: int = 7) -> list[DayDescriptor]:
    """`n` consecutive days ending at `reference` (inclusive), oldest first.

    Non-positive `n` yields an empty list.
    """
    days: list[DayDescriptor] = []
    for offset in range(n - 1, -1, -1):
        day = shift_day(reference, -offset)
        days.append(DayDescriptor(day=day, day_name=day.strftime("%a"), day_number=day.day))
    return days
