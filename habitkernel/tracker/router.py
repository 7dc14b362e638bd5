"""Habit HTTP router — thin layer over the registry."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from habitkernel.auth import verify_api_key
from habitkernel.config import settings
from habitkernel.state import get_registry
from habitkernel.tracker import features
from habitkernel.tracker.days import local_today, parse_day_key
from habitkernel.tracker.ledger import is_completed
from habitkernel.tracker.models import DashboardStats, DayDescriptor, Habit, HabitCreate, HabitView
from habitkernel.tracker.registry import HabitRegistry
from habitkernel.tracker.window import get_recent_days

router = APIRouter(prefix="/habits", tags=["habits"], dependencies=[Depends(verify_api_key)])


def _parse_date(value: str, name: str) -> date:
    try:
        return parse_day_key(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


def _reference_day(value: str | None, tz: str | None) -> date:
    if value is not None:
        return _parse_date(value, "date")
    return local_today(tz or settings.default_tz)


def _view(habit: Habit, today: date) -> HabitView:
    return HabitView(
        habit=habit,
        streak=features.get_streak(habit, today, settings.streak_lookback_days),
        completion_rate=features.get_completion_rate(habit),
        completed_today=is_completed(habit, today),
        recent_days=features.recent_statuses(habit, today, settings.recent_days),
    )


# ---------------------------------------------------------------------------
# /habits
# ---------------------------------------------------------------------------


@router.get("", response_model=list[HabitView])
async def habits_list(
    registry: HabitRegistry = Depends(get_registry),
    on: str | None = Query(default=None, alias="date", description="Reference day (YYYY-MM-DD)"),
    tz: str | None = Query(default=None, description="Timezone (e.g. US/Eastern)"),
) -> list[HabitView]:
    today = _reference_day(on, tz)
    return [_view(h, today) for h in registry.list()]


@router.post("", response_model=Habit, status_code=201)
async def habits_create(
    body: HabitCreate,
    registry: HabitRegistry = Depends(get_registry),
) -> Habit:
    habit = registry.create(body.name, body.description)
    if habit is None:
        raise HTTPException(status_code=422, detail="Habit name must not be empty")
    return habit


# ---------------------------------------------------------------------------
# /habits/days, /habits/stats
# ---------------------------------------------------------------------------


@router.get("/days", response_model=list[DayDescriptor])
async def recent_days(
    on: str | None = Query(default=None, alias="date", description="Last day of the window"),
    n: int | None = Query(default=None, ge=1, le=366, description="Window length"),
    tz: str | None = Query(default=None),
) -> list[DayDescriptor]:
    return get_recent_days(_reference_day(on, tz), n or settings.recent_days)


@router.get("/stats", response_model=DashboardStats)
async def habits_stats(
    registry: HabitRegistry = Depends(get_registry),
    on: str | None = Query(default=None, alias="date"),
    tz: str | None = Query(default=None),
) -> DashboardStats:
    today = _reference_day(on, tz)
    stats = features.dashboard_stats(registry.list(), today, settings.streak_lookback_days)
    return stats.model_copy(update={"unsaved_changes": registry.unsaved_changes})


# ---------------------------------------------------------------------------
# /habits/{habit_id}
# ---------------------------------------------------------------------------


@router.get("/{habit_id}", response_model=HabitView)
async def habit_detail(
    habit_id: str,
    registry: HabitRegistry = Depends(get_registry),
    on: str | None = Query(default=None, alias="date"),
    tz: str | None = Query(default=None),
) -> HabitView:
    habit = registry.get(habit_id)
    if habit is None:
        raise HTTPException(status_code=404, detail=f"Unknown habit: {habit_id}")
    return _view(habit, _reference_day(on, tz))


@router.post("/{habit_id}/toggle", response_model=Habit)
async def habit_toggle(
    habit_id: str,
    registry: HabitRegistry = Depends(get_registry),
    on: str | None = Query(default=None, alias="date", description="Day to toggle (YYYY-MM-DD)"),
    tz: str | None = Query(default=None),
) -> Habit:
    habit = registry.toggle(habit_id, _reference_day(on, tz))
    if habit is None:
        raise HTTPException(status_code=404, detail=f"Unknown habit: {habit_id}")
    return habit
