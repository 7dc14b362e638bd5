"""Habit record and read-side models — Pydantic v2."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

from habitkernel.tracker.days import parse_day_key


class HabitColor(str, Enum):
    blue = "bg-blue-500"
    green = "bg-green-500"
    purple = "bg-purple-500"
    orange = "bg-orange-500"
    pink = "bg-pink-500"
    indigo = "bg-indigo-500"
    teal = "bg-teal-500"
    red = "bg-red-500"


HABIT_COLORS: tuple[HabitColor, ...] = tuple(HabitColor)


class Habit(BaseModel):
    """One tracked habit. Snapshots are immutable; mutations copy."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    color_tag: HabitColor
    created_at: datetime
    # Absent day == not completed
    completions: dict[date, StrictBool] = Field(default_factory=dict)

    @field_validator("completions", mode="before")
    @classmethod
    def _parse_day_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {parse_day_key(k) if isinstance(k, str) else k: v for k, v in value.items()}


class HabitCreate(BaseModel):
    name: str
    description: str = ""


class DayDescriptor(BaseModel):
    day: date
    day_name: str  # short weekday label, e.g. "Mon"
    day_number: int


class DayStatus(DayDescriptor):
    completed: bool = False


class HabitView(BaseModel):
    habit: Habit
    streak: int = 0
    completion_rate: int = 0  # 0–100, over recorded days only
    completed_today: bool = False
    recent_days: list[DayStatus] = Field(default_factory=list)


class DashboardStats(BaseModel):
    day: date
    total_habits: int = 0
    completed_today: int = 0
    best_streak: int = 0
    unsaved_changes: bool = False
