"""Shared fixtures for the test suite."""

from __future__ import annotations

import itertools
import random
from datetime import date, datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from habitkernel.main import app
from habitkernel.state import get_registry
from habitkernel.tracker.models import Habit, HabitColor
from habitkernel.tracker.registry import HabitRegistry
from habitkernel.tracker.storage import MemoryStorage
from habitkernel.tracker.sync import PersistenceSync

FIXED_NOW = datetime(2024, 3, 3, 9, 30, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Registry wiring (no disk, deterministic ids / colors / clock)
# ---------------------------------------------------------------------------

@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def sync(storage) -> PersistenceSync:
    return PersistenceSync(storage, retries=1)


@pytest.fixture()
def registry(sync) -> HabitRegistry:
    counter = itertools.count(1)
    return HabitRegistry(
        sync,
        rng=random.Random(42),
        clock=lambda: FIXED_NOW,
        id_factory=lambda: f"habit-{next(counter)}",
    )


@pytest.fixture()
def override_registry(registry):
    """Override the FastAPI dependency so the app uses the in-memory registry."""
    app.dependency_overrides[get_registry] = lambda: registry
    yield registry
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_registry):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_habit(
    completions: dict[date, bool] | None = None,
    habit_id: str = "h1",
    name: str = "Drink water",
) -> Habit:
    """Helper to build a habit snapshot with the given ledger."""
    return Habit(
        id=habit_id,
        name=name,
        color_tag=HabitColor.blue,
        created_at=FIXED_NOW,
        completions=completions or {},
    )
