"""Tests for pure analytics functions."""

from datetime import date, timedelta

from habitkernel.tracker.features import (
    STREAK_LOOKBACK_DAYS,
    best_streak,
    completed_count,
    dashboard_stats,
    get_completion_rate,
    get_streak,
    recent_statuses,
    round_half_up,
)

from tests.conftest import make_habit


def _run(end: date, length: int) -> dict[date, bool]:
    return {end - timedelta(days=i): True for i in range(length)}


class TestGetStreak:
    def test_no_completions(self):
        assert get_streak(make_habit(), date(2024, 3, 3)) == 0

    def test_breaks_on_reference_day(self):
        habit = make_habit(
            {date(2024, 3, 1): True, date(2024, 3, 2): True, date(2024, 3, 3): False}
        )
        assert get_streak(habit, date(2024, 3, 3)) == 0
        assert get_streak(habit, date(2024, 3, 2)) == 2

    def test_absent_reference_day(self):
        habit = make_habit({date(2024, 3, 2): True})
        assert get_streak(habit, date(2024, 3, 3)) == 0

    def test_seven_day_run(self):
        d = date(2024, 3, 3)
        completions = _run(d, 7)
        completions[d - timedelta(days=7)] = False
        assert get_streak(make_habit(completions), d) == 7

    def test_gap_stops_walk(self):
        d = date(2024, 3, 10)
        completions = {**_run(d, 3), **_run(d - timedelta(days=5), 10)}
        assert get_streak(make_habit(completions), d) == 3

    def test_crosses_year_boundary(self):
        d = date(2024, 1, 2)
        assert get_streak(make_habit(_run(d, 5)), d) == 5

    def test_capped_at_lookback(self):
        d = date(2024, 3, 3)
        habit = make_habit(_run(d, 500))
        assert get_streak(habit, d) == STREAK_LOOKBACK_DAYS == 365

    def test_custom_lookback(self):
        d = date(2024, 3, 3)
        assert get_streak(make_habit(_run(d, 30)), d, lookback=10) == 10

    def test_future_days_ignored(self):
        d = date(2024, 3, 3)
        habit = make_habit({d + timedelta(days=1): True, d: True})
        assert get_streak(habit, d) == 1

    def test_earliest_representable_day(self):
        assert get_streak(make_habit({date.min: True}), date.min) == 1


class TestGetCompletionRate:
    def test_empty(self):
        assert get_completion_rate(make_habit()) == 0

    def test_all_false(self):
        assert get_completion_rate(make_habit({date(2024, 1, 1): False})) == 0

    def test_all_true(self):
        assert get_completion_rate(make_habit(_run(date(2024, 1, 9), 9))) == 100

    def test_rounds_to_nearest(self):
        completions = {date(2024, 1, 1): True, date(2024, 1, 2): False, date(2024, 1, 3): False}
        assert get_completion_rate(make_habit(completions)) == 33

    def test_half_rounds_up(self):
        # 1 of 8 = 12.5%
        completions = {date(2024, 1, i): i == 1 for i in range(1, 9)}
        assert get_completion_rate(make_habit(completions)) == 13

    def test_only_recorded_days_count(self):
        completions = {date(2024, 1, 1): True, date(2024, 6, 1): True}
        assert get_completion_rate(make_habit(completions)) == 100


class TestRoundHalfUp:
    def test_values(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(66.66) == 67
        assert round_half_up(0.0) == 0


class TestDashboard:
    def test_completed_count(self):
        d = date(2024, 3, 3)
        habits = [make_habit({d: True}, "a"), make_habit({d: False}, "b"), make_habit(None, "c")]
        assert completed_count(habits, d) == 1

    def test_best_streak(self):
        d = date(2024, 3, 3)
        habits = [make_habit(_run(d, 2), "a"), make_habit(_run(d, 5), "b")]
        assert best_streak(habits, d) == 5

    def test_best_streak_no_habits(self):
        assert best_streak([], date(2024, 3, 3)) == 0

    def test_stats(self):
        d = date(2024, 3, 3)
        habits = [make_habit(_run(d, 4), "a"), make_habit(None, "b")]
        stats = dashboard_stats(habits, d)
        assert stats.day == d
        assert stats.total_habits == 2
        assert stats.completed_today == 1
        assert stats.best_streak == 4
        assert stats.unsaved_changes is False

    def test_recent_statuses(self):
        d = date(2024, 3, 3)
        statuses = recent_statuses(make_habit({d: True, d - timedelta(days=1): False}), d, 3)
        assert [s.day for s in statuses] == [d - timedelta(days=2), d - timedelta(days=1), d]
        assert [s.completed for s in statuses] == [False, False, True]
