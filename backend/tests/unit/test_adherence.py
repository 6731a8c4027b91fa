"""
Unit tests for services/analytics/adherence.py

Tests cover:
- Day status and past-day detection
- Per-week adherence and history windows
- Streaks, consistency, trend and overall summary
"""
from datetime import date

import pytest

from liftstats.models.schedule import DaySchedule, WeekSchedule
from liftstats.models.stats import AdherenceTrend, DayStatus
from liftstats.services.analytics.adherence import (
    adherence_history,
    adherence_streaks,
    adherence_trend,
    best_week,
    consistency_score,
    day_status,
    is_day_in_past,
    overall_adherence,
    week_adherence,
)
from liftstats.services.analytics.temporal import next_week_id


def _schedule(week, planned, completed):
    """Week with ``planned`` templated days, the first ``completed`` of them done."""
    names = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
    days = {name: DaySchedule() for name in names}
    for index in range(planned):
        days[names[index]] = DaySchedule(template_id=f"t{index}", completed=index < completed)
    return WeekSchedule(week_id=week, days=days)


def _history(*counts, first_week="2026-W01"):
    """Week adherence list from (planned, completed) pairs, consecutive weeks."""
    history = []
    week = first_week
    for planned, completed in counts:
        history.append(week_adherence(_schedule(week, planned, completed)))
        week = next_week_id(week)
    return history


class TestDayStatus:
    """Tests for day_status and is_day_in_past."""

    def test_completed_wins(self):
        assert day_status(DaySchedule(completed=True), is_past=True) == DayStatus.COMPLETED

    def test_rest_day(self):
        assert day_status(DaySchedule(), is_past=True) == DayStatus.REST

    def test_planned_day(self):
        day = DaySchedule(template_id="push")

        assert day_status(day, is_past=True) == DayStatus.MISSED
        assert day_status(day, is_past=False) == DayStatus.PLANNED

    def test_is_day_in_past(self, today):
        assert is_day_in_past("monday", "2026-W12", today)
        assert not is_day_in_past("wednesday", "2026-W12", today)
        assert not is_day_in_past("friday", "2026-W12", today)
        assert is_day_in_past("sunday", "2026-W11", today)

    def test_unknown_day_rejected(self, today):
        with pytest.raises(ValueError):
            is_day_in_past("someday", "2026-W12", today)


class TestWeekAdherence:
    """Tests for week_adherence."""

    def test_partial_week(self):
        week = week_adherence(_schedule("2026-W12", planned=3, completed=2))

        assert week.week_start == date(2026, 3, 16)
        assert (week.planned, week.completed, week.missed) == (3, 2, 1)
        assert week.percentage == 67
        assert not week.is_perfect

    def test_perfect_week(self):
        week = week_adherence(_schedule("2026-W12", planned=2, completed=2))

        assert week.percentage == 100
        assert week.is_perfect

    def test_nothing_planned(self):
        week = week_adherence(WeekSchedule.empty("2026-W12"))

        assert week.percentage == 0
        assert not week.is_perfect


class TestAdherenceHistory:
    """Tests for adherence_history."""

    def test_window_oldest_first_with_missing_weeks_empty(self, today):
        schedules = {"2026-W12": _schedule("2026-W12", 3, 2), "2026-W10": _schedule("2026-W10", 2, 2)}

        history = adherence_history(schedules, today=today, weeks=4)

        assert [week.week_id for week in history] == ["2026-W09", "2026-W10", "2026-W11", "2026-W12"]
        assert [week.planned for week in history] == [0, 2, 0, 3]


class TestAdherenceSummaries:
    """Tests for streaks, consistency, trend and best week."""

    def test_streaks(self):
        history = _history((2, 2), (2, 2), (3, 1), (2, 2))

        assert adherence_streaks(history) == (1, 2)

    def test_empty_week_breaks_streak(self):
        history = _history((2, 2), (0, 0))

        assert adherence_streaks(history) == (0, 1)

    def test_consistency_score(self):
        assert consistency_score(_history((2, 2), (4, 4))) == 100
        assert consistency_score(_history((2, 2), (2, 1))) == 50
        assert consistency_score(_history((0, 0))) == 0

    def test_consistency_ignores_unplanned_weeks(self):
        assert consistency_score(_history((2, 2), (0, 0), (3, 3))) == 100

    def test_trend_improving(self):
        history = _history(*([(2, 1)] * 4 + [(2, 2)] * 4))

        assert adherence_trend(history) == AdherenceTrend.IMPROVING

    def test_trend_declining(self):
        history = _history(*([(2, 2)] * 4 + [(2, 1)] * 4))

        assert adherence_trend(history) == AdherenceTrend.DECLINING

    def test_trend_needs_previous_window(self):
        assert adherence_trend(_history(*[(2, 2)] * 4)) == AdherenceTrend.STABLE
        assert adherence_trend(_history((2, 2))) == AdherenceTrend.STABLE

    def test_best_week(self):
        history = _history((0, 0), (2, 1), (3, 3), (2, 2))

        assert best_week(history).week_id == "2026-W03"
        assert best_week(_history((0, 0))) is None


class TestOverallAdherence:
    """Tests for overall_adherence."""

    def test_summary(self):
        history = _history((2, 2), (3, 2), first_week="2026-W11")

        summary = overall_adherence(history)

        assert (summary.total_planned, summary.total_completed, summary.total_missed) == (5, 4, 1)
        assert summary.percentage == 80
        assert summary.weeks_tracked == 2
        assert (summary.current_streak, summary.longest_streak) == (0, 1)
        assert summary.average_workouts_per_week == 2.0
        assert summary.best_week.week_id == "2026-W11"
        assert summary.trend == AdherenceTrend.STABLE
        assert len(summary.weeks) == 2

    def test_empty_history(self):
        summary = overall_adherence([])

        assert summary.percentage == 0
        assert summary.average_workouts_per_week == 0.0
        assert summary.best_week is None
