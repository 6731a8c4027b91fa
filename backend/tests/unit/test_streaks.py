"""
Unit tests for daily and weekly streak detection.
"""
from datetime import date

from liftstats.services.analytics.temporal import detect_streak, detect_weekly_streak


def _state(result):
    return result.current_streak, result.longest_streak


class TestDailyStreak:
    """Tests for detect_streak."""

    def test_run_ending_today(self, today, days_ago):
        dates = [today, days_ago(1), days_ago(2)]

        assert _state(detect_streak(dates, today=today)) == (3, 3)

    def test_older_run_does_not_extend_current(self, today, days_ago):
        dates = [today, days_ago(1), days_ago(2), days_ago(5)]

        assert _state(detect_streak(dates, today=today)) == (3, 3)

    def test_run_ended_before_today(self, today, days_ago):
        dates = [days_ago(n) for n in range(3, 8)]

        assert _state(detect_streak(dates, today=today)) == (0, 5)

    def test_rest_days_tolerated(self, today, days_ago):
        dates = [today, days_ago(2), days_ago(3)]

        result = detect_streak(dates, allow_rest_days=True, max_rest_days_per_week=1, today=today)

        assert result.current_streak == 3

    def test_rest_days_not_allowed(self, today, days_ago):
        dates = [today, days_ago(2), days_ago(3)]

        assert _state(detect_streak(dates, today=today)) == (1, 2)

    def test_allowance_ignored_unless_enabled(self, today, days_ago):
        dates = [today, days_ago(2), days_ago(3)]

        result = detect_streak(dates, allow_rest_days=False, max_rest_days_per_week=2, today=today)

        assert result.current_streak == 1

    def test_same_day_counted_once(self, today, days_ago):
        dates = [today, today, "2026-03-18T19:30:00", days_ago(1)]

        assert _state(detect_streak(dates, today=today)) == (2, 2)

    def test_no_dates(self, today):
        assert _state(detect_streak([], today=today)) == (0, 0)

    def test_lookback_limits_scan(self, today, days_ago):
        dates = [days_ago(n) for n in range(10)]

        assert _state(detect_streak(dates, today=today, lookback_days=4)) == (4, 4)


class TestWeeklyStreak:
    """Tests for detect_weekly_streak."""

    def test_consecutive_weeks(self, today):
        dates = [date(2026, 3, 17), date(2026, 3, 10), date(2026, 3, 3)]

        assert detect_weekly_streak(dates, today=today).current_streak == 3

    def test_current_week_without_training(self, today):
        dates = [date(2026, 3, 10), date(2026, 3, 3)]

        assert _state(detect_weekly_streak(dates, today=today)) == (0, 2)

    def test_sunday_counts_for_its_week(self, today):
        """2026-03-15 is a Sunday, so it belongs to 2026-W11."""
        dates = [date(2026, 3, 16), date(2026, 3, 15)]

        assert detect_weekly_streak(dates, today=today).current_streak == 2
