"""
Unit tests for the goal progress strategies.

Tests cover:
- Strength goals (1RM personal record, deadline status, forecast)
- Volume goals (total, exercise, muscle group)
- Frequency goals
- Streak goals (daily, weekly)
- Milestones reached since the last recorded ones
"""
from datetime import date

import pytest

from liftstats.models.goal import GoalDefinition
from liftstats.models.stats import GoalStatus
from liftstats.services.analytics.distribution import lookup_categorizer
from liftstats.services.analytics.strategies import (
    FrequencyGoalStrategy,
    StreakGoalStrategy,
    StrengthGoalStrategy,
    VolumeGoalStrategy,
)
from tests.conftest import build_exercise, build_session


def _goal(**document):
    return GoalDefinition.model_validate(document)


@pytest.fixture
def current_week_sessions():
    """Two sessions this week (2026-W12) and one the week before."""
    return [
        build_session(
            date(2026, 3, 10),
            build_exercise("Bench Press", [(100, 10)], "chest"),
            total_volume=4000,
        ),
        build_session(
            date(2026, 3, 16),
            build_exercise("Bench Press", [(80, 5)], "chest"),
            build_exercise("Squat", [(120, 5)], "legs"),
            total_volume=1000,
        ),
        build_session(
            date(2026, 3, 17),
            build_exercise("Squat", [(100, 5)], "legs"),
            total_volume=500,
        ),
    ]


class TestStrengthGoalStrategy:
    """Tests for StrengthGoalStrategy."""

    def test_progress_toward_target(self, bench_sessions, today):
        goal = _goal(
            type="strength",
            exerciseName="Bench Press",
            targetWeight=120,
            startDate="2026-03-01",
            deadline="2026-05-01",
        )

        progress = StrengthGoalStrategy().compute(goal, bench_sessions, today)

        assert progress.current_value == 110
        assert progress.progress_percent == pytest.approx(110 / 120 * 100)
        assert progress.expected_progress_percent == pytest.approx(17 / 61 * 100)
        assert progress.days_remaining == 44
        assert progress.predicted_completion == date(2026, 3, 29)
        assert progress.status == GoalStatus.AHEAD

    def test_personal_record_not_latest(self, bench_sessions, today):
        sessions = bench_sessions + [
            build_session(date(2026, 3, 17), build_exercise("Bench Press", [(90, 1)]))
        ]
        goal = _goal(type="strength", exerciseName="Bench Press", targetWeight=120)

        assert StrengthGoalStrategy().compute(goal, sessions, today).current_value == 110

    def test_no_sessions_reports_baseline(self, today):
        goal = _goal(type="strength", exerciseName="Bench Press", targetWeight=120, currentWeight=95)

        progress = StrengthGoalStrategy().compute(goal, [], today)

        assert progress.current_value == 95
        assert progress.progress_percent == 0.0
        assert progress.predicted_completion is None
        assert progress.days_remaining is None

    def test_at_risk_near_deadline(self, bench_sessions, today):
        goal = _goal(
            type="strength",
            exerciseName="Bench Press",
            targetWeight=160,
            startDate="2026-03-01",
            deadline="2026-03-25",
        )

        progress = StrengthGoalStrategy().compute(goal, bench_sessions, today)

        assert progress.days_remaining == 7
        assert progress.status == GoalStatus.AT_RISK

    def test_completed(self, bench_sessions, today):
        goal = _goal(type="strength", exerciseName="Bench Press", targetWeight=100)

        progress = StrengthGoalStrategy().compute(goal, bench_sessions, today)

        assert progress.progress_percent == 100.0
        assert progress.status == GoalStatus.COMPLETED


class TestVolumeGoalStrategy:
    """Tests for VolumeGoalStrategy."""

    def test_total_weekly_volume(self, current_week_sessions, today):
        goal = _goal(type="volume", target=3000)

        progress = VolumeGoalStrategy().compute(goal, current_week_sessions, today)

        assert progress.current_value == 1500
        assert progress.progress_percent == pytest.approx(50.0)
        assert progress.expected_progress_percent == pytest.approx(3 / 7 * 100)
        assert progress.days_remaining == 5
        assert progress.status == GoalStatus.AHEAD

    def test_exercise_volume(self, current_week_sessions, today):
        goal = _goal(type="volume", volumeType="exercise", exerciseName="Squat", target=3000)

        progress = VolumeGoalStrategy().compute(goal, current_week_sessions, today)

        assert progress.current_value == 1100

    def test_muscle_group_volume_uses_categorizer(self, current_week_sessions, today):
        goal = _goal(type="volume", volumeType="muscle-group", muscleGroup="triceps", target=1000)
        strategy = VolumeGoalStrategy(lookup_categorizer({"Bench Press": ["chest", "triceps"]}))

        progress = strategy.compute(goal, current_week_sessions, today)

        assert progress.current_value == 400

    def test_monthly_period(self, current_week_sessions, today):
        goal = _goal(type="volume", target=5500, period="month")

        progress = VolumeGoalStrategy().compute(goal, current_week_sessions, today)

        assert progress.current_value == 5500
        assert progress.status == GoalStatus.COMPLETED
        assert progress.days_remaining == 14


class TestFrequencyGoalStrategy:
    """Tests for FrequencyGoalStrategy."""

    def test_sessions_this_week(self, current_week_sessions, today):
        goal = _goal(type="frequency", targetCount=4)

        progress = FrequencyGoalStrategy().compute(goal, current_week_sessions, today)

        assert progress.current_value == 2
        assert progress.progress_percent == pytest.approx(50.0)
        assert progress.status == GoalStatus.AHEAD

    def test_muscle_group_sessions(self, current_week_sessions, today):
        goal = _goal(type="frequency", frequencyType="muscle_group", muscleGroup="chest", targetCount=3)

        progress = FrequencyGoalStrategy().compute(goal, current_week_sessions, today)

        assert progress.current_value == 1
        assert progress.progress_percent == pytest.approx(100 / 3)
        assert progress.status == GoalStatus.ON_TRACK

    def test_behind(self, today):
        goal = _goal(type="frequency", targetCount=5)

        progress = FrequencyGoalStrategy().compute(goal, [], today)

        assert progress.current_value == 0
        assert progress.status == GoalStatus.BEHIND


class TestStreakGoalStrategy:
    """Tests for StreakGoalStrategy."""

    def test_daily_streak(self, today, days_ago):
        sessions = [build_session(days_ago(n)) for n in (0, 1, 2, 6, 7, 8, 9)]
        goal = _goal(type="streak", targetDays=5)

        progress = StreakGoalStrategy().compute(goal, sessions, today)

        assert progress.current_value == 3
        assert progress.longest_streak == 4
        assert progress.progress_percent == pytest.approx(60.0)
        assert progress.days_remaining == 2
        assert progress.status == GoalStatus.ON_TRACK

    def test_rest_days_allowed(self, today, days_ago):
        sessions = [build_session(days_ago(n)) for n in (0, 2, 3)]
        goal = _goal(type="streak", targetDays=3, allowRestDays=True, maxRestDaysPerWeek=1)

        progress = StreakGoalStrategy().compute(goal, sessions, today)

        assert progress.current_value == 3
        assert progress.status == GoalStatus.COMPLETED
        assert progress.days_remaining == 0

    def test_weekly_streak(self, today):
        sessions = [build_session(date(2026, 3, day)) for day in (3, 10, 17)]
        goal = _goal(type="streak", streakType="weekly", targetWeeks=4)

        progress = StreakGoalStrategy().compute(goal, sessions, today)

        assert progress.current_value == 3
        assert progress.days_remaining == 1


class TestGoalMilestones:
    """Tests for milestone fields on goal progress."""

    def test_new_milestones_skip_recorded_ones(self, bench_sessions, today):
        goal = _goal(
            type="strength",
            exerciseName="Bench Press",
            targetWeight=120,
            milestonesReached=[25, 50, 75],
        )

        progress = StrengthGoalStrategy().compute(goal, bench_sessions, today)

        assert progress.new_milestones == (90,)
        assert progress.next_milestone == 100

    def test_period_goal_milestones(self, current_week_sessions, today):
        goal = _goal(type="volume", target=3000)

        progress = VolumeGoalStrategy().compute(goal, current_week_sessions, today)

        assert progress.new_milestones == (25, 50)
        assert progress.next_milestone == 75

    def test_completed_streak_has_no_next_milestone(self, today, days_ago):
        sessions = [build_session(days_ago(n)) for n in range(3)]
        goal = _goal(type="streak", targetDays=3, reachedMilestones=[25, 50, 75, 90])

        progress = StreakGoalStrategy().compute(goal, sessions, today)

        assert progress.new_milestones == (100,)
        assert progress.next_milestone is None

    def test_no_progress_yet(self, today):
        goal = _goal(type="frequency", targetCount=3)

        progress = FrequencyGoalStrategy().compute(goal, [], today)

        assert progress.new_milestones == ()
        assert progress.next_milestone == 25
