"""
Streak Strategy - consecutive training days or weeks against a target length.
"""
import math
from datetime import date
from typing import Sequence

from liftstats.models.goal import GoalDefinition, GoalType, StreakType
from liftstats.models.record import SessionRecord
from liftstats.models.stats import GoalProgress, GoalStatus
from liftstats.services.analytics.projection import progress_percent
from liftstats.services.analytics.strategies.base import GoalProgressStrategy
from liftstats.services.analytics.temporal import detect_streak, detect_weekly_streak


class StreakGoalStrategy(GoalProgressStrategy):
    """
    Strategy for streak goals.

    Streak goals have no time expectation: status is completed once the
    current streak reaches the target and on track otherwise, and
    ``days_remaining`` is the number of streak units (days or weeks) still
    needed.
    """

    goal_type = GoalType.STREAK

    def compute(
        self,
        goal: GoalDefinition,
        sessions: Sequence[SessionRecord],
        today: date,
    ) -> GoalProgress:
        dates = [session.date for session in sessions]

        if goal.streak_type == StreakType.DAILY:
            streak = detect_streak(
                dates,
                allow_rest_days=goal.allow_rest_days,
                max_rest_days_per_week=goal.max_rest_days_per_week,
                today=today,
            )
        else:
            streak = detect_weekly_streak(dates, today=today)

        progress = progress_percent(streak.current_streak, goal.target_value)
        status = GoalStatus.COMPLETED if progress >= 100 else GoalStatus.ON_TRACK

        return GoalProgress(
            current_value=streak.current_streak,
            target_value=goal.target_value,
            progress_percent=progress,
            expected_progress_percent=0.0,
            status=status,
            days_remaining=max(0, math.ceil(goal.target_value) - streak.current_streak),
            longest_streak=streak.longest_streak,
            **self._milestones(goal, progress),
        )
