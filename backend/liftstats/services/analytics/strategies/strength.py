"""
Strength Strategy - estimated-1RM goals for a single exercise.

Current value is the best 1RM ever estimated for the exercise (the
personal record), not the latest session.
"""
from datetime import date
from typing import Sequence

from liftstats.core.logging import get_logger
from liftstats.models.goal import GoalDefinition, GoalType
from liftstats.models.record import ProgressPoint, SessionRecord
from liftstats.models.stats import GoalProgress
from liftstats.services.analytics.projection import (
    classify_goal_status,
    days_remaining,
    expected_progress_percent,
    predict_completion_date,
    progress_percent,
)
from liftstats.services.analytics.strategies.base import GoalProgressStrategy
from liftstats.services.analytics.strength import build_exercise_history, entry_one_rep_max

logger = get_logger(__name__)


class StrengthGoalStrategy(GoalProgressStrategy):
    """Strategy for strength (target 1RM) goals."""

    goal_type = GoalType.STRENGTH

    def compute(
        self,
        goal: GoalDefinition,
        sessions: Sequence[SessionRecord],
        today: date,
    ) -> GoalProgress:
        history = build_exercise_history(sessions, goal.exercise_name)
        points = [
            ProgressPoint(date=entry.date, value=entry_one_rep_max(entry, self.cache) or 0.0)
            for entry in history
        ]

        if points:
            current = max(point.value for point in points)
            progress = progress_percent(current, goal.target_value)
            predicted = predict_completion_date(points, goal.target_value, today)
        else:
            # No session yet: report the baseline the goal was created with
            current = goal.current_value
            progress = 0.0
            predicted = None

        expected = expected_progress_percent(goal.start_date, goal.deadline, today)
        days_left = days_remaining(goal.deadline, today)

        logger.debug(
            "Computed strength goal",
            goal_id=goal.id,
            sessions=len(points),
            progress=round(progress, 1),
        )

        return GoalProgress(
            current_value=current,
            target_value=goal.target_value,
            progress_percent=progress,
            expected_progress_percent=expected,
            status=classify_goal_status(progress, expected, days_left),
            days_remaining=days_left,
            predicted_completion=predicted,
            **self._milestones(goal, progress),
        )
