"""
Frequency Strategy - number of sessions in the current week or month.
"""
from datetime import date
from typing import Sequence

from liftstats.models.goal import FrequencyType, GoalDefinition, GoalType
from liftstats.models.record import SessionRecord
from liftstats.models.stats import GoalProgress
from liftstats.services.analytics.projection import classify_period_status, progress_percent
from liftstats.services.analytics.strategies.base import GoalProgressStrategy


class FrequencyGoalStrategy(GoalProgressStrategy):
    """
    Strategy for frequency goals.

    Muscle-group frequency goals only count sessions with at least one
    exercise training that group.
    """

    goal_type = GoalType.FREQUENCY

    def compute(
        self,
        goal: GoalDefinition,
        sessions: Sequence[SessionRecord],
        today: date,
    ) -> GoalProgress:
        start, end = self._period_window(goal, today)
        period_sessions = self._sessions_in_window(sessions, start, end)

        if goal.frequency_type == FrequencyType.MUSCLE_GROUP:
            period_sessions = [
                session for session in period_sessions
                if any(self._trains_muscle_group(e, goal.muscle_group) for e in session.exercises)
            ]

        current = len(period_sessions)
        progress = progress_percent(current, goal.target_value)
        expected, days_left = self._period_expectation(start, end, today)

        return GoalProgress(
            current_value=current,
            target_value=goal.target_value,
            progress_percent=progress,
            expected_progress_percent=expected,
            status=classify_period_status(progress, expected),
            days_remaining=days_left,
            **self._milestones(goal, progress),
        )
