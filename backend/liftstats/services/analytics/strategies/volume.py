"""
Volume Strategy - training volume goals over the current week or month.

Volume can be counted for the whole session (total), for a single
exercise, or for the exercises the categorizer assigns to a muscle group.
"""
from datetime import date
from typing import Sequence

from liftstats.models.goal import GoalDefinition, GoalType, VolumeType
from liftstats.models.record import SessionRecord
from liftstats.models.stats import GoalProgress
from liftstats.services.analytics.projection import classify_period_status, progress_percent
from liftstats.services.analytics.strategies.base import GoalProgressStrategy
from liftstats.services.analytics.strength import exercise_volume, find_exercise, session_volume


class VolumeGoalStrategy(GoalProgressStrategy):
    """Strategy for volume goals."""

    goal_type = GoalType.VOLUME

    def compute(
        self,
        goal: GoalDefinition,
        sessions: Sequence[SessionRecord],
        today: date,
    ) -> GoalProgress:
        start, end = self._period_window(goal, today)
        period_sessions = self._sessions_in_window(sessions, start, end)

        current = sum(self._session_contribution(goal, session) for session in period_sessions)
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

    def _session_contribution(self, goal: GoalDefinition, session: SessionRecord) -> float:
        if goal.volume_type == VolumeType.TOTAL:
            return session_volume(session)

        if goal.volume_type == VolumeType.EXERCISE:
            exercise = find_exercise(session, goal.exercise_name)
            return exercise_volume(exercise) if exercise else 0.0

        return sum(
            exercise_volume(exercise)
            for exercise in session.exercises
            if self._trains_muscle_group(exercise, goal.muscle_group)
        )
