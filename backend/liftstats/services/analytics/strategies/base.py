"""
Base Strategy - Abstract interface for goal-type-specific progress calculation.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from liftstats.models.goal import GoalDefinition, GoalType
from liftstats.models.record import ExerciseEntry, SessionRecord
from liftstats.models.stats import GoalProgress
from liftstats.services.analytics.cache import OneRepMaxCache
from liftstats.services.analytics.distribution import Categorizer, primary_muscle_group
from liftstats.services.analytics.projection import detect_milestones, next_milestone
from liftstats.services.analytics.temporal import days_between, filter_by_period, period_boundaries


class GoalProgressStrategy(ABC):
    """
    Abstract base class for goal progress calculation.

    Subclasses turn a goal and the user's completed sessions into a
    GoalProgress at a reference day.
    """

    goal_type: GoalType

    def __init__(
        self,
        categorizer: Categorizer = primary_muscle_group,
        cache: Optional[OneRepMaxCache] = None,
    ):
        self.categorizer = categorizer
        self.cache = cache

    @abstractmethod
    def compute(
        self,
        goal: GoalDefinition,
        sessions: Sequence[SessionRecord],
        today: date,
    ) -> GoalProgress:
        """
        Compute goal progress.

        Args:
            goal: Validated goal definition
            sessions: Completed sessions (any order)
            today: Reference day

        Returns:
            GoalProgress
        """
        pass

    # ========================================
    # Shared Helper Methods
    # ========================================

    def _trains_muscle_group(self, exercise: ExerciseEntry, muscle_group: Optional[str]) -> bool:
        """Whether the categorizer assigns the exercise to the muscle group."""
        if not muscle_group:
            return False
        return muscle_group in set(self.categorizer(exercise))

    def _period_window(self, goal: GoalDefinition, today: date) -> Tuple[date, date]:
        """Current week or month of a recurring goal."""
        return period_boundaries(goal.period, today)

    def _sessions_in_window(
        self,
        sessions: Sequence[SessionRecord],
        start: date,
        end: date,
    ) -> List[SessionRecord]:
        return filter_by_period(sessions, start, end)

    def _milestones(self, goal: GoalDefinition, progress: float) -> Dict[str, Any]:
        """Milestone fields of GoalProgress, skipping thresholds the goal already recorded."""
        return {
            "new_milestones": tuple(detect_milestones(progress, goal.reached_milestones)),
            "next_milestone": next_milestone(progress, goal.reached_milestones),
        }

    def _period_expectation(self, start: date, end: date, today: date) -> Tuple[float, int]:
        """
        Expected progress and days left of a period window.

        Both count today as a training day: on the first day of a week
        1/7 of the target is expected and 7 days remain.
        """
        total_days = days_between(start, end) + 1
        days_passed = days_between(start, today) + 1
        expected = max(0.0, min(days_passed / total_days * 100, 100.0))
        return expected, days_between(today, end) + 1
