"""
Stats Calculator - Main engine for computing training statistics.

Orchestrates:
- Document normalization from the Record Store
- Strategy selection based on goal type
- Exercise, volume, distribution, streak, overload and adherence views
"""
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from liftstats.core.config import settings
from liftstats.core.dates import to_day
from liftstats.core.logging import get_logger, track_computation
from liftstats.models.goal import GoalDefinition, GoalType
from liftstats.models.record import SessionRecord
from liftstats.models.schedule import WeekSchedule
from liftstats.models.stats import (
    BalanceEntry,
    BalanceStatus,
    ExerciseProgress,
    GoalProgress,
    OverallAdherence,
    OverloadSummary,
    PeriodBucket,
    PeriodType,
    StreakState,
    WeekVolume,
)
from liftstats.services.analytics.adapter import get_adapter
from liftstats.services.analytics.adherence import adherence_history, overall_adherence
from liftstats.services.analytics.cache import OneRepMaxCache
from liftstats.services.analytics.distribution import (
    DEFAULT_BALANCE_TOLERANCE,
    Categorizer,
    category_percentages,
    primary_muscle_group,
    score_distribution_balance,
    volume_by_category,
)
from liftstats.services.analytics.overload import (
    progressive_overload_summary,
    weekly_volume_progression,
)
from liftstats.services.analytics.strategies import (
    FrequencyGoalStrategy,
    GoalProgressStrategy,
    StreakGoalStrategy,
    StrengthGoalStrategy,
    VolumeGoalStrategy,
)
from liftstats.services.analytics.strength import (
    build_exercise_history,
    classify_trend,
    entry_one_rep_max,
    find_personal_record,
    session_volume,
)
from liftstats.services.analytics.temporal import (
    detect_streak,
    detect_weekly_streak,
    filter_by_period,
    group_by_period,
)

logger = get_logger(__name__)


class StatsCalculator:
    """
    Main statistics calculation engine.

    Every method is a fresh computation over the sessions passed in; the
    calculator keeps no record state between calls (the optional 1RM cache
    only memoizes the pure formula).

    Usage:
        calculator = StatsCalculator(categorizer=lookup_categorizer(catalog))
        sessions = calculator.normalize(documents, source="firestore")
        progress = calculator.goal_progress(goal_document, sessions)
    """

    def __init__(
        self,
        categorizer: Optional[Categorizer] = None,
        cache: Optional[OneRepMaxCache] = None,
    ):
        self.categorizer = categorizer or primary_muscle_group

        if cache is None and settings.cache_enabled():
            cache = OneRepMaxCache(max_size=settings.ONE_RM_CACHE_SIZE)
        self.cache = cache

        # Initialize strategies
        self._strategies: Dict[GoalType, GoalProgressStrategy] = {
            strategy.goal_type: strategy
            for strategy in (
                StrengthGoalStrategy(self.categorizer, self.cache),
                VolumeGoalStrategy(self.categorizer, self.cache),
                FrequencyGoalStrategy(self.categorizer, self.cache),
                StreakGoalStrategy(self.categorizer, self.cache),
            )
        }

    def normalize(
        self,
        documents: Iterable[Dict[str, Any]],
        source: str = "firestore",
        completed_only: bool = True,
    ) -> List[SessionRecord]:
        """
        Normalize raw Record Store documents.

        Args:
            documents: Raw workout documents
            source: Data source name (firestore, manual)
            completed_only: Drop sessions that are not completed

        Returns:
            Sessions sorted oldest first
        """
        adapter = get_adapter(source)
        with track_computation(logger, "normalize", source=adapter.source_name) as call:
            sessions = adapter.normalize_many(documents, completed_only=completed_only)
            call.add_context(sessions=len(sessions))
        return sessions

    # ========================================
    # Exercises
    # ========================================

    def exercise_progress(
        self,
        sessions: Sequence[SessionRecord],
        exercise_name: str,
    ) -> ExerciseProgress:
        """Latest 1RM, personal record, last date and trend of one exercise."""
        with track_computation(logger, "exercise_progress", sessions=len(sessions)) as call:
            progress = self._exercise_progress(sessions, exercise_name)
            call.add_context(entries=progress.session_count, trend=progress.trend.direction.value)
        return progress

    def exercise_progress_table(self, sessions: Sequence[SessionRecord]) -> List[ExerciseProgress]:
        """
        Progress of every exercise performed, most recently performed first.
        """
        with track_computation(logger, "exercise_progress_table", sessions=len(sessions)) as call:
            names = []
            for session in sessions:
                for exercise in session.exercises:
                    if exercise.name and exercise.name not in names:
                        names.append(exercise.name)

            table = [self._exercise_progress(sessions, name) for name in names]
            table.sort(key=lambda row: row.exercise_name)
            table.sort(key=lambda row: row.last_performed or date.min, reverse=True)
            call.add_context(exercises=len(table))
        return table

    def _exercise_progress(
        self,
        sessions: Sequence[SessionRecord],
        exercise_name: str,
    ) -> ExerciseProgress:
        history = build_exercise_history(sessions, exercise_name)
        record = find_personal_record(history, self.cache)

        return ExerciseProgress(
            exercise_name=exercise_name,
            session_count=len(history),
            last_performed=history[-1].date if history else None,
            latest_one_rep_max=entry_one_rep_max(history[-1], self.cache) if history else None,
            personal_record=record,
            personal_record_one_rep_max=entry_one_rep_max(record, self.cache) if record else None,
            trend=classify_trend(history, self.cache),
        )

    # ========================================
    # Goals
    # ========================================

    def goal_progress(
        self,
        goal: Union[GoalDefinition, Mapping[str, Any]],
        sessions: Sequence[SessionRecord],
        today: Any = None,
    ) -> GoalProgress:
        """
        Compute progress of a goal.

        Args:
            goal: GoalDefinition or raw goal document
            sessions: Completed sessions
            today: Reference day (default: today)

        Returns:
            GoalProgress

        Raises:
            pydantic.ValidationError: If a raw goal document is invalid
            ValueError: If no strategy handles the goal type
        """
        if not isinstance(goal, GoalDefinition):
            goal = GoalDefinition.model_validate(goal)

        reference = to_day(today) if today is not None else date.today()
        strategy = self._get_strategy(goal.type)

        with track_computation(
            logger,
            "goal_progress",
            goal_id=goal.id,
            goal_type=goal.type.value,
            sessions=len(sessions),
        ) as call:
            progress = strategy.compute(goal, sessions, reference)
            call.add_context(
                status=progress.status.value,
                progress=round(progress.progress_percent, 1),
            )
        return progress

    def _get_strategy(self, goal_type: GoalType) -> GoalProgressStrategy:
        """Get strategy for goal type."""
        strategy = self._strategies.get(goal_type)

        if not strategy:
            raise ValueError(f"Unsupported goal type: {goal_type}")

        return strategy

    # ========================================
    # Volume and distribution
    # ========================================

    def volume_by_period(
        self,
        sessions: Sequence[SessionRecord],
        period_type: Union[str, PeriodType] = PeriodType.WEEK,
    ) -> List[PeriodBucket]:
        """Session volume per week or month (sparse, oldest first)."""
        with track_computation(
            logger,
            "volume_by_period",
            period=getattr(period_type, "value", period_type),
            sessions=len(sessions),
        ) as call:
            buckets = group_by_period(sessions, period_type, session_volume)
            call.add_context(buckets=len(buckets))
        return buckets

    def muscle_distribution(
        self,
        sessions: Sequence[SessionRecord],
        start: Any = None,
        end: Any = None,
    ) -> Dict[str, float]:
        """
        Share of volume per muscle group in percent.

        Optionally restricted to sessions between ``start`` and ``end``
        (inclusive).
        """
        with track_computation(logger, "muscle_distribution", sessions=len(sessions)) as call:
            selected = self._window(sessions, start, end)
            distribution = category_percentages(volume_by_category(selected, self.categorizer))
            call.add_context(categories=len(distribution))
        return distribution

    def distribution_balance(
        self,
        sessions: Sequence[SessionRecord],
        expected: Mapping[str, float],
        tolerance: float = DEFAULT_BALANCE_TOLERANCE,
        start: Any = None,
        end: Any = None,
    ) -> List[BalanceEntry]:
        """Muscle distribution scored against an expected distribution."""
        actual = self.muscle_distribution(sessions, start, end)
        with track_computation(logger, "distribution_balance", categories=len(expected)) as call:
            balance = score_distribution_balance(actual, expected, tolerance)
            call.add_context(
                unbalanced=sum(1 for entry in balance if entry.status != BalanceStatus.BALANCED)
            )
        return balance

    def _window(self, sessions: Sequence[SessionRecord], start: Any, end: Any) -> List[SessionRecord]:
        if start is None and end is None:
            return list(sessions)
        return filter_by_period(
            sessions,
            start if start is not None else date.min,
            end if end is not None else date.max,
        )

    # ========================================
    # Streaks, overload, adherence
    # ========================================

    def streak(
        self,
        sessions: Sequence[SessionRecord],
        allow_rest_days: bool = False,
        max_rest_days_per_week: int = 0,
        today: Any = None,
    ) -> StreakState:
        """Daily training streak."""
        with track_computation(logger, "streak", sessions=len(sessions)) as call:
            state = detect_streak(
                [session.date for session in sessions],
                allow_rest_days=allow_rest_days,
                max_rest_days_per_week=max_rest_days_per_week,
                today=today,
            )
            call.add_context(current=state.current_streak, longest=state.longest_streak)
        return state

    def weekly_streak(self, sessions: Sequence[SessionRecord], today: Any = None) -> StreakState:
        """Weekly training streak."""
        with track_computation(logger, "weekly_streak", sessions=len(sessions)) as call:
            state = detect_weekly_streak([session.date for session in sessions], today=today)
            call.add_context(current=state.current_streak, longest=state.longest_streak)
        return state

    def overload(
        self,
        sessions: Sequence[SessionRecord],
    ) -> Tuple[List[WeekVolume], Optional[OverloadSummary]]:
        """Weekly volume progression and its summary (None under two weeks)."""
        with track_computation(logger, "overload", sessions=len(sessions)) as call:
            progression = weekly_volume_progression(sessions)
            summary = progressive_overload_summary(progression)
            call.add_context(
                weeks=len(progression),
                status=summary.status.value if summary else None,
            )
        return progression, summary

    def adherence(
        self,
        schedules: Mapping[str, Union[WeekSchedule, Mapping[str, Any]]],
        today: Any = None,
        weeks: Optional[int] = None,
    ) -> OverallAdherence:
        """
        Schedule adherence over the last weeks.

        Args:
            schedules: Week id -> WeekSchedule or raw schedule document
            today: Reference day (default: today)
            weeks: Weeks of history (default: ADHERENCE_WEEKS)
        """
        parsed = {
            week: schedule if isinstance(schedule, WeekSchedule)
            else WeekSchedule.model_validate({"id": week, **schedule})
            for week, schedule in schedules.items()
        }

        with track_computation(logger, "adherence", schedules=len(parsed)) as call:
            summary = overall_adherence(adherence_history(parsed, today, weeks))
            call.add_context(
                percentage=summary.percentage,
                current_streak=summary.current_streak,
                trend=summary.trend.value,
            )
        return summary
