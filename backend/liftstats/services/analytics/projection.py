"""
Progress Projection - goal progress, status classification and completion forecasts.
"""
import math
from datetime import date, timedelta
from typing import Any, Iterable, List, Optional, Sequence

from liftstats.core.dates import to_day
from liftstats.models.record import ProgressPoint
from liftstats.models.stats import GoalStatus, Pace, Point
from liftstats.services.analytics.regression import linear_regression
from liftstats.services.analytics.temporal import days_between

AT_RISK_DAYS = 14
AT_RISK_PROGRESS = 80
STATUS_BAND = 10
# Period goals (volume / frequency) count as ahead sooner
PERIOD_AHEAD_BAND = 5
PERIOD_BEHIND_BAND = 10

MILESTONE_THRESHOLDS = (25, 50, 75, 90, 100)


def _reference_day(today: Any) -> date:
    return to_day(today) if today is not None else date.today()


def progress_percent(current: float, target: float) -> float:
    """Share of the target reached, clamped to 0..100."""
    if target <= 0:
        return 0.0
    return max(0.0, min(current / target * 100, 100.0))


def expected_progress_percent(start_date: Any, deadline: Any, today: Any = None) -> float:
    """
    Linear time-based expectation between start and deadline, clamped to 0..100.

    Missing start or deadline gives 0. A window of zero or negative length
    is fully expected (100) once the start has passed.
    """
    if start_date is None or deadline is None:
        return 0.0

    reference = _reference_day(today)
    total_days = days_between(start_date, deadline)
    days_passed = days_between(start_date, reference)

    if total_days <= 0:
        return 100.0 if days_passed >= 0 else 0.0

    return max(0.0, min(days_passed / total_days * 100, 100.0))


def days_remaining(deadline: Any, today: Any = None) -> Optional[int]:
    """Whole days from today until the deadline, None without deadline."""
    if deadline is None:
        return None
    return days_between(_reference_day(today), deadline)


def classify_goal_status(
    current_progress: float,
    expected_progress: float,
    days_left: Optional[int],
) -> GoalStatus:
    """
    Classify a deadline goal.

    Checks run in priority order: completed, at risk (under 14 days left
    and under 80 %), ahead or behind by more than 10 points, on track.
    Goals without a deadline (``days_left`` None) are never at risk.
    """
    if current_progress >= 100:
        return GoalStatus.COMPLETED
    if days_left is not None and days_left < AT_RISK_DAYS and current_progress < AT_RISK_PROGRESS:
        return GoalStatus.AT_RISK
    if current_progress > expected_progress + STATUS_BAND:
        return GoalStatus.AHEAD
    if current_progress < expected_progress - STATUS_BAND:
        return GoalStatus.BEHIND
    return GoalStatus.ON_TRACK


def classify_period_status(current_progress: float, expected_progress: float) -> GoalStatus:
    """Classify a recurring period goal (no at-risk state, narrower ahead band)."""
    if current_progress >= 100:
        return GoalStatus.COMPLETED
    if current_progress > expected_progress + PERIOD_AHEAD_BAND:
        return GoalStatus.AHEAD
    if current_progress < expected_progress - PERIOD_BEHIND_BAND:
        return GoalStatus.BEHIND
    return GoalStatus.ON_TRACK


def predict_completion_date(
    history: Sequence[ProgressPoint],
    target_value: float,
    today: Any = None,
) -> Optional[date]:
    """
    Forecast when the trend of ``history`` reaches ``target_value``.

    Fits a line over the entry index, solves it for the target and turns
    the index distance past the last entry into days using the average gap
    between consecutive entries.

    Args:
        history: Chronological measurements
        target_value: Value to reach
        today: Reference day returned when the target is already met

    Returns:
        Predicted day, today when already met, or None when fewer than 2
        entries exist, the trend is flat or declining with the target
        still unmet, or the forecast falls beyond the last representable day
    """
    if len(history) < 2:
        return None

    reference = _reference_day(today)
    regression = linear_regression(
        [Point(x=index, y=entry.value) for index, entry in enumerate(history)]
    )

    last_index = len(history) - 1
    if not regression.slope > 0:
        if history[-1].value >= target_value:
            return reference
        return None

    target_index = (target_value - regression.intercept) / regression.slope
    index_delta = target_index - last_index
    if index_delta <= 0:
        return reference

    gaps = [
        days_between(history[i - 1].date, history[i].date)
        for i in range(1, len(history))
    ]
    avg_gap = sum(gaps) / len(gaps)

    last_day = to_day(history[-1].date)
    offset_days = index_delta * avg_gap
    # Near-flat trends project past the calendar
    if not math.isfinite(offset_days) or offset_days > (date.max - last_day).days:
        return None

    return last_day + timedelta(days=round(offset_days))


def required_pace(current: float, target: float, days_left: float) -> Pace:
    """
    Pace needed to close the gap to ``target`` in ``days_left`` days.

    ``days_left`` of 0 raises ZeroDivisionError; guarding it is up to the
    caller.
    """
    total = target - current
    return Pace(
        per_day=total / days_left,
        per_week=total / (days_left / 7),
        total=total,
    )


def detect_milestones(progress: float, reached: Iterable[int] = ()) -> List[int]:
    """Milestone thresholds reached by ``progress`` and not yet recorded."""
    already = set(reached)
    return [
        threshold for threshold in MILESTONE_THRESHOLDS
        if progress >= threshold and threshold not in already
    ]


def next_milestone(progress: float, reached: Iterable[int] = ()) -> Optional[int]:
    """First threshold above ``progress`` not yet recorded, None past the last one."""
    already = set(reached)
    for threshold in MILESTONE_THRESHOLDS:
        if progress < threshold and threshold not in already:
            return threshold
    return None
