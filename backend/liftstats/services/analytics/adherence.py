"""
Schedule adherence - planned vs completed training days per week.

A day is planned when it has a template; a week is perfect when it had at
least one planned day and every planned day was completed.
"""
from datetime import date, timedelta
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from liftstats.core.config import settings
from liftstats.core.dates import to_day
from liftstats.models.schedule import DAY_NAMES, DaySchedule, WeekSchedule
from liftstats.models.stats import (
    AdherenceTrend,
    DayStatus,
    OverallAdherence,
    WeekAdherence,
)
from liftstats.services.analytics.descriptive import standard_deviation
from liftstats.services.analytics.temporal import week_id, week_start_from_id

TREND_WINDOW_WEEKS = 4
TREND_THRESHOLD = 10


def day_status(day: DaySchedule, is_past: bool) -> DayStatus:
    """Completed first, then rest (no template), then missed if past, else planned."""
    if day.completed:
        return DayStatus.COMPLETED
    if not day.is_planned:
        return DayStatus.REST
    if is_past:
        return DayStatus.MISSED
    return DayStatus.PLANNED


def is_day_in_past(day_name: str, week: str, today: Any = None) -> bool:
    """
    Whether a named day of a week lies before today.

    Raises:
        ValueError: If the day name is unknown or the week id is malformed
    """
    if day_name not in DAY_NAMES:
        raise ValueError(f"Unknown day name: {day_name!r}")

    reference = to_day(today) if today is not None else date.today()
    day = week_start_from_id(week) + timedelta(days=DAY_NAMES.index(day_name))
    return day < reference


def week_adherence(schedule: WeekSchedule) -> WeekAdherence:
    """
    Adherence of one week.

    ``completed`` counts every completed day; ``missed`` is planned minus
    completed. The percentage is 0 for a week with nothing planned.
    """
    days = list(schedule.days.values())
    planned = sum(1 for day in days if day.is_planned)
    completed = sum(1 for day in days if day.completed)
    percentage = round(completed / planned * 100) if planned > 0 else 0

    return WeekAdherence(
        week_id=schedule.week_id,
        week_start=week_start_from_id(schedule.week_id),
        planned=planned,
        completed=completed,
        missed=planned - completed,
        percentage=percentage,
        is_perfect=planned > 0 and percentage == 100,
    )


def adherence_history(
    schedules: Mapping[str, WeekSchedule],
    today: Any = None,
    weeks: Optional[int] = None,
) -> List[WeekAdherence]:
    """
    Adherence of the last ``weeks`` weeks ending with the current one, oldest first.

    Weeks missing from ``schedules`` count as empty (all rest days).

    Args:
        schedules: Week id -> WeekSchedule
        today: Reference day (default: today)
        weeks: Number of weeks (default: ADHERENCE_WEEKS)
    """
    reference = to_day(today) if today is not None else date.today()
    count = settings.ADHERENCE_WEEKS if weeks is None else weeks

    history = []
    for offset in range(count - 1, -1, -1):
        week = week_id(reference - timedelta(weeks=offset))
        schedule = schedules.get(week) or WeekSchedule.empty(week)
        history.append(week_adherence(schedule))
    return history


def adherence_streaks(history: Sequence[WeekAdherence]) -> Tuple[int, int]:
    """Current (ending with the latest week) and longest run of perfect weeks."""
    current = 0
    for week in reversed(history):
        if not week.is_perfect:
            break
        current += 1

    longest = 0
    run = 0
    for week in history:
        run = run + 1 if week.is_perfect else 0
        longest = max(longest, run)

    return current, longest


def consistency_score(history: Sequence[WeekAdherence]) -> int:
    """
    0..100 score, higher when weekly percentages vary less.

    Only weeks with planned days count; none gives 0.
    """
    percentages = [week.percentage for week in history if week.planned > 0]
    if not percentages:
        return 0
    return round(max(0.0, 100 - standard_deviation(percentages) * 2))


def adherence_trend(history: Sequence[WeekAdherence]) -> AdherenceTrend:
    """Last four weeks against the four before them, +-10 points."""
    if len(history) < TREND_WINDOW_WEEKS:
        return AdherenceTrend.STABLE

    recent = history[-TREND_WINDOW_WEEKS:]
    previous = history[-2 * TREND_WINDOW_WEEKS:-TREND_WINDOW_WEEKS]
    if not previous:
        return AdherenceTrend.STABLE

    recent_avg = sum(week.percentage for week in recent) / len(recent)
    previous_avg = sum(week.percentage for week in previous) / len(previous)
    diff = recent_avg - previous_avg

    if diff > TREND_THRESHOLD:
        return AdherenceTrend.IMPROVING
    if diff < -TREND_THRESHOLD:
        return AdherenceTrend.DECLINING
    return AdherenceTrend.STABLE


def best_week(history: Sequence[WeekAdherence]) -> Optional[WeekAdherence]:
    """Week with the highest percentage among weeks with planned days (earliest on ties)."""
    best = None
    for week in history:
        if week.planned == 0:
            continue
        if best is None or week.percentage > best.percentage:
            best = week
    return best


def overall_adherence(history: Sequence[WeekAdherence]) -> OverallAdherence:
    """Totals, streaks, consistency and trend over an adherence history."""
    total_planned = sum(week.planned for week in history)
    total_completed = sum(week.completed for week in history)
    current, longest = adherence_streaks(history)

    return OverallAdherence(
        total_planned=total_planned,
        total_completed=total_completed,
        total_missed=total_planned - total_completed,
        percentage=round(total_completed / total_planned * 100) if total_planned > 0 else 0,
        weeks_tracked=len(history),
        current_streak=current,
        longest_streak=longest,
        consistency_score=consistency_score(history),
        trend=adherence_trend(history),
        average_workouts_per_week=round(total_completed / len(history), 1) if history else 0.0,
        best_week=best_week(history),
        weeks=tuple(history),
    )
