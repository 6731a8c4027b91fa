"""
Progressive overload - week-over-week volume classification and period comparison.
"""
from typing import Callable, Iterable, List, Optional, Sequence

from liftstats.models.record import SessionRecord
from liftstats.models.stats import (
    ChangeDirection,
    OverloadStatus,
    OverloadSummary,
    PeriodType,
    WeekVolume,
    WeekVolumeStatus,
)
from liftstats.services.analytics.strength import session_volume
from liftstats.services.analytics.temporal import group_by_period

OVERLOAD_THRESHOLD_PCT = 2.5
ON_TRACK_RATE_PCT = 50
NEXT_WEEK_INCREASE = 1.05


def percentage_change(current: float, previous: float) -> float:
    """
    Change from ``previous`` to ``current`` in percent, rounded to one decimal.

    From 0 to 0 is no change; from 0 to anything else counts as 100 %.
    """
    if previous == 0:
        return 0.0 if current == 0 else 100.0
    return round((current - previous) / previous * 100, 1)


def change_direction(value: float, neutral_threshold: float = 0) -> ChangeDirection:
    """Up, down, or neutral when within ``neutral_threshold`` of zero."""
    if abs(value) <= neutral_threshold:
        return ChangeDirection.NEUTRAL
    return ChangeDirection.UP if value > 0 else ChangeDirection.DOWN


def classify_volume_change(change: float) -> WeekVolumeStatus:
    if change > OVERLOAD_THRESHOLD_PCT:
        return WeekVolumeStatus.PROGRESSING
    if change < -OVERLOAD_THRESHOLD_PCT:
        return WeekVolumeStatus.REGRESSING
    return WeekVolumeStatus.MAINTAINING


def weekly_volume_progression(
    sessions: Iterable[SessionRecord],
    volume_extractor: Callable[[SessionRecord], float] = session_volume,
) -> List[WeekVolume]:
    """
    Training volume per ISO week with the change against the previous listed week.

    Weeks without sessions are not listed, so a change is always relative
    to the previous week that had training. The first week has change 0.
    """
    buckets = group_by_period(sessions, PeriodType.WEEK, volume_extractor)

    progression = []
    previous: Optional[float] = None
    for bucket in buckets:
        volume = bucket.aggregated_value
        if previous is None or previous <= 0:
            change = 0.0
        else:
            change = (volume - previous) / previous * 100

        progression.append(
            WeekVolume(
                week_id=bucket.period_key,
                week_start=bucket.period_start,
                volume=volume,
                session_count=bucket.record_count,
                change=change,
                status=classify_volume_change(change),
            )
        )
        previous = volume

    return progression


def progressive_overload_summary(progression: Sequence[WeekVolume]) -> Optional[OverloadSummary]:
    """
    Summarize a weekly progression.

    Needs at least two weeks. Only weeks after the first are compared;
    the overall status is on track when at least half of them progressed,
    regressing when the average change is below -2.5 %, otherwise
    maintaining. The next-week target is the last volume plus 5 %.
    """
    if len(progression) < 2:
        return None

    compared = progression[1:]
    weeks_progressing = sum(1 for week in compared if week.status == WeekVolumeStatus.PROGRESSING)
    total_weeks = len(compared)
    progress_rate = weeks_progressing / total_weeks * 100
    avg_increase = sum(week.change for week in compared) / total_weeks

    if progress_rate >= ON_TRACK_RATE_PCT:
        status = OverloadStatus.ON_TRACK
    elif avg_increase < -OVERLOAD_THRESHOLD_PCT:
        status = OverloadStatus.REGRESSING
    else:
        status = OverloadStatus.MAINTAINING

    return OverloadSummary(
        weeks_progressing=weeks_progressing,
        total_weeks=total_weeks,
        progress_rate=progress_rate,
        avg_increase=avg_increase,
        status=status,
        next_week_target=progression[-1].volume * NEXT_WEEK_INCREASE,
    )
