"""
Temporal Aggregation - calendar periods, ISO week ids, period buckets and streaks.

Weeks are Monday-anchored ISO 8601 weeks regardless of locale: Sunday is
the last day of its week.
"""
import calendar
import re
from datetime import date, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar, Union

from liftstats.core.config import settings
from liftstats.core.dates import to_day
from liftstats.models.stats import PeriodBucket, PeriodType, StreakState

T = TypeVar("T")

_WEEK_ID_PATTERN = re.compile(r"^(\d{4})-W(\d{2})$")


def _default_date_getter(record: Any) -> Any:
    return record.date


def parse_period_type(period_type: Union[str, PeriodType]) -> PeriodType:
    """
    Coerce a period name to PeriodType.

    Raises:
        ValueError: If the period is neither week nor month
    """
    try:
        return PeriodType(period_type)
    except ValueError:
        raise ValueError(f"Unknown period: {period_type!r}") from None


# ========================================
# Calendar boundaries
# ========================================

def iso_week_number(value: Any) -> int:
    """ISO 8601 week number (1..53)."""
    return to_day(value).isocalendar()[1]


def start_of_week(value: Any) -> date:
    """Monday of the week containing the day."""
    day = to_day(value)
    return day - timedelta(days=day.weekday())


def end_of_week(value: Any) -> date:
    """Sunday of the week containing the day."""
    return start_of_week(value) + timedelta(days=6)


def start_of_month(value: Any) -> date:
    return to_day(value).replace(day=1)


def end_of_month(value: Any) -> date:
    day = to_day(value)
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def days_between(start: Any, end: Any) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (to_day(end) - to_day(start)).days


def period_boundaries(
    period_type: Union[str, PeriodType],
    reference: Any = None,
) -> Tuple[date, date]:
    """
    First and last day of the week or month containing ``reference``.

    Args:
        period_type: "week" or "month"
        reference: Reference day (default: today)

    Raises:
        ValueError: If the period is unknown
    """
    period = parse_period_type(period_type)
    day = to_day(reference) if reference is not None else date.today()

    if period == PeriodType.WEEK:
        return start_of_week(day), end_of_week(day)
    return start_of_month(day), end_of_month(day)


def filter_by_period(
    records: Iterable[T],
    start: Any,
    end: Any,
    date_getter: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """Records whose calendar day falls within [start, end], inclusive."""
    getter = date_getter or _default_date_getter
    first, last = to_day(start), to_day(end)
    return [record for record in records if first <= to_day(getter(record)) <= last]


# ========================================
# Week ids ("YYYY-Www")
# ========================================

def week_id(value: Any) -> str:
    """ISO week id of a day, e.g. "2026-W02"."""
    iso_year, iso_week, _ = to_day(value).isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def week_start_from_id(week: str) -> date:
    """
    Monday of an ISO week id.

    Raises:
        ValueError: If the id is malformed or the week does not exist
    """
    match = _WEEK_ID_PATTERN.match(week or "")
    if not match:
        raise ValueError(f"Invalid week id: {week!r}")

    year, number = int(match.group(1)), int(match.group(2))
    try:
        return date.fromisocalendar(year, number, 1)
    except ValueError:
        raise ValueError(f"Invalid week id: {week!r}") from None


def week_end_from_id(week: str) -> date:
    """Sunday of an ISO week id."""
    return week_start_from_id(week) + timedelta(days=6)


def next_week_id(week: str) -> str:
    return week_id(week_start_from_id(week) + timedelta(days=7))


def previous_week_id(week: str) -> str:
    return week_id(week_start_from_id(week) - timedelta(days=7))


def period_key(period_type: Union[str, PeriodType], value: Any) -> str:
    """Bucket key: ISO week id for weeks, "YYYY-MM" for months."""
    period = parse_period_type(period_type)
    day = to_day(value)
    if period == PeriodType.WEEK:
        return week_id(day)
    return f"{day.year:04d}-{day.month:02d}"


# ========================================
# Period buckets
# ========================================

def group_by_period(
    records: Iterable[T],
    period_type: Union[str, PeriodType],
    value_extractor: Callable[[T], float],
    date_getter: Optional[Callable[[T], Any]] = None,
) -> List[PeriodBucket]:
    """
    Sum a per-record value into week or month buckets.

    Only periods containing at least one record are returned, sorted by
    period start. Gaps are left for the caller to fill.

    Args:
        records: Dated records
        period_type: "week" or "month"
        value_extractor: Numeric value of a record
        date_getter: Date of a record (default: ``record.date``)

    Raises:
        ValueError: If the period is unknown
    """
    period = parse_period_type(period_type)
    getter = date_getter or _default_date_getter

    buckets: Dict[date, List[Any]] = {}
    for record in records:
        start, end = period_boundaries(period, getter(record))
        bucket = buckets.setdefault(start, [end, 0.0, 0])
        bucket[1] += value_extractor(record)
        bucket[2] += 1

    return [
        PeriodBucket(
            period_key=period_key(period, start),
            period_start=start,
            period_end=end,
            aggregated_value=total,
            record_count=count,
        )
        for start, (end, total, count) in sorted(buckets.items())
    ]


# ========================================
# Streaks
# ========================================

def _scan_backward(
    covered: Callable[[int], bool],
    steps: int,
    tolerance: int = 0,
) -> StreakState:
    """
    Walk ``steps`` periods back from the current one.

    Up to ``tolerance`` consecutive uncovered periods are skipped without
    breaking the run. The first break fixes the current streak (0 when the
    scan starts on a break); every break feeds the longest streak.
    """
    current: Optional[int] = None
    longest = 0
    run = 0
    missed = 0

    for offset in range(steps):
        if covered(offset):
            run += 1
            missed = 0
            continue

        missed += 1
        if missed <= tolerance:
            continue

        longest = max(longest, run)
        if current is None:
            current = run
        run = 0

    longest = max(longest, run)
    if current is None:
        current = run

    return StreakState(current_streak=current, longest_streak=longest)


def detect_streak(
    dates: Iterable[Any],
    allow_rest_days: bool = False,
    max_rest_days_per_week: int = 0,
    today: Any = None,
    lookback_days: Optional[int] = None,
) -> StreakState:
    """
    Daily training streak counted backward from today.

    Dates are deduplicated by calendar day. With ``allow_rest_days``, up to
    ``max_rest_days_per_week`` consecutive missed days do not break the
    streak. A run that ended before today only counts toward the longest
    streak.

    Args:
        dates: Training dates (any date-like value)
        allow_rest_days: Tolerate short gaps
        max_rest_days_per_week: Maximum consecutive missed days tolerated
        today: Reference day (default: today)
        lookback_days: Days scanned (default: STREAK_LOOKBACK_DAYS)

    Returns:
        StreakState
    """
    reference = to_day(today) if today is not None else date.today()
    steps = settings.STREAK_LOOKBACK_DAYS if lookback_days is None else lookback_days
    days = {to_day(value) for value in dates}
    tolerance = max_rest_days_per_week if allow_rest_days else 0

    return _scan_backward(
        lambda offset: reference - timedelta(days=offset) in days,
        steps,
        tolerance,
    )


def detect_weekly_streak(
    dates: Iterable[Any],
    today: Any = None,
    lookback_weeks: Optional[int] = None,
) -> StreakState:
    """
    Consecutive Monday-anchored weeks with at least one training day.

    A current week without training gives a current streak of 0.
    """
    reference = start_of_week(today if today is not None else date.today())
    steps = settings.STREAK_LOOKBACK_WEEKS if lookback_weeks is None else lookback_weeks
    weeks = {start_of_week(value) for value in dates}

    return _scan_backward(
        lambda offset: reference - timedelta(weeks=offset) in weeks,
        steps,
    )
