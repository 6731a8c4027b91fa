"""
Date normalization helpers.

Record and goal documents carry dates in several shapes (Firestore
timestamp dicts, ISO strings, epoch milliseconds, datetime objects).
Everything downstream works on calendar days.
"""
from datetime import date, datetime, timezone
from typing import Any, Optional


def normalize_date(value: Any) -> Optional[datetime]:
    """
    Normalize a date-like value to a datetime.

    Handles:
    - datetime / date objects
    - Firestore timestamps ({"seconds": ..., "nanoseconds": ...} or objects
      exposing ``to_datetime()`` / ``toDate()``)
    - ISO 8601 strings
    - epoch milliseconds (int/float)

    Returns:
        datetime, or None if the value cannot be interpreted
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    for method_name in ("to_datetime", "toDate"):
        method = getattr(value, method_name, None)
        if callable(method):
            return normalize_date(method())

    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
            return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
        # Wrapped timestamp
        if value.get("_value"):
            return normalize_date(value["_value"])
        return None

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None

    return None


def to_day(value: Any) -> date:
    """
    Calendar day of a date-like value.

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    normalized = normalize_date(value)
    if normalized is None:
        raise ValueError(f"Invalid date value: {value!r}")
    return normalized.date()


def today() -> date:
    """Current local calendar day."""
    return date.today()
