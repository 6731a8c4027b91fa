"""
Shared fixtures: a fixed reference day and session builders.
"""
from datetime import date, timedelta

import pytest

from liftstats.models.record import ExerciseEntry, SessionRecord, SetEntry

# Wednesday of ISO week 2026-W12 (Monday 2026-03-16 .. Sunday 2026-03-22)
TODAY = date(2026, 3, 18)


def build_exercise(name, sets=(), muscle_group=None, exercise_id=None):
    return ExerciseEntry(
        name=name,
        sets=tuple(SetEntry(weight=w, reps=r) for w, r in sets),
        exercise_id=exercise_id,
        muscle_group=muscle_group,
    )


def build_session(day, *exercises, total_volume=None, status="completed"):
    return SessionRecord(
        date=day,
        exercises=tuple(exercises),
        total_volume=total_volume,
        status=status,
    )


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def days_ago(today):
    """Factory: calendar day ``n`` days before the reference day."""
    def _days_ago(n):
        return today - timedelta(days=n)
    return _days_ago


@pytest.fixture
def make_exercise():
    return build_exercise


@pytest.fixture
def make_session():
    return build_session


@pytest.fixture
def bench_sessions():
    """Three weekly bench press sessions with single-rep best sets (1RM = weight)."""
    return [
        build_session(date(2026, 3, 1), build_exercise("Bench Press", [(100, 1), (60, 1)], "chest")),
        build_session(date(2026, 3, 8), build_exercise("Bench Press", [(105, 1)], "chest")),
        build_session(date(2026, 3, 15), build_exercise("Bench Press", [(110, 1)], "chest")),
    ]
