"""
Strength Metrics - 1RM estimation, best sets, personal records and trends.

Also holds the volume helpers and the per-exercise history builder the
higher layers feed into these metrics.
"""
from typing import Iterable, List, Optional, Sequence

from liftstats.models.record import (
    ExerciseEntry,
    HistoryEntry,
    SessionRecord,
    SetEntry,
)
from liftstats.models.stats import Point, TrendDirection, TrendResult
from liftstats.services.analytics.cache import OneRepMaxCache
from liftstats.services.analytics.regression import linear_regression

# Epley is unreliable beyond this many reps
MAX_RELIABLE_REPS = 15
MIN_TREND_SAMPLES = 4
TREND_THRESHOLD_PCT = 2.5


def _epley(weight: float, reps: int) -> Optional[float]:
    if not weight or not reps or weight <= 0 or reps <= 0:
        return None
    if reps == 1:
        return weight
    if reps > MAX_RELIABLE_REPS:
        return None
    return weight * (1 + reps / 30)


def estimated_one_rep_max(
    weight: float,
    reps: int,
    cache: Optional[OneRepMaxCache] = None,
) -> Optional[float]:
    """
    Estimate the one-rep max with the Epley formula.

    A single rep returns the weight itself. More than 15 reps, or a
    non-positive weight or rep count, has no estimate (None).

    Args:
        weight: Weight lifted in kg
        reps: Repetitions performed
        cache: Optional LRU cache shared across calls

    Returns:
        Estimated 1RM in kg or None
    """
    if cache is None:
        return _epley(weight, reps)
    return cache.get_or_compute(weight, reps, _epley)


def _is_valid_set(entry: Optional[SetEntry]) -> bool:
    return bool(entry is not None and entry.weight and entry.reps)


def best_set(sets: Iterable[SetEntry]) -> Optional[SetEntry]:
    """
    Select the set with the highest weight x reps.

    Sets without weight or reps are ignored; on ties the first set wins.
    Returns None when no set qualifies.
    """
    best: Optional[SetEntry] = None
    best_score = 0.0

    for entry in sets:
        if not _is_valid_set(entry):
            continue
        score = entry.weight * entry.reps
        if score > best_score:
            best = entry
            best_score = score

    return best


def exercise_volume(exercise: ExerciseEntry) -> float:
    """Sum of weight x reps over sets with positive weight and reps."""
    return sum(
        entry.weight * entry.reps
        for entry in exercise.sets
        if _is_valid_set(entry)
    )


def session_volume(session: SessionRecord) -> float:
    """Stored session volume when positive, otherwise the sum of exercise volumes."""
    if session.total_volume is not None and session.total_volume > 0:
        return session.total_volume
    return sum(exercise_volume(exercise) for exercise in session.exercises)


def find_exercise(session: SessionRecord, exercise_name: str) -> Optional[ExerciseEntry]:
    """First exercise of the session with the given name."""
    for exercise in session.exercises:
        if exercise.name == exercise_name:
            return exercise
    return None


def build_exercise_history(
    sessions: Iterable[SessionRecord],
    exercise_name: str,
) -> List[HistoryEntry]:
    """
    Chronological history of one exercise.

    One entry per session that contains the exercise, carrying the best
    set of that session (None when no set qualifies).
    """
    entries = []
    for session in sorted(sessions, key=lambda s: s.date):
        exercise = find_exercise(session, exercise_name)
        if exercise is None:
            continue
        entries.append(
            HistoryEntry(
                date=session.date,
                best_set=best_set(exercise.sets),
                sets=exercise.sets,
            )
        )
    return entries


def entry_one_rep_max(
    entry: HistoryEntry,
    cache: Optional[OneRepMaxCache] = None,
) -> Optional[float]:
    """Estimated 1RM of a history entry's best set."""
    if not _is_valid_set(entry.best_set):
        return None
    return estimated_one_rep_max(entry.best_set.weight, entry.best_set.reps, cache)


def classify_trend(
    history: Sequence[HistoryEntry],
    cache: Optional[OneRepMaxCache] = None,
) -> TrendResult:
    """
    Classify the estimated-1RM trend of an exercise history.

    Points keep their position in ``history`` as x, so entries without an
    estimate leave gaps rather than shifting later sessions. At least 4
    usable points are required; the slope relative to the mean 1RM
    decides the direction (> 2.5 % up, < -2.5 % down).

    Args:
        history: Chronological exercise history
        cache: Optional 1RM cache

    Returns:
        TrendResult with r_squared as confidence
    """
    insufficient = TrendResult(
        direction=TrendDirection.INSUFFICIENT_DATA,
        percentage_change=0.0,
        confidence=0.0,
    )

    if len(history) < MIN_TREND_SAMPLES:
        return insufficient

    points = []
    for index, entry in enumerate(history):
        value = entry_one_rep_max(entry, cache)
        if value is not None and value > 0:
            points.append(Point(x=index, y=value))

    if len(points) < MIN_TREND_SAMPLES:
        return insufficient

    regression = linear_regression(points)
    avg_value = sum(p.y for p in points) / len(points)
    percentage_change = regression.slope / avg_value * 100 if avg_value > 0 else 0.0

    if percentage_change > TREND_THRESHOLD_PCT:
        direction = TrendDirection.UP
    elif percentage_change < -TREND_THRESHOLD_PCT:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.FLAT

    return TrendResult(
        direction=direction,
        percentage_change=percentage_change,
        confidence=regression.r_squared,
    )


def find_personal_record(
    history: Sequence[HistoryEntry],
    cache: Optional[OneRepMaxCache] = None,
) -> Optional[HistoryEntry]:
    """
    History entry with the highest estimated 1RM.

    Entries without an estimate are skipped; the earliest entry wins ties.
    """
    best: Optional[HistoryEntry] = None
    best_value = 0.0

    for entry in history:
        value = entry_one_rep_max(entry, cache)
        if value is not None and value > best_value:
            best = entry
            best_value = value

    return best
