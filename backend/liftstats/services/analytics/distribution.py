"""
Volume/Distribution Aggregator - per-category totals and balance scoring.

Categories (muscle groups, exercise types) are never hardcoded: a
categorizer supplied by the caller maps each exercise to the set of
categories it trains.
"""
from typing import Callable, Dict, Iterable, List, Mapping, Set, TypeVar

from liftstats.models.record import ExerciseEntry, SessionRecord
from liftstats.models.stats import BalanceEntry, BalanceStatus
from liftstats.services.analytics.strength import exercise_volume

T = TypeVar("T")

Categorizer = Callable[[ExerciseEntry], Iterable[str]]

DEFAULT_BALANCE_TOLERANCE = 10.0


def primary_muscle_group(exercise: ExerciseEntry) -> Set[str]:
    """Categorizer using the muscle group stored on the exercise itself."""
    return {exercise.muscle_group} if exercise.muscle_group else set()


def lookup_categorizer(
    catalog: Mapping[str, Iterable[str]],
    fallback: Categorizer = primary_muscle_group,
) -> Categorizer:
    """
    Categorizer backed by an exercise catalog.

    The catalog maps an exercise id or name to its muscle groups (primary
    and secondary). Exercises missing from the catalog use ``fallback``.
    """
    def categorize(exercise: ExerciseEntry) -> Set[str]:
        for key in (exercise.exercise_id, exercise.name):
            if key and key in catalog:
                return set(catalog[key])
        return set(fallback(exercise))

    return categorize


def aggregate_by_category(
    records: Iterable[T],
    categorizer: Callable[[T], Iterable[str]],
    value_extractor: Callable[[T], float],
) -> Dict[str, float]:
    """
    Sum record values per category.

    A record counts in full toward every category it belongs to, so an
    exercise training chest and triceps adds its whole volume to both.
    """
    totals: Dict[str, float] = {}
    for record in records:
        categories = set(categorizer(record))
        if not categories:
            continue
        value = value_extractor(record)
        for category in categories:
            totals[category] = totals.get(category, 0.0) + value
    return totals


def volume_by_category(
    sessions: Iterable[SessionRecord],
    categorizer: Categorizer = primary_muscle_group,
) -> Dict[str, float]:
    """Exercise volume per category across sessions."""
    exercises = (exercise for session in sessions for exercise in session.exercises)
    return aggregate_by_category(exercises, categorizer, exercise_volume)


def category_percentages(totals: Mapping[str, float]) -> Dict[str, float]:
    """Each category's share of the grand total in percent (all 0 when the total is 0)."""
    grand_total = sum(totals.values())
    if grand_total <= 0:
        return {category: 0.0 for category in totals}
    return {category: value / grand_total * 100 for category, value in totals.items()}


def score_distribution_balance(
    actual: Mapping[str, float],
    expected: Mapping[str, float],
    tolerance: float = DEFAULT_BALANCE_TOLERANCE,
) -> List[BalanceEntry]:
    """
    Compare actual category shares against the expected distribution.

    Categories present on either side are scored (a missing share counts
    as 0). Entries are sorted by difference ascending, most under-trained
    first.

    Args:
        actual: Category -> actual percent
        expected: Category -> expected percent
        tolerance: Maximum absolute difference still considered balanced

    Returns:
        List of BalanceEntry
    """
    categories = list(expected)
    categories.extend(category for category in actual if category not in expected)

    entries = []
    for category in categories:
        actual_value = actual.get(category, 0.0)
        expected_value = expected.get(category, 0.0)
        difference = actual_value - expected_value

        if abs(difference) <= tolerance:
            status = BalanceStatus.BALANCED
        elif difference < 0:
            status = BalanceStatus.UNDER_TRAINED
        else:
            status = BalanceStatus.OVER_TRAINED

        entries.append(
            BalanceEntry(
                category=category,
                actual=actual_value,
                expected=expected_value,
                difference=difference,
                status=status,
            )
        )

    return sorted(entries, key=lambda entry: entry.difference)
