"""
Training record value types.

These mirror the documents owned by the Record Store after normalization.
The library only borrows them for the duration of a call.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True)
class SetEntry:
    """Single set: weight in kg and repetitions."""
    weight: float
    reps: int

    @property
    def volume(self) -> float:
        return self.weight * self.reps


@dataclass(frozen=True)
class ExerciseEntry:
    """One exercise performed in a session."""
    name: str
    sets: Tuple[SetEntry, ...] = field(default_factory=tuple)
    exercise_id: Optional[str] = None
    muscle_group: Optional[str] = None  # primary muscle group, if the store knows it


@dataclass(frozen=True)
class SessionRecord:
    """
    A training session as supplied by the Record Store.

    ``total_volume`` is the stored volume when the store precomputed it;
    volume helpers fall back to summing sets when it is missing or zero.
    """
    date: date
    exercises: Tuple[ExerciseEntry, ...] = field(default_factory=tuple)
    duration_minutes: Optional[float] = None
    status: str = "completed"
    total_volume: Optional[float] = None
    record_id: Optional[str] = None

    def exercise_names(self) -> Tuple[str, ...]:
        return tuple(exercise.name for exercise in self.exercises)


@dataclass(frozen=True)
class HistoryEntry:
    """Best set of one exercise on one session date."""
    date: date
    best_set: Optional[SetEntry]
    sets: Tuple[SetEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProgressPoint:
    """Dated goal measurement, input of completion prediction."""
    date: date
    value: float
