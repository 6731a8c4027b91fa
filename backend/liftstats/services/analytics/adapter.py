"""
Record Store adapters - normalize raw workout documents into SessionRecord.

Supported sources:
- Firestore workout documents (camelCase, timestamp dicts)
- Manual input (plain dicts)
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from liftstats.core.dates import normalize_date
from liftstats.core.logging import get_logger
from liftstats.models.record import ExerciseEntry, SessionRecord, SetEntry

logger = get_logger(__name__)

COMPLETED_STATUS = "completed"


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class RawDataAdapter(ABC):
    """Abstract base class for Record Store adapters."""

    source_name: str = "unknown"

    # Document keys, in priority order, that may carry the session date
    date_fields: Tuple[str, ...] = ("date",)

    @abstractmethod
    def normalize(self, raw_data: Dict[str, Any]) -> Optional[SessionRecord]:
        """
        Normalize one raw document.

        Args:
            raw_data: Raw document from the source

        Returns:
            SessionRecord, or None when the document has no usable date
        """
        pass

    def normalize_many(
        self,
        documents: Iterable[Dict[str, Any]],
        completed_only: bool = True,
    ) -> List[SessionRecord]:
        """
        Normalize a batch of documents, oldest first.

        Documents with an unusable date are skipped. With
        ``completed_only``, sessions whose status is not "completed" are
        dropped as well.
        """
        sessions = []
        skipped = 0
        total = 0

        for raw in documents:
            total += 1
            session = self.normalize(raw)
            if session is None:
                skipped += 1
                continue
            if completed_only and session.status != COMPLETED_STATUS:
                continue
            sessions.append(session)

        sessions.sort(key=lambda s: s.date)

        logger.debug(
            "Normalized documents",
            source=self.source_name,
            documents=total,
            sessions=len(sessions),
            skipped=skipped,
        )
        return sessions

    def _extract_date(self, raw_data: Dict[str, Any]) -> Optional[date]:
        """First field of ``date_fields`` holding a parseable date, as a calendar day."""
        for field_name in self.date_fields:
            value = raw_data.get(field_name)
            if value is None:
                continue
            normalized = normalize_date(value)
            if normalized is not None:
                return normalized.date()

        logger.warning(
            "Skipping document with invalid date",
            source=self.source_name,
            record_id=raw_data.get("id"),
        )
        return None

    def _extract_sets(self, raw_sets: Any) -> Tuple[SetEntry, ...]:
        sets = []
        for raw_set in raw_sets or []:
            if not isinstance(raw_set, dict):
                continue
            reps = raw_set.get("reps", raw_set.get("repetitions"))
            sets.append(SetEntry(weight=_to_float(raw_set.get("weight")), reps=_to_int(reps)))
        return tuple(sets)


class FirestoreAdapter(RawDataAdapter):
    """
    Adapter for Firestore workout documents.

    The session date is ``completedAt`` (when the workout finished),
    falling back to ``createdAt``. Timestamps may arrive as
    {seconds, nanoseconds} dicts, ISO strings, epoch milliseconds or
    datetime objects.
    """

    source_name = "firestore"
    date_fields = ("completedAt", "createdAt")

    def normalize(self, raw_data: Dict[str, Any]) -> Optional[SessionRecord]:
        """Normalize a Firestore workout document."""
        session_date = self._extract_date(raw_data)
        if session_date is None:
            return None

        exercises = tuple(
            ExerciseEntry(
                name=raw.get("exerciseName") or raw.get("name") or "",
                sets=self._extract_sets(raw.get("sets")),
                exercise_id=raw.get("exerciseId"),
                muscle_group=raw.get("muscleGroup"),
            )
            for raw in raw_data.get("exercises") or []
            if isinstance(raw, dict)
        )

        return SessionRecord(
            date=session_date,
            exercises=exercises,
            duration_minutes=_optional_float(raw_data.get("duration")),
            status=raw_data.get("status") or COMPLETED_STATUS,
            total_volume=_optional_float(raw_data.get("totalVolume")),
            record_id=raw_data.get("id"),
        )


class ManualAdapter(RawDataAdapter):
    """
    Adapter for manually entered sessions.

    Plain dicts: ``date``, ``exercises[].name``, ``exercises[].sets`` and
    optional ``duration_minutes`` / ``total_volume``.
    """

    source_name = "manual"
    date_fields = ("date", "completed_at", "created_at")

    def normalize(self, raw_data: Dict[str, Any]) -> Optional[SessionRecord]:
        """Normalize a manually entered session."""
        session_date = self._extract_date(raw_data)
        if session_date is None:
            return None

        exercises = tuple(
            ExerciseEntry(
                name=raw.get("name") or "",
                sets=self._extract_sets(raw.get("sets")),
                exercise_id=raw.get("exercise_id"),
                muscle_group=raw.get("muscle_group"),
            )
            for raw in raw_data.get("exercises") or []
            if isinstance(raw, dict)
        )

        return SessionRecord(
            date=session_date,
            exercises=exercises,
            duration_minutes=_optional_float(raw_data.get("duration_minutes")),
            status=raw_data.get("status") or COMPLETED_STATUS,
            total_volume=_optional_float(raw_data.get("total_volume")),
            record_id=raw_data.get("id"),
        )


# Adapter registry
_ADAPTERS = {
    "firestore": FirestoreAdapter,
    "manual": ManualAdapter,
}


def get_adapter(source: str) -> RawDataAdapter:
    """
    Get the appropriate adapter for a data source.

    Args:
        source: Data source name (firestore, manual)

    Returns:
        Adapter instance; unknown sources fall back to the manual adapter
    """
    adapter_class = _ADAPTERS.get(source.lower())

    if not adapter_class:
        logger.warning("Unknown data source, falling back to manual", source=source)
        adapter_class = ManualAdapter

    return adapter_class()
