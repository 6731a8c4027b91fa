"""
Computed statistics value types.

Every value here is built fresh by an analytics call and never persisted
by the library. Enumerations are string-valued so they compare equal to
the plain strings the presentation layer expects.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from liftstats.models.record import HistoryEntry


class TrendDirection(str, Enum):
    """Direction of an estimated-1RM trend."""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    INSUFFICIENT_DATA = "insufficient_data"


class GoalStatus(str, Enum):
    """Goal progress classification."""
    ON_TRACK = "on_track"
    AHEAD = "ahead"
    BEHIND = "behind"
    AT_RISK = "at_risk"
    COMPLETED = "completed"


class BalanceStatus(str, Enum):
    """Actual vs expected share of a training category."""
    BALANCED = "balanced"
    UNDER_TRAINED = "under_trained"
    OVER_TRAINED = "over_trained"


class PeriodType(str, Enum):
    """Calendar period used for bucketing and goal windows."""
    WEEK = "week"
    MONTH = "month"


class WeekVolumeStatus(str, Enum):
    """Week-over-week volume classification."""
    PROGRESSING = "progressing"
    MAINTAINING = "maintaining"
    REGRESSING = "regressing"


class OverloadStatus(str, Enum):
    """Overall progressive-overload classification."""
    ON_TRACK = "on_track"
    MAINTAINING = "maintaining"
    REGRESSING = "regressing"


class ChangeDirection(str, Enum):
    """Direction of a period-over-period change."""
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class AdherenceTrend(str, Enum):
    """Schedule adherence trend across recent weeks."""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class DayStatus(str, Enum):
    """Status of one scheduled day."""
    COMPLETED = "completed"
    REST = "rest"
    MISSED = "missed"
    PLANNED = "planned"


@dataclass(frozen=True)
class Point:
    """Regression input point."""
    x: float
    y: float


@dataclass(frozen=True)
class RegressionResult:
    """Ordinary least-squares fit."""
    slope: float
    intercept: float
    r_squared: float


@dataclass(frozen=True)
class TrendResult:
    direction: TrendDirection
    percentage_change: float
    confidence: float  # r_squared of the underlying fit


@dataclass(frozen=True)
class OutlierFlag:
    value: float
    index: int
    is_outlier: bool


@dataclass(frozen=True)
class PeriodBucket:
    """Aggregated value of one week or month."""
    period_key: str  # ISO week id ("2024-W03") or month ("2024-01")
    period_start: date
    period_end: date
    aggregated_value: float
    record_count: int


@dataclass(frozen=True)
class StreakState:
    current_streak: int
    longest_streak: int


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a goal at a reference day."""
    current_value: float
    target_value: float
    progress_percent: float
    expected_progress_percent: float
    status: GoalStatus
    days_remaining: Optional[int]  # None for goals without deadline
    predicted_completion: Optional[date] = None
    longest_streak: Optional[int] = None  # streak goals only
    new_milestones: Tuple[int, ...] = ()  # thresholds reached but not yet recorded on the goal
    next_milestone: Optional[int] = None


@dataclass(frozen=True)
class Pace:
    """Required pace to reach a target before a deadline."""
    per_day: float
    per_week: float
    total: float


@dataclass(frozen=True)
class BalanceEntry:
    category: str
    actual: float
    expected: float
    difference: float
    status: BalanceStatus


@dataclass(frozen=True)
class WeekVolume:
    """Training volume of one ISO week with its change vs the previous listed week."""
    week_id: str
    week_start: date
    volume: float
    session_count: int
    change: float
    status: WeekVolumeStatus


@dataclass(frozen=True)
class OverloadSummary:
    weeks_progressing: int
    total_weeks: int
    progress_rate: float
    avg_increase: float
    status: OverloadStatus
    next_week_target: float


@dataclass(frozen=True)
class ExerciseProgress:
    """Progress overview of a single exercise."""
    exercise_name: str
    session_count: int
    last_performed: Optional[date]
    latest_one_rep_max: Optional[float]
    personal_record: Optional[HistoryEntry]
    personal_record_one_rep_max: Optional[float]
    trend: TrendResult


@dataclass(frozen=True)
class WeekAdherence:
    """Planned vs completed sessions of one scheduled week."""
    week_id: str
    week_start: date
    planned: int
    completed: int
    missed: int
    percentage: int
    is_perfect: bool


@dataclass(frozen=True)
class OverallAdherence:
    total_planned: int
    total_completed: int
    total_missed: int
    percentage: int
    weeks_tracked: int
    current_streak: int
    longest_streak: int
    consistency_score: int
    trend: AdherenceTrend
    average_workouts_per_week: float
    best_week: Optional[WeekAdherence] = None
    weeks: Tuple[WeekAdherence, ...] = field(default_factory=tuple)
