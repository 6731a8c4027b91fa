from liftstats.models.record import (
    SetEntry,
    ExerciseEntry,
    SessionRecord,
    HistoryEntry,
    ProgressPoint,
)
from liftstats.models.stats import (
    TrendDirection,
    GoalStatus,
    BalanceStatus,
    PeriodType,
    WeekVolumeStatus,
    OverloadStatus,
    ChangeDirection,
    AdherenceTrend,
    DayStatus,
    Point,
    RegressionResult,
    TrendResult,
    OutlierFlag,
    PeriodBucket,
    StreakState,
    GoalProgress,
    Pace,
    BalanceEntry,
    WeekVolume,
    OverloadSummary,
    ExerciseProgress,
    WeekAdherence,
    OverallAdherence,
)
from liftstats.models.goal import (
    GoalDefinition,
    GoalType,
    VolumeType,
    FrequencyType,
    StreakType,
)
from liftstats.models.schedule import DaySchedule, WeekSchedule

__all__ = [
    "SetEntry",
    "ExerciseEntry",
    "SessionRecord",
    "HistoryEntry",
    "ProgressPoint",
    "TrendDirection",
    "GoalStatus",
    "BalanceStatus",
    "PeriodType",
    "WeekVolumeStatus",
    "OverloadStatus",
    "ChangeDirection",
    "AdherenceTrend",
    "DayStatus",
    "Point",
    "RegressionResult",
    "TrendResult",
    "OutlierFlag",
    "PeriodBucket",
    "StreakState",
    "GoalProgress",
    "Pace",
    "BalanceEntry",
    "WeekVolume",
    "OverloadSummary",
    "ExerciseProgress",
    "WeekAdherence",
    "OverallAdherence",
    "GoalDefinition",
    "GoalType",
    "VolumeType",
    "FrequencyType",
    "StreakType",
    "DaySchedule",
    "WeekSchedule",
]
