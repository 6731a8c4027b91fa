"""
Analytics module - Training statistics and progress calculation.

This module provides:
- Regression, descriptive statistics and strength metrics
- Calendar period aggregation and streak detection
- Goal progress projection with per-goal-type strategies
- Volume distribution, progressive overload and schedule adherence
- Record Store adapters and the StatsCalculator engine
"""
from liftstats.services.analytics.adapter import (
    RawDataAdapter,
    FirestoreAdapter,
    ManualAdapter,
    get_adapter,
)
from liftstats.services.analytics.adherence import (
    adherence_history,
    day_status,
    overall_adherence,
    week_adherence,
)
from liftstats.services.analytics.cache import OneRepMaxCache
from liftstats.services.analytics.calculator import StatsCalculator
from liftstats.services.analytics.distribution import (
    aggregate_by_category,
    category_percentages,
    lookup_categorizer,
    primary_muscle_group,
    score_distribution_balance,
    volume_by_category,
)
from liftstats.services.analytics.descriptive import (
    detect_outliers,
    mean,
    moving_average,
    percentile_rank,
    standard_deviation,
)
from liftstats.services.analytics.overload import (
    change_direction,
    percentage_change,
    progressive_overload_summary,
    weekly_volume_progression,
)
from liftstats.services.analytics.projection import (
    classify_goal_status,
    detect_milestones,
    expected_progress_percent,
    next_milestone,
    predict_completion_date,
    required_pace,
)
from liftstats.services.analytics.regression import linear_regression
from liftstats.services.analytics.strength import (
    best_set,
    build_exercise_history,
    classify_trend,
    estimated_one_rep_max,
    exercise_volume,
    find_personal_record,
    session_volume,
)
from liftstats.services.analytics.temporal import (
    detect_streak,
    detect_weekly_streak,
    group_by_period,
    iso_week_number,
    period_boundaries,
    start_of_week,
    week_id,
)

__all__ = [
    # Adapters
    "RawDataAdapter",
    "FirestoreAdapter",
    "ManualAdapter",
    "get_adapter",
    # Calculator
    "StatsCalculator",
    "OneRepMaxCache",
    # Regression / descriptive
    "linear_regression",
    "mean",
    "standard_deviation",
    "percentile_rank",
    "moving_average",
    "detect_outliers",
    # Strength
    "estimated_one_rep_max",
    "best_set",
    "classify_trend",
    "find_personal_record",
    "exercise_volume",
    "session_volume",
    "build_exercise_history",
    # Temporal
    "iso_week_number",
    "start_of_week",
    "week_id",
    "period_boundaries",
    "group_by_period",
    "detect_streak",
    "detect_weekly_streak",
    # Projection
    "expected_progress_percent",
    "classify_goal_status",
    "predict_completion_date",
    "required_pace",
    "detect_milestones",
    "next_milestone",
    # Distribution
    "aggregate_by_category",
    "volume_by_category",
    "category_percentages",
    "score_distribution_balance",
    "primary_muscle_group",
    "lookup_categorizer",
    # Overload
    "weekly_volume_progression",
    "progressive_overload_summary",
    "percentage_change",
    "change_direction",
    # Adherence
    "week_adherence",
    "adherence_history",
    "overall_adherence",
    "day_status",
]
