"""
Goal-type-specific progress strategies.

Each strategy implements the progress calculation for one type of goal.
"""
from liftstats.services.analytics.strategies.base import GoalProgressStrategy
from liftstats.services.analytics.strategies.frequency import FrequencyGoalStrategy
from liftstats.services.analytics.strategies.streak import StreakGoalStrategy
from liftstats.services.analytics.strategies.strength import StrengthGoalStrategy
from liftstats.services.analytics.strategies.volume import VolumeGoalStrategy

__all__ = [
    "GoalProgressStrategy",
    "FrequencyGoalStrategy",
    "StreakGoalStrategy",
    "StrengthGoalStrategy",
    "VolumeGoalStrategy",
]
