"""
Services module - Statistics and progress calculation layer.

Modules:
- analytics: pure calculations, goal strategies and the StatsCalculator engine
"""
from liftstats.services.analytics import StatsCalculator

__all__ = [
    "StatsCalculator",
]
