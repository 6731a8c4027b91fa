"""
Regression Engine - ordinary least-squares line fit over point sequences.
"""
import math
from typing import Sequence

from liftstats.core.logging import get_logger
from liftstats.models.stats import Point, RegressionResult

logger = get_logger(__name__)


def linear_regression(points: Sequence[Point]) -> RegressionResult:
    """
    Fit ``y = slope * x + intercept`` by closed-form least squares.

    Fewer than 2 points give the degenerate fit (0, 0, 0). When every y is
    identical the fit is exact and r_squared is 1.

    If every x is identical the slope is undefined: slope and intercept are
    NaN and r_squared is NaN (or 1 when every y is identical as well).

    Args:
        points: Sequence of Point, typically x = workout ordinal

    Returns:
        RegressionResult
    """
    n = len(points)
    if n < 2:
        return RegressionResult(slope=0.0, intercept=0.0, r_squared=0.0)

    sum_x = sum(p.x for p in points)
    sum_y = sum(p.y for p in points)
    sum_xy = sum(p.x * p.y for p in points)
    sum_x2 = sum(p.x * p.x for p in points)

    y_mean = sum_y / n
    ss_total = sum((p.y - y_mean) ** 2 for p in points)

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        logger.debug("Zero variance in x, slope undefined", points=n)
        return RegressionResult(
            slope=math.nan,
            intercept=math.nan,
            r_squared=1.0 if ss_total == 0 else math.nan,
        )

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    ss_residual = sum((p.y - (slope * p.x + intercept)) ** 2 for p in points)
    r_squared = 1.0 if ss_total == 0 else 1 - ss_residual / ss_total

    return RegressionResult(slope=slope, intercept=intercept, r_squared=r_squared)
