"""
Descriptive statistics over plain numeric sequences.
"""
import math
from typing import List, Sequence

from liftstats.models.stats import OutlierFlag


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for empty input."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation (divides by n). Empty input gives 0."""
    n = len(values)
    if n == 0:
        return 0.0

    avg = sum(values) / n
    variance = sum((v - avg) ** 2 for v in values) / n
    return math.sqrt(variance)


def percentile_rank(value: float, dataset: Sequence[float]) -> float:
    """
    Percentile rank of ``value`` within ``dataset``.

    The rank is the position of the first element >= value in the sorted
    dataset, as a percentage of its length. A value above every element
    ranks 100; an empty dataset ranks 0.
    """
    if not dataset:
        return 0.0

    ordered = sorted(dataset)
    for index, item in enumerate(ordered):
        if item >= value:
            return index / len(ordered) * 100
    return 100.0


def moving_average(data: Sequence[float], window_size: int = 3) -> List[float]:
    """
    Centered moving average.

    Each window starts ``window_size // 2`` elements before the current
    position (clamped at both ends), so edge windows are shorter.
    Data shorter than the window is returned unchanged.

    Raises:
        ValueError: If window_size is negative
    """
    if window_size < 0:
        raise ValueError(f"window_size must be non-negative, got {window_size}")

    n = len(data)
    if n < window_size:
        return list(data)

    result = []
    for i in range(n):
        start = max(0, i - window_size // 2)
        end = min(n, start + window_size)
        window = data[start:end]
        result.append(sum(window) / len(window) if window else data[i])
    return result


def detect_outliers(values: Sequence[float]) -> List[OutlierFlag]:
    """
    Flag outliers with the IQR rule.

    Quartiles are taken at sorted indices floor(n * 0.25) and
    floor(n * 0.75) (no interpolation); bounds are Q1 - 1.5 IQR and
    Q3 + 1.5 IQR. Output keeps input order.
    """
    if not values:
        return []

    ordered = sorted(values)
    n = len(ordered)
    q1 = ordered[math.floor(n * 0.25)]
    q3 = ordered[math.floor(n * 0.75)]
    iqr = q3 - q1

    lower_bound = q1 - 1.5 * iqr
    upper_bound = q3 + 1.5 * iqr

    return [
        OutlierFlag(value=value, index=index, is_outlier=value < lower_bound or value > upper_bound)
        for index, value in enumerate(values)
    ]
