"""
Unit tests for services/analytics/descriptive.py
"""
import pytest

from liftstats.services.analytics.descriptive import (
    detect_outliers,
    mean,
    moving_average,
    percentile_rank,
    standard_deviation,
)


class TestMeanAndDeviation:
    """Tests for mean and standard_deviation."""

    def test_mean(self):
        assert mean([1, 2, 3, 4]) == pytest.approx(2.5)
        assert mean([]) == 0.0

    def test_population_standard_deviation(self):
        assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_standard_deviation_edge_cases(self):
        assert standard_deviation([]) == 0.0
        assert standard_deviation([42]) == 0.0


class TestPercentileRank:
    """Tests for percentile_rank."""

    def test_rank_of_member(self):
        assert percentile_rank(3, [4, 1, 3, 2]) == pytest.approx(50.0)

    def test_lowest_value_ranks_zero(self):
        assert percentile_rank(1, [1, 2, 3, 4]) == 0.0

    def test_value_above_all_ranks_100(self):
        assert percentile_rank(5, [1, 2, 3, 4]) == 100.0

    def test_empty_dataset(self):
        assert percentile_rank(5, []) == 0.0


class TestMovingAverage:
    """Tests for moving_average."""

    def test_centered_window(self):
        assert moving_average([1, 2, 3, 4, 5], 3) == pytest.approx([2, 2, 3, 4, 4.5])

    def test_data_shorter_than_window_returned_unchanged(self):
        assert moving_average([1, 2], 3) == [1, 2]

    def test_negative_window_rejected(self):
        with pytest.raises(ValueError):
            moving_average([1, 2, 3], -1)


class TestDetectOutliers:
    """Tests for detect_outliers."""

    def test_flags_extreme_value(self):
        flags = detect_outliers([10, 12, 11, 13, 12, 100])

        assert [flag.index for flag in flags if flag.is_outlier] == [5]
        assert [flag.value for flag in flags] == [10, 12, 11, 13, 12, 100]

    def test_no_outliers_in_uniform_data(self):
        assert not any(flag.is_outlier for flag in detect_outliers([5, 5, 5, 5]))

    def test_empty(self):
        assert detect_outliers([]) == []
