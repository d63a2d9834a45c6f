"""Unit tests for the best split finder."""
import pytest

from activity_analytics.core.exceptions import NoEligibleWindowError
from activity_analytics.services.analytics.splits import SplitCalculator, SplitResult


class TestBestSplit:

    def test_constant_series(self):
        time = list(range(100))
        calculator = SplitCalculator(time, [5.0] * 100)

        assert calculator.best_split(10) == pytest.approx(5.0)
        assert calculator.best_split(99) == pytest.approx(5.0)

    def test_finds_best_window(self):
        """Each value is held over the second preceding its sample."""
        calculator = SplitCalculator([0, 1, 2, 3, 4, 5], [0, 1, 2, 3, 4, 5])
        assert calculator.best_split(2) == pytest.approx(4.5)
        assert calculator.longest_segment == 5

    def test_uneven_sampling_is_time_weighted(self):
        """A value held for 3 seconds weighs three times more."""
        calculator = SplitCalculator([0, 1, 4], [0, 10, 1])
        assert calculator.best_split(4) == pytest.approx((10 + 1 + 1 + 1) / 4)

    def test_sub_second_samples_all_count(self):
        """At 2 Hz every half second sample weighs half a second."""
        time = [i * 0.5 for i in range(21)]
        values = [0.0 if i % 2 == 0 else 10.0 for i in range(21)]
        calculator = SplitCalculator(time, values)

        assert calculator.longest_segment == 10
        assert calculator.best_split(1) == pytest.approx(5.0)
        assert calculator.best_split(10) == pytest.approx(5.0)

    def test_interval_is_split_across_grid_cells(self):
        # Second 0 holds 4 then 8, second 1 holds 8 then 2
        calculator = SplitCalculator([0, 0.5, 1.5, 2.0], [0, 4, 8, 2])

        assert calculator.best_split(1) == pytest.approx(6.0)
        assert calculator.best_split(2) == pytest.approx(5.5)

    def test_trailing_partial_second_is_dropped(self):
        calculator = SplitCalculator([0, 1, 2, 2.5], [0, 3, 3, 100])

        assert calculator.longest_segment == 2
        assert calculator.best_split(2) == pytest.approx(3.0)

    def test_fractional_duration_rounds_up(self):
        calculator = SplitCalculator([0, 1, 2, 3], [0, 6, 0, 0])
        assert calculator.best_split(1.5) == pytest.approx(3.0)

    def test_window_longer_than_activity_raises(self):
        calculator = SplitCalculator([0, 1, 2, 3], [1, 1, 1, 1])
        with pytest.raises(NoEligibleWindowError) as exc_info:
            calculator.best_split(10)
        assert exc_info.value.duration == 10

    def test_gap_splits_series(self):
        """No window may span a gap longer than max_gap."""
        time = [0, 1, 2, 100000, 100001, 100002]
        values = [1, 1, 1, 9, 9, 9]
        calculator = SplitCalculator(time, values, max_gap=60)

        assert calculator.best_split(2) == pytest.approx(9.0)
        with pytest.raises(NoEligibleWindowError):
            calculator.best_split(3)

    def test_non_increasing_time_is_skipped(self):
        calculator = SplitCalculator([0, 1, 1, 2], [0, 4, 100, 4])
        assert calculator.best_split(2) == pytest.approx(4.0)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            SplitCalculator([0, 1, 2], [1, 2])


class TestBestSplitMonotonicity:

    @pytest.mark.parametrize("series", [
        [200.0] * 600,
        [400.0] * 60 + [150.0] * 540,
        [300.0] * 120 + [250.0] * 120 + [100.0] * 360,
    ])
    def test_best_split_non_increasing_with_duration(self, series):
        calculator = SplitCalculator(list(range(len(series))), series)
        durations = [1, 5, 30, 60, 120, 300, 599]
        bests = [calculator.best_split(d) for d in durations]

        for shorter, longer in zip(bests, bests[1:]):
            assert longer <= shorter + 1e-9


class TestBestSplitRanges:

    def test_skips_infeasible_durations(self):
        calculator = SplitCalculator(list(range(61)), [100.0] * 61)
        results = calculator.best_split_ranges([1, 30, 60, 61, 3600])

        assert [r.duration for r in results] == [1, 30, 60]
        assert all(r.average == pytest.approx(100.0) for r in results)

    def test_result_type(self):
        calculator = SplitCalculator([0, 1, 2], [0, 5, 5])
        assert calculator.best_split_ranges([2]) == [SplitResult(duration=2, average=5.0)]
