"""Unit tests for running power estimation."""
import pytest

from activity_analytics.services.analytics.running_power import (
    FLAT_METABOLIC_COST,
    RunningPowerEstimator,
    minetti_cost_of_running,
)


class TestMinettiCost:

    def test_flat_cost(self):
        assert minetti_cost_of_running(0.0) == pytest.approx(FLAT_METABOLIC_COST)

    def test_uphill_costs_more_than_flat(self):
        assert minetti_cost_of_running(0.1) > minetti_cost_of_running(0.0)

    def test_grade_is_clamped(self):
        assert minetti_cost_of_running(2.0) == minetti_cost_of_running(0.45)


class TestRunningPowerEstimator:

    def test_flat_power(self):
        assert RunningPowerEstimator.estimate_power(70, 3.0, 1.0) == pytest.approx(70 * 3.0 * 1.04)

    def test_uphill_power_is_higher(self):
        flat = RunningPowerEstimator.estimate_power(70, 3.0, 1.0)
        uphill = RunningPowerEstimator.estimate_power(70, 3.0, 1.0, elevation_gain=0.3)
        assert uphill > flat

    def test_stopped_gives_zero(self):
        assert RunningPowerEstimator.estimate_power(70, 0.0, 1.0) == 0.0
        assert RunningPowerEstimator.estimate_power(70, 3.0, 0.0) == 0.0

    def test_stream_has_same_length_and_starts_at_zero(self):
        time = list(range(10))
        distance = [t * 3.0 for t in time]
        watts = RunningPowerEstimator.create_power_stream(70, distance, time, [50.0] * 10)

        assert len(watts) == 10
        assert watts[0] == 0.0
        assert watts[5] == pytest.approx(70 * 3.0 * 1.04)

    def test_missing_weight_raises(self):
        with pytest.raises(ValueError):
            RunningPowerEstimator.create_power_stream(None, [0, 3], [0, 1])

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            RunningPowerEstimator.create_power_stream(70, [0, 3, 6], [0, 1])
