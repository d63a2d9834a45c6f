"""Unit tests for the stateless formulas shared by the analyzers."""
import math

import pytest

from activity_analytics.models import (
    ActivityAnalysis,
    ActivityStream,
    ActivityType,
    AthleteProfile,
    Gender,
    HeartRateData,
    LactateThreshold,
)
from activity_analytics.services.analytics.formulas import (
    CYCLING_MOVING_THRESHOLD_KPH,
    RUNNING_MOVING_THRESHOLD_KPH,
    convert_pace_to_speed,
    convert_speed_to_pace,
    discrete_value_between,
    has_athlete_settings_lacks,
    heart_rate_reserve,
    heart_rate_stress_score,
    moving_speed_threshold,
    per_hour,
    power_curve_durations,
    power_stress_score,
    resolve_lthr,
    running_performance_index,
    running_stress_score,
    safe_divide,
    training_impulse,
    trimp_gender_factor,
    weighted_percentiles,
)


# ===========================================================================
# WEIGHTED PERCENTILES
# ===========================================================================

class TestWeightedPercentiles:

    @pytest.mark.parametrize("values,weights", [
        ([5.0, 1.0, 3.0], [1.0, 1.0, 1.0]),
        ([10.0, 20.0, 30.0, 40.0], [4.0, 0.5, 0.5, 2.0]),
        ([7.0], [3.0]),
        ([2.0, 2.0, 9.0, -1.0], [1.0, 2.0, 3.0, 4.0]),
    ])
    def test_zero_and_one_give_min_and_max(self, values, weights):
        low, high = weighted_percentiles(values, weights, [0, 1])
        assert low == min(values)
        assert high == max(values)

    def test_median_of_two_equal_weights_is_between(self):
        (median,) = weighted_percentiles([10.0, 20.0], [1.0, 1.0], [0.5])
        assert 10.0 <= median <= 20.0

    def test_quartiles(self):
        values = [1.0, 2.0, 3.0, 4.0]
        assert weighted_percentiles(values, [1.0] * 4, [0.25, 0.5, 0.75]) == [1.0, 2.0, 3.0]

    def test_weights_shift_the_median(self):
        (median,) = weighted_percentiles([1.0, 100.0], [1.0, 9.0], [0.5])
        assert median == 100.0

    def test_unsorted_percentile_request_keeps_order(self):
        assert weighted_percentiles([1.0, 2.0, 3.0, 4.0], [1.0] * 4, [0.75, 0.25]) == [3.0, 1.0]

    def test_empty_input_gives_none(self):
        assert weighted_percentiles([], [], [0.25, 0.5, 0.75]) == [None, None, None]


# ===========================================================================
# CONVERSIONS
# ===========================================================================

class TestConversions:

    @pytest.mark.parametrize("speed", [0.5, 8.0, 20.0, 43.7])
    def test_pace_round_trip(self, speed):
        assert convert_pace_to_speed(convert_speed_to_pace(speed)) == pytest.approx(speed)

    def test_pace_of_20_kph(self):
        assert convert_speed_to_pace(20.0) == pytest.approx(180.0)

    @pytest.mark.parametrize("speed", [0, -3.0, math.inf, math.nan, None])
    def test_invalid_speed_gives_marker(self, speed):
        assert convert_speed_to_pace(speed) == -1

    def test_marker_pace_gives_no_speed(self):
        assert convert_pace_to_speed(-1) is None

    def test_discrete_value_between_is_trapezoid(self):
        assert discrete_value_between(10.0, 20.0, 2.0) == pytest.approx(30.0)

    def test_safe_divide(self):
        assert safe_divide(10, 4) == 2.5
        assert safe_divide(10, 0) is None
        assert safe_divide(None, 4) is None


# ===========================================================================
# HEART RATE LOAD
# ===========================================================================

class TestHeartRateLoad:

    def test_heart_rate_reserve(self):
        assert heart_rate_reserve(125, 190, 60) == pytest.approx(0.5)

    def test_degenerate_reserve_does_not_raise(self):
        """max_hr == rest_hr propagates inf/nan instead of raising."""
        assert heart_rate_reserve(150, 60, 60) == math.inf
        assert heart_rate_reserve(50, 60, 60) == -math.inf
        assert math.isnan(heart_rate_reserve(60, 60, 60))

    def test_degenerate_stress_score_is_nan(self):
        trimp = training_impulse(60, heart_rate_reserve(150, 60, 60), trimp_gender_factor(Gender.MEN))
        hrss = heart_rate_stress_score(Gender.MEN, 60, 60, 60, trimp)

        assert trimp == math.inf
        assert math.isnan(hrss)

    def test_gender_factor(self):
        assert trimp_gender_factor(Gender.MEN) == 1.92
        assert trimp_gender_factor(Gender.WOMEN) == 1.67

    def test_one_hour_at_threshold_scores_100(self):
        reserve = heart_rate_reserve(170, 190, 60)
        trimp = training_impulse(60, reserve, trimp_gender_factor(Gender.WOMEN))
        assert heart_rate_stress_score(Gender.WOMEN, 190, 60, 170, trimp) == pytest.approx(100.0)


class TestResolveLthr:

    def test_cycling_override(self):
        athlete = AthleteProfile(lthr=LactateThreshold(default=160, cycling=165, running=170))
        assert resolve_lthr(ActivityType.RIDE, athlete) == 165
        assert resolve_lthr(ActivityType.VIRTUAL_RIDE, athlete) == 165

    def test_running_override_only_for_run(self):
        athlete = AthleteProfile(lthr=LactateThreshold(default=160, running=170))
        assert resolve_lthr(ActivityType.RUN, athlete) == 170
        assert resolve_lthr(ActivityType.VIRTUAL_RUN, athlete) == 160

    def test_default_override(self):
        athlete = AthleteProfile(lthr=LactateThreshold(default=158))
        assert resolve_lthr(ActivityType.SWIM, athlete) == 158

    def test_karvonen_fallback(self):
        athlete = AthleteProfile(max_hr=190, rest_hr=60)
        assert resolve_lthr(ActivityType.RIDE, athlete) == pytest.approx(60 + 0.85 * 130)


# ===========================================================================
# STRESS SCORES
# ===========================================================================

class TestStressScores:

    def test_power_stress_score_one_hour_at_ftp(self):
        assert power_stress_score(3600, 200, 200) == pytest.approx(100.0)

    @pytest.mark.parametrize("ftp", [None, 0, -10])
    def test_power_stress_score_without_ftp(self, ftp):
        assert power_stress_score(3600, 200, ftp) is None

    def test_running_stress_score(self):
        """One hour at 6:00/km with a 5:00/km threshold: IF^2 * 100."""
        assert running_stress_score(3600, 360, 300) == pytest.approx((300 / 360) ** 2 * 100)

    def test_per_hour(self):
        assert per_hour(50, 1800) == pytest.approx(100.0)
        assert per_hour(50, 0) is None
        assert per_hour(None, 1800) is None


class TestRunningPerformanceIndex:

    def test_flat_run(self):
        value = running_performance_index(190, 10000, 3000, 0, 0, 160)
        intensity = 0.92
        expected = (213.9 / 50 * (10 ** 1.06) + 3.5) / intensity
        assert value == pytest.approx(expected)

    def test_climbing_increases_index(self):
        flat = running_performance_index(190, 10000, 3000, 0, 0, 160)
        hilly = running_performance_index(190, 10000, 3000, 200, 0, 160)
        assert hilly > flat

    def test_non_positive_intensity_gives_none(self):
        assert running_performance_index(190, 10000, 3000, 0, 0, 20) is None

    def test_missing_moving_time_gives_none(self):
        assert running_performance_index(190, 10000, 0, 0, 0, 160) is None


# ===========================================================================
# MISC
# ===========================================================================

class TestPowerCurveDurations:

    def test_capped_and_closed_by_max_time(self):
        assert power_curve_durations(45) == list(range(1, 30)) + [30, 35, 40, 45]

    def test_long_activity_includes_five_minutes(self):
        assert 300 in power_curve_durations(4 * 3600)


class TestMovingSpeedThreshold:

    def test_thresholds_by_family(self):
        assert moving_speed_threshold(ActivityType.EBIKE_RIDE) == CYCLING_MOVING_THRESHOLD_KPH
        assert moving_speed_threshold(ActivityType.VIRTUAL_RUN) == RUNNING_MOVING_THRESHOLD_KPH
        assert moving_speed_threshold(ActivityType.HIKE) == 0.0


def _heart_rate_data(trimp: float, hrss: float) -> HeartRateData:
    return HeartRateData(
        hrss=hrss, hrss_per_hour=None, trimp=trimp, trimp_per_hour=None,
        best20min=None, best60min=None,
        lower_quartile_heart_rate=None, median_heart_rate=None, upper_quartile_heart_rate=None,
        average_heart_rate=150, max_heart_rate=160,
        activity_heart_rate_reserve=60, activity_heart_rate_reserve_max=70,
    )


class TestHasAthleteSettingsLacks:

    def test_ride_with_power_without_ftp(self):
        stream = ActivityStream(time=[0, 1], power=[100, 200])
        lacks = has_athlete_settings_lacks(
            20000, 3600, 3700, ActivityType.RIDE, None, AthleteProfile(), stream
        )
        assert lacks is True

    def test_ride_with_ftp(self):
        stream = ActivityStream(time=[0, 1], power=[100, 200])
        lacks = has_athlete_settings_lacks(
            20000, 3600, 3700, ActivityType.RIDE, None, AthleteProfile(cycling_ftp=250), stream
        )
        assert lacks is False

    def test_heart_rate_stress_score_makes_ftp_optional(self):
        stream = ActivityStream(time=[0, 1], power=[100, 200])
        analysis = ActivityAnalysis(heart_rate_data=_heart_rate_data(trimp=80, hrss=90))
        lacks = has_athlete_settings_lacks(
            20000, 3600, 3700, ActivityType.RIDE, analysis, AthleteProfile(), stream
        )
        assert lacks is False

    def test_run_with_grade_adjusted_speed_without_threshold_pace(self):
        stream = ActivityStream(time=[0, 1], grade_adjusted_velocity=[3.0, 3.0])
        lacks = has_athlete_settings_lacks(
            10000, 3000, 3100, ActivityType.RUN, None, AthleteProfile(), stream
        )
        assert lacks is True

    def test_swim_without_swim_ftp(self):
        lacks = has_athlete_settings_lacks(
            2000, 2400, 2600, ActivityType.SWIM, None, AthleteProfile(), None
        )
        assert lacks is True

    def test_other_sports_never_lack(self):
        lacks = has_athlete_settings_lacks(
            5000, 3600, 3600, ActivityType.WALK, None, AthleteProfile(), None
        )
        assert lacks is False
