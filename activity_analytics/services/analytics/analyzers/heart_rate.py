"""
Heart Rate Analyzer - Training load from heart rate.
"""
from typing import List, Optional

from activity_analytics.models.analysis import HeartRateData
from activity_analytics.models.enums import ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.services.analytics.analyzers.base import MetricAnalyzer
from activity_analytics.services.analytics.formulas import (
    BEST_20_MIN,
    BEST_60_MIN,
    QUARTILES,
    discrete_value_between,
    heart_rate_reserve,
    heart_rate_stress_score,
    mean,
    per_hour,
    resolve_lthr,
    training_impulse,
    trimp_gender_factor,
    weighted_percentiles,
)


class HeartRateAnalyzer(MetricAnalyzer):
    """
    TRIMP, HRSS and heart rate distribution while moving.

    TRIMP uses the mean heart rate of each sample pair; with max_hr equal to
    rest_hr the reserve is inf or nan and the scores propagate it.
    """

    metric = "heart_rate"

    def analyze(self, stream: ActivityStream) -> Optional[HeartRateData]:
        heart_rate = stream.heart_rate
        time = stream.time
        velocity = stream.velocity

        if not heart_rate or not time or mean(heart_rate) == 0:
            return None

        athlete = self.athlete
        gender_factor = trimp_gender_factor(athlete.gender)
        heart_rate_zones = self._prepare_zones(ZoneType.HEART_RATE)

        trimp = 0.0
        moving_seconds = 0.0
        heart_rate_sum = 0.0
        heart_rates_moving: List[float] = []
        heart_rates_moving_duration: List[float] = []

        for i in range(1, len(heart_rate)):
            if not self._is_moving(velocity, i):
                continue

            duration = time[i] - time[i - 1]
            heart_rate_sum += discrete_value_between(heart_rate[i], heart_rate[i - 1], duration)
            moving_seconds += duration

            heart_rates_moving.append(heart_rate[i])
            heart_rates_moving_duration.append(duration)

            pair_average = (heart_rate[i] + heart_rate[i - 1]) / 2
            reserve = heart_rate_reserve(pair_average, athlete.max_hr, athlete.rest_hr)
            trimp += training_impulse(duration / 60, reserve, gender_factor)

            heart_rate_zones.add(heart_rate[i], duration)

        if moving_seconds <= 0:
            return None

        lower_quartile, median, upper_quartile = weighted_percentiles(
            heart_rates_moving, heart_rates_moving_duration, QUARTILES
        )

        lthr = resolve_lthr(self.activity_type, athlete)
        hrss = heart_rate_stress_score(athlete.gender, athlete.max_hr, athlete.rest_hr, lthr, trimp)

        average_heart_rate = heart_rate_sum / moving_seconds
        max_heart_rate = max(heart_rate)

        calculator = self._splits(time, heart_rate)

        return HeartRateData(
            hrss=hrss,
            hrss_per_hour=per_hour(hrss, moving_seconds),
            trimp=trimp,
            trimp_per_hour=per_hour(trimp, moving_seconds),
            best20min=self._best_split(calculator, BEST_20_MIN, "best20min"),
            best60min=self._best_split(calculator, BEST_60_MIN, "best60min"),
            lower_quartile_heart_rate=lower_quartile,
            median_heart_rate=median,
            upper_quartile_heart_rate=upper_quartile,
            average_heart_rate=average_heart_rate,
            max_heart_rate=max_heart_rate,
            activity_heart_rate_reserve=heart_rate_reserve(
                average_heart_rate, athlete.max_hr, athlete.rest_hr
            ) * 100,
            activity_heart_rate_reserve_max=heart_rate_reserve(
                max_heart_rate, athlete.max_hr, athlete.rest_hr
            ) * 100,
            heart_rate_zones=self._zones_result(heart_rate_zones),
        )
