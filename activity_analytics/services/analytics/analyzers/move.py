"""
Move Analyzer - Speed and pace statistics.

Speed metrics:
- Genuine (moving only) and total average speed
- Weighted quartiles, variance, best 20 minutes
- Speed, pace and grade adjusted pace zones
- Running stress score from grade adjusted pace
"""
import math
from typing import List, Optional, Sequence

from activity_analytics.models.analysis import MoveData, PaceData, SpeedData
from activity_analytics.models.enums import ActivityType, ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.services.analytics.analyzers.base import MetricAnalyzer
from activity_analytics.services.analytics.formulas import (
    BEST_20_MIN,
    QUARTILES,
    convert_speed_to_pace,
    discrete_value_between,
    mean,
    moving_speed_threshold,
    per_hour,
    running_stress_score,
    safe_divide,
    weighted_percentiles,
)


def _floor_pace(speed: Optional[float]) -> Optional[float]:
    if speed is None:
        return None
    return math.floor(convert_speed_to_pace(speed))


def _pace(speed: Optional[float]) -> Optional[float]:
    if speed is None:
        return None
    return convert_speed_to_pace(speed)


class MoveAnalyzer(MetricAnalyzer):
    """
    Speed and pace analysis.

    A sample counts as moving when its speed is above the sport threshold
    (cycling 6.48 kph, running 3.6 kph, others 0).
    """

    metric = "speed"

    def analyze(self, stream: ActivityStream) -> Optional[MoveData]:
        velocity = stream.velocity
        time = stream.time

        if not velocity or not time or mean(velocity) == 0:
            return None

        grade_adjusted = self._grade_adjusted_channel(velocity, stream.grade_adjusted_velocity)
        has_grade_adjusted = bool(grade_adjusted)

        speed_zones = self._prepare_zones(ZoneType.SPEED)
        pace_zones = self._prepare_zones(ZoneType.PACE)
        grade_adjusted_pace_zones = self._prepare_zones(ZoneType.GRADE_ADJUSTED_PACE)

        threshold = moving_speed_threshold(self.activity_type)

        genuine_speed_sum = 0.0
        genuine_seconds = 0.0
        elapsed_seconds = 0.0
        speed_variance_sum = 0.0
        speeds_moving: List[float] = []
        speeds_moving_duration: List[float] = []
        grade_adjusted_speeds: List[float] = []

        for i in range(1, len(velocity)):
            duration = time[i] - time[i - 1]
            elapsed_seconds += duration
            current_speed = velocity[i] * 3.6

            if current_speed > threshold:
                speeds_moving.append(current_speed)
                speeds_moving_duration.append(duration)
                speed_variance_sum += current_speed ** 2

                genuine_speed_sum += discrete_value_between(current_speed, velocity[i - 1] * 3.6, duration)
                genuine_seconds += duration

                speed_zones.add(current_speed, duration)
                pace = convert_speed_to_pace(current_speed)
                pace_zones.add(0 if pace == -1 else pace, duration)

            if has_grade_adjusted and grade_adjusted[i] > 0:
                grade_adjusted_speed = grade_adjusted[i] * 3.6
                grade_adjusted_speeds.append(grade_adjusted_speed)
                grade_adjusted_pace = convert_speed_to_pace(grade_adjusted_speed)
                grade_adjusted_pace_zones.add(0 if grade_adjusted_pace == -1 else grade_adjusted_pace, duration)

        if genuine_seconds <= 0:
            return None

        genuine_avg_speed = genuine_speed_sum / genuine_seconds
        variance_speed = (speed_variance_sum / len(speeds_moving)) - genuine_avg_speed ** 2
        standard_deviation_speed = math.sqrt(variance_speed) if variance_speed > 0 else 0.0
        lower_quartile, median, upper_quartile = weighted_percentiles(
            speeds_moving, speeds_moving_duration, QUARTILES
        )

        best20min = self._best_split(self._splits(time, velocity), BEST_20_MIN, "best20min")
        if best20min is not None:
            best20min *= 3.6

        genuine_grade_adjusted_avg_speed = mean(grade_adjusted_speeds)
        genuine_grade_adjusted_avg_pace = (
            _floor_pace(genuine_grade_adjusted_avg_speed)
            if has_grade_adjusted and genuine_grade_adjusted_avg_speed else None
        )

        speed_data = SpeedData(
            genuine_avg_speed=genuine_avg_speed,
            total_avg_speed=safe_divide(genuine_avg_speed * genuine_seconds, elapsed_seconds),
            best20min=best20min,
            avg_pace=_floor_pace(genuine_avg_speed),
            lower_quartile_speed=lower_quartile,
            median_speed=median,
            upper_quartile_speed=upper_quartile,
            variance_speed=variance_speed,
            genuine_grade_adjusted_avg_speed=genuine_grade_adjusted_avg_speed,
            standard_deviation_speed=standard_deviation_speed,
            speed_zones=self._zones_result(speed_zones),
        )

        stress_score = self._running_stress_score(genuine_seconds, genuine_grade_adjusted_avg_pace)
        grade_adjusted_pace_result = self._zones_result(grade_adjusted_pace_zones)

        pace_data = PaceData(
            avg_pace=_floor_pace(genuine_avg_speed),
            best20min=_floor_pace(best20min) if best20min else None,
            lower_quartile_pace=_pace(lower_quartile),
            median_pace=_pace(median),
            upper_quartile_pace=_pace(upper_quartile),
            variance_pace=convert_speed_to_pace(variance_speed),
            genuine_grade_adjusted_avg_pace=genuine_grade_adjusted_avg_pace,
            pace_zones=self._zones_result(pace_zones),
            grade_adjusted_pace_zones=grade_adjusted_pace_result if has_grade_adjusted else None,
            running_stress_score=stress_score,
            running_stress_score_per_hour=per_hour(stress_score, genuine_seconds),
        )

        return MoveData(moving_time=genuine_seconds, speed=speed_data, pace=pace_data)

    def estimate(self, moving_time: Optional[float], distance: Optional[float]) -> Optional[MoveData]:
        """
        Move data from summary totals when no stream exists (manual entries).

        Args:
            moving_time: Moving time in seconds
            distance: Distance in meters

        Returns:
            MoveData with averages only, or None without totals
        """
        if not moving_time or not distance:
            return None

        average_speed = distance / moving_time * 3.6
        average_pace = convert_speed_to_pace(average_speed)

        speed_data = SpeedData(
            genuine_avg_speed=average_speed,
            total_avg_speed=average_speed,
            best20min=None,
            avg_pace=average_pace,
            lower_quartile_speed=None,
            median_speed=None,
            upper_quartile_speed=None,
            variance_speed=0,
            genuine_grade_adjusted_avg_speed=average_speed,
            standard_deviation_speed=0,
        )

        stress_score = None
        if self.activity_type == ActivityType.RUN:
            stress_score = self._running_stress_score(moving_time, average_pace)

        pace_data = PaceData(
            avg_pace=average_pace,
            best20min=None,
            lower_quartile_pace=None,
            median_pace=None,
            upper_quartile_pace=None,
            variance_pace=0,
            genuine_grade_adjusted_avg_pace=average_pace,
            running_stress_score=stress_score,
            running_stress_score_per_hour=per_hour(stress_score, moving_time),
        )

        return MoveData(moving_time=moving_time, speed=speed_data, pace=pace_data)

    # ========================================
    # Move-specific helpers
    # ========================================

    def _grade_adjusted_channel(
        self,
        velocity: Sequence[float],
        grade_adjusted: Optional[Sequence[float]]
    ) -> Optional[Sequence[float]]:
        """
        Grade adjusted speed channel to use.

        Treadmill runs report an all zero channel; velocity stands in for it
        since a treadmill has no elevation effect.
        """
        if (self.context.is_trainer
                and self.activity_type == ActivityType.RUN
                and grade_adjusted
                and mean(grade_adjusted) == 0):
            return velocity
        return grade_adjusted

    def _running_stress_score(
        self,
        moving_time: float,
        grade_adjusted_pace: Optional[float]
    ) -> Optional[float]:
        running_ftp = self.athlete.running_ftp
        if not self.activity_type.is_running or not grade_adjusted_pace or grade_adjusted_pace <= 0 \
                or not running_ftp:
            return None
        return running_stress_score(moving_time, grade_adjusted_pace, running_ftp)
