"""
Grade Analyzer - Terrain breakdown into climbing, flat and downhill.
"""
import math
from typing import List, Optional

from activity_analytics.models.analysis import GradeData, UpFlatDown, UpFlatDownTotal
from activity_analytics.models.enums import GradeProfile, ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.services.analytics.analyzers.base import MetricAnalyzer
from activity_analytics.services.analytics.formulas import (
    CADENCE_THRESHOLD_RPM,
    GRADE_CLIMBING_LIMIT,
    GRADE_DOWNHILL_LIMIT,
    GRADE_PROFILE_FLAT_PERCENTAGE_DETECTED,
    MIN_MAX_GRADE_SAMPLE_PERCENTAGE,
    QUARTILES,
    discrete_value_between,
    mean,
    safe_divide,
    weighted_percentiles,
)

UP = "up"
FLAT = "flat"
DOWN = "down"


def _terrain(grade: float) -> str:
    if grade > GRADE_CLIMBING_LIMIT:
        return UP
    if grade < GRADE_DOWNHILL_LIMIT:
        return DOWN
    return FLAT


def _speed_kph(meters: float, seconds: float) -> Optional[float]:
    speed = safe_divide(meters, seconds)
    return speed * 3.6 if speed is not None else None


class GradeAnalyzer(MetricAnalyzer):
    """
    Grade analysis while moving.

    Grades above 1.6% are climbing, below -1.6% downhill, flat otherwise.
    Trainer activities have no meaningful grade and yield None.
    """

    metric = "grade"

    def analyze(self, stream: ActivityStream) -> Optional[GradeData]:
        grade = stream.grade
        velocity = stream.velocity
        time = stream.time
        distance = stream.distance
        cadence = stream.cadence

        if not grade or not velocity or not time or not distance or mean(velocity) == 0:
            return None

        if self.context.is_trainer:
            return None

        has_cadence = bool(cadence)
        grade_zones = self._prepare_zones(ZoneType.GRADE)

        seconds = {UP: 0.0, FLAT: 0.0, DOWN: 0.0}
        meters = {UP: 0.0, FLAT: 0.0, DOWN: 0.0}
        cadence_sum = {UP: 0.0, FLAT: 0.0, DOWN: 0.0}
        cadence_count = {UP: 0, FLAT: 0, DOWN: 0}

        grade_sum = 0.0
        grade_distance = 0.0
        total_seconds = 0.0
        grades_moving: List[float] = []
        grades_moving_distance: List[float] = []

        for i in range(1, len(grade)):
            if velocity[i] <= 0:
                continue

            duration = time[i] - time[i - 1]
            step_distance = distance[i] - distance[i - 1]

            grade_sum += discrete_value_between(grade[i], grade[i - 1], step_distance)
            grade_distance += step_distance
            grades_moving.append(grade[i])
            grades_moving_distance.append(step_distance)
            grade_zones.add(grade[i], duration)
            total_seconds += duration

            terrain = _terrain(grade[i])
            seconds[terrain] += duration
            meters[terrain] += step_distance

            if has_cadence and cadence[i] > CADENCE_THRESHOLD_RPM:
                cadence_sum[terrain] += cadence[i]
                cadence_count[terrain] += 1

        flat_percentage = safe_divide(seconds[FLAT], total_seconds)
        if flat_percentage is not None and flat_percentage * 100 >= GRADE_PROFILE_FLAT_PERCENTAGE_DETECTED:
            grade_profile = GradeProfile.FLAT
        else:
            grade_profile = GradeProfile.HILLY

        lower_quartile, median, upper_quartile = weighted_percentiles(
            grades_moving, grades_moving_distance, QUARTILES
        )
        avg_min_grade, avg_max_grade = self._grade_extremes(grade)

        cadence_pace_data = None
        if has_cadence:
            cadence_pace_data = UpFlatDown(
                up=safe_divide(cadence_sum[UP], cadence_count[UP]),
                flat=safe_divide(cadence_sum[FLAT], cadence_count[FLAT]),
                down=safe_divide(cadence_sum[DOWN], cadence_count[DOWN]),
            )

        return GradeData(
            avg_grade=safe_divide(grade_sum, grade_distance),
            avg_max_grade=avg_max_grade,
            avg_min_grade=avg_min_grade,
            lower_quartile_grade=lower_quartile,
            median_grade=median,
            upper_quartile_grade=upper_quartile,
            up_flat_down_in_seconds=UpFlatDownTotal(
                up=seconds[UP], flat=seconds[FLAT], down=seconds[DOWN], total=total_seconds
            ),
            up_flat_down_move_data=UpFlatDown(
                up=_speed_kph(meters[UP], seconds[UP]),
                flat=_speed_kph(meters[FLAT], seconds[FLAT]),
                down=_speed_kph(meters[DOWN], seconds[DOWN]),
            ),
            up_flat_down_distance_data=UpFlatDown(
                up=meters[UP] / 1000,
                flat=meters[FLAT] / 1000,
                down=meters[DOWN] / 1000,
            ),
            grade_profile=grade_profile,
            up_flat_down_cadence_pace_data=cadence_pace_data,
            grade_zones=self._zones_result(grade_zones),
        )

    @staticmethod
    def _grade_extremes(grade: List[float]):
        """
        Mean of the lowest and highest 0.25% of grade samples.

        Short streams fall back to the single min and max.
        """
        sorted_grade = sorted(grade)
        count = math.floor(len(sorted_grade) * MIN_MAX_GRADE_SAMPLE_PERCENTAGE / 100)
        if count >= 1:
            return mean(sorted_grade[:count]), mean(sorted_grade[-count:])
        return sorted_grade[0], sorted_grade[-1]
