"""
Cadence Analyzer - Pedaling and stride statistics for rides and runs.
"""
import math
from typing import List, Optional

from activity_analytics.models.analysis import CadenceData
from activity_analytics.models.enums import ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.services.analytics.analyzers.base import MetricAnalyzer
from activity_analytics.services.analytics.formulas import (
    CADENCE_THRESHOLD_RPM,
    QUARTILES,
    discrete_value_between,
    mean,
    safe_divide,
    weighted_percentiles,
)


class CadenceAnalyzer(MetricAnalyzer):
    """
    Cadence analysis.

    An occurrence is one crank revolution when cycling, one stride when
    running. Cadence above 35 rpm counts as active.
    """

    metric = "cadence"

    def analyze(self, stream: ActivityStream) -> Optional[CadenceData]:
        cadence = stream.cadence
        time = stream.time
        velocity = stream.velocity
        distance = stream.distance

        if not cadence or not time or mean(cadence) == 0:
            return None

        zone_type = self._cadence_zone_type()
        if zone_type is None:
            return None

        is_running = self.activity_type.is_running
        has_distance = bool(distance)
        cadence_zones = self._prepare_zones(zone_type)

        total_occurrences = 0.0
        moving_sample_count = 0
        active_sample_count = 0
        active_cadence_sum = 0.0
        active_seconds = 0.0
        active_variance_sum = 0.0
        cadences_active: List[float] = []
        cadences_active_duration: List[float] = []
        distances_per_occurrence: List[float] = []
        distances_per_occurrence_duration: List[float] = []

        for i in range(1, len(cadence)):
            duration = time[i] - time[i - 1]

            # Cadence is per minute
            occurrences = discrete_value_between(cadence[i], cadence[i - 1], duration / 60)
            total_occurrences += occurrences

            if not self._is_moving(velocity, i):
                continue

            moving_sample_count += 1

            if cadence[i] > CADENCE_THRESHOLD_RPM:
                active_sample_count += 1
                active_cadence_sum += discrete_value_between(cadence[i], cadence[i - 1], duration)
                active_seconds += duration
                active_variance_sum += cadence[i] ** 2
                cadences_active.append(cadence[i])
                cadences_active_duration.append(duration)

                if has_distance:
                    meters = distance[i] - distance[i - 1]
                    # A running stride counts both legs
                    occurrence_distance = safe_divide(meters, occurrences * 2 if is_running else occurrences)
                    if occurrence_distance is not None:
                        distances_per_occurrence.append(occurrence_distance)
                        distances_per_occurrence_duration.append(duration)

            cadence_zones.add(cadence[i], duration)

        average_cadence = safe_divide(active_cadence_sum, active_seconds)
        variance = safe_divide(active_variance_sum, active_sample_count)
        standard_deviation = 0.0
        if variance is not None and average_cadence is not None and variance - average_cadence ** 2 > 0:
            standard_deviation = math.sqrt(variance - average_cadence ** 2)

        lower_cadence, median_cadence, upper_cadence = weighted_percentiles(
            cadences_active, cadences_active_duration, QUARTILES
        )
        lower_distance, median_distance, upper_distance = weighted_percentiles(
            distances_per_occurrence, distances_per_occurrence_duration, QUARTILES
        )

        cadence_ratio = safe_divide(active_sample_count, moving_sample_count)

        return CadenceData(
            cadence_percentage_moving=cadence_ratio * 100 if cadence_ratio is not None else None,
            cadence_time_moving=active_seconds,
            average_cadence_moving=average_cadence,
            standard_deviation_cadence=round(standard_deviation, 1),
            total_occurrences=total_occurrences,
            lower_quartile_cadence=lower_cadence,
            median_cadence=median_cadence,
            upper_quartile_cadence=upper_cadence,
            average_distance_per_occurrence=mean(distances_per_occurrence),
            lower_quartile_distance_per_occurrence=lower_distance,
            median_distance_per_occurrence=median_distance,
            upper_quartile_distance_per_occurrence=upper_distance,
            cadence_zones=self._zones_result(cadence_zones),
        )

    def _cadence_zone_type(self) -> Optional[ZoneType]:
        if self.activity_type.is_cycling:
            return ZoneType.CYCLING_CADENCE
        if self.activity_type.is_running:
            return ZoneType.RUNNING_CADENCE
        return None
