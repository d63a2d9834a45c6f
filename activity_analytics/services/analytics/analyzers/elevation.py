"""
Elevation Analyzer - Altitude, climbing and ascent speed.
"""
import math
from typing import List, Optional

from activity_analytics.models.analysis import AscentSpeedData, ElevationData
from activity_analytics.models.enums import ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.services.analytics.analyzers.base import MetricAnalyzer
from activity_analytics.services.analytics.formulas import (
    ASCENT_SPEED_GRADE_LIMIT,
    MOVING_THRESHOLD_KPH,
    QUARTILES,
    discrete_value_between,
    mean,
    round_half_up,
    safe_divide,
    weighted_percentiles,
)


def _whole(value: Optional[float]) -> Optional[float]:
    return round_half_up(value, 0) if value is not None else None


class ElevationAnalyzer(MetricAnalyzer):
    """
    Elevation analysis on the smoothed altitude channel.

    Ascent speed only counts climbing steps steeper than 1.6% and is left
    out when the stream was cut to bounds.
    """

    metric = "elevation"

    def analyze(self, stream: ActivityStream) -> Optional[ElevationData]:
        distance = stream.distance
        time = stream.time
        velocity = stream.velocity
        altitude = stream.altitude

        if not distance or not time or not velocity or not altitude:
            return None
        if mean(distance) == 0 or mean(velocity) == 0:
            return None

        elevation_zones = self._prepare_zones(ZoneType.ELEVATION)
        ascent_speed_zones = self._prepare_zones(ZoneType.ASCENT)

        accumulated_elevation = 0.0
        accumulated_distance = 0.0
        ascent = 0.0
        descent = 0.0
        elevations: List[float] = []
        elevations_distance: List[float] = []
        ascent_speeds: List[float] = []
        ascent_speeds_distance: List[float] = []

        for i in range(1, len(altitude)):
            if velocity[i] * 3.6 <= MOVING_THRESHOLD_KPH:
                continue

            duration = time[i] - time[i - 1]
            step_distance = distance[i] - distance[i - 1]

            accumulated_elevation += discrete_value_between(altitude[i], altitude[i - 1], step_distance)
            accumulated_distance += step_distance
            elevations.append(altitude[i])
            elevations_distance.append(step_distance)
            elevation_zones.add(altitude[i], duration)

            elevation_diff = altitude[i] - altitude[i - 1]
            if elevation_diff > 0:
                ascent += elevation_diff

                if step_distance > 0 and duration > 0 \
                        and elevation_diff / step_distance * 100 > ASCENT_SPEED_GRADE_LIMIT:
                    # Meters climbed per hour
                    ascent_speed = elevation_diff / duration * 3600
                    ascent_speeds.append(ascent_speed)
                    ascent_speeds_distance.append(step_distance)
                    ascent_speed_zones.add(ascent_speed, duration)
            else:
                descent -= elevation_diff

        if not elevations:
            return None

        lower_elevation, median_elevation, upper_elevation = weighted_percentiles(
            elevations, elevations_distance, QUARTILES
        )

        ascent_speed_data = None
        ascent_speed_zones_result = None
        if not self.context.has_bounds:
            average_ascent_speed = mean(ascent_speeds)
            lower_ascent, median_ascent, upper_ascent = weighted_percentiles(
                ascent_speeds, ascent_speeds_distance, QUARTILES
            )
            ascent_speed_data = AscentSpeedData(
                avg=average_ascent_speed
                if average_ascent_speed is not None and math.isfinite(average_ascent_speed) else -1,
                lower_quartile=_whole(lower_ascent),
                median=_whole(median_ascent),
                upper_quartile=_whole(upper_ascent),
            )
            ascent_speed_zones_result = self._zones_result(ascent_speed_zones)

        return ElevationData(
            avg_elevation=_whole(safe_divide(accumulated_elevation, accumulated_distance)),
            accumulated_elevation_ascent=ascent,
            accumulated_elevation_descent=descent,
            lower_quartile_elevation=_whole(lower_elevation),
            median_elevation=_whole(median_elevation),
            upper_quartile_elevation=_whole(upper_elevation),
            elevation_zones=self._zones_result(elevation_zones),
            ascent_speed_zones=ascent_speed_zones_result,
            ascent_speed=ascent_speed_data,
        )
