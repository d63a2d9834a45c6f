"""
Power Analyzer - Cycling and running power statistics.

Power metrics:
- Average and weighted (normalized) power
- Variability index, intensity, watts per kg
- Power stress score
- Best 20 minutes, best 80% of the activity, power curve
"""
import math
from typing import List, Optional, Sequence, Tuple

from activity_analytics.core.config import settings
from activity_analytics.models.analysis import PowerBestSplit, PowerData
from activity_analytics.models.enums import ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.services.analytics.analyzers.base import MetricAnalyzer
from activity_analytics.services.analytics.formulas import (
    BEST_20_MIN,
    BEST_EIGHTY_PERCENT_RATIO,
    MOVING_THRESHOLD_KPH,
    QUARTILES,
    discrete_value_between,
    mean,
    per_hour,
    power_curve_durations,
    power_stress_score,
    safe_divide,
    weighted_percentiles,
)
from activity_analytics.services.analytics.splits import SplitCalculator


class PowerAnalyzer(MetricAnalyzer):
    """
    Power analysis over a measured or estimated watts stream.

    Samples without a speed value are skipped when a speed stream exists,
    except on trainers.
    """

    metric = "power"

    def analyze(
        self,
        stream: ActivityStream,
        has_power_meter: bool = True,
        is_estimated_running_power: bool = False
    ) -> Optional[PowerData]:
        power = stream.power
        time = stream.time
        velocity = stream.velocity

        if not power or not time or mean(power) == 0:
            return None

        power_zones = self._prepare_zones(self._power_zone_type())
        window_seconds = settings.AVG_POWER_WINDOW_SECONDS
        has_no_speed_stream = not velocity

        watts_on_move: List[float] = []
        watts_on_move_duration: List[float] = []
        total_moving_seconds = 0.0

        rolling_window_size = 0.0
        rolling_index = 0
        rolling_sum = power[0]
        sum_4th_power = 0.0
        rolling_terms = 0

        for i in range(1, len(power)):
            if not (self.context.is_trainer or has_no_speed_stream or velocity[i] is not None):
                continue

            duration = time[i] - time[i - 1]

            rolling_sum += power[i]
            rolling_window_size += duration
            sum_4th_power += (rolling_sum / (i - rolling_index + 1)) ** 4
            rolling_terms += 1

            # Drop leading samples until the window spans less than its size
            while rolling_window_size >= window_seconds and rolling_index < i:
                rolling_sum -= power[rolling_index]
                rolling_window_size -= time[rolling_index + 1] - time[rolling_index]
                rolling_index += 1

            if has_no_speed_stream or self.context.is_trainer or velocity[i] * 3.6 > MOVING_THRESHOLD_KPH:
                total_moving_seconds += duration

            watts_on_move.append(power[i])
            watts_on_move_duration.append(duration)
            power_zones.add(power[i], duration)

        if rolling_terms == 0:
            return None

        avg_watts = mean(power)
        weighted_power = math.sqrt(math.sqrt(sum_4th_power / rolling_terms))

        ftp = self.athlete.cycling_ftp
        weight = self.athlete.weight
        intensity = weighted_power / ftp if ftp and ftp > 0 else None

        lower_quartile, median, upper_quartile = weighted_percentiles(
            watts_on_move, watts_on_move_duration, QUARTILES
        )

        best20min, best_eighty_percent, power_curve = self.best_power_splits(time, power)

        stress_score = power_stress_score(total_moving_seconds, weighted_power, ftp)

        return PowerData(
            has_power_meter=has_power_meter,
            avg_watts=avg_watts,
            avg_watts_per_kg=safe_divide(avg_watts, weight),
            weighted_power=weighted_power,
            best20min=best20min,
            best_eighty_percent=best_eighty_percent,
            variability_index=weighted_power / avg_watts,
            intensity=intensity,
            power_stress_score=stress_score,
            power_stress_score_per_hour=per_hour(stress_score, total_moving_seconds),
            weighted_watts_per_kg=safe_divide(weighted_power, weight),
            lower_quartile_watts=lower_quartile,
            median_watts=median,
            upper_quartile_watts=upper_quartile,
            power_zones=self._zones_result(power_zones),
            power_curve=power_curve,
            is_estimated_running_power=is_estimated_running_power,
        )

    def best_power_splits(
        self,
        time: Sequence[float],
        power: Sequence[float]
    ) -> Tuple[Optional[float], Optional[float], Tuple[PowerBestSplit, ...]]:
        """
        Best 20 minutes, best 80% of the activity and the power curve.

        Window lengths are measured on elapsed time, so streams cut to bounds
        or starting at a non-zero timestamp get the same splits. The curve is
        only computed when requested by the context.

        Returns:
            (best20min, best_eighty_percent, power_curve)
        """
        calculator: SplitCalculator = self._splits(time, power)
        elapsed = time[-1] - time[0]

        best_eighty_percent = self._best_split(
            calculator, math.floor(elapsed * BEST_EIGHTY_PERCENT_RATIO), "best_eighty_percent"
        )
        best20min = self._best_split(calculator, BEST_20_MIN, "best20min")

        power_curve: Tuple[PowerBestSplit, ...] = ()
        if self.context.return_power_curve:
            durations = power_curve_durations(elapsed)
            power_curve = tuple(
                PowerBestSplit(time=split.duration, watts=split.average)
                for split in calculator.best_split_ranges(durations)
            )

        return best20min, best_eighty_percent, power_curve

    def _power_zone_type(self) -> Optional[ZoneType]:
        if self.activity_type.is_cycling:
            return ZoneType.POWER
        if self.activity_type.is_running:
            return ZoneType.RUNNING_POWER
        return None
