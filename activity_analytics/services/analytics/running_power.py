"""
Running power estimation for runs recorded without a power meter.

Uses Minetti (2002) energy cost of running on a slope, scaled so that flat
ground matches the mechanical cost reported by running power meters.
"""
from typing import List, Optional, Sequence

# Minetti metabolic cost on flat ground (J/kg/m)
FLAT_METABOLIC_COST = 3.6
# Mechanical cost on flat ground as reported by running power meters (J/kg/m)
FLAT_MECHANICAL_COST = 1.04
MAX_ABS_GRADE = 0.45


def minetti_cost_of_running(grade: float) -> float:
    """
    Minetti (2002) energy cost equation.

    Args:
        grade: Slope as decimal (0.05 = 5%)

    Returns:
        Metabolic cost in J/kg/m
    """
    grade = max(-MAX_ABS_GRADE, min(MAX_ABS_GRADE, grade))
    return (155.4 * (grade ** 5) - 30.4 * (grade ** 4) - 43.3 * (grade ** 3)
            + 46.3 * (grade ** 2) + 19.5 * grade + FLAT_METABOLIC_COST)


class RunningPowerEstimator:
    """Builds a synthetic watts stream from distance, time and altitude."""

    @staticmethod
    def estimate_power(
        weight: float,
        meters: float,
        seconds: float,
        elevation_gain: float = 0.0
    ) -> float:
        """
        Estimated power for one sample interval.

        Args:
            weight: Athlete weight in kg
            meters: Distance covered during the interval
            seconds: Interval duration
            elevation_gain: Altitude change during the interval

        Returns:
            Watts, 0 when not moving
        """
        if seconds <= 0 or meters <= 0:
            return 0.0

        speed = meters / seconds
        grade = elevation_gain / meters
        relative_cost = minetti_cost_of_running(grade) / FLAT_METABOLIC_COST
        return max(0.0, weight * speed * FLAT_MECHANICAL_COST * relative_cost)

    @classmethod
    def create_power_stream(
        cls,
        weight: Optional[float],
        distance: Sequence[float],
        time: Sequence[float],
        altitude: Optional[Sequence[float]] = None
    ) -> List[float]:
        """
        Watts stream of the same length as the input streams.

        Raises:
            ValueError: if weight is missing or streams differ in length
        """
        if not weight or weight <= 0:
            raise ValueError("Athlete weight is required to estimate running power")
        if len(distance) != len(time):
            raise ValueError("Distance and time streams differ in length")

        has_altitude = altitude is not None and len(altitude) == len(time)

        watts = [0.0] if time else []
        for i in range(1, len(time)):
            elevation_gain = (altitude[i] - altitude[i - 1]) if has_altitude else 0.0
            watts.append(cls.estimate_power(
                weight,
                distance[i] - distance[i - 1],
                time[i] - time[i - 1],
                elevation_gain,
            ))
        return watts
