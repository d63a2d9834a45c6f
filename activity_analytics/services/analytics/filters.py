"""
Noise filters applied to the altitude channel before analysis.
"""
from typing import List, Optional, Sequence

from activity_analytics.core.config import settings


class KalmanFilter:
    """
    Single variable Kalman filter (constant state model).

    Keeps one estimate and its covariance, updated per input sample.
    """

    def __init__(
        self,
        process_noise: float = 1.0,
        measurement_noise: float = 1.0
    ):
        self.process_noise = process_noise
        self.measurement_noise = measurement_noise
        self.estimate: Optional[float] = None
        self.covariance: float = 0.0

    def filter(self, measurement: float) -> float:
        """Feed one measurement and return the filtered estimate."""
        if self.estimate is None:
            self.estimate = measurement
            self.covariance = self.measurement_noise
            return self.estimate

        # Predict
        predicted_covariance = self.covariance + self.process_noise

        # Correct
        gain = predicted_covariance / (predicted_covariance + self.measurement_noise)
        self.estimate = self.estimate + gain * (measurement - self.estimate)
        self.covariance = predicted_covariance - gain * predicted_covariance

        return self.estimate

    def smooth(self, values: Sequence[float]) -> List[float]:
        if not values:
            raise ValueError("Cannot filter an empty sequence")
        return [self.filter(value) for value in values]


class LowPassFilter:
    """Single pole low pass filter."""

    def __init__(self, smoothing: float):
        if not 0 < smoothing < 1:
            raise ValueError(f"Smoothing factor must be in (0, 1), got {smoothing}")
        self.smoothing = smoothing

    def smooth(self, values: Sequence[float]) -> List[float]:
        if not values:
            raise ValueError("Cannot filter an empty sequence")

        smoothed = [values[0]]
        for value in values[1:]:
            previous = smoothed[-1]
            smoothed.append(previous + self.smoothing * (value - previous))
        return smoothed


def smooth_altitude(altitudes: Sequence[float]) -> List[float]:
    """Kalman filter then low pass an altitude channel, returning a new list."""
    kalman = KalmanFilter(
        process_noise=settings.ALTITUDE_KALMAN_PROCESS_NOISE,
        measurement_noise=settings.ALTITUDE_KALMAN_MEASUREMENT_NOISE,
    )
    low_pass = LowPassFilter(settings.ALTITUDE_LOW_PASS_SMOOTHING)
    return low_pass.smooth(kalman.smooth(altitudes))
