"""Synthetic activity streams for engine tests.

Every generator samples at 1 Hz starting at t=0 and is deterministic.
Distance is cumulative meters, velocity m/s, grade %.
"""
from typing import Any, Dict, List, Optional

from activity_analytics.models import ActivityStream


def make_ride_stream(
    duration_s: int = 3600,
    speed_kph: float = 20.0,
    watts: Optional[float] = 200.0,
    heart_rate: Optional[float] = 150.0,
    cadence: Optional[float] = 90.0,
    altitude_m: float = 100.0,
) -> ActivityStream:
    """Flat ride at constant speed, power, heart rate and cadence."""
    speed_m_s = speed_kph / 3.6
    time = list(range(duration_s))

    return ActivityStream(
        time=time,
        distance=[t * speed_m_s for t in time],
        velocity=[speed_m_s] * duration_s,
        heart_rate=[heart_rate] * duration_s if heart_rate is not None else None,
        power=[watts] * duration_s if watts is not None else None,
        cadence=[cadence] * duration_s if cadence is not None else None,
        grade=[0.0] * duration_s,
        altitude=[altitude_m] * duration_s,
    )


def make_hill_ride_stream(
    climb_s: int = 1200,
    descent_s: int = 600,
    speed_kph: float = 18.0,
    grade_pct: float = 5.0,
    start_altitude_m: float = 200.0,
) -> ActivityStream:
    """Steady climb followed by a descent on the same slope."""
    speed_m_s = speed_kph / 3.6
    duration_s = climb_s + descent_s
    time = list(range(duration_s))

    altitude: List[float] = []
    grade: List[float] = []
    current = start_altitude_m
    for t in time:
        slope = grade_pct if t < climb_s else -grade_pct
        if t > 0:
            current += speed_m_s * slope / 100
        altitude.append(current)
        grade.append(slope)

    return ActivityStream(
        time=time,
        distance=[t * speed_m_s for t in time],
        velocity=[speed_m_s] * duration_s,
        heart_rate=[155.0] * duration_s,
        power=[220.0] * duration_s,
        cadence=[85.0] * duration_s,
        grade=grade,
        altitude=altitude,
    )


def make_run_stream(
    duration_s: int = 3600,
    speed_m_s: float = 3.0,
    heart_rate: Optional[float] = 150.0,
    cadence_spm: Optional[float] = 85.0,
    grade_adjusted: bool = True,
    altitude_m: float = 50.0,
) -> ActivityStream:
    """Flat run at constant speed without a power meter."""
    time = list(range(duration_s))

    return ActivityStream(
        time=time,
        distance=[t * speed_m_s for t in time],
        velocity=[speed_m_s] * duration_s,
        grade_adjusted_velocity=[speed_m_s] * duration_s if grade_adjusted else None,
        heart_rate=[heart_rate] * duration_s if heart_rate is not None else None,
        cadence=[cadence_spm] * duration_s if cadence_spm is not None else None,
        grade=[0.0] * duration_s,
        altitude=[altitude_m] * duration_s,
    )


def make_strava_payload(duration_s: int = 600, wrap_data: bool = True) -> Dict[str, Any]:
    """Strava activity summary with streams keyed by stream type."""
    time = list(range(duration_s))
    streams = {
        "time": time,
        "distance": [t * 5.0 for t in time],
        "velocity_smooth": [5.0] * duration_s,
        "heartrate": [140] * duration_s,
        "watts": [180] * duration_s,
        "cadence": [88] * duration_s,
        "grade_smooth": [0.0] * duration_s,
        "altitude": [120.0] * duration_s,
        "latlng": [[45.0, 6.0]] * duration_s,
        "temp": [20] * duration_s,
    }
    if wrap_data:
        streams = {key: {"data": values} for key, values in streams.items()}

    return {
        "id": 123456,
        "type": "Ride",
        "sport_type": "GravelRide",
        "trainer": False,
        "device_watts": True,
        "moving_time": duration_s - 1,
        "distance": (duration_s - 1) * 5.0,
        "total_elevation_gain": 0.0,
        "streams": streams,
    }
