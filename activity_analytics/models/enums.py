"""
Shared enumerations for activity analysis.
"""
from enum import Enum


class ActivityType(str, Enum):
    """Sport of a recorded activity."""
    RIDE = "Ride"
    VIRTUAL_RIDE = "VirtualRide"
    EBIKE_RIDE = "EBikeRide"
    RUN = "Run"
    VIRTUAL_RUN = "VirtualRun"
    SWIM = "Swim"
    WALK = "Walk"
    HIKE = "Hike"
    ROWING = "Rowing"
    OTHER = "Other"

    @property
    def is_cycling(self) -> bool:
        return self in _CYCLING_TYPES

    @property
    def is_running(self) -> bool:
        return self in _RUNNING_TYPES


_CYCLING_TYPES = frozenset({
    ActivityType.RIDE,
    ActivityType.VIRTUAL_RIDE,
    ActivityType.EBIKE_RIDE,
})

_RUNNING_TYPES = frozenset({
    ActivityType.RUN,
    ActivityType.VIRTUAL_RUN,
})


class Gender(str, Enum):
    MEN = "men"
    WOMEN = "women"


class ZoneType(str, Enum):
    """Metric dimension a zone set applies to."""
    SPEED = "speed"
    PACE = "pace"
    GRADE_ADJUSTED_PACE = "gradeAdjustedPace"
    HEART_RATE = "heartRate"
    POWER = "power"
    RUNNING_POWER = "runningPower"
    CYCLING_CADENCE = "cyclingCadence"
    RUNNING_CADENCE = "runningCadence"
    GRADE = "grade"
    ELEVATION = "elevation"
    ASCENT = "ascent"


class GradeProfile(str, Enum):
    FLAT = "FLAT"
    HILLY = "HILLY"
