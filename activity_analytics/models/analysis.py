"""
Analysis result value objects.

Every summary is created once per computation and never mutated after
being returned. None means "not computable for this activity".
"""
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from activity_analytics.models.enums import GradeProfile
from activity_analytics.models.zones import ZoneResult

Zones = Optional[Tuple[ZoneResult, ...]]

_KEY_OVERRIDES = {
    "trimp": "TRIMP",
    "trimp_per_hour": "TRIMPPerHour",
    "hrss": "HRSS",
    "hrss_per_hour": "HRSSPerHour",
}


def _camel(name: str) -> str:
    if name in _KEY_OVERRIDES:
        return _KEY_OVERRIDES[name]
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def _serialize(value: Any) -> Any:
    if isinstance(value, ZoneResult):
        return value.to_dict()
    if is_dataclass(value):
        return {_camel(f.name): _serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary for API/IPC responses."""
        return _serialize(self)


@dataclass(frozen=True)
class SpeedData(_Serializable):
    """Speeds in kph, pace in seconds per km."""
    genuine_avg_speed: float
    total_avg_speed: Optional[float]
    best20min: Optional[float]
    avg_pace: Optional[float]
    lower_quartile_speed: Optional[float]
    median_speed: Optional[float]
    upper_quartile_speed: Optional[float]
    variance_speed: float
    genuine_grade_adjusted_avg_speed: Optional[float]
    standard_deviation_speed: float
    speed_zones: Zones = None


@dataclass(frozen=True)
class PaceData(_Serializable):
    """Paces in seconds per km."""
    avg_pace: Optional[float]
    best20min: Optional[float]
    lower_quartile_pace: Optional[float]
    median_pace: Optional[float]
    upper_quartile_pace: Optional[float]
    variance_pace: Optional[float]
    genuine_grade_adjusted_avg_pace: Optional[float]
    pace_zones: Zones = None
    grade_adjusted_pace_zones: Zones = None
    running_stress_score: Optional[float] = None
    running_stress_score_per_hour: Optional[float] = None


@dataclass(frozen=True)
class MoveData(_Serializable):
    moving_time: float
    speed: SpeedData
    pace: PaceData


@dataclass(frozen=True)
class PowerBestSplit(_Serializable):
    time: float
    watts: float


@dataclass(frozen=True)
class PowerData(_Serializable):
    has_power_meter: bool
    avg_watts: float
    avg_watts_per_kg: Optional[float]
    weighted_power: float
    best20min: Optional[float]
    best_eighty_percent: Optional[float]
    variability_index: float
    intensity: Optional[float]
    power_stress_score: Optional[float]
    power_stress_score_per_hour: Optional[float]
    weighted_watts_per_kg: Optional[float]
    lower_quartile_watts: Optional[float]
    median_watts: Optional[float]
    upper_quartile_watts: Optional[float]
    power_zones: Zones = None
    power_curve: Tuple[PowerBestSplit, ...] = ()
    is_estimated_running_power: bool = False


@dataclass(frozen=True)
class HeartRateData(_Serializable):
    hrss: float
    hrss_per_hour: Optional[float]
    trimp: float
    trimp_per_hour: Optional[float]
    best20min: Optional[float]
    best60min: Optional[float]
    lower_quartile_heart_rate: Optional[float]
    median_heart_rate: Optional[float]
    upper_quartile_heart_rate: Optional[float]
    average_heart_rate: Optional[float]
    max_heart_rate: float
    activity_heart_rate_reserve: Optional[float]
    activity_heart_rate_reserve_max: float
    heart_rate_zones: Zones = None


@dataclass(frozen=True)
class UpFlatDown(_Serializable):
    up: Optional[float] = None
    flat: Optional[float] = None
    down: Optional[float] = None


@dataclass(frozen=True)
class UpFlatDownTotal(_Serializable):
    up: float = 0
    flat: float = 0
    down: float = 0
    total: float = 0


@dataclass(frozen=True)
class CadenceData(_Serializable):
    cadence_percentage_moving: Optional[float]
    cadence_time_moving: float
    average_cadence_moving: Optional[float]
    standard_deviation_cadence: float
    total_occurrences: float
    lower_quartile_cadence: Optional[float]
    median_cadence: Optional[float]
    upper_quartile_cadence: Optional[float]
    average_distance_per_occurrence: Optional[float]
    lower_quartile_distance_per_occurrence: Optional[float]
    median_distance_per_occurrence: Optional[float]
    upper_quartile_distance_per_occurrence: Optional[float]
    cadence_zones: Zones = None
    up_flat_down_cadence_pace_data: Optional[UpFlatDown] = None


@dataclass(frozen=True)
class GradeData(_Serializable):
    avg_grade: Optional[float]
    avg_max_grade: float
    avg_min_grade: float
    lower_quartile_grade: Optional[float]
    median_grade: Optional[float]
    upper_quartile_grade: Optional[float]
    up_flat_down_in_seconds: UpFlatDownTotal
    up_flat_down_move_data: UpFlatDown
    up_flat_down_distance_data: UpFlatDown
    grade_profile: GradeProfile
    up_flat_down_cadence_pace_data: Optional[UpFlatDown] = None
    grade_zones: Zones = None


@dataclass(frozen=True)
class AscentSpeedData(_Serializable):
    """Ascent speeds in meters per hour; avg is -1 when never climbing."""
    avg: float
    lower_quartile: Optional[float]
    median: Optional[float]
    upper_quartile: Optional[float]


@dataclass(frozen=True)
class ElevationData(_Serializable):
    avg_elevation: Optional[float]
    accumulated_elevation_ascent: float
    accumulated_elevation_descent: float
    lower_quartile_elevation: Optional[float]
    median_elevation: Optional[float]
    upper_quartile_elevation: Optional[float]
    elevation_zones: Zones = None
    ascent_speed_zones: Zones = None
    ascent_speed: Optional[AscentSpeedData] = None


@dataclass(frozen=True)
class ActivityAnalysis(_Serializable):
    """Final result of one activity computation."""
    elapsed_time: Optional[float] = None
    moving_time: Optional[float] = None
    pause_time: Optional[float] = None
    move_ratio: Optional[float] = None
    running_performance_index: Optional[float] = None
    speed_data: Optional[SpeedData] = None
    pace_data: Optional[PaceData] = None
    power_data: Optional[PowerData] = None
    heart_rate_data: Optional[HeartRateData] = None
    cadence_data: Optional[CadenceData] = None
    grade_data: Optional[GradeData] = None
    elevation_data: Optional[ElevationData] = None


@dataclass(frozen=True)
class ActivitySourceData:
    """Summary totals from the provider, used when no stream exists."""
    moving_time: Optional[float] = None
    distance: Optional[float] = None
    elevation_gain: Optional[float] = None


@dataclass(frozen=True)
class AnalysisOptions:
    """
    Per-call options.

    has_power_meter=None infers the flag from the power channel.
    bounds is a [start, end) sample index pair for sub-segment analysis.
    """
    return_zones: bool = False
    return_power_curve: bool = False
    bounds: Optional[Tuple[int, int]] = None
    source_data: Optional[ActivitySourceData] = None
    is_owner: bool = True
    has_power_meter: Optional[bool] = None
