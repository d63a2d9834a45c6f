"""
Analytics module - Activity stream analysis.

This module provides:
- Data adapters for normalizing raw activity payloads from various sources
- Per-metric analyzers (speed, power, heart rate, cadence, grade, elevation)
- Collaborators: best split finder, zone distribution, altitude filters,
  running power estimator
- The ActivityComputer engine
"""
from activity_analytics.services.analytics.adapter import (
    NormalizedActivity,
    RawDataAdapter,
    StravaAdapter,
    NativeAdapter,
    ManualAdapter,
    get_adapter,
    map_activity_type,
)
from activity_analytics.services.analytics.calculator import (
    ActivityComputer,
    compute_analysis,
    compute_from_raw,
)
from activity_analytics.services.analytics.filters import KalmanFilter, LowPassFilter, smooth_altitude
from activity_analytics.services.analytics.formulas import (
    has_athlete_settings_lacks,
    resolve_lthr,
    weighted_percentiles,
)
from activity_analytics.services.analytics.running_power import RunningPowerEstimator
from activity_analytics.services.analytics.splits import SplitCalculator, SplitResult
from activity_analytics.services.analytics.zones import ZoneDistribution

__all__ = [
    # Data structures
    "NormalizedActivity",
    # Adapters
    "RawDataAdapter",
    "StravaAdapter",
    "NativeAdapter",
    "ManualAdapter",
    "get_adapter",
    "map_activity_type",
    # Engine
    "ActivityComputer",
    "compute_analysis",
    "compute_from_raw",
    # Collaborators
    "KalmanFilter",
    "LowPassFilter",
    "smooth_altitude",
    "RunningPowerEstimator",
    "SplitCalculator",
    "SplitResult",
    "ZoneDistribution",
    # Formulas
    "has_athlete_settings_lacks",
    "resolve_lthr",
    "weighted_percentiles",
]
