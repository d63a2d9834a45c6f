"""
Activity analytics - Statistical and physiological analysis of workout streams.

The engine only emits structlog events. Applications embedding it call
setup_logging() once at startup to render them as JSON or console output:

    from activity_analytics import compute_analysis, setup_logging

    setup_logging()
    analysis = compute_analysis(ActivityType.RIDE, False, athlete, UserSettings(), stream)
"""
from activity_analytics.core.exceptions import (
    AnalyticsError,
    InvalidZoneConfigurationError,
    NoEligibleWindowError,
    StreamValidationError,
)
from activity_analytics.core.logging import setup_logging
from activity_analytics.models import (
    ActivityAnalysis,
    ActivitySourceData,
    ActivityStream,
    ActivityType,
    AnalysisOptions,
    AthleteProfile,
    Gender,
    UserSettings,
    UserZones,
    ZoneSet,
)
from activity_analytics.services.analytics import ActivityComputer, compute_analysis, compute_from_raw

__version__ = "0.1.0"

__all__ = [
    "ActivityComputer",
    "compute_analysis",
    "compute_from_raw",
    "ActivityAnalysis",
    "ActivitySourceData",
    "ActivityStream",
    "ActivityType",
    "AnalysisOptions",
    "AthleteProfile",
    "Gender",
    "UserSettings",
    "UserZones",
    "ZoneSet",
    "AnalyticsError",
    "InvalidZoneConfigurationError",
    "NoEligibleWindowError",
    "StreamValidationError",
    "setup_logging",
]
