from activity_analytics.models.analysis import (
    ActivityAnalysis,
    ActivitySourceData,
    AnalysisOptions,
    AscentSpeedData,
    CadenceData,
    ElevationData,
    GradeData,
    HeartRateData,
    MoveData,
    PaceData,
    PowerBestSplit,
    PowerData,
    SpeedData,
    UpFlatDown,
    UpFlatDownTotal,
)
from activity_analytics.models.athlete import AthleteProfile, LactateThreshold
from activity_analytics.models.enums import ActivityType, Gender, GradeProfile, ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.models.zones import UserSettings, UserZones, Zone, ZoneResult, ZoneSet

__all__ = [
    # Inputs
    "ActivityStream",
    "AthleteProfile",
    "LactateThreshold",
    "UserSettings",
    "UserZones",
    "Zone",
    "ZoneSet",
    "ZoneResult",
    "ActivitySourceData",
    "AnalysisOptions",
    # Enums
    "ActivityType",
    "Gender",
    "GradeProfile",
    "ZoneType",
    # Results
    "ActivityAnalysis",
    "AscentSpeedData",
    "CadenceData",
    "ElevationData",
    "GradeData",
    "HeartRateData",
    "MoveData",
    "PaceData",
    "PowerBestSplit",
    "PowerData",
    "SpeedData",
    "UpFlatDown",
    "UpFlatDownTotal",
]
