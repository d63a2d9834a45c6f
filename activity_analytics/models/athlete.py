"""
Athlete physiological parameters used during one analysis.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from activity_analytics.models.enums import Gender


@dataclass(frozen=True)
class LactateThreshold:
    """Lactate threshold heart rate overrides (bpm)."""
    default: Optional[float] = None
    cycling: Optional[float] = None
    running: Optional[float] = None


@dataclass(frozen=True)
class AthleteProfile:
    """
    Athlete settings snapshot taken at the activity date.

    running_ftp is a threshold pace in seconds per km, swim_ftp is in
    meters per minute, cycling_ftp is in watts.
    """
    gender: Gender = Gender.MEN
    max_hr: float = 190
    rest_hr: float = 65
    lthr: LactateThreshold = field(default_factory=LactateThreshold)
    weight: Optional[float] = 70
    cycling_ftp: Optional[float] = None
    running_ftp: Optional[float] = None
    swim_ftp: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AthleteProfile":
        """Build a profile from a camelCase settings mapping."""
        settings = data.get("athleteSettings", data)
        raw_lthr = settings.get("lthr") or {}
        gender = data.get("gender", settings.get("gender", Gender.MEN.value))

        return cls(
            gender=Gender(gender),
            max_hr=settings.get("maxHr", cls.max_hr),
            rest_hr=settings.get("restHr", cls.rest_hr),
            lthr=LactateThreshold(
                default=raw_lthr.get("default"),
                cycling=raw_lthr.get("cycling"),
                running=raw_lthr.get("running"),
            ),
            weight=settings.get("weight", cls.weight),
            cycling_ftp=settings.get("cyclingFtp"),
            running_ftp=settings.get("runningFtp"),
            swim_ftp=settings.get("swimFtp"),
        )
