"""
Zone boundary definitions.

Definitions are immutable and can be shared between concurrent analyses.
Time spent in each zone is accumulated by a per-call ZoneDistribution
(see services.analytics.zones) and reported as ZoneResult snapshots.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from activity_analytics.core.exceptions import InvalidZoneConfigurationError
from activity_analytics.models.enums import ZoneType


@dataclass(frozen=True)
class Zone:
    """Numeric range, upper bound inclusive."""
    from_value: float
    to_value: float


@dataclass(frozen=True)
class ZoneResult:
    """Zone with the time accumulated during one analysis."""
    from_value: float
    to_value: float
    seconds: float
    percent: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_value,
            "to": None if math.isinf(self.to_value) else self.to_value,
            "s": self.seconds,
            "percentDistrib": self.percent,
        }


class ZoneSet:
    """
    Ordered, contiguous sequence of zones for one metric dimension.

    Raises:
        InvalidZoneConfigurationError: if a zone is inverted or zones
            overlap, leave holes or are not ascending.
    """

    def __init__(self, zones: Iterable[Zone]):
        self._zones: Tuple[Zone, ...] = tuple(zones)
        self._validate()

    def _validate(self) -> None:
        previous: Optional[Zone] = None
        for index, zone in enumerate(self._zones):
            if zone.from_value > zone.to_value:
                raise InvalidZoneConfigurationError(
                    f"Zone {index} lower bound {zone.from_value} is above upper bound {zone.to_value}"
                )
            if previous is not None and zone.from_value != previous.to_value:
                raise InvalidZoneConfigurationError(
                    f"Zone {index} starts at {zone.from_value}, expected {previous.to_value}"
                )
            previous = zone

    @classmethod
    def from_bounds(cls, bounds: Iterable[Mapping[str, float]]) -> "ZoneSet":
        """Build from a list of {"from": x, "to": y} mappings."""
        zones = []
        for bound in bounds:
            to_value = bound.get("to")
            zones.append(Zone(
                from_value=float(bound["from"]),
                to_value=math.inf if to_value is None else float(to_value),
            ))
        return cls(zones)

    @classmethod
    def stepped(cls, start: float, stop: float, step: float) -> "ZoneSet":
        """Evenly spaced zones from start to stop, then one open-ended zone."""
        zones = []
        lower = start
        while lower < stop:
            upper = min(lower + step, stop)
            zones.append(Zone(lower, upper))
            lower = upper
        zones.append(Zone(stop, math.inf))
        return cls(zones)

    @property
    def zones(self) -> Tuple[Zone, ...]:
        return self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._zones)

    def __getitem__(self, index: int) -> Zone:
        return self._zones[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZoneSet):
            return NotImplemented
        return self._zones == other._zones

    def __repr__(self) -> str:
        return f"ZoneSet({len(self._zones)} zones)"


# start, stop, step of the built-in zone sets
_DEFAULT_STEPS: Dict[ZoneType, Tuple[float, float, float]] = {
    ZoneType.SPEED: (0, 90, 3),                  # kph
    ZoneType.PACE: (0, 900, 30),                 # seconds per km
    ZoneType.GRADE_ADJUSTED_PACE: (0, 900, 30),  # seconds per km
    ZoneType.HEART_RATE: (0, 220, 10),           # bpm
    ZoneType.POWER: (0, 1000, 50),               # watts
    ZoneType.RUNNING_POWER: (0, 600, 25),        # watts
    ZoneType.CYCLING_CADENCE: (0, 150, 5),       # rpm
    ZoneType.RUNNING_CADENCE: (0, 125, 5),       # spm, one leg
    ZoneType.GRADE: (-20, 20, 1),                # %
    ZoneType.ELEVATION: (0, 5000, 250),          # meters
    ZoneType.ASCENT: (0, 2000, 100),             # meters per hour
}


@dataclass(frozen=True)
class UserZones:
    """Zone sets per metric dimension."""
    zone_sets: Mapping[ZoneType, ZoneSet] = field(default_factory=dict)

    def get(self, zone_type: ZoneType) -> Optional[ZoneSet]:
        return self.zone_sets.get(zone_type)

    @classmethod
    def defaults(cls) -> "UserZones":
        return cls({
            zone_type: ZoneSet.stepped(*steps)
            for zone_type, steps in _DEFAULT_STEPS.items()
        })

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, List[Mapping[str, float]]],
        fill_defaults: bool = True
    ) -> "UserZones":
        """
        Parse zones keyed by ZoneType value (e.g. "heartRate").

        Args:
            data: Mapping of zone type name to list of bounds
            fill_defaults: Use built-in zones for types missing from data

        Returns:
            UserZones instance
        """
        zone_sets: Dict[ZoneType, ZoneSet] = {}
        if fill_defaults:
            zone_sets.update(cls.defaults().zone_sets)

        for key, bounds in data.items():
            zone_sets[ZoneType(key)] = ZoneSet.from_bounds(bounds)

        return cls(zone_sets)


@dataclass(frozen=True)
class UserSettings:
    """User preferences consumed by the engine."""
    zones: UserZones = field(default_factory=UserZones.defaults)
