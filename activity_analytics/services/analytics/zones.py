"""
Zone distribution engine.

A ZoneDistribution is a per-call accumulator over an immutable ZoneSet:
prepare() starts from zero, add() assigns a weighted sample to the first
zone whose upper bound holds it, finalize() turns weights into
percentages of the total. The last zone is open ended.
"""
import math
from typing import List, Optional, Tuple

from activity_analytics.core.logging import get_logger
from activity_analytics.models.zones import ZoneResult, ZoneSet

logger = get_logger(__name__)


class ZoneDistribution:
    """Time (or distance) accumulated per zone during one analysis."""

    def __init__(self, zone_set: Optional[ZoneSet], label: str = "zones"):
        self.zone_set = zone_set
        self.label = label
        self.seconds: List[float] = [0.0] * (len(zone_set) if zone_set else 0)
        self.unclassified_seconds = 0.0
        self.unclassified_count = 0

    @classmethod
    def prepare(cls, zone_set: Optional[ZoneSet], label: str = "zones") -> "ZoneDistribution":
        """Fresh accumulator with every zone at zero."""
        return cls(zone_set, label)

    def classify(self, value: float) -> Optional[int]:
        """
        Index of the first zone whose upper bound is >= value.

        The last zone takes every value above its configured upper bound, so
        any finite or infinite sample maps to exactly one zone.

        Returns:
            Zone index, or None for NaN or a missing zone set
        """
        if not self.zone_set or math.isnan(value):
            return None
        for index, zone in enumerate(self.zone_set):
            if value <= zone.to_value:
                return index
        return len(self.zone_set) - 1

    def add(self, value: float, seconds: float) -> Optional[int]:
        """Accumulate a sample weight in the zone holding value."""
        if not self.zone_set:
            return None

        index = self.classify(value)
        if index is None:
            self.unclassified_seconds += seconds
            self.unclassified_count += 1
        else:
            self.seconds[index] += seconds
        return index

    @property
    def total(self) -> float:
        return sum(self.seconds)

    def finalize(self) -> Tuple[ZoneResult, ...]:
        """
        Snapshot zones with their share of the total.

        Every percentage is 0 when nothing was accumulated.
        """
        if self.unclassified_count:
            logger.warning(
                "Samples without a zone",
                zones=self.label,
                samples=self.unclassified_count,
                seconds=self.unclassified_seconds,
            )

        if not self.zone_set:
            return ()

        total = self.total
        return tuple(
            ZoneResult(
                from_value=zone.from_value,
                to_value=zone.to_value,
                seconds=seconds,
                percent=(seconds / total * 100) if total > 0 else 0.0,
            )
            for zone, seconds in zip(self.zone_set, self.seconds)
        )
