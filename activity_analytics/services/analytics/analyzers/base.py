"""
Base Analyzer - Abstract interface for per-metric stream analysis.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple

from activity_analytics.core.config import settings
from activity_analytics.core.exceptions import NoEligibleWindowError
from activity_analytics.core.logging import get_logger
from activity_analytics.models.athlete import AthleteProfile
from activity_analytics.models.enums import ActivityType, ZoneType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.models.zones import UserZones, ZoneResult
from activity_analytics.services.analytics.formulas import MOVING_THRESHOLD_KPH
from activity_analytics.services.analytics.splits import SplitCalculator
from activity_analytics.services.analytics.zones import ZoneDistribution

logger = get_logger(__name__)

SplitCalculatorFactory = Callable[[Sequence[float], Sequence[float], float], SplitCalculator]


@dataclass(frozen=True)
class AnalysisContext:
    """
    Configuration of the current computation, shared by all analyzers.

    has_bounds is True when the stream was cut to a sub-segment.
    """
    activity_type: ActivityType
    is_trainer: bool
    athlete: AthleteProfile
    zones: UserZones = field(default_factory=UserZones.defaults)
    return_zones: bool = False
    return_power_curve: bool = False
    has_bounds: bool = False
    split_max_gap: float = settings.SPLIT_MAX_GAP_SECONDS
    split_calculator_factory: SplitCalculatorFactory = SplitCalculator


class MetricAnalyzer(ABC):
    """
    Abstract base class for one metric dimension.

    Subclasses return a frozen summary, or None when the required channels
    are absent, empty or degenerate.
    """

    metric: str = "unknown"

    def __init__(self, context: AnalysisContext):
        self.context = context

    @abstractmethod
    def analyze(self, stream: ActivityStream) -> Optional[Any]:
        """
        Compute the metric summary.

        Args:
            stream: Smoothed and sliced activity stream

        Returns:
            Summary dataclass or None if not computable
        """
        pass

    # ========================================
    # Shared Helper Methods
    # ========================================

    @property
    def activity_type(self) -> ActivityType:
        return self.context.activity_type

    @property
    def athlete(self) -> AthleteProfile:
        return self.context.athlete

    def _is_moving(self, velocity: Optional[Sequence[float]], index: int) -> bool:
        """
        Moving check used by power, heart rate, cadence and elevation.

        Trainer sessions and streams without speed always count as moving.
        """
        if self.context.is_trainer or not velocity:
            return True
        speed = velocity[index]
        return speed is not None and speed * 3.6 > MOVING_THRESHOLD_KPH

    def _prepare_zones(self, zone_type: Optional[ZoneType]) -> ZoneDistribution:
        zone_set = self.context.zones.get(zone_type) if zone_type else None
        label = zone_type.value if zone_type else "none"
        return ZoneDistribution.prepare(zone_set, label=label)

    def _zones_result(self, distribution: ZoneDistribution) -> Optional[Tuple[ZoneResult, ...]]:
        """Finalize a distribution, returning it only when zones were requested."""
        zones = distribution.finalize()
        return zones if self.context.return_zones else None

    def _splits(self, time: Sequence[float], values: Sequence[float]) -> SplitCalculator:
        return self.context.split_calculator_factory(time, values, self.context.split_max_gap)

    def _best_split(
        self,
        calculator: SplitCalculator,
        duration: float,
        label: str
    ) -> Optional[float]:
        """Best split or None when the activity is too short for it."""
        try:
            return calculator.best_split(duration)
        except NoEligibleWindowError:
            logger.warning(
                "No best split available for this range",
                metric=self.metric,
                split=label,
                duration=duration,
            )
            return None
