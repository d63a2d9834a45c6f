"""
Activity Computer - Main engine for analysing an activity stream.

Orchestrates:
- Stream validation, altitude smoothing and slicing to bounds
- Moving time resolution (stream, manual estimate, elapsed time)
- Analyzer dispatch per metric
- Result assembly
"""
from dataclasses import replace
from typing import Any, Dict, Optional

from activity_analytics.core.config import settings
from activity_analytics.core.logging import get_logger, log_duration
from activity_analytics.models.analysis import (
    ActivityAnalysis,
    AnalysisOptions,
    CadenceData,
    ElevationData,
    GradeData,
    HeartRateData,
    MoveData,
    PowerData,
)
from activity_analytics.models.athlete import AthleteProfile
from activity_analytics.models.enums import ActivityType
from activity_analytics.models.stream import ActivityStream
from activity_analytics.models.zones import UserSettings
from activity_analytics.services.analytics.adapter import NormalizedActivity, get_adapter
from activity_analytics.services.analytics.analyzers import (
    AnalysisContext,
    CadenceAnalyzer,
    ElevationAnalyzer,
    GradeAnalyzer,
    HeartRateAnalyzer,
    MoveAnalyzer,
    PowerAnalyzer,
)
from activity_analytics.services.analytics.analyzers.base import SplitCalculatorFactory
from activity_analytics.services.analytics.filters import smooth_altitude
from activity_analytics.services.analytics.formulas import running_performance_index
from activity_analytics.services.analytics.running_power import RunningPowerEstimator
from activity_analytics.services.analytics.splits import SplitCalculator

logger = get_logger(__name__)


class ActivityComputer:
    """
    Analysis engine for one activity.

    Usage:
        analysis = ActivityComputer.calculate(
            ActivityType.RIDE,
            is_trainer=False,
            athlete=athlete,
            user_settings=UserSettings(),
            stream=stream,
            options=AnalysisOptions(return_zones=True),
        )

    Inputs are never mutated; smoothing and slicing produce new streams.
    """

    def __init__(
        self,
        activity_type: ActivityType,
        is_trainer: bool,
        athlete: AthleteProfile,
        user_settings: UserSettings,
        stream: Optional[ActivityStream],
        options: Optional[AnalysisOptions] = None,
        split_calculator_factory: SplitCalculatorFactory = SplitCalculator,
        power_estimator: Any = RunningPowerEstimator,
    ):
        self.activity_type = activity_type
        self.is_trainer = is_trainer
        self.athlete = athlete
        self.user_settings = user_settings
        self.stream = stream
        self.options = options or AnalysisOptions()
        self.power_estimator = power_estimator

        self.context = AnalysisContext(
            activity_type=activity_type,
            is_trainer=is_trainer,
            athlete=athlete,
            zones=user_settings.zones,
            return_zones=self.options.return_zones,
            return_power_curve=self.options.return_power_curve,
            has_bounds=self.options.bounds is not None,
            split_max_gap=settings.SPLIT_MAX_GAP_SECONDS,
            split_calculator_factory=split_calculator_factory,
        )

        self.move_analyzer = MoveAnalyzer(self.context)
        self.power_analyzer = PowerAnalyzer(self.context)
        self.heart_rate_analyzer = HeartRateAnalyzer(self.context)
        self.grade_analyzer = GradeAnalyzer(self.context)
        self.cadence_analyzer = CadenceAnalyzer(self.context)
        self.elevation_analyzer = ElevationAnalyzer(self.context)

    @classmethod
    def calculate(
        cls,
        activity_type: ActivityType,
        is_trainer: bool,
        athlete: AthleteProfile,
        user_settings: UserSettings,
        stream: Optional[ActivityStream],
        options: Optional[AnalysisOptions] = None,
        **collaborators: Any
    ) -> ActivityAnalysis:
        """Build a computer for the activity and run it."""
        return cls(activity_type, is_trainer, athlete, user_settings, stream, options, **collaborators).compute()

    def compute(self) -> ActivityAnalysis:
        """
        Run the analysis pipeline.

        Returns:
            ActivityAnalysis, with None for every summary that cannot be computed

        Raises:
            StreamValidationError: if channels differ in length or bounds are invalid
        """
        stream = self._prepare_stream(self.stream)

        logger.debug(
            "Computing activity analysis",
            activity_type=self.activity_type.value,
            is_trainer=self.is_trainer,
            samples=stream.sample_count if stream else 0,
            bounds=self.options.bounds,
        )

        with log_duration(
            logger,
            "Computed activity analysis",
            activity_type=self.activity_type.value,
            samples=stream.sample_count if stream else 0,
        ):
            return self._compute_analysis(stream)

    # ========================================
    # Pipeline stages
    # ========================================

    def _prepare_stream(self, stream: Optional[ActivityStream]) -> Optional[ActivityStream]:
        """Validate, smooth altitude, then slice to bounds."""
        if stream is None or stream.is_empty:
            return None

        stream = stream.validate()

        if stream.has("altitude"):
            stream = stream.replace_channel("altitude", smooth_altitude(stream.altitude))

        bounds = self.options.bounds
        if bounds is not None:
            start, end = bounds
            stream = stream.slice(start, min(end, stream.sample_count))

        return stream

    def _compute_analysis(self, stream: Optional[ActivityStream]) -> ActivityAnalysis:
        elapsed_time = None
        if stream is not None and stream.has("time"):
            elapsed_time = stream.time[-1] - stream.time[0]

        move_data = self._move_data(stream)

        moving_time = None
        if move_data is not None and move_data.moving_time > 0:
            moving_time = move_data.moving_time

        source_data = self.options.source_data
        if not moving_time and stream is None and source_data and source_data.moving_time:
            moving_time = source_data.moving_time

        if elapsed_time and elapsed_time > 0 and not moving_time:
            moving_time = elapsed_time

        if not elapsed_time and moving_time and moving_time > 0:
            elapsed_time = moving_time

        pause_time = None
        move_ratio = None
        if elapsed_time and elapsed_time > 0 and moving_time and moving_time > 0:
            pause_time = elapsed_time - moving_time
            move_ratio = moving_time / elapsed_time

        power_data = self._power_data(stream)
        heart_rate_data = self._heart_rate_data(stream)
        grade_data = self._grade_data(stream)
        cadence_data = self._cadence_data(stream, grade_data)
        elevation_data = self._elevation_data(stream)

        distance = self._total_distance(stream)

        return ActivityAnalysis(
            elapsed_time=elapsed_time,
            moving_time=moving_time,
            pause_time=pause_time,
            move_ratio=move_ratio,
            running_performance_index=self._running_performance_index(
                distance, moving_time, elevation_data, heart_rate_data
            ),
            speed_data=move_data.speed if move_data else None,
            pace_data=move_data.pace if move_data else None,
            power_data=power_data,
            heart_rate_data=heart_rate_data,
            cadence_data=cadence_data,
            grade_data=grade_data,
            elevation_data=elevation_data,
        )

    def _move_data(self, stream: Optional[ActivityStream]) -> Optional[MoveData]:
        if stream is not None and stream.has("time") and stream.has("velocity"):
            return self.move_analyzer.analyze(stream)

        # Manual runs get an estimate so a running stress score exists
        source_data = self.options.source_data
        if source_data is not None and self.activity_type == ActivityType.RUN:
            return self.move_analyzer.estimate(source_data.moving_time, source_data.distance)

        return None

    def _has_power_meter(self, stream: Optional[ActivityStream]) -> bool:
        if self.options.has_power_meter is not None:
            return self.options.has_power_meter
        return stream is not None and stream.has("power")

    def _power_data(self, stream: Optional[ActivityStream]) -> Optional[PowerData]:
        if stream is None:
            return None

        has_power_meter = self._has_power_meter(stream)

        if self.activity_type.is_running and not has_power_meter and self.options.is_owner:
            return self._estimated_running_power(stream, has_power_meter)

        return self.power_analyzer.analyze(stream, has_power_meter=has_power_meter)

    def _estimated_running_power(
        self,
        stream: ActivityStream,
        has_power_meter: bool
    ) -> Optional[PowerData]:
        """Power data from a watts stream estimated on distance and altitude."""
        if not stream.has("distance") or not stream.has("time"):
            return None

        try:
            watts = self.power_estimator.create_power_stream(
                self.athlete.weight,
                stream.distance,
                stream.time,
                stream.altitude,
            )
        except ValueError as e:
            logger.warning(
                "Running power estimation failed",
                activity_type=self.activity_type.value,
                error=str(e),
            )
            return None

        return self.power_analyzer.analyze(
            stream.replace_channel("power", watts),
            has_power_meter=has_power_meter,
            is_estimated_running_power=True,
        )

    def _heart_rate_data(self, stream: Optional[ActivityStream]) -> Optional[HeartRateData]:
        return self.heart_rate_analyzer.analyze(stream) if stream is not None else None

    def _grade_data(self, stream: Optional[ActivityStream]) -> Optional[GradeData]:
        return self.grade_analyzer.analyze(stream) if stream is not None else None

    def _cadence_data(
        self,
        stream: Optional[ActivityStream],
        grade_data: Optional[GradeData]
    ) -> Optional[CadenceData]:
        if stream is None:
            return None

        cadence_data = self.cadence_analyzer.analyze(stream)

        # Climbing, flat and downhill cadence comes from the grade breakdown
        if cadence_data is not None and grade_data is not None \
                and grade_data.up_flat_down_cadence_pace_data is not None:
            cadence_data = replace(
                cadence_data,
                up_flat_down_cadence_pace_data=grade_data.up_flat_down_cadence_pace_data,
            )
        return cadence_data

    def _elevation_data(self, stream: Optional[ActivityStream]) -> Optional[ElevationData]:
        return self.elevation_analyzer.analyze(stream) if stream is not None else None

    def _total_distance(self, stream: Optional[ActivityStream]) -> Optional[float]:
        if stream is not None and stream.has("distance"):
            return stream.distance[-1]
        source_data = self.options.source_data
        if source_data is not None and source_data.distance and source_data.distance > 0:
            return source_data.distance
        return None

    def _running_performance_index(
        self,
        distance: Optional[float],
        moving_time: Optional[float],
        elevation_data: Optional[ElevationData],
        heart_rate_data: Optional[HeartRateData]
    ) -> Optional[float]:
        if not self.activity_type.is_running or not distance or not moving_time:
            return None
        if elevation_data is None or heart_rate_data is None:
            return None

        return running_performance_index(
            self.athlete.max_hr,
            distance,
            moving_time,
            elevation_data.accumulated_elevation_ascent,
            elevation_data.accumulated_elevation_descent,
            heart_rate_data.average_heart_rate,
        )


def compute_analysis(
    activity_type: ActivityType,
    is_trainer: bool,
    athlete: AthleteProfile,
    user_settings: UserSettings,
    stream: Optional[ActivityStream],
    options: Optional[AnalysisOptions] = None
) -> ActivityAnalysis:
    """
    Analyse one activity stream.

    Args:
        activity_type: Sport of the activity
        is_trainer: Indoor trainer or treadmill session
        athlete: Athlete physiological settings
        user_settings: Zone definitions
        stream: Activity stream, None for manual entries
        options: Zones, power curve, bounds and summary totals

    Returns:
        ActivityAnalysis
    """
    return ActivityComputer.calculate(activity_type, is_trainer, athlete, user_settings, stream, options)


def compute_from_raw(
    raw_data: Dict[str, Any],
    athlete: AthleteProfile,
    user_settings: Optional[UserSettings] = None,
    source: str = "native",
    options: Optional[AnalysisOptions] = None
) -> ActivityAnalysis:
    """
    Normalize a provider payload then analyse it.

    Summary totals and the power meter flag found in the payload fill the
    options left unset by the caller.

    Args:
        raw_data: Raw activity payload
        athlete: Athlete physiological settings
        user_settings: Zone definitions, defaults when None
        source: Data source name (strava, native, manual)
        options: Analysis options

    Returns:
        ActivityAnalysis
    """
    activity: NormalizedActivity = get_adapter(source).normalize(raw_data)
    options = options or AnalysisOptions()

    if options.source_data is None and activity.source_data is not None:
        options = replace(options, source_data=activity.source_data)
    if options.has_power_meter is None and activity.has_power_meter is not None:
        options = replace(options, has_power_meter=activity.has_power_meter)

    return ActivityComputer.calculate(
        activity.activity_type,
        activity.is_trainer,
        athlete,
        user_settings or UserSettings(),
        activity.stream,
        options,
    )
