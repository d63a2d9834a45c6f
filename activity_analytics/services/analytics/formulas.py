"""
Stateless constants and formulas shared by the analyzers.

Everything here is a pure function of its arguments so it can be used and
tested without building an ActivityComputer.
"""
import math
from typing import List, Optional, Sequence

from activity_analytics.models.analysis import ActivityAnalysis
from activity_analytics.models.athlete import AthleteProfile
from activity_analytics.models.enums import ActivityType, Gender
from activity_analytics.models.stream import ActivityStream

DEFAULT_LTHR_KARVONEN_HRR_FACTOR = 0.85
MOVING_THRESHOLD_KPH = 0.1
CYCLING_MOVING_THRESHOLD_KPH = 1.8 * 3.6
RUNNING_MOVING_THRESHOLD_KPH = 3.6
CADENCE_THRESHOLD_RPM = 35
GRADE_CLIMBING_LIMIT = 1.6
GRADE_DOWNHILL_LIMIT = -1.6
GRADE_PROFILE_FLAT_PERCENTAGE_DETECTED = 60
ASCENT_SPEED_GRADE_LIMIT = GRADE_CLIMBING_LIMIT
MIN_MAX_GRADE_SAMPLE_PERCENTAGE = 0.25
PERCENTILE_TOLERANCE = 0.00001
QUARTILES = (0.25, 0.5, 0.75)

TRIMP_MEN_FACTOR = 1.92
TRIMP_WOMEN_FACTOR = 1.67
TRIMP_WEIGHTING = 0.64

BEST_20_MIN = 20 * 60
BEST_60_MIN = 60 * 60
BEST_EIGHTY_PERCENT_RATIO = 0.8

# 1s to 24h, coarser as durations grow
DEFAULT_POWER_CURVE_TIMES = (
    list(range(1, 30, 1))
    + list(range(30, 60, 5))
    + list(range(60, 5 * 60, 10))
    + list(range(5 * 60, 20 * 60, 30))
    + list(range(20 * 60, 60 * 60, 60))
    + list(range(60 * 60, 5 * 60 * 60, 5 * 60))
    + list(range(5 * 60 * 60, 24 * 60 * 60, 60 * 60))
)


def safe_divide(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """numerator / denominator, or None when either side is missing or the denominator is 0."""
    if numerator is None or not denominator:
        return None
    return numerator / denominator


def mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _ieee_divide(numerator: float, denominator: float) -> float:
    """Float division returning inf/nan on a zero denominator instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def discrete_value_between(current: float, previous: float, delta: float) -> float:
    """Trapezoid area between two samples spaced by delta."""
    return current * delta - ((current - previous) * delta) / 2


def convert_speed_to_pace(speed: Optional[float]) -> float:
    """
    Args:
        speed: Speed in kph

    Returns:
        Pace in seconds per km, -1 when speed is not finite or not positive
    """
    if speed is None or not math.isfinite(speed) or speed <= 0:
        return -1
    return 1 / speed * 60 * 60


def convert_pace_to_speed(pace: Optional[float]) -> Optional[float]:
    """Seconds per km to kph, None for the -1 pace marker."""
    if pace is None or not math.isfinite(pace) or pace <= 0:
        return None
    return 60 * 60 / pace


def heart_rate_reserve(heart_rate: float, max_hr: float, rest_hr: float) -> float:
    """
    Heart rate reserve fraction.

    When max_hr == rest_hr the result is inf, -inf or nan; no error is raised.
    """
    return _ieee_divide(heart_rate - rest_hr, max_hr - rest_hr)


def trimp_gender_factor(gender: Gender) -> float:
    return TRIMP_MEN_FACTOR if gender == Gender.MEN else TRIMP_WOMEN_FACTOR


def training_impulse(duration_minutes: float, reserve: float, gender_factor: float) -> float:
    """Banister TRIMP for a period spent at the given heart rate reserve."""
    return duration_minutes * reserve * TRIMP_WEIGHTING * _exp(gender_factor * reserve)


def weighted_percentiles(
    values: Sequence[float],
    weights: Sequence[float],
    percentiles: Sequence[float]
) -> List[Optional[float]]:
    """
    Weighted percentiles in one pass over the sorted samples.

    Each percentile p takes the value of the first sample whose cumulative
    weight exceeds p * total (minus a small tolerance for roundoff).

    Args:
        values: Sample values
        weights: Per sample weight (duration or distance)
        percentiles: Requested percentiles in [0, 1]

    Returns:
        One value per percentile, all None when values is empty
    """
    results: List[Optional[float]] = [None] * len(percentiles)
    if not values:
        return results

    samples = sorted(zip(values, weights), key=lambda sample: sample[0])
    total = sum(weight for _, weight in samples)

    # Resolve percentiles in ascending order while walking samples once
    pending = sorted(range(len(percentiles)), key=lambda index: percentiles[index])
    cursor = 0
    cumulative = 0.0

    for value, weight in samples:
        cumulative += weight
        while cursor < len(pending):
            index = pending[cursor]
            if cumulative > (percentiles[index] - PERCENTILE_TOLERANCE) * total:
                results[index] = value
                cursor += 1
            else:
                break
        if cursor == len(pending):
            break

    # Trailing percentiles never crossed (e.g. all weights zero) take the max
    for index in pending[cursor:]:
        results[index] = samples[-1][0]

    return results


def resolve_lthr(activity_type: ActivityType, athlete: AthleteProfile) -> float:
    """
    Lactate threshold heart rate along activity type.

    Sport override, then generic override, then Karvonen estimate
    rest + 0.85 * (max - rest).
    """
    lthr = athlete.lthr
    if lthr is not None:
        if activity_type.is_cycling and lthr.cycling is not None:
            return lthr.cycling
        if activity_type == ActivityType.RUN and lthr.running is not None:
            return lthr.running
        if lthr.default is not None:
            return lthr.default

    return athlete.rest_hr + DEFAULT_LTHR_KARVONEN_HRR_FACTOR * (athlete.max_hr - athlete.rest_hr)


def heart_rate_stress_score(
    gender: Gender,
    max_hr: float,
    rest_hr: float,
    lactate_threshold: float,
    activity_trimp: float
) -> float:
    """TRIMP relative to one hour at lactate threshold heart rate, x100."""
    threshold_reserve = heart_rate_reserve(lactate_threshold, max_hr, rest_hr)
    threshold_trimp = training_impulse(60, threshold_reserve, trimp_gender_factor(gender))
    return _ieee_divide(activity_trimp, threshold_trimp) * 100


def power_stress_score(
    moving_time: float,
    weighted_power: float,
    cycling_ftp: Optional[float]
) -> Optional[float]:
    """Training stress score from weighted power, None without a usable FTP."""
    if cycling_ftp is None or cycling_ftp <= 0:
        return None

    intensity = weighted_power / cycling_ftp
    return (moving_time * weighted_power * intensity) / (cycling_ftp * 3600) * 100


def running_stress_score(
    moving_time: float,
    grade_adjusted_avg_pace: float,
    running_threshold_pace: float
) -> float:
    """Running stress score from paces in seconds per km."""
    grade_adjusted_avg_speed = 1 / grade_adjusted_avg_pace
    running_threshold_speed = 1 / running_threshold_pace
    intensity_factor = grade_adjusted_avg_speed / running_threshold_speed
    return (moving_time * grade_adjusted_avg_speed * intensity_factor) / (running_threshold_speed * 3600) * 100


def per_hour(score: Optional[float], seconds: Optional[float]) -> Optional[float]:
    """Normalize a score to one hour, None when seconds is 0."""
    rate = safe_divide(score, seconds)
    return None if rate is None else rate * 60 * 60


def round_half_up(value: float, digits: int) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def running_performance_index(
    max_hr: float,
    distance: float,
    moving_time: float,
    ascent: float,
    descent: float,
    average_heart_rate: float
) -> Optional[float]:
    """
    Running index from grade adjusted distance and heart rate intensity.

    Climbing counts 6x and descending -4x on top of flat distance.
    """
    if not max_hr or not moving_time or average_heart_rate is None:
        return None

    run_intensity = round_half_up(average_heart_rate / max_hr * 1.45 - 0.3, 2)
    grade_adjusted_distance = distance + (ascent * 6) - (descent * 4)
    if run_intensity <= 0 or grade_adjusted_distance <= 0:
        return None

    distance_rate = (213.9 / (moving_time / 60) * ((grade_adjusted_distance / 1000) ** 1.06)) + 3.5
    return distance_rate / run_intensity


def power_curve_durations(max_time: float) -> List[float]:
    """Default curve durations shorter than max_time, closed by max_time."""
    return [t for t in DEFAULT_POWER_CURVE_TIMES if t < max_time] + [max_time]


def moving_speed_threshold(activity_type: ActivityType) -> float:
    """Speed (kph) above which a sample counts as moving for speed stats."""
    if activity_type.is_cycling:
        return CYCLING_MOVING_THRESHOLD_KPH
    if activity_type.is_running:
        return RUNNING_MOVING_THRESHOLD_KPH
    return 0.0


def has_athlete_settings_lacks(
    distance: Optional[float],
    moving_time: Optional[float],
    elapsed_time: Optional[float],
    activity_type: ActivityType,
    analysis: Optional[ActivityAnalysis],
    athlete: AthleteProfile,
    stream: Optional[ActivityStream]
) -> bool:
    """
    Check if the athlete lacks a threshold setting needed to score this activity.

    Returns False when a heart rate stress score exists, since it does not
    depend on any FTP.
    """
    is_swimming = activity_type == ActivityType.SWIM
    if not activity_type.is_cycling and not activity_type.is_running and not is_swimming:
        return False

    heart_rate_data = analysis.heart_rate_data if analysis else None
    if heart_rate_data and heart_rate_data.trimp and heart_rate_data.hrss:
        return False

    if activity_type.is_cycling and stream is not None and stream.has("power") \
            and not (athlete.cycling_ftp and athlete.cycling_ftp > 0):
        return True

    if activity_type.is_running and stream is not None and stream.has("grade_adjusted_velocity") \
            and (not (moving_time and moving_time > 0) or not (athlete.running_ftp and athlete.running_ftp > 0)):
        return True

    if is_swimming and distance and distance > 0 and moving_time and moving_time > 0 \
            and elapsed_time and elapsed_time > 0 and not (athlete.swim_ftp and athlete.swim_ftp > 0):
        return True

    return False
