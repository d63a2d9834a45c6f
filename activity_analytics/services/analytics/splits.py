"""
Best split finder.

Finds the best time weighted average of a value over a window of given
duration. The series is resampled once on a one second grid and kept as
prefix sums, so any number of durations can be queried against it.

Each sample value is held over the interval since the previous sample. An
interval adds value x overlap to every grid cell it covers, so sub-second
sampling keeps its full weight; a trailing partial cell is dropped.

Intervals longer than the max gap (paused recording, GPS drop) break the
series into segments; a window never spans two segments.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from activity_analytics.core.config import settings
from activity_analytics.core.exceptions import NoEligibleWindowError

# Tolerance when matching fractional sample times against the one second grid
_GRID_EPSILON = 1e-9


@dataclass(frozen=True)
class SplitResult:
    """Best average found for one window duration (seconds)."""
    duration: float
    average: float


class SplitCalculator:
    """
    Usage:
        calculator = SplitCalculator(time, watts)
        best_20min = calculator.best_split(20 * 60)
        curve = calculator.best_split_ranges([1, 5, 60, 300])
    """

    def __init__(
        self,
        time: Sequence[float],
        values: Sequence[float],
        max_gap: Optional[float] = None
    ):
        if len(time) != len(values):
            raise ValueError(
                f"Time and value series differ in length: {len(time)} != {len(values)}"
            )
        self.max_gap = settings.SPLIT_MAX_GAP_SECONDS if max_gap is None else max_gap
        self._segments: List[List[float]] = self._build_segments(time, values)

    def _build_segments(self, time: Sequence[float], values: Sequence[float]) -> List[List[float]]:
        segments: List[List[float]] = []
        prefix = [0.0]
        cell_sum = 0.0
        elapsed = 0.0

        for i in range(1, len(time)):
            delta = time[i] - time[i - 1]
            if delta <= 0:
                continue

            if delta > self.max_gap:
                if len(prefix) > 1:
                    segments.append(prefix)
                prefix = [0.0]
                cell_sum = 0.0
                elapsed = 0.0
                continue

            value = values[i] or 0.0
            position = elapsed
            elapsed += delta

            # Spread the interval over the cells it overlaps; the open cell
            # is [len(prefix) - 1, len(prefix))
            while position < elapsed - _GRID_EPSILON:
                cell_end = len(prefix)
                step_end = min(elapsed, cell_end)
                cell_sum += value * (step_end - position)
                position = step_end
                if step_end >= cell_end - _GRID_EPSILON:
                    prefix.append(prefix[-1] + cell_sum)
                    cell_sum = 0.0

        if len(prefix) > 1:
            segments.append(prefix)

        return segments

    @property
    def longest_segment(self) -> int:
        """Duration in seconds of the longest contiguous segment."""
        return max((len(prefix) - 1 for prefix in self._segments), default=0)

    def _best_average(self, duration: float) -> Optional[float]:
        window = int(math.ceil(duration))
        if window <= 0:
            return None

        best: Optional[float] = None
        for prefix in self._segments:
            if len(prefix) - 1 < window:
                continue
            segment_best = max(
                prefix[end] - prefix[end - window]
                for end in range(window, len(prefix))
            )
            if best is None or segment_best > best:
                best = segment_best

        return None if best is None else best / window

    def best_split(self, duration: float) -> float:
        """
        Best average over any contiguous window of the given duration.

        Args:
            duration: Window length in seconds

        Returns:
            Best time weighted average

        Raises:
            NoEligibleWindowError: if no segment is long enough
        """
        best = self._best_average(duration)
        if best is None:
            raise NoEligibleWindowError(
                duration,
                f"No contiguous window of {duration}s (longest segment {self.longest_segment}s)"
            )
        return best

    def best_split_ranges(self, durations: Sequence[float]) -> List[SplitResult]:
        """
        Best averages for many durations, skipping infeasible ones.

        Args:
            durations: Window lengths in seconds

        Returns:
            SplitResult list in the order of durations
        """
        results = []
        for duration in durations:
            best = self._best_average(duration)
            if best is not None:
                results.append(SplitResult(duration=duration, average=best))
        return results
