"""
Activity stream: parallel per-sample channels of one recording.
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from activity_analytics.core.exceptions import StreamValidationError


@dataclass(frozen=True)
class ActivityStream:
    """
    Parallel sample channels sharing the same index.

    Units: time s, distance m, velocity m/s, heart_rate bpm, power W,
    cadence rpm (spm for runs), grade %, altitude m.

    Absent channels are None or empty, never zero filled.
    """
    time: Optional[Sequence[float]] = None
    distance: Optional[Sequence[float]] = None
    velocity: Optional[Sequence[float]] = None
    grade_adjusted_velocity: Optional[Sequence[float]] = None
    heart_rate: Optional[Sequence[float]] = None
    power: Optional[Sequence[float]] = None
    cadence: Optional[Sequence[float]] = None
    grade: Optional[Sequence[float]] = None
    altitude: Optional[Sequence[float]] = None
    lat_lng: Optional[Sequence[Tuple[float, float]]] = None

    @classmethod
    def channel_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def has(self, channel: str) -> bool:
        """Check if a channel holds samples."""
        values = getattr(self, channel)
        return values is not None and len(values) > 0

    @property
    def is_empty(self) -> bool:
        return not any(self.has(name) for name in self.channel_names())

    @property
    def sample_count(self) -> int:
        lengths = [len(getattr(self, name)) for name in self.channel_names() if self.has(name)]
        return max(lengths) if lengths else 0

    def validate(self) -> "ActivityStream":
        """
        Ensure every present channel has the same length.

        Raises:
            StreamValidationError: if channel lengths differ
        """
        lengths = {
            name: len(getattr(self, name))
            for name in self.channel_names()
            if self.has(name)
        }
        if len(set(lengths.values())) > 1:
            raise StreamValidationError(f"Stream channels have different lengths: {lengths}")
        return self

    def slice(self, start: int, end: int) -> "ActivityStream":
        """
        Return a copy with every present channel cut to [start, end).

        Raises:
            StreamValidationError: if bounds are negative or inverted
        """
        if start < 0 or end <= start:
            raise StreamValidationError(f"Invalid stream bounds [{start}, {end}]")

        sliced: Dict[str, Any] = {}
        for name in self.channel_names():
            if self.has(name):
                sliced[name] = list(getattr(self, name)[start:end])
        return replace(self, **sliced)

    def replace_channel(self, channel: str, values: Optional[Sequence[float]]) -> "ActivityStream":
        """Return a copy with one channel swapped."""
        return replace(self, **{channel: values})
