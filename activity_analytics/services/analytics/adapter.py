"""
Data Source Adapters - Normalize raw activity payloads into analysis inputs.

Supported sources:
- Strava API streams (velocity_smooth, heartrate, watts, ...)
- Native payloads already using ActivityStream channel names
- Manual entries (summary totals, no stream)
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from activity_analytics.core.logging import get_logger
from activity_analytics.models.analysis import ActivitySourceData
from activity_analytics.models.enums import ActivityType
from activity_analytics.models.stream import ActivityStream

logger = get_logger(__name__)


@dataclass
class NormalizedActivity:
    """
    Unified activity data structure.

    This is the intermediate representation after adapting raw data
    from any source. ActivityComputer consumes it directly.
    """
    activity_type: ActivityType
    is_trainer: bool = False
    stream: Optional[ActivityStream] = None
    source_data: Optional[ActivitySourceData] = None
    has_power_meter: Optional[bool] = None

    # Metadata
    source: str = "unknown"
    source_id: Optional[str] = None

    def has_stream(self) -> bool:
        return self.stream is not None and not self.stream.is_empty

    def channels(self) -> List[str]:
        """Names of the channels holding samples."""
        if self.stream is None:
            return []
        return [name for name in ActivityStream.channel_names() if self.stream.has(name)]


class RawDataAdapter(ABC):
    """Abstract base class for data source adapters."""

    source_name: str = "unknown"

    # Provider key -> ActivityStream channel
    stream_keys: Dict[str, str] = {}

    @abstractmethod
    def normalize(self, raw_data: Dict[str, Any]) -> NormalizedActivity:
        """
        Normalize raw data to unified format.

        Args:
            raw_data: Raw activity payload from the source

        Returns:
            NormalizedActivity ready for analysis
        """
        pass

    def normalize_stream(self, raw_streams: Any) -> Optional[ActivityStream]:
        """
        Build an ActivityStream from provider streams.

        Accepts a mapping keyed by stream type, where values are either
        sample lists or {"data": [...]} objects, or a list of
        {"type": ..., "data": [...]} objects.
        """
        if not raw_streams:
            return None

        if isinstance(raw_streams, list):
            raw_streams = {item.get("type"): item for item in raw_streams if isinstance(item, Mapping)}

        channels: Dict[str, Any] = {}
        ignored: List[str] = []
        for key, value in raw_streams.items():
            channel = self.stream_keys.get(key)
            if channel is None:
                ignored.append(key)
                continue
            samples = value.get("data") if isinstance(value, Mapping) else value
            if samples:
                channels[channel] = [tuple(s) for s in samples] if channel == "lat_lng" else list(samples)

        if ignored:
            logger.debug("Ignored unknown stream types", source=self.source_name, streams=ignored)

        if not channels:
            return None
        return ActivityStream(**channels)

    def _detect_activity_type(self, raw_data: Dict[str, Any]) -> ActivityType:
        """Detect activity type from raw data."""
        # Common field names for activity type
        type_fields = ["sport_type", "type", "activityType", "activity_type", "sport"]

        for field_name in type_fields:
            if raw_data.get(field_name):
                return map_activity_type(str(raw_data[field_name]))

        return ActivityType.OTHER

    def _extract_source_data(self, raw_data: Dict[str, Any]) -> Optional[ActivitySourceData]:
        """Summary totals, used when the stream cannot provide them."""
        source_data = ActivitySourceData(
            moving_time=raw_data.get("moving_time"),
            distance=raw_data.get("distance"),
            elevation_gain=raw_data.get("total_elevation_gain"),
        )
        if source_data.moving_time is None and source_data.distance is None \
                and source_data.elevation_gain is None:
            return None
        return source_data


_ACTIVITY_TYPES = {
    "ride": ActivityType.RIDE,
    "mountainbikeride": ActivityType.RIDE,
    "gravelride": ActivityType.RIDE,
    "cycling": ActivityType.RIDE,
    "virtualride": ActivityType.VIRTUAL_RIDE,
    "ebikeride": ActivityType.EBIKE_RIDE,
    "emountainbikeride": ActivityType.EBIKE_RIDE,
    "run": ActivityType.RUN,
    "trailrun": ActivityType.RUN,
    "running": ActivityType.RUN,
    "virtualrun": ActivityType.VIRTUAL_RUN,
    "swim": ActivityType.SWIM,
    "swimming": ActivityType.SWIM,
    "walk": ActivityType.WALK,
    "hike": ActivityType.HIKE,
    "rowing": ActivityType.ROWING,
    "virtualrow": ActivityType.ROWING,
}


def map_activity_type(raw_type: str) -> ActivityType:
    """Map a provider sport name to ActivityType, OTHER when unknown."""
    key = raw_type.replace("_", "").replace(" ", "").lower()
    return _ACTIVITY_TYPES.get(key, ActivityType.OTHER)


class StravaAdapter(RawDataAdapter):
    """
    Adapter for Strava API data.

    Expects the activity summary with its streams under "streams".
    """

    source_name = "strava"

    stream_keys = {
        "time": "time",
        "distance": "distance",
        "velocity_smooth": "velocity",
        "grade_adjusted_speed": "grade_adjusted_velocity",
        "heartrate": "heart_rate",
        "watts": "power",
        "cadence": "cadence",
        "grade_smooth": "grade",
        "altitude": "altitude",
        "latlng": "lat_lng",
    }

    def normalize(self, raw_data: Dict[str, Any]) -> NormalizedActivity:
        """Normalize a Strava activity with its streams."""

        activity_type = self._detect_activity_type(raw_data)
        stream = self.normalize_stream(raw_data.get("streams"))

        activity = NormalizedActivity(
            activity_type=activity_type,
            is_trainer=bool(raw_data.get("trainer", False)),
            stream=stream,
            source_data=self._extract_source_data(raw_data),
            has_power_meter=raw_data.get("device_watts"),
            source=self.source_name,
            source_id=str(raw_data["id"]) if raw_data.get("id") is not None else None,
        )

        logger.debug(
            "Normalized Strava activity",
            activity_type=activity_type.value,
            channels=activity.channels(),
            samples=stream.sample_count if stream else 0,
        )

        return activity


class NativeAdapter(RawDataAdapter):
    """
    Adapter for payloads already using ActivityStream channel names.
    """

    source_name = "native"

    stream_keys = {name: name for name in ActivityStream.channel_names()}

    def normalize(self, raw_data: Dict[str, Any]) -> NormalizedActivity:
        """Normalize a native payload."""

        activity_type = self._detect_activity_type(raw_data)
        stream = self.normalize_stream(raw_data.get("streams"))

        activity = NormalizedActivity(
            activity_type=activity_type,
            is_trainer=bool(raw_data.get("is_trainer", False)),
            stream=stream,
            source_data=self._extract_source_data(raw_data),
            has_power_meter=raw_data.get("has_power_meter"),
            source=self.source_name,
            source_id=raw_data.get("id"),
        )

        logger.debug(
            "Normalized native activity",
            activity_type=activity_type.value,
            channels=activity.channels(),
        )

        return activity


class ManualAdapter(RawDataAdapter):
    """
    Adapter for manually entered activities.

    Manual entries carry totals only:
    - type
    - moving_time (seconds), distance (meters)
    - optional total_elevation_gain (meters)
    """

    source_name = "manual"

    def normalize(self, raw_data: Dict[str, Any]) -> NormalizedActivity:
        """Normalize manually entered data."""

        activity_type = self._detect_activity_type(raw_data)
        source_data = self._extract_source_data(raw_data)

        activity = NormalizedActivity(
            activity_type=activity_type,
            is_trainer=bool(raw_data.get("trainer", False)),
            stream=None,
            source_data=source_data,
            has_power_meter=False,
            source=self.source_name,
            source_id=raw_data.get("id"),
        )

        logger.debug(
            "Normalized manual activity",
            activity_type=activity_type.value,
            moving_time=source_data.moving_time if source_data else None,
        )

        return activity


# Adapter registry
_ADAPTERS = {
    "strava": StravaAdapter,
    "native": NativeAdapter,
    "manual": ManualAdapter,
}


def get_adapter(source: str) -> RawDataAdapter:
    """
    Get the appropriate adapter for a data source.

    Args:
        source: Data source name (strava, native, manual)

    Returns:
        Adapter instance, the native adapter for unknown sources
    """
    adapter_class = _ADAPTERS.get(source.lower())

    if not adapter_class:
        logger.warning("Unknown data source, falling back to native", source=source)
        adapter_class = NativeAdapter

    return adapter_class()
