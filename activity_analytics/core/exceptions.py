"""
Engine exceptions.

Missing or degenerate data is not an error: analyzers return None for
the affected summary. These exceptions cover contract violations only.
"""


class AnalyticsError(Exception):
    """Base class for all engine errors."""


class StreamValidationError(AnalyticsError, ValueError):
    """Activity stream channels are inconsistent or bounds are invalid."""


class InvalidZoneConfigurationError(AnalyticsError, ValueError):
    """Zone boundaries are not ordered and contiguous."""


class NoEligibleWindowError(AnalyticsError, ValueError):
    """No contiguous window of the requested duration exists."""
    
    def __init__(self, duration: float, message: str = ""):
        self.duration = duration
        super().__init__(message or f"No eligible window of {duration}s")
