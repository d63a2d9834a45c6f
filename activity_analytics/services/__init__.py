"""
Services module - Analysis engine layer.

Modules:
- analytics: Stream analysis, analyzers and source adapters
"""
from activity_analytics.services.analytics import ActivityComputer, compute_analysis

__all__ = [
    "ActivityComputer",
    "compute_analysis",
]
