"""
Per-metric analyzers.

Each analyzer turns one dimension of an activity stream into a summary.
"""
from activity_analytics.services.analytics.analyzers.base import AnalysisContext, MetricAnalyzer
from activity_analytics.services.analytics.analyzers.cadence import CadenceAnalyzer
from activity_analytics.services.analytics.analyzers.elevation import ElevationAnalyzer
from activity_analytics.services.analytics.analyzers.grade import GradeAnalyzer
from activity_analytics.services.analytics.analyzers.heart_rate import HeartRateAnalyzer
from activity_analytics.services.analytics.analyzers.move import MoveAnalyzer
from activity_analytics.services.analytics.analyzers.power import PowerAnalyzer

__all__ = [
    "AnalysisContext",
    "MetricAnalyzer",
    "MoveAnalyzer",
    "PowerAnalyzer",
    "HeartRateAnalyzer",
    "CadenceAnalyzer",
    "GradeAnalyzer",
    "ElevationAnalyzer",
]
