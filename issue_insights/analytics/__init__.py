"""Trend, performance and insight analytics over issue data."""

from .engine import AnalyticsEngine
from .insights import InsightSynthesizer
from .metrics import MetricsCalculator, generate_classification_metrics, median
from .trends import TrendAnalyzer, generate_time_series

__all__ = [
    "AnalyticsEngine",
    "InsightSynthesizer",
    "MetricsCalculator",
    "TrendAnalyzer",
    "generate_classification_metrics",
    "generate_time_series",
    "median",
]
