"""Analytics facade over the trend, metrics and insight components."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, List, Mapping, Sequence, Union

from issue_insights.constants import METRICS_WINDOWS
from issue_insights.models import (
    ClassificationMetrics,
    IssueClassification,
    IssueInsights,
    IssueRecord,
    PerformanceMetrics,
    TimeSeriesPoint,
    TrendAnalysis,
)
from issue_insights.utils import utc_now

from .insights import InsightSynthesizer
from .metrics import MetricsCalculator, generate_classification_metrics
from .trends import TrendAnalyzer, generate_time_series

IssueInput = Union[IssueRecord, Mapping[str, Any]]


def _records(issues: Iterable[IssueInput]) -> List[IssueRecord]:
    return [IssueRecord.coerce(issue) for issue in issues]


@dataclass(slots=True)
class AnalyticsEngine:
    """Stateless analytics entry point.

    ``clock`` supplies the reference time for windowed and age-based figures;
    tests inject a fixed clock to make results deterministic.
    """

    clock: Callable[[], datetime] = utc_now

    def analyze_trends(self, points: Sequence[TimeSeriesPoint]) -> TrendAnalysis:
        return TrendAnalyzer.analyze(points)

    def calculate_performance_metrics(self, issues: Iterable[IssueInput]) -> PerformanceMetrics:
        return MetricsCalculator.calculate(_records(issues), now=self.clock())

    def generate_classification_metrics(
        self, classifications: Sequence[IssueClassification]
    ) -> ClassificationMetrics:
        return generate_classification_metrics(classifications)

    def generate_insights(
        self,
        issues: Iterable[IssueInput],
        classifications: Sequence[IssueClassification] = (),
    ) -> IssueInsights:
        return InsightSynthesizer.generate(_records(issues), classifications, now=self.clock())

    def generate_time_series(
        self,
        issues: Iterable[IssueInput],
        window_days: int = METRICS_WINDOWS['default_time_series_days'],
    ) -> List[TimeSeriesPoint]:
        return generate_time_series(_records(issues), window_days, now=self.clock())
