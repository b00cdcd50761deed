"""Resolution, throughput and classification distribution metrics."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from issue_insights.constants import METRICS_WINDOWS, RESPONSE_TIME_PLACEHOLDER_HOURS
from issue_insights.models import (
    ClassificationMetrics,
    IssueClassification,
    IssueRecord,
    PerformanceMetrics,
    ProcessingStats,
)
from issue_insights.utils import hours_between, utc_now


def median(values: Sequence[float]) -> float:
    """Median with the usual odd/even rule; 0 for an empty sequence."""
    if not values:
        return 0.0

    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


class MetricsCalculator:
    """Compute performance metrics for a batch of issues."""

    @staticmethod
    def resolution_times(issues: Sequence[IssueRecord]) -> List[float]:
        """Hours from creation to close for closed issues with valid dates.

        Issues missing either timestamp, or closed before they were created,
        are left out rather than counted as zero.
        """
        times = []
        for issue in issues:
            if not issue.is_closed or issue.created_at is None or issue.closed_at is None:
                continue
            hours = hours_between(issue.created_at, issue.closed_at)
            if hours >= 0:
                times.append(hours)
        return times

    @classmethod
    def calculate(
        cls, issues: Sequence[IssueRecord], now: Optional[datetime] = None
    ) -> PerformanceMetrics:
        """Summarise resolution speed and backlog for ``issues``.

        The resolution rate covers issues created in the trailing window; when
        that window is empty it falls back to the overall closed/total ratio.
        """
        recent_days = METRICS_WINDOWS['recent_days']
        window_start = (now or utc_now()) - timedelta(days=recent_days)

        open_count = sum(1 for issue in issues if issue.is_open)
        closed_count = sum(1 for issue in issues if issue.is_closed)

        times = cls.resolution_times(issues)
        average_resolution_time = sum(times) / len(times) if times else 0.0

        recent = [
            issue for issue in issues
            if issue.created_at is not None and issue.created_at >= window_start
        ]
        recent_closed = sum(1 for issue in recent if issue.is_closed)

        if recent:
            resolution_rate = recent_closed / len(recent) * 100
        elif issues:
            resolution_rate = closed_count / len(issues) * 100
        else:
            resolution_rate = 0.0

        throughput = recent_closed / recent_days

        return PerformanceMetrics(
            average_resolution_time=average_resolution_time,
            median_resolution_time=median(times),
            resolution_rate=resolution_rate,
            response_time=RESPONSE_TIME_PLACEHOLDER_HOURS,
            throughput=throughput,
            backlog_size=open_count,
            burndown_rate=throughput,
        )


def generate_classification_metrics(
    classifications: Sequence[IssueClassification],
) -> ClassificationMetrics:
    """Aggregate confidence, category/priority counts and timing."""
    total = len(classifications)
    if total == 0:
        return ClassificationMetrics(total_classified=0, average_confidence=0.0)

    # Counter keeps first-encounter order, which breaks ties later on
    categories = Counter(item.primary_category for item in classifications)
    priorities = Counter(item.estimated_priority for item in classifications)
    times = [item.processing_time_ms for item in classifications]
    total_time = sum(times)

    return ClassificationMetrics(
        total_classified=total,
        average_confidence=sum(item.primary_confidence for item in classifications) / total,
        category_distribution=dict(categories),
        priority_distribution=dict(priorities),
        processing_stats=ProcessingStats(
            average_time_ms=total_time / total,
            min_time_ms=min(times),
            max_time_ms=max(times),
            total_time_ms=total_time,
        ),
    )
