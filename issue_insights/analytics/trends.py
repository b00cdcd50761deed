"""Linear trend fitting and daily time-series generation."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from issue_insights.constants import METRICS_WINDOWS, TREND_THRESHOLDS, TrendDirection
from issue_insights.exceptions import InvalidTimeWindowError
from issue_insights.models import IssueRecord, TimeSeriesPoint, TrendAnalysis, TrendPrediction
from issue_insights.utils import clamp, days_between, utc_now

logger = logging.getLogger(__name__)


class TrendAnalyzer:
    """Fit an ordinary least-squares line to a time series.

    Timestamps become elapsed days since the earliest point. Direction is
    ``stable`` when the slope is negligible or the fit explains too little of
    the variance.
    """

    @staticmethod
    def analyze(points: Sequence[TimeSeriesPoint]) -> TrendAnalysis:
        """Return the trend of ``points``.

        Args:
            points: Observations in any order; the input is not modified

        Returns:
            Trend analysis. Fewer than three points yields a stable trend with
            zero confidence that predicts the last known value.
        """
        if len(points) < TREND_THRESHOLDS['minimum_points_for_trend']:
            last_value = points[-1].value if points else 0.0
            return TrendAnalysis(
                direction=TrendDirection.STABLE,
                confidence=0.0,
                slope=0.0,
                r_squared=0.0,
                prediction=TrendPrediction(next_period=last_value, confidence=0.0),
            )

        ordered = sorted(points, key=lambda point: point.timestamp)
        origin = ordered[0].timestamp
        xs = [days_between(origin, point.timestamp) for point in ordered]
        ys = [float(point.value) for point in ordered]

        n = len(ordered)
        sum_x = sum(xs)
        sum_y = sum(ys)
        sum_xy = sum(x * y for x, y in zip(xs, ys))
        sum_xx = sum(x * x for x in xs)

        denominator = n * sum_xx - sum_x * sum_x
        # All points share one timestamp: no slope can be fitted
        slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator else 0.0
        intercept = (sum_y - slope * sum_x) / n

        mean_y = sum_y / n
        ss_res = sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, ys))
        ss_tot = sum((y - mean_y) ** 2 for y in ys)
        r_squared = 1.0 if ss_tot == 0 else 1 - ss_res / ss_tot

        confidence = abs(r_squared)
        if abs(slope) < TREND_THRESHOLDS['stable_slope'] or confidence < TREND_THRESHOLDS['minimum_r_squared']:
            direction = TrendDirection.STABLE
        elif slope > 0:
            direction = TrendDirection.INCREASING
        else:
            direction = TrendDirection.DECREASING

        next_period = slope * (xs[-1] + 1) + intercept

        return TrendAnalysis(
            direction=direction,
            confidence=confidence,
            slope=slope,
            r_squared=r_squared,
            prediction=TrendPrediction(
                next_period=max(0.0, next_period),
                confidence=clamp(confidence),
            ),
        )


def generate_time_series(
    issues: Iterable[IssueRecord],
    window_days: int = METRICS_WINDOWS['default_time_series_days'],
    now: Optional[datetime] = None,
) -> List[TimeSeriesPoint]:
    """Count created issues per UTC day over the trailing window.

    Args:
        issues: Issue records; ones without a creation date are skipped
        window_days: Number of daily points to produce
        now: End of the window (defaults to now)

    Returns:
        ``window_days`` points in chronological order, zero-filled

    Raises:
        InvalidTimeWindowError: If ``window_days`` is not positive
    """
    if window_days <= 0:
        raise InvalidTimeWindowError(f"Time window must be positive, got {window_days}")

    window_start = (now or utc_now()) - timedelta(days=window_days)
    daily_counts = Counter(
        issue.created_at.date()
        for issue in issues
        if issue.created_at is not None and issue.created_at >= window_start
    )

    series = []
    for offset in range(window_days):
        timestamp = window_start + timedelta(days=offset)
        series.append(TimeSeriesPoint(timestamp=timestamp, value=float(daily_counts[timestamp.date()])))

    logger.debug(f"Generated {len(series)} daily points from {sum(daily_counts.values())} issues")
    return series
