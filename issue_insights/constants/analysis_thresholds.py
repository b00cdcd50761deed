"""Analysis thresholds for trends, metrics and insights."""

from __future__ import annotations

# =============================================================================
# Trend Analysis
# =============================================================================

TREND_THRESHOLDS = {
    'minimum_points_for_trend': 3,  # Fewer points: no regression, report stable
    'stable_slope': 0.01,  # |slope| below this is stable
    'minimum_r_squared': 0.3,  # Fit quality below this is stable
}

# =============================================================================
# Performance Metrics
# =============================================================================

METRICS_WINDOWS = {
    'recent_days': 30,  # Trailing window for resolution rate and throughput
    'default_time_series_days': 30,
}

# Time to first response needs comment data the core does not receive
RESPONSE_TIME_PLACEHOLDER_HOURS = 24.0

# =============================================================================
# Insight Synthesis
# =============================================================================

INSIGHT_THRESHOLDS = {
    'low_resolution_rate': 70.0,  # Percent
    'aging_average_days': 90,
    'stale_oldest_days': 365,
    'bug_share': 0.5,  # Fraction of total issues
    'feature_share': 0.4,
}
