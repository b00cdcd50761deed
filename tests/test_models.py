from __future__ import annotations

from datetime import datetime, timezone

import pytest

from issue_insights.analytics import AnalyticsEngine, InsightSynthesizer, MetricsCalculator, generate_time_series
from issue_insights.models import IssueRecord

from conftest import NOW


def test_naive_datetimes_are_taken_as_utc() -> None:
    record = IssueRecord(created_at=datetime(2024, 5, 30, 12), closed_at=datetime(2024, 5, 31, 12))

    assert record.created_at == datetime(2024, 5, 30, 12, tzinfo=timezone.utc)
    assert record.closed_at == datetime(2024, 5, 31, 12, tzinfo=timezone.utc)
    assert record.updated_at is None


def test_iso_strings_are_parsed_and_garbage_dropped() -> None:
    record = IssueRecord(created_at="2024-05-30T10:00:00Z", closed_at="yesterday")

    assert record.created_at == datetime(2024, 5, 30, 10, tzinfo=timezone.utc)
    assert record.closed_at is None


def test_metrics_accept_naive_records() -> None:
    issues = [
        IssueRecord(state="closed", created_at=datetime(2024, 5, 30, 12), closed_at=datetime(2024, 5, 31, 12)),
    ]

    metrics = MetricsCalculator.calculate(issues, now=NOW)

    assert metrics.average_resolution_time == pytest.approx(24.0)
    assert metrics.resolution_rate == pytest.approx(100.0)


def test_insights_accept_naive_records() -> None:
    insights = InsightSynthesizer.generate([IssueRecord(created_at=datetime(2024, 5, 22, 12))], [], now=NOW)

    assert insights.metrics.average_age == pytest.approx(10.0)


def test_time_series_accepts_naive_records() -> None:
    series = generate_time_series([IssueRecord(created_at=datetime(2024, 5, 30, 12))], 7, now=NOW)

    assert len(series) == 7
    assert sum(point.value for point in series) == 1.0


def test_non_numeric_identifiers_become_zero() -> None:
    record = IssueRecord.from_dict({"number": "abc", "id": "x1", "title": "Broken"})

    assert record.number == 0
    assert record.issue_id == 0
    assert IssueRecord.from_dict({"number": "7"}).number == 7


def test_engine_tolerates_non_numeric_identifiers() -> None:
    engine = AnalyticsEngine(clock=lambda: NOW)
    payload = {"number": "abc", "state": "closed", "created_at": "2024-05-30T12:00:00Z", "closed_at": "2024-05-31T12:00:00Z"}

    metrics = engine.calculate_performance_metrics([payload])
    insights = engine.generate_insights([payload])

    assert metrics.average_resolution_time == pytest.approx(24.0)
    assert insights.metrics.closed_issues == 1
