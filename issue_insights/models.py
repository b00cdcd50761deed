"""Domain models shared across the issue insights toolkit."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from .constants import Category, IssueState, Priority, TrendDirection
from .utils import parse_timestamp


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _as_int(value: Any) -> int:
    """Coerce an identifier to ``int``; unusable values become 0."""
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


# =============================================================================
# Issue Records
# =============================================================================


@dataclass(slots=True)
class Label:
    """Issue label as returned by the tracker API."""

    name: str
    color: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        payload: Dict[str, Optional[str]] = {"name": self.name}
        if self.color is not None:
            payload["color"] = self.color
        if self.description is not None:
            payload["description"] = self.description
        return payload


# Labels arrive either as plain names or as objects carrying a ``name``
LabelLike = Union[str, Label, Mapping[str, Any]]


@dataclass(slots=True)
class IssueRecord:
    """Materialized issue handed to the classification and analytics engines."""

    number: int = 0
    title: Optional[str] = None
    body: Optional[str] = None
    labels: List[LabelLike] = field(default_factory=list)
    state: str = IssueState.OPEN.value
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    issue_id: int = 0
    html_url: str = ""

    def __post_init__(self) -> None:
        # Naive datetimes are taken as UTC; ISO strings are parsed
        self.created_at = parse_timestamp(self.created_at)
        self.closed_at = parse_timestamp(self.closed_at)
        self.updated_at = parse_timestamp(self.updated_at)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "IssueRecord":
        """Build a record from a GitHub REST issue object.

        Timestamps that cannot be parsed become ``None`` so the analytics can
        exclude them instead of failing.
        """

        labels: List[LabelLike] = []
        for raw_label in payload.get("labels") or []:
            if isinstance(raw_label, Mapping):
                labels.append(
                    Label(
                        name=str(raw_label.get("name") or ""),
                        color=raw_label.get("color"),
                        description=raw_label.get("description"),
                    )
                )
            else:
                labels.append(raw_label)

        state = str(payload.get("state") or IssueState.OPEN.value).lower()

        return cls(
            number=_as_int(payload.get("number")),
            title=payload.get("title"),
            body=payload.get("body"),
            labels=labels,
            state=state,
            created_at=payload.get("created_at"),
            closed_at=payload.get("closed_at"),
            updated_at=payload.get("updated_at"),
            issue_id=_as_int(payload.get("id")),
            html_url=str(payload.get("html_url") or ""),
        )

    @classmethod
    def coerce(cls, issue: Union["IssueRecord", Mapping[str, Any]]) -> "IssueRecord":
        """Accept either a record or a raw issue mapping."""

        if isinstance(issue, IssueRecord):
            return issue
        if isinstance(issue, Mapping):
            return cls.from_dict(issue)
        raise TypeError(f"Unsupported issue type: {type(issue).__name__}")

    @property
    def is_open(self) -> bool:
        return self.state == IssueState.OPEN.value

    @property
    def is_closed(self) -> bool:
        return self.state == IssueState.CLOSED.value


# =============================================================================
# Classification Models
# =============================================================================


@dataclass(slots=True)
class IssueMetadata:
    """Structural facts about an issue captured during feature extraction."""

    title_length: int = 0
    body_length: int = 0
    has_code_blocks: bool = False
    has_steps_to_reproduce: bool = False
    has_expected_behavior: bool = False
    label_count: int = 0
    existing_labels: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "title_length": self.title_length,
            "body_length": self.body_length,
            "has_code_blocks": self.has_code_blocks,
            "has_steps_to_reproduce": self.has_steps_to_reproduce,
            "has_expected_behavior": self.has_expected_behavior,
            "label_count": self.label_count,
            "existing_labels": list(self.existing_labels),
        }


@dataclass(slots=True)
class IssueFeatures:
    """Normalized feature bag a rule is scored against."""

    title: str
    body: str
    labels: List[str]
    metadata: IssueMetadata


@dataclass(slots=True)
class CategoryClassification:
    """Evidence collected for one category."""

    category: Category
    confidence: float
    reasons: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """Serialise the classification for JSON output."""

        return {
            "category": self.category.value,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "keywords": list(self.keywords),
        }


@dataclass(slots=True)
class IssueClassification:
    """Complete classification result for one issue."""

    issue_id: int
    issue_number: int
    classifications: List[CategoryClassification]
    primary_category: Category
    primary_confidence: float
    estimated_priority: Priority
    priority_confidence: float
    processing_time_ms: float
    version: str
    metadata: IssueMetadata

    def to_dict(self) -> Dict[str, object]:
        """Serialise the classification result for JSON output."""

        return {
            "issue_id": self.issue_id,
            "issue_number": self.issue_number,
            "classifications": [item.to_dict() for item in self.classifications],
            "primary_category": self.primary_category.value,
            "primary_confidence": self.primary_confidence,
            "estimated_priority": self.estimated_priority.value,
            "priority_confidence": self.priority_confidence,
            "processing_time_ms": self.processing_time_ms,
            "version": self.version,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(slots=True)
class BatchError:
    """Failure recorded for a single issue during batch classification."""

    issue_number: int
    error: str

    def to_dict(self) -> Dict[str, object]:
        return {"issue_number": self.issue_number, "error": self.error}


@dataclass(slots=True)
class BatchClassificationResult:
    """Outcome of classifying many issues in one call."""

    total_issues: int
    processed_issues: int
    failed_issues: int
    results: List[IssueClassification] = field(default_factory=list)
    errors: List[BatchError] = field(default_factory=list)
    processing_time_ms: float = 0.0
    average_confidence: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_issues": self.total_issues,
            "processed_issues": self.processed_issues,
            "failed_issues": self.failed_issues,
            "results": [result.to_dict() for result in self.results],
            "errors": [error.to_dict() for error in self.errors],
            "processing_time_ms": self.processing_time_ms,
            "average_confidence": self.average_confidence,
        }


@dataclass(slots=True)
class TaskScore:
    """Ranking score of an open issue used for task recommendations."""

    issue_number: int
    issue_id: int
    title: str
    body: str
    score: float
    priority: Priority
    category: Category
    confidence: float
    reasons: List[str]
    labels: List[str]
    state: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    url: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "issue_number": self.issue_number,
            "issue_id": self.issue_id,
            "title": self.title,
            "body": self.body,
            "score": self.score,
            "priority": self.priority.value,
            "category": self.category.value,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "labels": list(self.labels),
            "state": self.state,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
            "url": self.url,
        }


@dataclass(slots=True)
class TopTasksResult:
    """Highest scoring open issues with summary statistics."""

    tasks: List[TaskScore]
    total_analyzed: int
    average_score: float
    processing_time_ms: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "tasks": [task.to_dict() for task in self.tasks],
            "total_analyzed": self.total_analyzed,
            "average_score": self.average_score,
            "processing_time_ms": self.processing_time_ms,
        }


# =============================================================================
# Analytics Models
# =============================================================================


@dataclass(slots=True)
class TimeSeriesPoint:
    """Single observation of a time series."""

    timestamp: datetime
    value: float
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "timestamp": self.timestamp.isoformat(),
            "value": self.value,
        }
        if self.category is not None:
            payload["category"] = self.category
        return payload


@dataclass(slots=True)
class TrendPrediction:
    """Forecast for the period following the last observation."""

    next_period: float
    confidence: float

    def to_dict(self) -> Dict[str, float]:
        return {"next_period": self.next_period, "confidence": self.confidence}


@dataclass(slots=True)
class TrendAnalysis:
    """Linear trend fitted to a time series."""

    direction: TrendDirection
    confidence: float
    slope: float
    r_squared: float
    prediction: TrendPrediction

    def to_dict(self) -> Dict[str, object]:
        return {
            "direction": self.direction.value,
            "confidence": self.confidence,
            "slope": self.slope,
            "r_squared": self.r_squared,
            "prediction": self.prediction.to_dict(),
        }


@dataclass(slots=True)
class PerformanceMetrics:
    """Resolution and throughput statistics for a batch of issues.

    Times are in hours, rates in percent and throughput in issues per day.
    """

    average_resolution_time: float
    median_resolution_time: float
    resolution_rate: float
    response_time: float
    throughput: float
    backlog_size: int
    burndown_rate: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "average_resolution_time": self.average_resolution_time,
            "median_resolution_time": self.median_resolution_time,
            "resolution_rate": self.resolution_rate,
            "response_time": self.response_time,
            "throughput": self.throughput,
            "backlog_size": self.backlog_size,
            "burndown_rate": self.burndown_rate,
        }


@dataclass(slots=True)
class ProcessingStats:
    """Timing statistics over many classification calls."""

    average_time_ms: float = 0.0
    min_time_ms: float = 0.0
    max_time_ms: float = 0.0
    total_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "average_time_ms": self.average_time_ms,
            "min_time_ms": self.min_time_ms,
            "max_time_ms": self.max_time_ms,
            "total_time_ms": self.total_time_ms,
        }


@dataclass(slots=True)
class ClassificationMetrics:
    """Aggregate view over a set of classification results."""

    total_classified: int
    average_confidence: float
    category_distribution: Dict[Category, int] = field(default_factory=dict)
    priority_distribution: Dict[Priority, int] = field(default_factory=dict)
    processing_stats: ProcessingStats = field(default_factory=ProcessingStats)

    def to_dict(self) -> Dict[str, object]:
        return {
            "total_classified": self.total_classified,
            "average_confidence": self.average_confidence,
            "category_distribution": {
                category.value: count for category, count in self.category_distribution.items()
            },
            "priority_distribution": {
                priority.value: count for priority, count in self.priority_distribution.items()
            },
            "processing_stats": self.processing_stats.to_dict(),
        }


@dataclass(slots=True)
class InsightMetrics:
    """Snapshot of issue counts and ages (days) behind an insights report."""

    total_issues: int
    open_issues: int
    closed_issues: int
    average_age: float
    oldest_issue: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "total_issues": self.total_issues,
            "open_issues": self.open_issues,
            "closed_issues": self.closed_issues,
            "average_age": self.average_age,
            "oldest_issue": self.oldest_issue,
        }


@dataclass(slots=True)
class IssueInsights:
    """Narrative findings synthesized from issue metrics and classifications."""

    summary: str
    key_findings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    risk_factors: List[str] = field(default_factory=list)
    opportunities: List[str] = field(default_factory=list)
    metrics: Optional[InsightMetrics] = None

    def to_dict(self) -> Dict[str, object]:
        """Convert the insights into a JSON friendly payload."""

        return {
            "summary": self.summary,
            "key_findings": list(self.key_findings),
            "recommendations": list(self.recommendations),
            "risk_factors": list(self.risk_factors),
            "opportunities": list(self.opportunities),
            "metrics": self.metrics.to_dict() if self.metrics else None,
        }
