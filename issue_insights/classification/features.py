"""Feature extraction from raw issue records."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from issue_insights.constants import REGEX_PATTERNS
from issue_insights.models import IssueFeatures, IssueMetadata, IssueRecord


def label_name(label: Any) -> str:
    """Resolve a label given as a plain name or as an object carrying ``name``."""

    if isinstance(label, str):
        return label
    if isinstance(label, Mapping):
        return str(label.get("name") or "")
    return str(getattr(label, "name", None) or "")


def label_names(labels: Iterable[Any]) -> List[str]:
    """Normalize a label list to plain names, dropping empty ones."""
    return [name for name in (label_name(label) for label in labels or []) if name]


class FeatureExtractor:
    """Turn an issue record into the feature bag rules are scored against.

    Missing title or body degrade to empty strings; nothing here raises for
    absent fields.
    """

    @staticmethod
    def extract(issue: IssueRecord) -> IssueFeatures:
        title = issue.title or ""
        body = issue.body or ""
        labels = label_names(issue.labels)

        metadata = IssueMetadata(
            title_length=len(title),
            body_length=len(body),
            has_code_blocks=bool(REGEX_PATTERNS['code_fence'].search(body)),
            has_steps_to_reproduce=bool(REGEX_PATTERNS['steps_to_reproduce'].search(body)),
            has_expected_behavior=bool(REGEX_PATTERNS['expected_behavior'].search(body)),
            label_count=len(labels),
            existing_labels=list(labels),
        )

        return IssueFeatures(
            title=title.lower(),
            body=body.lower(),
            labels=[label.lower() for label in labels],
            metadata=metadata,
        )
