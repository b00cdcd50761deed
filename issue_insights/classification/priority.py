"""Priority estimation from the primary classification and urgency signals."""

from __future__ import annotations

from typing import Iterable, NamedTuple

from issue_insights.constants import (
    CATEGORY_PRIORITY_MAP,
    PRIORITY_CONFIDENCE,
    PRIORITY_KEYWORDS,
    REGEX_PATTERNS,
    Priority,
)
from issue_insights.models import CategoryClassification, IssueFeatures


class PriorityEstimate(NamedTuple):
    priority: Priority
    confidence: float


def _mentions_any(features: IssueFeatures, keywords: Iterable[str]) -> bool:
    return any(keyword in features.title or keyword in features.body for keyword in keywords)


class PriorityEstimator:
    """Estimate issue priority.

    Algorithm:
    1. Look up the primary category's default priority; confidence starts at
       70% of the primary classification confidence
    2. Critical keywords force ``critical`` (+0.3 confidence)
    3. Otherwise, unless already critical, high keywords add +0.2 and lift
       ``medium``/``low`` to ``high``
    4. Priority-looking labels add +0.1; critical-looking ones force ``critical``
    """

    @staticmethod
    def estimate(features: IssueFeatures, primary: CategoryClassification) -> PriorityEstimate:
        priority = CATEGORY_PRIORITY_MAP[primary.category]
        confidence = primary.confidence * PRIORITY_CONFIDENCE['base_multiplier']

        if _mentions_any(features, PRIORITY_KEYWORDS['critical']):
            priority = Priority.CRITICAL
            confidence = min(confidence + PRIORITY_CONFIDENCE['critical_keyword_bonus'], 1.0)
        elif priority is not Priority.CRITICAL and _mentions_any(features, PRIORITY_KEYWORDS['high']):
            if priority in (Priority.MEDIUM, Priority.LOW):
                priority = Priority.HIGH
            confidence = min(confidence + PRIORITY_CONFIDENCE['high_keyword_bonus'], 1.0)

        priority_labels = [
            label for label in features.labels if REGEX_PATTERNS['priority_label'].search(label)
        ]
        if priority_labels:
            confidence = min(confidence + PRIORITY_CONFIDENCE['priority_label_bonus'], 1.0)
            if any(REGEX_PATTERNS['critical_label'].search(label) for label in priority_labels):
                priority = Priority.CRITICAL

        return PriorityEstimate(priority, confidence)
