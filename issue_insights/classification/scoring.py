"""Task recommendation scoring for open issues."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Iterable, List, Optional

from issue_insights.constants import DEFAULT_TOP_TASKS, TASK_SCORE_WEIGHTS
from issue_insights.models import IssueClassification, IssueRecord, TaskScore, TopTasksResult
from issue_insights.utils import clamp, days_between, utc_now

from .classifier import IssueClassifier, IssueInput
from .features import label_names

logger = logging.getLogger(__name__)


class TaskScorer:
    """Rank open issues by how worthwhile they are to pick up next.

    Score components (0-100 overall):
    - category weight x 40
    - priority weight x 30
    - primary confidence x 20
    - recency bonus of up to 10 points, losing half a point per day of age
    """

    def __init__(self, classifier: Optional[IssueClassifier] = None) -> None:
        self.classifier = classifier or IssueClassifier()

    def calculate_task_score(
        self,
        issue: IssueInput,
        classification: IssueClassification,
        now: Optional[datetime] = None,
    ) -> TaskScore:
        """Score one issue from its classification.

        Args:
            issue: Issue record or raw GitHub issue mapping
            classification: Result of classifying ``issue``
            now: Reference time for the recency bonus (defaults to now)

        Returns:
            Task score rounded to one decimal place
        """
        record = IssueRecord.coerce(issue)
        config = self.classifier.config
        weights = TASK_SCORE_WEIGHTS
        default_weight = weights['default_weight']

        category_weight = config.category_weights.get(classification.primary_category, default_weight)
        priority_weight = config.priority_weights.get(classification.estimated_priority, default_weight)

        score = category_weight * weights['category']
        score += priority_weight * weights['priority']
        score += classification.primary_confidence * weights['confidence']

        if record.created_at is not None:
            age_days = days_between(record.created_at, now or utc_now())
            score += max(0.0, weights['recency'] - age_days * weights['recency_decay_per_day'])

        score = clamp(score, 0.0, weights['max_score'])

        return TaskScore(
            issue_number=record.number,
            issue_id=record.issue_id,
            title=record.title or "",
            body=record.body or "",
            score=round(score, 1),
            priority=classification.estimated_priority,
            category=classification.primary_category,
            confidence=round(classification.primary_confidence, 2),
            reasons=[reason for item in classification.classifications for reason in item.reasons],
            labels=label_names(record.labels),
            state=record.state,
            created_at=record.created_at,
            updated_at=record.updated_at,
            url=record.html_url,
        )

    def get_top_tasks(
        self,
        issues: Iterable[IssueInput],
        limit: int = DEFAULT_TOP_TASKS,
        now: Optional[datetime] = None,
    ) -> TopTasksResult:
        """Classify and score the open issues, returning the best ``limit``."""
        start_time = time.perf_counter()
        reference = now or utc_now()

        open_issues = [record for record in map(IssueRecord.coerce, issues) if record.is_open]
        scores: List[TaskScore] = [
            self.calculate_task_score(record, self.classifier.classify(record), reference)
            for record in open_issues
        ]
        scores.sort(key=lambda task: task.score, reverse=True)

        average_score = sum(task.score for task in scores) / len(scores) if scores else 0.0
        logger.debug(f"Scored {len(scores)} open issues, returning top {limit}")

        return TopTasksResult(
            tasks=scores[: max(limit, 0)],
            total_analyzed=len(open_issues),
            average_score=round(average_score, 1),
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
