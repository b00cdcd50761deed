"""Narrative insights synthesized from issue data and classifications."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from issue_insights.constants import INSIGHT_MESSAGES, INSIGHT_THRESHOLDS, Category
from issue_insights.models import InsightMetrics, IssueClassification, IssueInsights, IssueRecord
from issue_insights.utils import days_between, utc_now

from .metrics import generate_classification_metrics


class InsightSynthesizer:
    """Turn counts, ages and category distribution into findings.

    Every threshold is checked independently, so any combination of findings,
    risks and recommendations can appear in one report.
    """

    @staticmethod
    def generate(
        issues: Sequence[IssueRecord],
        classifications: Sequence[IssueClassification],
        now: Optional[datetime] = None,
    ) -> IssueInsights:
        reference = now or utc_now()
        thresholds = INSIGHT_THRESHOLDS

        total = len(issues)
        open_issues = [issue for issue in issues if issue.is_open]
        closed_count = sum(1 for issue in issues if issue.is_closed)

        ages = [
            days_between(issue.created_at, reference)
            for issue in open_issues
            if issue.created_at is not None
        ]
        average_age = sum(ages) / len(ages) if ages else 0.0
        oldest = max(ages) if ages else 0.0

        resolution_rate = closed_count / total * 100 if total else 0.0

        insights = IssueInsights(
            summary=INSIGHT_MESSAGES['summary'].format(
                total=total,
                open=len(open_issues),
                closed=closed_count,
                average_age=average_age,
                resolution_rate=resolution_rate,
            ),
            metrics=InsightMetrics(
                total_issues=total,
                open_issues=len(open_issues),
                closed_issues=closed_count,
                average_age=average_age,
                oldest_issue=oldest,
            ),
        )

        if resolution_rate < thresholds['low_resolution_rate']:
            insights.key_findings.append(
                INSIGHT_MESSAGES['low_resolution_finding'].format(resolution_rate=resolution_rate)
            )
            insights.recommendations.append(INSIGHT_MESSAGES['low_resolution_recommendation'])

        if average_age > thresholds['aging_average_days']:
            insights.risk_factors.append(INSIGHT_MESSAGES['aging_risk'].format(average_age=average_age))
            insights.recommendations.append(INSIGHT_MESSAGES['aging_recommendation'])

        if oldest > thresholds['stale_oldest_days']:
            insights.risk_factors.append(INSIGHT_MESSAGES['stale_risk'].format(oldest=oldest))
            insights.recommendations.append(INSIGHT_MESSAGES['stale_recommendation'])

        distribution = generate_classification_metrics(classifications).category_distribution
        if distribution:
            # max() keeps the first of equally frequent categories
            top_category, count = max(distribution.items(), key=lambda item: item[1])
            insights.key_findings.append(
                INSIGHT_MESSAGES['top_category_finding'].format(category=top_category.value, count=count)
            )

            if top_category is Category.BUG and count > total * thresholds['bug_share']:
                insights.risk_factors.append(INSIGHT_MESSAGES['bug_risk'])
                insights.recommendations.append(INSIGHT_MESSAGES['bug_recommendation'])
            elif top_category is Category.FEATURE and count > total * thresholds['feature_share']:
                insights.opportunities.append(INSIGHT_MESSAGES['feature_opportunity'])
                insights.recommendations.append(INSIGHT_MESSAGES['feature_recommendation'])

        return insights
