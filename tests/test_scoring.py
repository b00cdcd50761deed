from __future__ import annotations

import pytest

from issue_insights.classification import IssueClassifier, TaskScorer
from issue_insights.config import ClassificationConfig
from issue_insights.constants import Category, Priority

from conftest import NOW, make_issue


def test_task_score_combines_weights_confidence_and_recency() -> None:
    scorer = TaskScorer()
    issue = make_issue(number=5, title="Fix bug in authentication", labels=["bug"], created_days_ago=2)
    classification = scorer.classifier.classify(issue)

    task = scorer.calculate_task_score(issue, classification, now=NOW)

    # bug weight 1.0 * 40 + high 0.8 * 30 + 0.9 * 20 + (10 - 2 * 0.5)
    assert classification.primary_confidence == pytest.approx(0.9)
    assert task.score == pytest.approx(91.0)
    assert task.priority is Priority.HIGH
    assert task.category is Category.BUG
    assert task.confidence == 0.9
    assert task.labels == ["bug"]
    assert task.url.endswith("/issues/5")
    assert task.reasons == [reason for item in classification.classifications for reason in item.reasons]


def test_missing_weights_default_to_half() -> None:
    config = ClassificationConfig(
        min_confidence=0.1,
        rules=[{"id": "crash", "name": "Crash", "category": "bug", "conditions": {"title_keywords": ["crash"]}}],
    )
    scorer = TaskScorer(IssueClassifier(config))
    issue = make_issue(title="Crash", created_days_ago=None)

    task = scorer.calculate_task_score(issue, scorer.classifier.classify(issue), now=NOW)

    # 0.5 * 40 + 0.5 * 30 + 0.4 * 20, no creation date so no recency bonus
    assert task.score == pytest.approx(43.0)
    assert task.confidence == 0.4


def test_recency_bonus_expires() -> None:
    scorer = TaskScorer()
    fresh = make_issue(title="Add support for themes", created_days_ago=0)
    stale = make_issue(title="Add support for themes", created_days_ago=30)

    fresh_score = scorer.calculate_task_score(fresh, scorer.classifier.classify(fresh), now=NOW).score
    stale_score = scorer.calculate_task_score(stale, scorer.classifier.classify(stale), now=NOW).score

    assert fresh_score - stale_score == pytest.approx(10.0)


def test_top_tasks_only_ranks_open_issues() -> None:
    issues = [
        make_issue(number=1, title="How do I configure this?", created_days_ago=3),
        make_issue(number=2, title="Security vulnerability in login", created_days_ago=3),
        make_issue(number=3, title="Fix crash on startup", state="closed", created_days_ago=3, closed_days_ago=1),
        make_issue(number=4, title="Fix bug in parser", created_days_ago=3),
    ]

    result = TaskScorer().get_top_tasks(issues, limit=2, now=NOW)

    assert result.total_analyzed == 3
    assert [task.issue_number for task in result.tasks] == [2, 4]
    scores = [task.score for task in result.tasks]
    assert scores == sorted(scores, reverse=True)
    assert result.average_score == round(result.average_score, 1)


def test_top_tasks_of_nothing() -> None:
    result = TaskScorer().get_top_tasks([], now=NOW)

    assert result.tasks == []
    assert result.total_analyzed == 0
    assert result.average_score == 0.0


def test_scoring_reads_config_without_copying(monkeypatch: pytest.MonkeyPatch) -> None:
    scorer = TaskScorer()

    def fail() -> None:
        raise AssertionError("config copied")

    monkeypatch.setattr(scorer.classifier, "get_config", fail)
    result = scorer.get_top_tasks([make_issue(title="Fix bug in parser", created_days_ago=3)], now=NOW)

    assert result.total_analyzed == 1
    assert scorer.classifier.config is scorer.classifier.config
