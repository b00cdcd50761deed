from __future__ import annotations

import pytest

from issue_insights.classification import IssueClassifier
from issue_insights.classification import classifier as classifier_module
from issue_insights.config import ClassificationConfig, default_classification_config
from issue_insights.constants import Category, Priority
from issue_insights.exceptions import ClassificationError, ConfigurationError

from conftest import issue_payload, make_issue


def _config(rules, **overrides) -> ClassificationConfig:
    return ClassificationConfig(rules=rules, **{"min_confidence": 0.1, **overrides})


def test_bug_report_is_classified_as_high_priority_bug(classifier: IssueClassifier) -> None:
    issue = make_issue(
        number=12,
        title="Fix bug in authentication",
        body="There is a bug that produces confusing error messages on login.",
    )

    result = classifier.classify(issue)

    assert result.primary_category is Category.BUG
    assert result.estimated_priority is Priority.HIGH
    assert result.primary_confidence == pytest.approx(0.9)
    assert result.priority_confidence == pytest.approx(0.63)
    assert result.issue_number == 12
    assert result.issue_id == 12000
    assert 'Title contains "bug"' in result.classifications[0].reasons
    assert "fix" in result.classifications[0].keywords


def test_security_report_is_critical(classifier: IssueClassifier) -> None:
    issue = make_issue(
        title="Security vulnerability in user authentication",
        body="There is a security issue that allows unauthorized access.",
    )

    result = classifier.classify(issue)

    assert result.primary_category is Category.SECURITY
    assert result.estimated_priority is Priority.CRITICAL
    assert result.primary_confidence > 0.8
    assert result.priority_confidence == pytest.approx(1.0)


def test_feature_request_scores_through_rule_and_category_weights(classifier: IssueClassifier) -> None:
    result = classifier.classify(make_issue(title="Add support for dark mode"))

    assert result.primary_category is Category.FEATURE
    # Rule score capped at 1.0, then rule weight 0.8 and category weight 0.8
    assert result.primary_confidence == pytest.approx(0.64)
    assert result.estimated_priority is Priority.MEDIUM
    assert result.priority_confidence == pytest.approx(0.448)


def test_empty_issue_falls_back_to_question(classifier: IssueClassifier) -> None:
    result = classifier.classify(make_issue(title=None, body=None))

    assert result.primary_category is Category.QUESTION
    assert result.primary_confidence == pytest.approx(0.3)
    assert result.primary_confidence < 0.7
    assert result.classifications == []
    assert result.estimated_priority is Priority.LOW
    assert result.metadata.title_length == 0


def test_weak_primary_is_replaced_by_fallback_but_evidence_is_kept() -> None:
    classifier = IssueClassifier(default_classification_config())
    classifier.update_config({"min_confidence": 0.7})

    result = classifier.classify(make_issue(title="Add support for dark mode"))

    assert result.primary_category is Category.QUESTION
    assert result.primary_confidence == pytest.approx(0.3)
    assert result.classifications[0].category is Category.FEATURE


def test_classifications_are_sorted_unique_and_truncated(classifier: IssueClassifier) -> None:
    issue = make_issue(
        title="How to fix slow docs build? Add feature to improve performance",
        body="Question about documentation and an error in the guide",
    )

    result = classifier.classify(issue)
    confidences = [item.confidence for item in result.classifications]
    categories = [item.category for item in result.classifications]

    assert confidences == sorted(confidences, reverse=True)
    assert len(categories) == len(set(categories))
    assert len(result.classifications) <= 3
    assert all(0.0 <= value <= 1.0 for value in confidences)
    assert result.primary_category is result.classifications[0].category


def test_max_categories_limits_output(classifier: IssueClassifier) -> None:
    classifier.update_config(max_categories=1)

    result = classifier.classify(
        make_issue(title="Fix bug: add feature docs", body="documentation error")
    )

    assert len(result.classifications) == 1


def test_ties_keep_taxonomy_order() -> None:
    rules = [
        {"id": "feature-thing", "name": "Feature", "category": "feature",
         "conditions": {"title_keywords": ["thing"]}},
        {"id": "bug-thing", "name": "Bug", "category": "bug",
         "conditions": {"title_keywords": ["thing"]}},
    ]
    classifier = IssueClassifier(_config(rules))

    result = classifier.classify(make_issue(title="A thing"))

    assert [item.category for item in result.classifications] == [Category.BUG, Category.FEATURE]
    assert result.classifications[0].confidence == result.classifications[1].confidence


def test_rules_in_one_category_accumulate_without_duplicate_evidence() -> None:
    rules = [
        {"id": "crash-a", "name": "Crash A", "category": "bug",
         "conditions": {"title_keywords": ["crash"]}},
        {"id": "crash-b", "name": "Crash B", "category": "bug",
         "conditions": {"title_keywords": ["crash"]}},
    ]
    classifier = IssueClassifier(_config(rules))

    result = classifier.classify(make_issue(title="Crash on save"))

    bug = result.classifications[0]
    assert bug.confidence == pytest.approx(0.8)
    assert bug.reasons == ['Title contains "crash"']
    assert bug.keywords == ["crash"]


def test_disabled_and_zero_weight_rules_do_not_contribute() -> None:
    rules = [
        {"id": "off", "name": "Off", "category": "bug", "enabled": False,
         "conditions": {"title_keywords": ["crash"]}},
        {"id": "weightless", "name": "Weightless", "category": "performance", "weight": 0.0,
         "conditions": {"title_keywords": ["crash"]}},
    ]
    classifier = IssueClassifier(_config(rules))

    result = classifier.classify(make_issue(title="Crash on save"))

    assert result.classifications == []
    assert result.primary_category is Category.QUESTION


def test_classification_is_deterministic(classifier: IssueClassifier) -> None:
    issue = make_issue(title="Why does the app crash?", body="Steps to reproduce: open it")

    first = classifier.classify(issue).to_dict()
    second = classifier.classify(issue).to_dict()
    first.pop("processing_time_ms")
    second.pop("processing_time_ms")

    assert first == second


def test_raw_github_payload_is_accepted(classifier: IssueClassifier) -> None:
    payload = issue_payload(3, "Docs: README is outdated", labels=[{"name": "documentation"}])

    result = classifier.classify(payload)

    assert result.issue_number == 3
    assert result.primary_category is Category.DOCUMENTATION
    assert result.metadata.existing_labels == ["documentation"]


def test_unexpected_failure_is_wrapped(classifier: IssueClassifier, monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(issue):
        raise RuntimeError("boom")

    monkeypatch.setattr(classifier_module.FeatureExtractor, "extract", explode)

    with pytest.raises(ClassificationError) as excinfo:
        classifier.classify(make_issue(number=7, title="anything"))

    assert str(excinfo.value) == "Classification failed: boom"
    assert excinfo.value.issue_number == 7
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_unsupported_issue_type_raises_classification_error(classifier: IssueClassifier) -> None:
    with pytest.raises(ClassificationError):
        classifier.classify(42)  # type: ignore[arg-type]


def test_classify_batch_records_failures(classifier: IssueClassifier) -> None:
    issues = [
        make_issue(number=1, title="Fix bug in parser"),
        42,
        make_issue(number=2, title="Add support for plugins"),
    ]

    batch = classifier.classify_batch(issues)  # type: ignore[arg-type]

    assert batch.total_issues == 3
    assert batch.processed_issues == 2
    assert batch.failed_issues == 1
    assert batch.errors[0].error.startswith("Classification failed:")
    assert [result.issue_number for result in batch.results] == [1, 2]
    expected_average = sum(r.primary_confidence for r in batch.results) / 2
    assert batch.average_confidence == pytest.approx(expected_average)


def test_classify_batch_of_nothing() -> None:
    batch = IssueClassifier().classify_batch([])

    assert batch.total_issues == 0
    assert batch.average_confidence == 0.0


def test_get_config_returns_a_copy(classifier: IssueClassifier) -> None:
    config = classifier.get_config()

    assert config == default_classification_config()
    assert config is not classifier.get_config()


def test_update_config_swaps_settings(classifier: IssueClassifier) -> None:
    classifier.update_config({"min_confidence": 0.95, "version": "2.0.0"})

    result = classifier.classify(make_issue(title="Fix bug in authentication"))

    assert classifier.get_config().min_confidence == 0.95
    assert result.version == "2.0.0"
    assert result.primary_category is Category.QUESTION


def test_update_config_accepts_complete_config(classifier: IssueClassifier) -> None:
    replacement = _config(
        [{"id": "docs", "name": "Docs", "category": "documentation",
          "conditions": {"title_keywords": ["readme"]}}]
    )

    classifier.update_config(replacement)

    assert classifier.get_config().rules[0].id == "docs"


def test_invalid_update_leaves_config_untouched(classifier: IssueClassifier) -> None:
    before = classifier.get_config()

    with pytest.raises(ConfigurationError):
        classifier.update_config(max_categories=0)

    assert classifier.get_config() == before
