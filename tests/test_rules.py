from __future__ import annotations

import re

import pytest

from issue_insights.classification import FeatureExtractor, RuleEvaluator, parse_rule_pattern
from issue_insights.config import ClassificationRule
from issue_insights.models import Label

from conftest import make_issue


def _rule(**conditions) -> ClassificationRule:
    return ClassificationRule(id="rule", name="Rule", category="bug", conditions=conditions)


def _features(**kwargs):
    return FeatureExtractor.extract(make_issue(**kwargs))


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("/crash/i", "CRASH", True),
        ("/crash/", "CRASH", False),
        ("/^b/m", "a\nb", True),
        ("/a.b/s", "a\nb", True),
        ("/a.b/", "a\nb", False),
        ("/\\?$/", "is this right?", True),
        ("/error/gu", "an error", True),
    ],
)
def test_parse_rule_pattern_flags(pattern: str, text: str, expected: bool) -> None:
    compiled = parse_rule_pattern(pattern)

    assert compiled is not None
    assert bool(compiled.search(text)) is expected


@pytest.mark.parametrize("pattern", ["crash", "/(unclosed/i", "//", "/crash/x"])
def test_parse_rule_pattern_rejects_invalid(pattern: str) -> None:
    assert parse_rule_pattern(pattern) is None


def test_parse_rule_pattern_maps_flags() -> None:
    compiled = parse_rule_pattern("/x/ims")

    assert compiled.flags & re.IGNORECASE
    assert compiled.flags & re.MULTILINE
    assert compiled.flags & re.DOTALL


def test_each_condition_adds_its_points() -> None:
    evaluator = RuleEvaluator()

    assert evaluator.evaluate(_rule(title_keywords=["crash"]), _features(title="Crash")).score == pytest.approx(0.4)
    assert evaluator.evaluate(_rule(body_keywords=["crash"]), _features(body="a crash")).score == pytest.approx(0.3)
    assert evaluator.evaluate(_rule(labels=["bug"]), _features(labels=["Bug"])).score == pytest.approx(0.5)
    assert evaluator.evaluate(_rule(title_patterns=["/cra.h/"]), _features(title="crash")).score == pytest.approx(0.4)
    assert evaluator.evaluate(_rule(body_patterns=["/cra.h/"]), _features(body="crash")).score == pytest.approx(0.3)


def test_rule_score_is_capped() -> None:
    rule = _rule(title_keywords=["crash", "bug", "error"], labels=["bug"])

    evaluation = RuleEvaluator().evaluate(rule, _features(title="Crash bug error", labels=["bug"]))

    assert evaluation.score == 1.0
    assert evaluation.keywords == ["crash", "bug", "error"]
    assert len(evaluation.reasons) == 4


def test_label_condition_matches_by_substring() -> None:
    rule = _rule(labels=["bug"])

    evaluation = RuleEvaluator().evaluate(rule, _features(labels=[Label(name="type: Bug")]))

    assert evaluation.score == pytest.approx(0.5)
    assert evaluation.reasons == ['Has label matching "bug"']
    assert evaluation.keywords == []


def test_exclude_keyword_zeroes_rule_case_insensitively() -> None:
    rule = _rule(title_keywords=["bug"], exclude_keywords=["Not A Bug"])

    evaluation = RuleEvaluator().evaluate(rule, _features(title="Bug? not a bug, works as intended"))

    assert evaluation.score == 0.0
    assert evaluation.reasons == []
    assert evaluation.keywords == []


def test_invalid_pattern_does_not_abort_rule() -> None:
    rule = _rule(title_keywords=["crash"], title_patterns=["/(broken/", "not-a-pattern"])

    evaluation = RuleEvaluator().evaluate(rule, _features(title="crash (broken"))

    assert evaluation.score == pytest.approx(0.4)


def test_compiled_patterns_are_cached_per_rule() -> None:
    evaluator = RuleEvaluator()
    rule = _rule(title_patterns=["/crash/i"])

    evaluator.evaluate(rule, _features(title="crash"))
    evaluator.evaluate(rule, _features(title="no match"))

    assert list(evaluator._pattern_cache) == [("rule", "/crash/i")]

    evaluator.clear_cache()
    assert evaluator._pattern_cache == {}
