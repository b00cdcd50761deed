"""Scoring of a single classification rule against an issue's features."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from issue_insights.config import ClassificationRule
from issue_insights.constants import (
    MAX_RULE_SCORE,
    REASON_TEMPLATES,
    RULE_PATTERN_FLAGS,
    RULE_PATTERN_SYNTAX,
    RULE_SCORES,
)
from issue_insights.models import IssueFeatures

logger = logging.getLogger(__name__)


def parse_rule_pattern(pattern: str) -> Optional[re.Pattern[str]]:
    """Compile a ``/body/flags`` rule pattern.

    Args:
        pattern: Pattern string as written in a rule file

    Returns:
        Compiled pattern, or None when the string is not in ``/body/flags``
        form or its body is not a valid regular expression
    """
    match = RULE_PATTERN_SYNTAX.match(pattern)
    if not match:
        logger.debug(f"Ignoring rule pattern without /body/flags syntax: {pattern!r}")
        return None

    body, flag_letters = match.groups()
    flags = 0
    for letter in flag_letters:
        flags |= RULE_PATTERN_FLAGS.get(letter, 0)

    try:
        return re.compile(body, flags)
    except re.error as exc:
        logger.debug(f"Ignoring invalid rule pattern {pattern!r}: {exc}")
        return None


class RuleEvaluation(NamedTuple):
    """Raw score of one rule with the evidence behind it."""
    score: float
    reasons: List[str]
    keywords: List[str]


class RuleEvaluator:
    """Score rules against feature bags.

    Compiled patterns are cached per rule id and pattern string so a rule set
    is compiled once per evaluator, not once per issue.
    """

    def __init__(self) -> None:
        self._pattern_cache: Dict[Tuple[str, str], Optional[re.Pattern[str]]] = {}

    def clear_cache(self) -> None:
        self._pattern_cache.clear()

    def evaluate(self, rule: ClassificationRule, features: IssueFeatures) -> RuleEvaluation:
        """Score ``rule`` against ``features``.

        Every matched condition adds its points; the total is capped at 1.0.
        A matching exclude keyword zeroes the whole rule.
        """
        conditions = rule.conditions

        # Exclusion is absolute, so check it before collecting evidence
        for keyword in conditions.exclude_keywords or []:
            needle = keyword.lower()
            if needle in features.title or needle in features.body:
                return RuleEvaluation(0.0, [], [])

        score = 0.0
        reasons: List[str] = []
        keywords: List[str] = []

        for keyword in conditions.title_keywords or []:
            if keyword.lower() in features.title:
                score += RULE_SCORES['title_keyword']
                reasons.append(REASON_TEMPLATES['title_keyword'].format(keyword=keyword))
                keywords.append(keyword)

        for keyword in conditions.body_keywords or []:
            if keyword.lower() in features.body:
                score += RULE_SCORES['body_keyword']
                reasons.append(REASON_TEMPLATES['body_keyword'].format(keyword=keyword))
                keywords.append(keyword)

        for label in conditions.labels or []:
            needle = label.lower()
            if any(needle in existing for existing in features.labels):
                score += RULE_SCORES['label_match']
                reasons.append(REASON_TEMPLATES['label_match'].format(label=label))

        score += self._score_patterns(
            rule.id, conditions.title_patterns, features.title, 'title_pattern', reasons
        )
        score += self._score_patterns(
            rule.id, conditions.body_patterns, features.body, 'body_pattern', reasons
        )

        return RuleEvaluation(min(score, MAX_RULE_SCORE), reasons, keywords)

    def _score_patterns(
        self,
        rule_id: str,
        patterns: Optional[Sequence[str]],
        text: str,
        kind: str,
        reasons: List[str],
    ) -> float:
        score = 0.0
        for pattern in patterns or []:
            compiled = self._compiled(rule_id, pattern)
            if compiled is not None and compiled.search(text):
                score += RULE_SCORES[kind]
                reasons.append(REASON_TEMPLATES[kind].format(pattern=pattern))
        return score

    def _compiled(self, rule_id: str, pattern: str) -> Optional[re.Pattern[str]]:
        key = (rule_id, pattern)
        if key not in self._pattern_cache:
            self._pattern_cache[key] = parse_rule_pattern(pattern)
        return self._pattern_cache[key]
