"""Rule-based issue classifier.

The classifier runs every enabled rule against an issue's features, folds the
rule scores into per-category confidences, picks a primary category (falling
back to ``question`` when the evidence is weak) and estimates a priority.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from issue_insights.config import ClassificationConfig, default_classification_config
from issue_insights.constants import FALLBACK_CLASSIFICATION, Category
from issue_insights.exceptions import ClassificationError, ConfigurationError
from issue_insights.models import (
    BatchClassificationResult,
    BatchError,
    CategoryClassification,
    IssueClassification,
    IssueFeatures,
    IssueRecord,
)
from issue_insights.utils import unique_in_order

from .features import FeatureExtractor
from .priority import PriorityEstimator
from .rules import RuleEvaluator

logger = logging.getLogger(__name__)

IssueInput = Union[IssueRecord, Mapping[str, Any]]


@dataclass(slots=True)
class _CategoryAccumulator:
    score: float = 0.0
    reasons: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)


def _issue_number(issue: Any) -> Optional[int]:
    if isinstance(issue, IssueRecord):
        return issue.number
    if isinstance(issue, Mapping):
        number = issue.get("number")
        return number if isinstance(number, int) else None
    return None


class IssueClassifier:
    """Classify issues with a swappable rule configuration.

    The classifier owns one piece of mutable state, its current config. Each
    call reads the config reference once, so swapping it with
    :meth:`update_config` never affects a call already in progress.
    """

    def __init__(self, config: Optional[ClassificationConfig] = None) -> None:
        self._config = config if config is not None else default_classification_config()
        self._evaluator = RuleEvaluator()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> ClassificationConfig:
        """Active configuration, shared rather than copied. Do not mutate."""
        return self._config

    def get_config(self) -> ClassificationConfig:
        """Return a copy of the active configuration."""
        return self._config.model_copy(deep=True)

    def update_config(
        self,
        changes: Union[ClassificationConfig, Mapping[str, Any], None] = None,
        **overrides: Any,
    ) -> None:
        """Hot-swap the configuration.

        Args:
            changes: A complete config, or a mapping of fields to replace
            **overrides: Additional fields to replace

        Raises:
            ConfigurationError: If the merged configuration is invalid. The
                active configuration is left untouched in that case.
        """
        if isinstance(changes, ClassificationConfig) and not overrides:
            new_config = changes
        else:
            merged: Dict[str, Any] = self._config.model_dump()
            if isinstance(changes, ClassificationConfig):
                merged.update(changes.model_dump())
            elif changes:
                merged.update(changes)
            merged.update(overrides)
            try:
                new_config = ClassificationConfig.model_validate(merged)
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid classification config: {exc}") from exc

        self._config = new_config
        self._evaluator.clear_cache()
        logger.debug(
            f"Classification config updated: version={new_config.version}, rules={len(new_config.rules)}"
        )

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, issue: IssueInput) -> IssueClassification:
        """Classify a single issue.

        Args:
            issue: Issue record or raw GitHub issue mapping

        Returns:
            Fully populated classification result

        Raises:
            ClassificationError: If anything goes wrong while extracting
                features or evaluating rules.
        """
        start_time = time.perf_counter()
        config = self._config

        try:
            record = IssueRecord.coerce(issue)
            features = FeatureExtractor.extract(record)
            classifications = self._apply_rules(features, config)
            primary = self._primary_classification(classifications, config)
            estimate = PriorityEstimator.estimate(features, primary)
        except Exception as exc:
            raise ClassificationError(
                f"Classification failed: {exc}", _issue_number(issue)
            ) from exc

        processing_time_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Classified issue #{record.number} as {primary.category.value} "
            f"({primary.confidence:.2f}) in {processing_time_ms:.2f}ms"
        )

        return IssueClassification(
            issue_id=record.issue_id,
            issue_number=record.number,
            classifications=classifications[: config.max_categories],
            primary_category=primary.category,
            primary_confidence=primary.confidence,
            estimated_priority=estimate.priority,
            priority_confidence=estimate.confidence,
            processing_time_ms=processing_time_ms,
            version=config.version,
            metadata=features.metadata,
        )

    def classify_batch(self, issues: Iterable[IssueInput]) -> BatchClassificationResult:
        """Classify many issues, recording failures instead of aborting."""
        start_time = time.perf_counter()
        results: List[IssueClassification] = []
        errors: List[BatchError] = []
        total = 0

        for issue in issues:
            total += 1
            try:
                results.append(self.classify(issue))
            except ClassificationError as exc:
                issue_number = exc.issue_number if exc.issue_number is not None else 0
                logger.warning(f"Skipping issue #{issue_number}: {exc}")
                errors.append(BatchError(issue_number=issue_number, error=str(exc)))

        average_confidence = (
            sum(result.primary_confidence for result in results) / len(results) if results else 0.0
        )

        return BatchClassificationResult(
            total_issues=total,
            processed_issues=len(results),
            failed_issues=len(errors),
            results=results,
            errors=errors,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
            average_confidence=average_confidence,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply_rules(
        self, features: IssueFeatures, config: ClassificationConfig
    ) -> List[CategoryClassification]:
        """Fold every enabled rule into per-category confidences.

        Returns classifications sorted by confidence, highest first; ties keep
        taxonomy order.
        """
        accumulators = {category: _CategoryAccumulator() for category in Category}

        for rule in config.rules:
            if not rule.enabled:
                continue

            evaluation = self._evaluator.evaluate(rule, features)
            if evaluation.score <= 0:
                continue

            multiplier = config.category_weights.get(rule.category, 1.0)
            accumulator = accumulators[rule.category]
            accumulator.score += evaluation.score * rule.weight * multiplier
            accumulator.reasons.extend(evaluation.reasons)
            accumulator.keywords.extend(evaluation.keywords)

        classifications = [
            CategoryClassification(
                category=category,
                confidence=min(accumulator.score, 1.0),
                reasons=unique_in_order(accumulator.reasons),
                keywords=unique_in_order(accumulator.keywords),
            )
            for category, accumulator in accumulators.items()
            if accumulator.score > 0
        ]

        return sorted(classifications, key=lambda item: item.confidence, reverse=True)

    @staticmethod
    def _primary_classification(
        classifications: List[CategoryClassification], config: ClassificationConfig
    ) -> CategoryClassification:
        if classifications and classifications[0].confidence >= config.min_confidence:
            return classifications[0]

        return CategoryClassification(
            category=FALLBACK_CLASSIFICATION['category'],
            confidence=FALLBACK_CLASSIFICATION['confidence'],
            reasons=[FALLBACK_CLASSIFICATION['reason']],
            keywords=[],
        )
