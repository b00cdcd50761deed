"""Rule-based issue classification."""

from .classifier import IssueClassifier
from .features import FeatureExtractor, label_name, label_names
from .priority import PriorityEstimate, PriorityEstimator
from .rules import RuleEvaluation, RuleEvaluator, parse_rule_pattern
from .scoring import TaskScorer

__all__ = [
    "FeatureExtractor",
    "IssueClassifier",
    "PriorityEstimate",
    "PriorityEstimator",
    "RuleEvaluation",
    "RuleEvaluator",
    "TaskScorer",
    "label_name",
    "label_names",
    "parse_rule_pattern",
]
