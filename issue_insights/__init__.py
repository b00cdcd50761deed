"""Rule-based GitHub issue classification and issue analytics."""

from .analytics import AnalyticsEngine
from .classification import IssueClassifier, TaskScorer
from .config import (
    ClassificationConfig,
    ClassificationRule,
    ConfigLoader,
    RuleConditions,
    default_classification_config,
    load_classification_config,
)
from .exceptions import ClassificationError, ConfigurationError, IssueInsightsError
from .models import IssueRecord

__version__ = "1.0.0"

__all__ = [
    "AnalyticsEngine",
    "ClassificationConfig",
    "ClassificationError",
    "ClassificationRule",
    "ConfigLoader",
    "ConfigurationError",
    "IssueClassifier",
    "IssueInsightsError",
    "IssueRecord",
    "RuleConditions",
    "TaskScorer",
    "default_classification_config",
    "load_classification_config",
]
