"""Scoring points, priority tables and keyword sets used by the classifier."""

from __future__ import annotations

from typing import Dict

from issue_insights.constants.types import Category, Priority

# =============================================================================
# Rule Evaluation
# =============================================================================

# Points contributed by each matched condition of a rule
RULE_SCORES = {
    'title_keyword': 0.4,
    'body_keyword': 0.3,
    'label_match': 0.5,  # Highest: labels are explicit human triage
    'title_pattern': 0.4,
    'body_pattern': 0.3,
}

# A single rule's raw score is capped here before weighting
MAX_RULE_SCORE = 1.0

# Substituted when nothing scores or the best score is under min_confidence
FALLBACK_CLASSIFICATION = {
    'category': Category.QUESTION,
    'confidence': 0.3,
    'reason': 'No clear classification found',
}

# =============================================================================
# Priority Estimation
# =============================================================================

CATEGORY_PRIORITY_MAP: Dict[Category, Priority] = {
    Category.SECURITY: Priority.CRITICAL,
    Category.BUG: Priority.HIGH,
    Category.PERFORMANCE: Priority.HIGH,
    Category.FEATURE: Priority.MEDIUM,
    Category.ENHANCEMENT: Priority.MEDIUM,
    Category.REFACTOR: Priority.MEDIUM,
    Category.CI_CD: Priority.MEDIUM,
    Category.HELP_WANTED: Priority.MEDIUM,
    Category.DOCUMENTATION: Priority.LOW,
    Category.QUESTION: Priority.LOW,
    Category.TEST: Priority.LOW,
    Category.DEPENDENCIES: Priority.LOW,
    Category.DUPLICATE: Priority.LOW,
    Category.INVALID: Priority.LOW,
    Category.WONTFIX: Priority.LOW,
    Category.GOOD_FIRST_ISSUE: Priority.LOW,
}

PRIORITY_KEYWORDS = {
    'critical': (
        'critical',
        'urgent',
        'blocking',
        'production',
        'crash',
        'data loss',
        'security',
    ),
    'high': ('urgent', 'important', 'asap'),
}

PRIORITY_CONFIDENCE = {
    'base_multiplier': 0.7,  # Applied to the primary classification confidence
    'critical_keyword_bonus': 0.3,
    'high_keyword_bonus': 0.2,
    'priority_label_bonus': 0.1,
}

# =============================================================================
# Task Scoring
# =============================================================================

# Maximum points per component; the total is clamped to [0, 100]
TASK_SCORE_WEIGHTS = {
    'category': 40,
    'priority': 30,
    'confidence': 20,
    'recency': 10,
    'recency_decay_per_day': 0.5,
    'default_weight': 0.5,  # Used when a category/priority has no configured weight
    'max_score': 100,
}

DEFAULT_TOP_TASKS = 3
