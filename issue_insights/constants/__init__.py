"""Constants and configuration values for the issue insights toolkit.

This package organizes constants into logical modules:
- types: Enums for categories, priorities, trend directions and issue states
- scoring: Rule points, priority tables, keyword sets, task scoring weights
- analysis_thresholds: Trend, metrics and insight thresholds
- regex_patterns: Rule pattern syntax and compiled feature patterns
- messages: Reason templates, insight texts and CLI messages
- ui_styles: Table and console styling
"""

from __future__ import annotations

from issue_insights.constants.analysis_thresholds import (
    INSIGHT_THRESHOLDS,
    METRICS_WINDOWS,
    RESPONSE_TIME_PLACEHOLDER_HOURS,
    TREND_THRESHOLDS,
)
from issue_insights.constants.messages import (
    ERROR_MESSAGES,
    INSIGHT_MESSAGES,
    REASON_TEMPLATES,
    SUCCESS_MESSAGES,
)
from issue_insights.constants.regex_patterns import (
    REGEX_PATTERNS,
    RULE_PATTERN_FLAGS,
    RULE_PATTERN_SYNTAX,
)
from issue_insights.constants.scoring import (
    CATEGORY_PRIORITY_MAP,
    DEFAULT_TOP_TASKS,
    FALLBACK_CLASSIFICATION,
    MAX_RULE_SCORE,
    PRIORITY_CONFIDENCE,
    PRIORITY_KEYWORDS,
    RULE_SCORES,
    TASK_SCORE_WEIGHTS,
)
from issue_insights.constants.types import (
    Category,
    IssueState,
    Priority,
    TrendDirection,
)
from issue_insights.constants.ui_styles import (
    PRIORITY_STYLES,
    TABLE_CONFIG,
    TREND_STYLES,
)

# Time conversion
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

__all__ = [
    # Analysis thresholds
    'INSIGHT_THRESHOLDS',
    'METRICS_WINDOWS',
    'RESPONSE_TIME_PLACEHOLDER_HOURS',
    'TREND_THRESHOLDS',
    # Messages
    'ERROR_MESSAGES',
    'INSIGHT_MESSAGES',
    'REASON_TEMPLATES',
    'SUCCESS_MESSAGES',
    # Regex patterns
    'REGEX_PATTERNS',
    'RULE_PATTERN_FLAGS',
    'RULE_PATTERN_SYNTAX',
    # Scoring
    'CATEGORY_PRIORITY_MAP',
    'DEFAULT_TOP_TASKS',
    'FALLBACK_CLASSIFICATION',
    'MAX_RULE_SCORE',
    'PRIORITY_CONFIDENCE',
    'PRIORITY_KEYWORDS',
    'RULE_SCORES',
    'TASK_SCORE_WEIGHTS',
    # Types
    'Category',
    'IssueState',
    'Priority',
    'TrendDirection',
    # UI styles
    'PRIORITY_STYLES',
    'TABLE_CONFIG',
    'TREND_STYLES',
    # Time
    'SECONDS_PER_DAY',
    'SECONDS_PER_HOUR',
]
