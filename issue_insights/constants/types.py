"""Type definitions and enums."""

from __future__ import annotations

from enum import Enum

# =============================================================================
# Classification Taxonomy
# =============================================================================

class Category(str, Enum):
    """Closed set of categories an issue can be classified into."""

    BUG = "bug"
    FEATURE = "feature"
    ENHANCEMENT = "enhancement"
    DOCUMENTATION = "documentation"
    QUESTION = "question"
    DUPLICATE = "duplicate"
    INVALID = "invalid"
    WONTFIX = "wontfix"
    HELP_WANTED = "help-wanted"
    GOOD_FIRST_ISSUE = "good-first-issue"
    SECURITY = "security"
    PERFORMANCE = "performance"
    REFACTOR = "refactor"
    TEST = "test"
    CI_CD = "ci-cd"
    DEPENDENCIES = "dependencies"


class Priority(str, Enum):
    """Priority levels, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    BACKLOG = "backlog"


# =============================================================================
# Analytics Types
# =============================================================================

class TrendDirection(str, Enum):
    """Qualitative direction of a fitted linear trend."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class IssueState(str, Enum):
    """Issue lifecycle states reported by the tracker."""

    OPEN = "open"
    CLOSED = "closed"
