"""Custom exceptions for the issue insights toolkit."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class IssueInsightsError(Exception):
    """Base exception for all issue insights errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(IssueInsightsError):
    """Raised when rule definitions or classifier settings are invalid."""

    def __init__(self, message: str, path: Optional[Path] = None):
        """Initialize configuration error.

        Args:
            message: Error message
            path: Rule file that failed to load, if any
        """
        super().__init__(message)
        self.path = path


# =============================================================================
# Classification Errors
# =============================================================================


class ClassificationError(IssueInsightsError):
    """Raised when an issue cannot be classified."""

    def __init__(self, message: str, issue_number: Optional[int] = None):
        """Initialize classification error.

        Args:
            message: Error message
            issue_number: Number of the issue that failed, if known
        """
        super().__init__(message)
        self.issue_number = issue_number


# =============================================================================
# Analysis Errors
# =============================================================================


class AnalysisError(IssueInsightsError):
    """Base exception for analytics errors."""
    pass


class InvalidTimeWindowError(AnalysisError):
    """Raised when a time-series window is not a positive number of days."""
    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(IssueInsightsError):
    """Base exception for validation errors."""
    pass


class InvalidInputError(ValidationError):
    """Raised when an input file does not hold issue records."""
    pass
