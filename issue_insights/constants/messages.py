"""User-facing reason, insight and CLI messages."""

from __future__ import annotations

# =============================================================================
# Classification Reasons
# =============================================================================

REASON_TEMPLATES = {
    'title_keyword': 'Title contains "{keyword}"',
    'body_keyword': 'Body contains "{keyword}"',
    'label_match': 'Has label matching "{label}"',
    'title_pattern': 'Title matches pattern "{pattern}"',
    'body_pattern': 'Body matches pattern "{pattern}"',
}

# =============================================================================
# Insight Messages
# =============================================================================

INSIGHT_MESSAGES = {
    'summary': (
        'Project has {total} total issues with {open} open and {closed} closed. '
        'Average age of open issues is {average_age:.1f} days. '
        'Resolution rate is {resolution_rate:.1f}%.'
    ),
    'low_resolution_finding': 'Low resolution rate of {resolution_rate:.1f}%',
    'low_resolution_recommendation': 'Focus on resolving existing issues before taking on new work',
    'aging_risk': 'Open issues are aging with average age of {average_age:.0f} days',
    'aging_recommendation': 'Implement regular issue triage and cleanup processes',
    'stale_risk': 'Oldest issue is {oldest:.0f} days old',
    'stale_recommendation': 'Review and close stale issues that are no longer relevant',
    'top_category_finding': 'Most common issue type: {category} ({count} issues)',
    'bug_risk': 'High number of bug reports may indicate quality issues',
    'bug_recommendation': 'Increase testing coverage and code review processes',
    'feature_opportunity': 'High demand for new features shows user engagement',
    'feature_recommendation': 'Consider roadmap planning for popular feature requests',
}

# =============================================================================
# CLI Messages
# =============================================================================

ERROR_MESSAGES = {
    'config_invalid': 'Configuration error:',
    'input_invalid': 'Invalid input:',
    'classification_failed': 'Classification error:',
    'analysis_failed': 'Analysis error:',
}

SUCCESS_MESSAGES = {
    'rules_valid': 'Rule file is valid: {path}',
    'rules_exported': 'Default rules written to {path}',
}
