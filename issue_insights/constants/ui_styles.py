"""UI styles and display configuration constants."""

from __future__ import annotations

# =============================================================================
# Table Configuration
# =============================================================================

TABLE_CONFIG = {
    'box_style': 'ROUNDED',
    'header_style': 'bold cyan',
    'title_max_length': 60,
}

# Rich style per priority level
PRIORITY_STYLES = {
    'critical': 'danger',
    'high': 'warning',
    'medium': 'accent',
    'low': 'muted',
    'backlog': 'muted',
}

# Rich style per trend direction
TREND_STYLES = {
    'increasing': 'warning',
    'decreasing': 'success',
    'stable': 'muted',
}
