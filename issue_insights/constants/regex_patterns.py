"""Regular expression patterns for rule parsing and feature detection."""

from __future__ import annotations

import re

# =============================================================================
# Rule Pattern Syntax
# =============================================================================

# Rule files write patterns as "/body/flags"
RULE_PATTERN_SYNTAX = re.compile(r'^/(.+)/([gimsuy]*)$', re.DOTALL)

# Flags without a Python counterpart (g, u, y) are accepted and ignored
RULE_PATTERN_FLAGS = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
}

# =============================================================================
# Regex Patterns (Compiled)
# =============================================================================

REGEX_PATTERNS = {
    # Issue body structure
    'code_fence': re.compile(r'```'),
    'steps_to_reproduce': re.compile(r'steps to reproduce', re.IGNORECASE),
    'expected_behavior': re.compile(r'expected behavior', re.IGNORECASE),

    # Existing label hints used by priority estimation
    'priority_label': re.compile(r'priority|urgent|critical|high|medium|low', re.IGNORECASE),
    'critical_label': re.compile(r'critical|urgent|p0|p1', re.IGNORECASE),
}
