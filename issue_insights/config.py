"""Classification rule schemas, built-in defaults and rule file loading."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from tomli_w import dump as toml_dump

from .constants import Category, Priority
from .exceptions import ConfigurationError

CONFIG_DIR = Path.home() / ".config" / "issue_insights"
RULES_FILE = CONFIG_DIR / "rules.toml"
CONFIG_VERSION = "1.0.0"

SUPPORTED_RULE_FILE_SUFFIXES = (".toml", ".yaml", ".yml", ".json")

logger = logging.getLogger(__name__)


class RuleConditions(BaseModel):
    """Keyword, label and pattern conditions of a classification rule."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    title_keywords: Optional[List[str]] = None
    body_keywords: Optional[List[str]] = None
    labels: Optional[List[str]] = None
    title_patterns: Optional[List[str]] = None
    body_patterns: Optional[List[str]] = None
    exclude_keywords: Optional[List[str]] = None


class ClassificationRule(BaseModel):
    """A weighted set of conditions mapped to one category."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    description: str = ""
    category: Category
    priority: Optional[Priority] = None
    conditions: RuleConditions = Field(default_factory=RuleConditions)
    weight: float = Field(default=1.0, ge=0.0, le=1.0)
    enabled: bool = True

    @field_validator("id", "name")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        """Reject empty identifiers and display names."""
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v


class ClassificationConfig(BaseModel):
    """Rule set and tuning knobs a classifier runs with."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = CONFIG_VERSION
    min_confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    max_categories: int = Field(default=3, ge=1, le=10)
    rules: List[ClassificationRule]
    category_weights: Dict[Category, float] = Field(default_factory=dict)
    priority_weights: Dict[Priority, float] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_unique_rule_ids(self) -> "ClassificationConfig":
        """Rule ids key the pattern cache, so they must be unique."""
        seen: set[str] = set()
        duplicates: List[str] = []
        for rule in self.rules:
            if rule.id in seen:
                duplicates.append(rule.id)
            seen.add(rule.id)
        if duplicates:
            raise ValueError(f"duplicate rule ids: {', '.join(sorted(set(duplicates)))}")
        return self


# =============================================================================
# Built-in Defaults
# =============================================================================

DEFAULT_RULES: List[Dict[str, Any]] = [
    {
        "id": "bug-detection",
        "name": "Bug Detection",
        "description": "Detects bug reports based on common keywords and patterns",
        "category": "bug",
        "priority": "high",
        "conditions": {
            "title_keywords": ["bug", "error", "issue", "problem", "broken", "fix", "crash"],
            "body_keywords": ["error", "exception", "stack trace", "reproduce", "expected", "actual"],
            "labels": ["bug", "error", "defect", "issue"],
            "title_patterns": [r"/\b(bug|error|issue)\b/i", r"/\bfix\b/i"],
            "body_patterns": [r"/steps to reproduce/i", r"/expected behavior/i", r"/actual behavior/i"],
        },
        "weight": 0.9,
    },
    {
        "id": "feature-request",
        "name": "Feature Request",
        "description": "Identifies feature requests and new functionality proposals",
        "category": "feature",
        "priority": "medium",
        "conditions": {
            "title_keywords": ["feature", "add", "implement", "support", "request", "proposal"],
            "body_keywords": ["would like", "could we", "suggestion", "proposal", "feature"],
            "labels": ["feature", "enhancement", "request"],
            "title_patterns": [r"/\b(add|implement|support)\b/i", r"/\bfeature\b/i"],
        },
        "weight": 0.8,
    },
    {
        "id": "enhancement",
        "name": "Enhancement",
        "description": "Identifies improvements to existing functionality",
        "category": "enhancement",
        "priority": "medium",
        "conditions": {
            "title_keywords": ["improve", "enhance", "better", "optimize", "update", "upgrade"],
            "body_keywords": ["improvement", "enhancement", "optimization", "performance"],
            "title_patterns": [r"/\b(improve|enhance|better|optimize)\b/i"],
        },
        "weight": 0.7,
    },
    {
        "id": "documentation",
        "name": "Documentation",
        "description": "Identifies documentation-related issues",
        "category": "documentation",
        "priority": "low",
        "conditions": {
            "title_keywords": ["docs", "documentation", "readme", "guide", "tutorial", "example"],
            "body_keywords": ["documentation", "docs", "readme", "guide", "tutorial"],
            "title_patterns": [r"/\b(docs?|documentation|readme)\b/i"],
        },
        "weight": 0.8,
    },
    {
        "id": "question",
        "name": "Question",
        "description": "Identifies questions and help requests",
        "category": "question",
        "priority": "low",
        "conditions": {
            "title_keywords": ["how", "why", "what", "question", "help", "clarification"],
            "body_keywords": ["question", "help", "how do i", "how can i", "clarification"],
            "title_patterns": [r"/\?$/", r"/\bhow\b/i", r"/\bwhy\b/i", r"/\bwhat\b/i"],
        },
        "weight": 0.6,
    },
    {
        "id": "security",
        "name": "Security",
        "description": "Identifies security-related issues",
        "category": "security",
        "priority": "critical",
        "conditions": {
            "title_keywords": ["security", "vulnerability", "exploit", "xss", "csrf", "injection"],
            "body_keywords": ["security", "vulnerability", "exploit", "attack", "malicious"],
            "title_patterns": [r"/\b(security|vulnerability|exploit)\b/i"],
        },
        "weight": 1.0,
    },
    {
        "id": "performance",
        "name": "Performance",
        "description": "Identifies performance-related issues",
        "category": "performance",
        "priority": "medium",
        "conditions": {
            "title_keywords": ["performance", "slow", "fast", "speed", "optimization", "memory"],
            "body_keywords": ["performance", "slow", "fast", "optimization", "memory", "cpu"],
            "title_patterns": [r"/\b(slow|fast|performance|optimization)\b/i"],
        },
        "weight": 0.8,
    },
]

DEFAULT_CATEGORY_WEIGHTS: Dict[str, float] = {
    "bug": 1.0,
    "security": 1.0,
    "feature": 0.8,
    "enhancement": 0.7,
    "performance": 0.8,
    "documentation": 0.5,
    "question": 0.4,
    "duplicate": 0.3,
    "invalid": 0.3,
    "wontfix": 0.3,
    "help-wanted": 0.6,
    "good-first-issue": 0.5,
    "refactor": 0.6,
    "test": 0.5,
    "ci-cd": 0.6,
    "dependencies": 0.5,
}

DEFAULT_PRIORITY_WEIGHTS: Dict[str, float] = {
    "critical": 1.0,
    "high": 0.8,
    "medium": 0.6,
    "low": 0.4,
    "backlog": 0.2,
}


def default_classification_config() -> ClassificationConfig:
    """Return the built-in rule set used when no rule file is supplied."""

    return ClassificationConfig(
        version=CONFIG_VERSION,
        min_confidence=0.3,
        max_categories=3,
        rules=DEFAULT_RULES,
        category_weights=DEFAULT_CATEGORY_WEIGHTS,
        priority_weights=DEFAULT_PRIORITY_WEIGHTS,
    )


# =============================================================================
# Rule File Loading
# =============================================================================


def parse_config(raw: Mapping[str, Any], path: Optional[Path] = None) -> ClassificationConfig:
    """Validate raw rule data into a :class:`ClassificationConfig`.

    Raises:
        ConfigurationError: If the data violates the rule schema.
    """

    try:
        return ClassificationConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid classification config: {exc}", path) from exc


def read_rule_file(path: Path) -> Dict[str, Any]:
    """Read a TOML, YAML or JSON rule file into a plain mapping.

    Raises:
        ConfigurationError: If the file is missing, unreadable or unparsable.
    """

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_RULE_FILE_SUFFIXES:
        raise ConfigurationError(
            f"Unsupported rule file type '{suffix}' (expected one of: "
            f"{', '.join(SUPPORTED_RULE_FILE_SUFFIXES)})",
            path,
        )

    try:
        if suffix == ".toml":
            with path.open("rb") as handle:
                raw = tomllib.load(handle)
        elif suffix == ".json":
            raw = json.loads(path.read_text(encoding="utf-8"))
        else:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Rule file not found: {path}", path) from exc
    except (OSError, tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to parse rule file {path}: {exc}", path) from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Rule file {path} must contain a mapping at the top level", path)
    return raw


class ConfigLoader:
    """Load rule files from disk, re-reading only when the file changes."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._config_path = Path(config_path) if config_path else RULES_FILE
        self._cached_config: Optional[ClassificationConfig] = None
        self._last_modified: Optional[int] = None

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load_config(self) -> ClassificationConfig:
        """Load and validate the rule file.

        The parsed config is cached against the file's modification time, so
        repeated calls are cheap until the file is edited.

        Raises:
            ConfigurationError: If the file is missing or invalid.
        """

        try:
            current_modified = self._config_path.stat().st_mtime_ns
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Rule file not found: {self._config_path}", self._config_path) from exc
        except OSError as exc:
            raise ConfigurationError(f"Cannot access rule file {self._config_path}: {exc}", self._config_path) from exc

        if self._cached_config is not None and current_modified == self._last_modified:
            return self._cached_config

        config = parse_config(read_rule_file(self._config_path), self._config_path)
        logger.debug(f"Loaded {len(config.rules)} classification rules from {self._config_path}")

        self._cached_config = config
        self._last_modified = current_modified
        return config

    def validate_config(self, config_path: Optional[Path] = None) -> Tuple[bool, List[str]]:
        """Validate a rule file without touching the cache.

        Returns:
            Tuple of (is_valid, error_messages)
        """

        path = Path(config_path) if config_path else self._config_path
        try:
            parse_config(read_rule_file(path), path)
        except ConfigurationError as exc:
            return False, [str(exc)]
        return True, []

    def set_config_path(self, path: Path) -> None:
        """Point the loader at another file and drop the cached config."""
        self._config_path = Path(path)
        self.clear_cache()

    def clear_cache(self) -> None:
        self._cached_config = None
        self._last_modified = None

    def config_exists(self) -> bool:
        return self._config_path.is_file()


def load_classification_config(config_path: Optional[Path] = None) -> ClassificationConfig:
    """Load rules from ``config_path``, the user rule file, or the built-in defaults.

    An explicit path must exist; the user rule file is optional.
    """

    if config_path is not None:
        return ConfigLoader(config_path).load_config()

    loader = ConfigLoader()
    if loader.config_exists():
        return loader.load_config()
    return default_classification_config()


def dump_config(config: ClassificationConfig, path: Path) -> None:
    """Persist a config as a TOML rule file.

    Args:
        config: Configuration to write
        path: Destination file; parent directories are created as needed
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(mode="json", exclude_none=True)
    with path.open("wb") as handle:
        toml_dump(payload, handle)
