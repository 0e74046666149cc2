"""
Guidelint Configuration

Lint settings, JSON (de)serialisation and environment overrides.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

SEVERITY_NAMES = ("error", "warning", "info")
OUTPUT_FORMATS = ("text", "json", "github")

DEFAULT_INDEX_NAMES = ["README.md", "index.md", "INDEX.md"]
DEFAULT_EXCLUDE = ["node_modules/*", "**/node_modules/*", "CHANGELOG.md", "LICENSE.md"]

ENV_PREFIX = "GUIDELINT_"


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def _split_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value]


@dataclass
class LintConfig:
    """Settings for a lint run."""

    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    recursive: bool = True

    # Rule selection; ids or id prefixes
    select: List[str] = field(default_factory=list)
    ignore: List[str] = field(default_factory=list)
    severity_overrides: Dict[str, str] = field(default_factory=dict)

    # Rule options
    index_names: List[str] = field(default_factory=lambda: list(DEFAULT_INDEX_NAMES))
    first_heading_level: int = 1
    near_duplicate_threshold: float = 0.8
    shingle_size: int = 5

    # Output
    fail_on: str = "error"
    output_format: str = "text"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check value ranges; raises ConfigError."""
        if self.fail_on not in SEVERITY_NAMES:
            raise ConfigError(
                f"fail_on must be one of {', '.join(SEVERITY_NAMES)}, got {self.fail_on!r}"
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got {self.output_format!r}"
            )
        if not 1 <= self.first_heading_level <= 6:
            raise ConfigError(
                f"first_heading_level must be between 1 and 6, got {self.first_heading_level}"
            )
        if not 0.0 < self.near_duplicate_threshold <= 1.0:
            raise ConfigError(
                "near_duplicate_threshold must be in (0, 1], "
                f"got {self.near_duplicate_threshold}"
            )
        if self.shingle_size < 1:
            raise ConfigError(f"shingle_size must be positive, got {self.shingle_size}")
        for rule_id, severity in self.severity_overrides.items():
            if severity not in SEVERITY_NAMES:
                raise ConfigError(f"Invalid severity {severity!r} for rule {rule_id}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "exclude": self.exclude,
            "recursive": self.recursive,
            "select": self.select,
            "ignore": self.ignore,
            "severity_overrides": self.severity_overrides,
            "index_names": self.index_names,
            "first_heading_level": self.first_heading_level,
            "near_duplicate_threshold": self.near_duplicate_threshold,
            "shingle_size": self.shingle_size,
            "fail_on": self.fail_on,
            "output_format": self.output_format,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LintConfig":
        """Create from dictionary; unknown keys raise ConfigError."""
        known = set(cls().to_dict())
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        defaults = cls()
        try:
            return cls(
                exclude=_split_list(data.get("exclude", defaults.exclude)),
                recursive=bool(data.get("recursive", True)),
                select=_split_list(data.get("select")),
                ignore=_split_list(data.get("ignore")),
                severity_overrides=dict(data.get("severity_overrides") or {}),
                index_names=_split_list(data.get("index_names", defaults.index_names)),
                first_heading_level=int(data.get("first_heading_level", 1)),
                near_duplicate_threshold=float(data.get("near_duplicate_threshold", 0.8)),
                shingle_size=int(data.get("shingle_size", 5)),
                fail_on=str(data.get("fail_on", "error")),
                output_format=str(data.get("output_format", "text")),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}")

    def merge(self, **overrides: Any) -> "LintConfig":
        """Return a copy with non-None overrides applied."""
        data = self.to_dict()
        for key, value in overrides.items():
            if value is not None:
                data[key] = value
        return LintConfig.from_dict(data)


def apply_env_overrides(
    config: LintConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> LintConfig:
    """
    Apply GUIDELINT_* environment variables to a config.

    Supported: GUIDELINT_FORMAT, GUIDELINT_FAIL_ON, GUIDELINT_SELECT,
    GUIDELINT_IGNORE (comma separated).

    Args:
        config: Base configuration
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New LintConfig with overrides applied
    """
    env = os.environ if environ is None else environ
    return config.merge(
        output_format=env.get(f"{ENV_PREFIX}FORMAT"),
        fail_on=env.get(f"{ENV_PREFIX}FAIL_ON"),
        select=_split_list(env[f"{ENV_PREFIX}SELECT"]) if f"{ENV_PREFIX}SELECT" in env else None,
        ignore=_split_list(env[f"{ENV_PREFIX}IGNORE"]) if f"{ENV_PREFIX}IGNORE" in env else None,
    )
