"""
Guidelint CLI Configuration

Project detection and the on-disk .guidelint/config.json file.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from guidelint.config import ConfigError, LintConfig, apply_env_overrides

# Default paths
DEFAULT_PROJECT_DIR = ".guidelint"
DEFAULT_CONFIG_FILE = "config.json"


@dataclass
class Config:
    """CLI configuration: where it came from plus the lint settings."""

    project_dir: Optional[Path] = None
    lint: LintConfig = field(default_factory=LintConfig)
    explicit_file: Optional[Path] = None

    def __post_init__(self):
        """Ensure paths are Path objects."""
        if isinstance(self.project_dir, str):
            self.project_dir = Path(self.project_dir)
        if isinstance(self.explicit_file, str):
            self.explicit_file = Path(self.explicit_file)

    @property
    def config_file(self) -> Optional[Path]:
        """Get the config file path; an explicit --config file wins."""
        if self.explicit_file:
            return self.explicit_file
        if self.project_dir:
            return self.project_dir / DEFAULT_CONFIG_FILE
        return None

    @property
    def root_dir(self) -> Path:
        """Directory that holds the project's .guidelint directory."""
        if self.project_dir:
            return self.project_dir.parent
        return Path.cwd()

    def save(self) -> None:
        """Save lint settings to the project config file."""
        if self.config_file is None:
            raise ConfigError("No project directory; run 'guidelint init' first")
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.lint.to_dict(), f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "project_dir": str(self.project_dir) if self.project_dir else None,
            "config_file": str(self.config_file) if self.config_file else None,
            "lint": self.lint.to_dict(),
        }


def load_config_file(config_file: Path) -> LintConfig:
    """Load lint settings from a JSON file; a missing file gives defaults."""
    if not config_file.exists():
        return LintConfig()
    try:
        with open(config_file) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_file}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a JSON object")
    return LintConfig.from_dict(data)


def detect_project_dir(start_path: Optional[Path] = None) -> Optional[Path]:
    """
    Detect project-specific .guidelint directory.

    Walks up from start_path looking for .guidelint directory.

    Args:
        start_path: Starting directory (defaults to cwd)

    Returns:
        Path to .guidelint directory if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while True:
        project_dir = current / DEFAULT_PROJECT_DIR
        if project_dir.is_dir():
            return project_dir
        if current == current.parent:
            return None
        current = current.parent


def get_config(
    project_dir: Optional[Path] = None,
    config_file: Optional[Path] = None,
    use_env: bool = True,
) -> Config:
    """
    Get configuration with project detection.

    Args:
        project_dir: Explicit .guidelint directory
        config_file: Explicit config file (takes precedence over project_dir)
        use_env: Apply GUIDELINT_* environment overrides

    Returns:
        Configured Config instance

    Raises:
        ConfigError: If the config file or environment values are invalid
    """
    if config_file is not None:
        lint = load_config_file(Path(config_file))
        config = Config(project_dir=project_dir, lint=lint, explicit_file=Path(config_file))
    else:
        if project_dir is None:
            project_dir = detect_project_dir()
        config = Config(project_dir=project_dir)
        if config.config_file is not None:
            config.lint = load_config_file(config.config_file)

    if use_env:
        config.lint = apply_env_overrides(config.lint)

    return config


def init_project(path: Optional[Path] = None) -> Path:
    """
    Initialize a new project with .guidelint directory.

    Args:
        path: Directory to initialize (defaults to cwd)

    Returns:
        Path to created .guidelint directory
    """
    if path is None:
        path = Path.cwd()

    project_dir = path / DEFAULT_PROJECT_DIR
    project_dir.mkdir(parents=True, exist_ok=True)

    config = Config(project_dir=project_dir)
    if not config.config_file.exists():
        config.save()

    return project_dir
