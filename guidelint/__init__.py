"""
Guidelint - Markdown Guide Set Linter

Checks a directory of Markdown best-practice guides for document
hygiene problems: unclosed code fences, heading level jumps, index
entries that point at missing files, broken links and duplicated guides.

Primary API:
    from guidelint import Linter, LintConfig

    report = Linter(LintConfig()).lint_paths(["./guides"])
    for finding in report.findings:
        print(finding.location, finding.rule_id, finding.message)
"""

__version__ = "0.1.0"

from guidelint.config import ConfigError, LintConfig, apply_env_overrides
from guidelint.documents import (
    GuideDocument,
    GuideParseError,
    GuideSet,
    load_guide,
    load_guide_set,
    scan_markdown,
)
from guidelint.linter import Linter, LintReport, lint_paths
from guidelint.rules import Finding, Rule, RuleContext, RuleRegistry, Severity, get_registry

__all__ = [
    "__version__",
    "ConfigError",
    "Finding",
    "GuideDocument",
    "GuideParseError",
    "GuideSet",
    "LintConfig",
    "LintReport",
    "Linter",
    "Rule",
    "RuleContext",
    "RuleRegistry",
    "Severity",
    "apply_env_overrides",
    "get_registry",
    "lint_paths",
    "load_guide",
    "load_guide_set",
    "scan_markdown",
]
