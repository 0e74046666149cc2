"""
Guidelint Linter

Runs the selected rules over a guide set and collects a LintReport.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from guidelint.config import LintConfig
from guidelint.documents import GuideSet, load_guide_set
from guidelint.rules import Finding, Rule, RuleContext, RuleRegistry, Severity, get_registry

logger = logging.getLogger(__name__)

LOAD_ERROR_ID = "GL000"
LOAD_ERROR_NAME = "load-error"


@dataclass
class LintReport:
    """Outcome of a lint run."""

    findings: List[Finding] = field(default_factory=list)
    guides_checked: int = 0
    rules_run: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.findings.sort(key=lambda f: f.sort_key())

    @property
    def counts(self) -> Dict[str, int]:
        counts = {severity.value: 0 for severity in Severity}
        for finding in self.findings:
            counts[finding.severity.value] += 1
        return counts

    @property
    def files_with_findings(self) -> int:
        return len({str(f.path) for f in self.findings})

    def by_path(self) -> Dict[str, List[Finding]]:
        grouped: Dict[str, List[Finding]] = {}
        for finding in self.findings:
            grouped.setdefault(str(finding.path), []).append(finding)
        return grouped

    def exit_code(self, fail_on: str = "error") -> int:
        """1 when any finding is at or above ``fail_on``, else 0."""
        threshold = Severity(fail_on)
        failed = any(f.severity.at_least(threshold) for f in self.findings)
        return 1 if failed else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "guides_checked": self.guides_checked,
            "rules_run": self.rules_run,
            "counts": self.counts,
            "findings": [f.to_dict() for f in self.findings],
        }


class Linter:
    """
    Lints Markdown guide sets.

    Example:
        linter = Linter(LintConfig(ignore=["GL010"]))
        report = linter.lint_paths([Path("docs")])
        sys.exit(report.exit_code())
    """

    def __init__(
        self,
        config: Optional[LintConfig] = None,
        registry: Optional[RuleRegistry] = None,
    ) -> None:
        self.config = config or LintConfig()
        self.registry = registry or get_registry()
        self.rules: List[Rule] = self.registry.select(
            select=self.config.select,
            ignore=self.config.ignore,
        )
        self._severity_overrides: Dict[str, Severity] = {}
        for key, value in self.config.severity_overrides.items():
            for rule in self.registry.select(select=[key]):
                self._severity_overrides[rule.rule_id] = Severity(value)

    def lint_paths(self, paths: Iterable[Path]) -> LintReport:
        """Load every guide under ``paths`` and lint the resulting set."""
        guide_set = load_guide_set(
            [Path(p) for p in paths],
            recursive=self.config.recursive,
            exclude=self.config.exclude,
        )
        return self.lint_guides(guide_set)

    def lint_guides(self, guide_set: GuideSet) -> LintReport:
        """Run the selected rules over an already loaded guide set."""
        context = RuleContext(config=self.config, guide_set=guide_set)
        findings: List[Finding] = []

        for error in guide_set.errors:
            findings.append(
                Finding(
                    rule_id=LOAD_ERROR_ID,
                    rule_name=LOAD_ERROR_NAME,
                    message=error.message,
                    path=error.path,
                    severity=Severity.ERROR,
                )
            )

        for rule in self.rules:
            logger.debug(f"Running {rule.rule_id} ({rule.name}) over {len(guide_set)} guides")
            try:
                rule_findings = rule.run(context)
            except Exception as e:
                logger.warning(f"Rule {rule.rule_id} failed: {e}", exc_info=True)
                findings.append(
                    Finding(
                        rule_id=LOAD_ERROR_ID,
                        rule_name=rule.name,
                        message=f"Rule {rule.rule_id} crashed: {e}",
                        path=guide_set.roots[0] if guide_set.roots else Path("."),
                        severity=Severity.ERROR,
                    )
                )
                continue

            override = self._severity_overrides.get(rule.rule_id)
            if override is not None:
                for finding in rule_findings:
                    finding.severity = override
            findings.extend(rule_findings)

        return LintReport(
            findings=findings,
            guides_checked=len(guide_set),
            rules_run=[rule.rule_id for rule in self.rules],
        )


def lint_paths(paths: Iterable[Path], config: Optional[LintConfig] = None) -> LintReport:
    """Convenience wrapper: lint paths with a fresh Linter."""
    return Linter(config).lint_paths(paths)
