"""
Rule Base Classes

Findings, severities and the Rule interface shared by all lint rules.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from guidelint.config import LintConfig
from guidelint.documents import GuideDocument, GuideSet


class Severity(str, Enum):
    """Finding severity, most severe first."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return {"error": 3, "warning": 2, "info": 1}[self.value]

    def at_least(self, other: "Severity") -> bool:
        return self.rank >= other.rank


@dataclass
class Finding:
    """A single rule violation."""

    rule_id: str
    message: str
    path: Path
    line: Optional[int] = None
    severity: Severity = Severity.ERROR
    rule_name: str = ""

    @property
    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def sort_key(self) -> tuple:
        return (str(self.path), self.line or 0, self.rule_id, self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "severity": self.severity.value,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class RuleContext:
    """Everything a rule may consult besides the document under check."""

    config: LintConfig = field(default_factory=LintConfig)
    guide_set: GuideSet = field(default_factory=GuideSet)

    @property
    def index(self) -> Optional[GuideDocument]:
        return self.guide_set.find_index(self.config.index_names)


SCOPE_DOCUMENT = "document"
SCOPE_SET = "set"


class Rule(ABC):
    """
    Base class for lint rules.

    Document-scoped rules implement ``check_document`` and run once per
    guide. Set-scoped rules implement ``check_set`` and run once per lint.
    """

    rule_id: str = ""
    name: str = ""
    description: str = ""
    default_severity: Severity = Severity.ERROR
    scope: str = SCOPE_DOCUMENT

    def check_document(self, guide: GuideDocument, context: RuleContext) -> Iterator[Finding]:
        return iter(())

    def check_set(self, guides: Sequence[GuideDocument], context: RuleContext) -> Iterator[Finding]:
        return iter(())

    def run(self, context: RuleContext) -> List[Finding]:
        """Run the rule over the context's guide set."""
        guides = context.guide_set.guides
        if self.scope == SCOPE_SET:
            return list(self.check_set(guides, context))
        findings: List[Finding] = []
        for guide in guides:
            findings.extend(self.check_document(guide, context))
        return findings

    def finding(self, path: Path, message: str, line: Optional[int] = None) -> Finding:
        """Build a finding for this rule at its default severity."""
        return Finding(
            rule_id=self.rule_id,
            rule_name=self.name,
            message=message,
            path=path,
            line=line,
            severity=self.default_severity,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "name": self.name,
            "description": self.description,
            "severity": self.default_severity.value,
            "scope": self.scope,
        }
