"""Code fence rules."""

from typing import Iterator

from guidelint.documents import GuideDocument
from guidelint.rules.base import Finding, Rule, RuleContext, Severity


class UnclosedFenceRule(Rule):
    """Every opened fenced code block must be closed."""

    rule_id = "GL001"
    name = "unclosed-fence"
    description = "Every opened fenced code block is closed"
    default_severity = Severity.ERROR

    def check_document(self, guide: GuideDocument, context: RuleContext) -> Iterator[Finding]:
        for fence in guide.structure.unclosed_fences:
            opener = fence.marker * fence.length
            label = f" ({fence.language})" if fence.language else ""
            yield self.finding(
                guide.path,
                f"Code fence {opener}{label} opened here is never closed",
                line=fence.start_line,
            )
