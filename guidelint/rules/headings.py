"""Heading structure rules."""

from typing import Dict, Iterator, List, Optional, Tuple

from guidelint.documents import GuideDocument
from guidelint.rules.base import Finding, Rule, RuleContext, Severity


class HeadingIncrementRule(Rule):
    """Heading levels only ever go down one level at a time."""

    rule_id = "GL002"
    name = "heading-increment"
    description = "Heading levels increase by at most one level at a time"
    default_severity = Severity.ERROR

    def check_document(self, guide: GuideDocument, context: RuleContext) -> Iterator[Finding]:
        previous = None
        for heading in guide.structure.headings:
            if previous is not None and heading.level > previous.level + 1:
                yield self.finding(
                    guide.path,
                    f"Heading level jumps from h{previous.level} to h{heading.level} "
                    f"(expected h{previous.level + 1} or lower)",
                    line=heading.line,
                )
            previous = heading


class FirstHeadingRule(Rule):
    """The first heading sets the document title level."""

    rule_id = "GL003"
    name = "first-heading"
    description = "The first heading is at the configured level (h1 by default)"
    default_severity = Severity.WARNING

    def check_document(self, guide: GuideDocument, context: RuleContext) -> Iterator[Finding]:
        expected = context.config.first_heading_level
        headings = guide.structure.headings
        if not headings:
            yield self.finding(guide.path, "Guide has no headings")
            return
        first = headings[0]
        if first.level != expected:
            yield self.finding(
                guide.path,
                f"First heading is h{first.level}, expected h{expected}",
                line=first.line,
            )


class DuplicateHeadingRule(Rule):
    """Sibling headings should be distinguishable."""

    rule_id = "GL004"
    name = "duplicate-heading"
    description = "No two headings with the same text under the same parent"
    default_severity = Severity.WARNING

    def check_document(self, guide: GuideDocument, context: RuleContext) -> Iterator[Finding]:
        # (level, index) of the open ancestors
        stack: List[Tuple[int, int]] = []
        seen: Dict[Tuple[Optional[int], str], int] = {}

        for index, heading in enumerate(guide.structure.headings):
            while stack and stack[-1][0] >= heading.level:
                stack.pop()
            parent = stack[-1][1] if stack else None
            stack.append((heading.level, index))

            text = heading.text.strip().lower()
            if not text:
                continue
            key = (parent, text)
            if key in seen:
                yield self.finding(
                    guide.path,
                    f"Duplicate heading {heading.text!r} (first used on line {seen[key]})",
                    line=heading.line,
                )
            else:
                seen[key] = heading.line


class EmptyHeadingRule(Rule):
    rule_id = "GL005"
    name = "empty-heading"
    description = "Headings have text"
    default_severity = Severity.ERROR

    def check_document(self, guide: GuideDocument, context: RuleContext) -> Iterator[Finding]:
        for heading in guide.structure.headings:
            if not heading.text.strip():
                yield self.finding(
                    guide.path,
                    f"Empty h{heading.level} heading",
                    line=heading.line,
                )
