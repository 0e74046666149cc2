"""
Link Rules

Checks that local links, and in particular the links in the index
document, point at files and headings that exist.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Set

from guidelint.documents import GuideDocument, GuideSet, Link
from guidelint.rules.base import SCOPE_SET, Finding, Rule, RuleContext, Severity


def local_links(guide: GuideDocument) -> List[Link]:
    """Links that point into the local file tree (not URLs, not bare anchors)."""
    return [
        link
        for link in guide.structure.links
        if not link.is_external and not link.is_anchor and link.path_part
    ]


def resolve_link(guide: GuideDocument, link: Link, guide_set: Optional[GuideSet] = None) -> Path:
    """
    Resolve a local link target to a path on disk.

    Relative targets resolve against the guide's directory. Targets starting
    with "/" resolve against the root the guide was loaded from, falling back
    to the guide's directory when no root contains it.
    """
    if link.path_part.startswith("/"):
        base = guide_set.root_for(guide.path) if guide_set is not None else None
        if base is None:
            base = guide.path.parent
        return base / link.path_part.lstrip("/")
    return guide.path.parent / link.path_part


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()


class IndexReferencesRule(Rule):
    """Every guide the index document links to exists on disk."""

    rule_id = "GL006"
    name = "index-references"
    description = "Every file referenced in the index document exists on disk"
    default_severity = Severity.ERROR
    scope = SCOPE_SET

    def check_set(self, guides: Sequence[GuideDocument], context: RuleContext) -> Iterator[Finding]:
        index = context.index
        if index is None:
            return
        for link in local_links(index):
            target = resolve_link(index, link, context.guide_set)
            if not target.exists():
                yield self.finding(
                    index.path,
                    f"Index references missing file {link.path_part!r}",
                    line=link.line,
                )


class BrokenLinkRule(Rule):
    """
    Local links resolve to existing files and headings.

    Missing files linked from the index document are left to GL006.
    """

    rule_id = "GL007"
    name = "broken-link"
    description = "Local links resolve to existing files and heading anchors"
    default_severity = Severity.ERROR

    def check_document(self, guide: GuideDocument, context: RuleContext) -> Iterator[Finding]:
        index = context.index
        is_index = index is not None and _same_file(index.path, guide.path)

        for link in guide.structure.links:
            if link.is_external:
                continue

            if link.is_anchor:
                fragment = link.fragment.lower()
                if fragment and fragment not in guide.anchors:
                    yield self.finding(
                        guide.path,
                        f"Link to missing heading anchor '#{link.fragment}'",
                        line=link.line,
                    )
                continue

            if not link.path_part:
                continue

            target = resolve_link(guide, link, context.guide_set)
            if not target.exists():
                if not is_index:
                    yield self.finding(
                        guide.path,
                        f"Broken link to {link.path_part!r}",
                        line=link.line,
                    )
                continue

            if link.fragment:
                target_guide = context.guide_set.by_path(target)
                if target_guide is not None and link.fragment.lower() not in target_guide.anchors:
                    yield self.finding(
                        guide.path,
                        f"Link to missing heading '#{link.fragment}' in {link.path_part!r}",
                        line=link.line,
                    )


class OrphanGuideRule(Rule):
    """Guides should be reachable from the index document."""

    rule_id = "GL008"
    name = "orphan-guide"
    description = "Every guide is linked from the index document"
    default_severity = Severity.WARNING
    scope = SCOPE_SET

    def check_set(self, guides: Sequence[GuideDocument], context: RuleContext) -> Iterator[Finding]:
        index = context.index
        if index is None:
            return

        referenced: Set[Path] = set()
        for link in local_links(index):
            target = resolve_link(index, link, context.guide_set)
            if target.exists():
                referenced.add(target.resolve())

        index_path = index.path.resolve()
        for guide in guides:
            resolved = guide.path.resolve()
            if resolved == index_path or resolved in referenced:
                continue
            yield self.finding(
                guide.path,
                f"Guide is not linked from the index document {index.name}",
            )
