"""
Duplicate Guide Rules

Identical copies are found by hashing the whitespace-normalised body;
near-copies (one template with substituted vocabulary) by Jaccard
similarity over word shingles.
"""

import re
from itertools import combinations
from typing import Dict, FrozenSet, Iterator, List, Sequence

from guidelint.documents import GuideDocument
from guidelint.rules.base import SCOPE_SET, Finding, Rule, RuleContext, Severity

_WORD_RE = re.compile(r"\w+", re.UNICODE)


def shingles(text: str, size: int = 5) -> FrozenSet[str]:
    """
    Word shingles of a text.

    Args:
        text: Document text
        size: Words per shingle

    Returns:
        Set of space-joined lowercase word windows; a text shorter than
        ``size`` words yields a single shingle of all its words
    """
    words = [w.lower() for w in _WORD_RE.findall(text)]
    if not words:
        return frozenset()
    if len(words) <= size:
        return frozenset([" ".join(words)])
    return frozenset(" ".join(words[i : i + size]) for i in range(len(words) - size + 1))


def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    if not a and not b:
        return 1.0
    union = len(a | b)
    return len(a & b) / union if union else 0.0


def _group_by_hash(guides: Sequence[GuideDocument]) -> Dict[str, List[GuideDocument]]:
    groups: Dict[str, List[GuideDocument]] = {}
    for guide in guides:
        if not guide.normalized_body:
            continue
        groups.setdefault(guide.content_hash, []).append(guide)
    return groups


class DuplicateGuideRule(Rule):
    """Identical guides under different names."""

    rule_id = "GL009"
    name = "duplicate-guide"
    description = "No two guides have identical content"
    default_severity = Severity.WARNING
    scope = SCOPE_SET

    def check_set(self, guides: Sequence[GuideDocument], context: RuleContext) -> Iterator[Finding]:
        for group in _group_by_hash(guides).values():
            if len(group) < 2:
                continue
            group = sorted(group, key=lambda g: str(g.path))
            original = group[0]
            for copy in group[1:]:
                yield self.finding(
                    copy.path,
                    f"Guide content is identical to {original.path}",
                )


class NearDuplicateGuideRule(Rule):
    """Guides that are mostly the same text."""

    rule_id = "GL010"
    name = "near-duplicate-guide"
    description = "Guides are not near-copies of each other"
    default_severity = Severity.INFO
    scope = SCOPE_SET

    def check_set(self, guides: Sequence[GuideDocument], context: RuleContext) -> Iterator[Finding]:
        threshold = context.config.near_duplicate_threshold
        size = context.config.shingle_size

        ordered = sorted(
            (g for g in guides if g.normalized_body),
            key=lambda g: str(g.path),
        )
        signatures = {id(g): shingles(g.body, size) for g in ordered}

        for first, second in combinations(ordered, 2):
            if first.content_hash == second.content_hash:
                continue  # exact copies are GL009
            similarity = jaccard(signatures[id(first)], signatures[id(second)])
            if similarity >= threshold:
                yield self.finding(
                    second.path,
                    f"Guide is {similarity:.0%} similar to {first.path}",
                )
