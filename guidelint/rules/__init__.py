"""
Guidelint Rules

Document-hygiene rules for Markdown guide sets.
"""

from guidelint.rules.base import (
    SCOPE_DOCUMENT,
    SCOPE_SET,
    Finding,
    Rule,
    RuleContext,
    Severity,
)
from guidelint.rules.duplicates import DuplicateGuideRule, NearDuplicateGuideRule
from guidelint.rules.fences import UnclosedFenceRule
from guidelint.rules.headings import (
    DuplicateHeadingRule,
    EmptyHeadingRule,
    FirstHeadingRule,
    HeadingIncrementRule,
)
from guidelint.rules.links import BrokenLinkRule, IndexReferencesRule, OrphanGuideRule
from guidelint.rules.registry import BUILTIN_RULES, RuleRegistry, get_registry

__all__ = [
    "BUILTIN_RULES",
    "BrokenLinkRule",
    "DuplicateGuideRule",
    "DuplicateHeadingRule",
    "EmptyHeadingRule",
    "Finding",
    "FirstHeadingRule",
    "HeadingIncrementRule",
    "IndexReferencesRule",
    "NearDuplicateGuideRule",
    "OrphanGuideRule",
    "Rule",
    "RuleContext",
    "RuleRegistry",
    "SCOPE_DOCUMENT",
    "SCOPE_SET",
    "Severity",
    "UnclosedFenceRule",
    "get_registry",
]
