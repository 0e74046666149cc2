"""
Rule Registry

Holds the available lint rules and resolves select/ignore lists.
"""

from typing import Dict, List, Optional, Sequence

from guidelint.config import ConfigError
from guidelint.rules.base import Rule
from guidelint.rules.duplicates import DuplicateGuideRule, NearDuplicateGuideRule
from guidelint.rules.fences import UnclosedFenceRule
from guidelint.rules.headings import (
    DuplicateHeadingRule,
    EmptyHeadingRule,
    FirstHeadingRule,
    HeadingIncrementRule,
)
from guidelint.rules.links import BrokenLinkRule, IndexReferencesRule, OrphanGuideRule

BUILTIN_RULES = [
    UnclosedFenceRule,
    HeadingIncrementRule,
    FirstHeadingRule,
    DuplicateHeadingRule,
    EmptyHeadingRule,
    IndexReferencesRule,
    BrokenLinkRule,
    OrphanGuideRule,
    DuplicateGuideRule,
    NearDuplicateGuideRule,
]


class RuleRegistry:
    """
    Registry of lint rules.

    Rules are looked up by id (``GL001``) or name (``unclosed-fence``).
    Selection accepts id prefixes, so ``GL00`` matches GL001..GL009.

    Example:
        registry = get_registry()
        rules = registry.select(select=["GL00"], ignore=["GL004"])
    """

    def __init__(self, rules: Optional[Sequence[Rule]] = None) -> None:
        self._rules: Dict[str, Rule] = {}
        self._names: Dict[str, str] = {}
        for rule in rules or []:
            self.register(rule)

    def register(self, rule: Rule) -> None:
        """Register a rule, replacing any rule with the same id."""
        if not rule.rule_id:
            raise ValueError(f"Rule {type(rule).__name__} has no rule_id")
        self._rules[rule.rule_id] = rule
        if rule.name:
            self._names[rule.name] = rule.rule_id

    def get(self, key: str) -> Optional[Rule]:
        """Get a rule by id or name."""
        if key in self._rules:
            return self._rules[key]
        if key.upper() in self._rules:
            return self._rules[key.upper()]
        if key in self._names:
            return self._rules[self._names[key]]
        return None

    def list_rules(self) -> List[Rule]:
        """All rules, ordered by id."""
        return [self._rules[rule_id] for rule_id in sorted(self._rules)]

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def _match(self, key: str) -> List[Rule]:
        rule = self.get(key)
        if rule is not None:
            return [rule]
        prefix = key.upper()
        matched = [r for r in self.list_rules() if r.rule_id.startswith(prefix)]
        if not matched:
            raise ConfigError(f"Unknown rule: {key}")
        return matched

    def select(
        self,
        select: Optional[Sequence[str]] = None,
        ignore: Optional[Sequence[str]] = None,
    ) -> List[Rule]:
        """
        Resolve the rules to run.

        Args:
            select: Rule ids, names or id prefixes to run (all when empty)
            ignore: Rule ids, names or id prefixes to skip

        Returns:
            Selected rules ordered by id

        Raises:
            ConfigError: If a key matches no rule
        """
        if select:
            chosen: Dict[str, Rule] = {}
            for key in select:
                for rule in self._match(key):
                    chosen[rule.rule_id] = rule
        else:
            chosen = dict(self._rules)

        for key in ignore or []:
            for rule in self._match(key):
                chosen.pop(rule.rule_id, None)

        return [chosen[rule_id] for rule_id in sorted(chosen)]

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


_default_registry: Optional[RuleRegistry] = None


def get_registry() -> RuleRegistry:
    """Get the default registry with all built-in rules."""
    global _default_registry
    if _default_registry is None:
        _default_registry = RuleRegistry([rule_cls() for rule_cls in BUILTIN_RULES])
    return _default_registry
