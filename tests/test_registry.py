"""
Tests for Rule Registry

Tests lookup and select/ignore resolution.
"""

import pytest

from guidelint.config import ConfigError
from guidelint.rules import BUILTIN_RULES, Rule, RuleRegistry, get_registry


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    def test_default_registry_has_builtins(self):
        registry = get_registry()

        assert len(registry) == len(BUILTIN_RULES)
        assert [r.rule_id for r in registry.list_rules()] == [
            f"GL{n:03d}" for n in range(1, 11)
        ]

    def test_get_by_id_name_and_case(self):
        registry = get_registry()

        assert registry.get("GL001").name == "unclosed-fence"
        assert registry.get("gl002").name == "heading-increment"
        assert registry.get("index-references").rule_id == "GL006"
        assert registry.get("nope") is None
        assert "broken-link" in registry

    def test_select_all_by_default(self):
        registry = get_registry()

        assert len(registry.select()) == len(BUILTIN_RULES)

    def test_select_prefix(self):
        rules = get_registry().select(select=["GL00"])

        assert [r.rule_id for r in rules] == [f"GL00{n}" for n in range(1, 10)]

    def test_select_and_ignore(self):
        rules = get_registry().select(select=["GL001", "heading-increment"], ignore=["GL002"])

        assert [r.rule_id for r in rules] == ["GL001"]

    def test_ignore_only(self):
        rules = get_registry().select(ignore=["GL010", "orphan-guide"])

        ids = [r.rule_id for r in rules]
        assert "GL010" not in ids
        assert "GL008" not in ids
        assert len(ids) == len(BUILTIN_RULES) - 2

    def test_unknown_rule_raises(self):
        with pytest.raises(ConfigError, match="Unknown rule"):
            get_registry().select(select=["XYZ999"])

    def test_register_custom_rule(self):
        class TodoRule(Rule):
            rule_id = "X100"
            name = "no-todo"

        registry = RuleRegistry()
        registry.register(TodoRule())

        assert registry.get("no-todo").rule_id == "X100"

    def test_register_requires_id(self):
        class Nameless(Rule):
            pass

        with pytest.raises(ValueError):
            RuleRegistry().register(Nameless())
