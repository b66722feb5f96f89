from importlib import metadata

import pytest

from yl_linter.config import RuleConfig
from yl_linter.context import LintContext
from yl_linter.models import Problem
from yl_linter.registry import RuleRegistry, default_registry
from yl_linter.rules.base import BaseRule

BUILTIN_RULE_IDS = [
    "line-length",
    "trailing-spaces",
    "empty-lines",
    "indentation",
    "new-line-at-end-of-file",
    "key-duplicates",
    "document-structure",
    "anchors",
    "yaml-syntax",
    "comments",
    "brackets",
    "braces",
    "colons",
    "commas",
    "hyphens",
    "truthy",
    "quoted-strings",
    "key-ordering",
    "float-values",
    "octal-values",
]


class NoTabsRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "no-tabs"

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        return [self._problem(config, n, line.index("\t") + 1, "tab") for n, line in context.lines() if "\t" in line]


class FakeEntryPoint:
    def __init__(self, name, target):
        self.name = name
        self.value = f"tests:{name}"
        self._target = target

    def load(self):
        return self._target


def test_default_registry_has_every_builtin_rule_once():
    registry = default_registry()

    assert registry.rule_ids() == BUILTIN_RULE_IDS
    assert len(registry) == len(BUILTIN_RULE_IDS)
    assert "line-length" in registry


def test_only_line_length_and_trailing_spaces_enabled_by_default():
    enabled = [rule.rule_id for rule in default_registry() if rule.default_config().enabled]

    assert enabled == ["line-length", "trailing-spaces"]


def test_register_and_get():
    registry = RuleRegistry()
    rule = NoTabsRule()
    registry.register(rule)

    assert registry.get("no-tabs") is rule
    assert registry.get("missing") is None
    assert registry.rules() == [rule]
    assert rule.description == "No description available"
    assert rule.default_config().enabled is False


def test_registries_are_independent():
    first = default_registry()
    second = default_registry()

    assert first.get("line-length") is not second.get("line-length")


def test_load_plugins(monkeypatch):
    monkeypatch.setattr(
        metadata, "entry_points", lambda group: [FakeEntryPoint("no-tabs", NoTabsRule)] if group == "yl.rules" else []
    )
    registry = RuleRegistry.with_default_rules()

    assert registry.load_plugins() == 1
    assert isinstance(registry.get("no-tabs"), NoTabsRule)


def test_load_plugins_rejects_non_rules(monkeypatch):
    monkeypatch.setattr(metadata, "entry_points", lambda group: [FakeEntryPoint("broken", dict)])

    with pytest.raises(TypeError):
        RuleRegistry().load_plugins()


def test_rules_follow_registration_order():
    registry = default_registry()

    assert [rule.rule_id for rule in registry.rules()] == BUILTIN_RULE_IDS
    assert list(registry) == registry.rules()
