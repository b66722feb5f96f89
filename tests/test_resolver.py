from yl_linter.config import Config, RuleConfig
from yl_linter.inline import InlineState
from yl_linter.models import Severity
from yl_linter.registry import RuleRegistry
from yl_linter.resolver import resolve_rule_config


def test_resolution_starts_from_rule_default():
    registry = RuleRegistry.with_default_rules()

    resolved = resolve_rule_config("line-length", Config(), registry)

    assert resolved.enabled is True
    assert resolved.get_int("max") == 80


def test_inline_params_merge_over_base_entry():
    registry = RuleRegistry.with_default_rules()
    config = Config(
        rules={"line-length": RuleConfig(level=Severity.WARNING, params={"max": 100, "allow-non-breakable-words": True})}
    )
    state = InlineState.from_content("# yl:set line-length.max=120\n")

    resolved = resolve_rule_config("line-length", config, registry, state)

    assert resolved.get_int("max") == 120
    assert resolved.get_bool("allow-non-breakable-words") is True
    assert resolved.level == Severity.WARNING


def test_inline_params_never_change_enabled_or_level():
    registry = RuleRegistry.with_default_rules()
    state = InlineState.from_content("# yl:config truthy enabled=true,level=warning\n")

    resolved = resolve_rule_config("truthy", Config(), registry, state)

    assert resolved.enabled is False
    assert resolved.level == Severity.ERROR
    assert resolved.get_bool("enabled") is True


def test_resolution_does_not_mutate_base_config():
    config = Config(rules={"line-length": RuleConfig(params={"max": 100})})
    state = InlineState.from_content("# yl:set line-length.max=120\n")

    resolve_rule_config("line-length", config, None, state)

    assert config.rules["line-length"].get_int("max") == 100


def test_unknown_rule_gets_generic_default():
    assert resolve_rule_config("mystery", Config()) == RuleConfig()
