from pathlib import Path

import pytest
from pydantic import ValidationError

from yl_linter.config import Config, RuleConfig, load_config, parse_config_value
from yl_linter.errors import ConfigLoadError
from yl_linter.models import Severity
from yl_linter.registry import RuleRegistry


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("false", False), ("42", 42), ("-7", -7), ("hello", "hello"), ("True", "True")],
)
def test_parse_config_value(raw, expected):
    value = parse_config_value(raw)
    assert value == expected
    assert type(value) is type(expected)


def test_rule_config_typed_accessors():
    config = RuleConfig(params={"max": 80, "flag": True, "name": "x", "items": ["a", "b"]})

    assert config.get_int("max") == 80
    assert config.get_int("flag") is None
    assert config.get_bool("flag") is True
    assert config.get_bool("max") is None
    assert config.get_string("name") == "x"
    assert config.get_list("items") == ["a", "b"]
    assert config.get_int("missing") is None


def test_rule_config_rejects_unsupported_values():
    with pytest.raises(ValidationError):
        RuleConfig(params={"ratio": 1.5})
    with pytest.raises(ValueError):
        RuleConfig().set_param("ratio", {"nested": 1})


def test_rule_config_copy_is_independent():
    base = RuleConfig(params={"max": 80})
    clone = base.copy()
    clone.set_param("max", 100)

    assert base.get_int("max") == 80


def test_get_rule_config_fallbacks():
    registry = RuleRegistry.with_default_rules()
    config = Config(rules={"line-length": RuleConfig(params={"max": 120})})

    assert config.get_rule_config("line-length", registry).get_int("max") == 120
    # The explicit entry replaces the default wholesale
    assert config.get_rule_config("line-length", registry).get_bool("allow-non-breakable-words") is None
    assert config.get_rule_config("trailing-spaces", registry).enabled is True
    assert config.get_rule_config("truthy", registry).enabled is False
    assert config.get_rule_config("no-such-rule", registry) == RuleConfig()


def test_default_ignore_and_yaml_globs():
    config = Config()

    assert config.is_file_ignored(Path("build/app.generated.yaml"))
    assert config.is_file_ignored(Path("repo/.git/config.yaml"))
    assert config.is_file_ignored(Path("node_modules/pkg/a.yml"))
    assert not config.is_file_ignored(Path("app.yaml"))

    assert config.is_yaml_file(Path("dir/a.yaml"))
    assert config.is_yaml_file(Path("a.yml"))
    assert config.is_yaml_file(Path("proj/.yamllint"))
    assert not config.is_yaml_file(Path("README.md"))


def test_literal_ignore_pattern_is_a_substring_match():
    config = Config(ignore=["vendor"])

    assert config.is_file_ignored(Path("src/vendor/x.yaml"))
    assert not config.is_file_ignored(Path("src/x.yaml"))


def test_presets():
    strict = Config.preset("strict")
    relaxed = Config.preset("relaxed")

    assert set(strict.rules) == set(RuleRegistry.with_default_rules().rule_ids())
    assert all(rule.level == Severity.ERROR for rule in strict.rules.values())
    assert all(rule.level == Severity.WARNING for rule in relaxed.rules.values())
    assert Config.default().rules["line-length"].get_int("max") == 80

    with pytest.raises(ConfigLoadError):
        Config.preset("nope")


def test_load_config(tmp_path):
    path = tmp_path / "yl.yaml"
    path.write_text(
        "rules:\n"
        "  line-length:\n"
        "    max: 120\n"
        "    level: warning\n"
        "  truthy: enable\n"
        "  trailing-spaces: disable\n"
        "  quoted-strings:\n"
        "    enabled: true\n"
        "    params:\n"
        "      quote-type: single\n"
        "ignore:\n"
        "  - 'generated/**'\n"
        "yaml-files:\n"
        "  - '*.yaml'\n"
    )

    config = load_config(path)

    assert config.rules["line-length"].get_int("max") == 120
    assert config.rules["line-length"].level == Severity.WARNING
    assert config.rules["truthy"].enabled is True
    assert config.rules["trailing-spaces"].enabled is False
    assert config.rules["quoted-strings"].get_string("quote-type") == "single"
    assert config.ignore == ["generated/**"]
    assert config.yaml_files == ["*.yaml"]


def test_load_config_ignores_extends(tmp_path):
    path = tmp_path / "yl.yaml"
    path.write_text("extends: default\nrules:\n  truthy: enable\n")

    assert load_config(path).rules["truthy"].enabled is True


@pytest.mark.parametrize(
    "text",
    ["rules: [unclosed\n", "- just\n- a list\n", "rules:\n  line-length:\n    level: loud\n"],
)
def test_load_config_errors(tmp_path, text):
    path = tmp_path / "yl.yaml"
    path.write_text(text)

    with pytest.raises(ConfigLoadError):
        load_config(path)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError):
        load_config(tmp_path / "missing.yaml")
