import pytest

from yl_linter.errors import DirectiveParseError
from yl_linter.inline import ALL_RULES, InlineState


def test_plain_content_disables_nothing():
    state = InlineState.from_content("key: value\nother: 1  # a comment\n")

    assert not state.is_file_ignored()
    assert not state.is_rule_disabled("line-length", 1)
    assert state.directives == {}


def test_ignore_file_disables_everything():
    state = InlineState.from_content("a: 1\n# yl:ignore-file\nb: 2\n")

    assert state.is_file_ignored()
    assert state.is_rule_disabled("anything", 1)


def test_disable_line_only_affects_its_own_line():
    state = InlineState.from_content("a: 1\nb: 2  # yl:disable-line line-length\nc: 3\n")

    assert state.is_rule_disabled("line-length", 2)
    assert not state.is_rule_disabled("line-length", 1)
    assert not state.is_rule_disabled("line-length", 3)
    assert not state.is_rule_disabled("trailing-spaces", 2)


def test_disable_line_without_rules_disables_all_rules_on_that_line():
    state = InlineState.from_content("a: 1  # yl:disable-line\nb: 2\n")

    assert state.line_disabled(1) == frozenset({ALL_RULES})
    assert state.is_rule_disabled("trailing-spaces", 1)
    assert not state.is_rule_disabled("trailing-spaces", 2)


def test_block_disable_applies_from_its_line_onward():
    state = InlineState.from_content("a: 1\n# yl:disable truthy\nb: yes\nc: no\n")

    assert not state.is_rule_disabled("truthy", 1)
    assert state.is_rule_disabled("truthy", 2)
    assert state.is_rule_disabled("truthy", 4)
    assert state.block_disabled == frozenset({"truthy"})


def test_block_disable_is_additive():
    state = InlineState.from_content("# yl:disable a\n# yl:disable b\nx: 1\n")

    assert state.is_rule_disabled("a", 3)
    assert state.is_rule_disabled("b", 3)
    assert not state.is_rule_disabled("b", 1)


def test_enable_named_rule_reenables_it():
    state = InlineState.from_content("# yl:disable a, b\nx: 1\n# yl:enable a\ny: 2\n")

    assert state.is_rule_disabled("a", 2)
    assert not state.is_rule_disabled("a", 4)
    assert state.is_rule_disabled("b", 4)


def test_enable_without_rules_clears_block_and_section():
    state = InlineState.from_content("# yl:disable a\n# yl:ignore-section b\nx: 1\n# yl:enable\ny: 2\n")

    assert state.is_rule_disabled("a", 3)
    assert state.is_rule_disabled("b", 3)
    assert not state.is_rule_disabled("a", 5)
    assert not state.is_rule_disabled("b", 5)
    assert state.block_disabled == frozenset()
    assert state.section_disabled == frozenset()


def test_disable_all_then_enable_one_keeps_sentinel():
    state = InlineState.from_content("# yl:disable\n# yl:enable a\nx: 1\n")

    # Removing a single id leaves the "all rules" sentinel in place
    assert state.is_rule_disabled("a", 3)


def test_set_directives_later_value_wins():
    state = InlineState.from_content(
        "# yl:set line-length.max=120\na: 1\n# yl:set line-length.max=130\nb: 2\n"
    )

    assert state.get_rule_config_override("line-length").get_int("max") == 130
    assert state.get_rule_config_override("line-length", line=2).get_int("max") == 120
    assert state.get_rule_config_override("line-length", line=3).get_int("max") == 130
    assert state.get_rule_config_override("trailing-spaces") is None


def test_config_directive_coerces_values():
    state = InlineState.from_content("# yl:config truthy check-keys=false,allowed-values=yes\n")

    override = state.get_rule_config_override("truthy")
    assert override.get_bool("check-keys") is False
    assert override.get_string("allowed-values") == "yes"


def test_override_is_a_copy():
    state = InlineState.from_content("# yl:set line-length.max=120\n")

    state.get_rule_config_override("line-length").set_param("max", 1)

    assert state.get_rule_config_override("line-length").get_int("max") == 120


def test_malformed_set_reports_the_line():
    with pytest.raises(DirectiveParseError) as excinfo:
        InlineState.from_content("a: 1\n# yl:set invalid-format\n")

    assert excinfo.value.line == 2


def test_process_resets_previous_state():
    state = InlineState.from_content("# yl:ignore-file\n# yl:disable a\n")
    state.process("x: 1\n")

    assert not state.is_file_ignored()
    assert not state.is_rule_disabled("a", 1)
    assert state.directives == {}
