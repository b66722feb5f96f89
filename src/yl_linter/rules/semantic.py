import re
from typing import Any

from ..config import RuleConfig
from ..context import LintContext
from ..errors import ConfigValidationError
from ..models import Problem
from . import common
from .base import BaseRule

TRUTHY_VARIANTS = (
    "yes", "Yes", "YES", "no", "No", "NO", "on", "On", "ON", "off", "Off", "OFF",
    "True", "TRUE", "False", "FALSE",
)

FLOAT_PATTERN = re.compile(r"[-+]?(\.[0-9]+|[0-9]+(\.[0-9]*)?)([eE][-+]?[0-9]+)?")
IMPLICIT_OCTAL_PATTERN = re.compile(r"0[0-9]+")
EXPLICIT_OCTAL_PATTERN = re.compile(r"0o[0-7]+")


def _value_start(line: str, colon: int) -> int:
    """0-based index of the first non-space character after `colon`"""
    return colon + 1 + common.count_run(line, colon + 1, 1)


class TruthyRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "truthy"

    @property
    def description(self) -> str:
        return "Enforces consistent boolean value representation"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("allowed-values", ["true", "false"])
        config.set_param("check-keys", True)
        return config

    def allowed_values(self, config: RuleConfig) -> list[str]:
        """Accepts a list or a comma separated string (the form `yl: set` can express)"""
        values = config.get_list("allowed-values")
        if values is not None:
            return [str(value) for value in values]
        text = config.get_string("allowed-values")
        if text is not None:
            return [value.strip() for value in text.split(",") if value.strip()]
        return ["true", "false"]

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        allowed = self.allowed_values(config)
        check_keys = config.get_bool("check-keys")
        check_keys = True if check_keys is None else check_keys
        problems = []

        for line_no, line in context.lines():
            if common.is_comment_only_line(line):
                continue

            candidates = []
            split = common.key_value_split(line)
            if split is not None:
                key, value, colon = split
                if check_keys:
                    candidates.append((key.lstrip("- "), line.find(key.lstrip("- ")) + 1))
                candidates.append((value, _value_start(line, colon) + 1))
            elif line.lstrip().startswith("- "):
                item = line.lstrip()[2:].strip()
                candidates.append((item, line.find(item) + 1))

            for text, column in candidates:
                if text in TRUTHY_VARIANTS and text not in allowed:
                    problems.append(
                        self._problem(
                            config,
                            line_no,
                            column,
                            f'truthy value should be one of [{", ".join(allowed)}], not "{text}"',
                        )
                    )

        return problems


class QuotedStringsRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "quoted-strings"

    @property
    def description(self) -> str:
        return "Enforces consistent string quoting"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("quote-type", "any")
        config.set_param("required-only-when-needed", False)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        quote_type = config.get_string("quote-type")
        if quote_type is not None and quote_type not in ("any", "single", "double"):
            raise ConfigValidationError(
                f"quote-type must be one of any, single, double, got {quote_type!r}", self.rule_id
            )

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        quote_type = config.get_string("quote-type") or "any"
        only_when_needed = bool(config.get_bool("required-only-when-needed"))
        problems = []

        for line_no, line in context.lines():
            if common.is_comment_only_line(line):
                continue
            for start, quote, text in self._quoted_strings(line):
                if quote_type == "single" and quote == '"':
                    problems.append(self._problem(config, line_no, start + 1, "string should be single-quoted"))
                elif quote_type == "double" and quote == "'":
                    problems.append(self._problem(config, line_no, start + 1, "string should be double-quoted"))
                if only_when_needed and not self._needs_quoting(text):
                    problems.append(self._problem(config, line_no, start + 1, "string should not be quoted"))

        return problems

    def _quoted_strings(self, line: str):
        """Yield (start, quote_char, content) for each closed quoted string"""
        index = 0
        while index < len(line):
            char = line[index]
            if char == "#" and (index == 0 or line[index - 1] in " \t"):
                return
            if char not in "\"'":
                index += 1
                continue
            start = index
            index += 1
            while index < len(line) and line[index] != char:
                index += 2 if line[index] == "\\" and char == '"' else 1
            if index < len(line):
                yield start, char, line[start + 1 : index]
            index += 1

    def _needs_quoting(self, text: str) -> bool:
        if not text or text != text.strip():
            return True
        if any(char in text for char in ":#[]{},&*!|>%@`\"'"):
            return True
        if text.lower() in ("true", "false", "null", "~") or text in TRUTHY_VARIANTS:
            return True
        return bool(FLOAT_PATTERN.fullmatch(text))


class KeyOrderingRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "key-ordering"

    @property
    def description(self) -> str:
        return "Enforces alphabetical ordering of keys in mappings"

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        document = context.yaml()
        if document is None:
            return []
        problems: list[Problem] = []
        self._check_node(context, config, document, problems, set())
        return problems

    def _check_node(
        self, context: LintContext, config: RuleConfig, node: Any, problems: list[Problem], seen: set[int]
    ) -> None:
        # Aliases can make a node contain itself; visit each container once
        if isinstance(node, (dict, list)):
            if id(node) in seen:
                return
            seen.add(id(node))

        if isinstance(node, dict):
            keys = [key for key in node if isinstance(key, str)]
            for previous, key in zip(keys, keys[1:]):
                if key < previous:
                    problems.append(
                        self._problem(
                            config, self._key_line(context, key), 1, f'wrong ordering of key "{key}" in mapping'
                        )
                    )
            for value in node.values():
                self._check_node(context, config, value, problems, seen)
        elif isinstance(node, list):
            for item in node:
                self._check_node(context, config, item, problems, seen)

    def _key_line(self, context: LintContext, key: str) -> int:
        # The parsed document carries no positions; fall back to a text search
        pattern = re.compile(rf"^\s*(-\s+)?[\"']?{re.escape(key)}[\"']?\s*:")
        for line_no, line in context.lines():
            if pattern.match(line):
                return line_no
        return 1


class FloatValuesRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "float-values"

    @property
    def description(self) -> str:
        return "Validates float value formats"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("forbid-scientific-notation", False)
        config.set_param("require-numeral-before-decimal", False)
        return config

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        forbid_scientific = bool(config.get_bool("forbid-scientific-notation"))
        require_numeral = bool(config.get_bool("require-numeral-before-decimal"))
        problems = []

        for line_no, line in context.lines():
            split = common.key_value_split(line)
            if split is None or common.is_comment_only_line(line):
                continue
            _, value, colon = split
            if not FLOAT_PATTERN.fullmatch(value):
                continue
            column = _value_start(line, colon) + 1
            if forbid_scientific and ("e" in value or "E" in value):
                problems.append(self._problem(config, line_no, column, "scientific notation is forbidden"))
            if require_numeral and value.lstrip("+-").startswith("."):
                problems.append(
                    self._problem(
                        config, line_no, column, "decimal number should have at least one numeral before decimal point"
                    )
                )

        return problems


class OctalValuesRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "octal-values"

    @property
    def description(self) -> str:
        return "Detects and forbids octal values"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("forbid-implicit-octal", True)
        config.set_param("forbid-explicit-octal", False)
        return config

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        forbid_implicit = config.get_bool("forbid-implicit-octal")
        forbid_implicit = True if forbid_implicit is None else forbid_implicit
        forbid_explicit = bool(config.get_bool("forbid-explicit-octal"))
        problems = []

        for line_no, line in context.lines():
            split = common.key_value_split(line)
            if split is None or common.is_comment_only_line(line):
                continue
            _, value, colon = split
            column = _value_start(line, colon) + 1
            if forbid_implicit and IMPLICIT_OCTAL_PATTERN.fullmatch(value):
                problems.append(self._problem(config, line_no, column, f'found implicit octal value "{value}"'))
            if forbid_explicit and EXPLICIT_OCTAL_PATTERN.fullmatch(value):
                problems.append(self._problem(config, line_no, column, f'found explicit octal value "{value}"'))

        return problems
