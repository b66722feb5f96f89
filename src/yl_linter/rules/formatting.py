import re

from ..config import RuleConfig
from ..context import LintContext
from ..models import Problem
from . import common
from .base import BaseRule

# Document markers and negative numbers also start with "-"
_NOT_SEQUENCE_ITEM = re.compile(r"---|-[0-9.]")


def _int_param(config: RuleConfig, key: str, default: int) -> int:
    value = config.get_int(key)
    return default if value is None else value


def _find_pairs(line: str, opening: str, closing: str) -> list[tuple[int, int]]:
    """(open, close) index pairs of balanced delimiters on one line"""
    pairs = []
    for start, char in enumerate(line):
        if char != opening:
            continue
        depth = 1
        index = start + 1
        while index < len(line) and depth > 0:
            if line[index] == opening:
                depth += 1
            elif line[index] == closing:
                depth -= 1
            index += 1
        if depth == 0:
            pairs.append((start, index - 1))
    return pairs


def _unquoted_positions(line: str, target: str):
    """Yield indexes of `target` outside quoted scalars"""
    quote = None
    for index, char in enumerate(line):
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == target:
            yield index


class _SpacesInsideRule(BaseRule):
    """Shared spacing check for flow collections delimited on one line"""

    opening = ""
    closing = ""
    noun = ""

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("min-spaces-inside", 0)
        config.set_param("max-spaces-inside", 1)
        config.set_param("min-spaces-inside-empty", 0)
        config.set_param("max-spaces-inside-empty", 0)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        self._require_non_negative(
            config, "min-spaces-inside", "max-spaces-inside", "min-spaces-inside-empty", "max-spaces-inside-empty"
        )

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        min_inside = _int_param(config, "min-spaces-inside", 0)
        max_inside = _int_param(config, "max-spaces-inside", 1)
        min_empty = _int_param(config, "min-spaces-inside-empty", 0)
        max_empty = _int_param(config, "max-spaces-inside-empty", 0)
        problems = []

        for line_no, line in context.lines():
            if common.is_comment_only_line(line):
                continue
            for open_pos, close_pos in _find_pairs(line, self.opening, self.closing):
                inner = line[open_pos + 1 : close_pos]
                if not inner.strip():
                    if len(inner) < min_empty:
                        problems.append(
                            self._problem(
                                config,
                                line_no,
                                open_pos + 1,
                                f"too few spaces inside empty {self.noun}, expected at least {min_empty}",
                            )
                        )
                    elif len(inner) > max_empty:
                        problems.append(
                            self._problem(
                                config,
                                line_no,
                                open_pos + 1,
                                f"too many spaces inside empty {self.noun}, expected at most {max_empty}",
                            )
                        )
                    continue

                leading = len(inner) - len(inner.lstrip(" "))
                trailing = len(inner) - len(inner.rstrip(" "))
                for count, column in ((leading, open_pos + 1), (trailing, close_pos + 1)):
                    message = self._spacing_message(count, min_inside, max_inside)
                    if message:
                        problems.append(self._problem(config, line_no, column, message))

        return problems

    def _spacing_message(self, count: int, minimum: int, maximum: int) -> str | None:
        if count < minimum:
            return f"too few spaces inside {self.noun}, expected at least {minimum}"
        if count > maximum:
            return f"too many spaces inside {self.noun}, expected at most {maximum}"
        return None


class BracketsRule(_SpacesInsideRule):
    opening = "["
    closing = "]"
    noun = "brackets"

    @property
    def rule_id(self) -> str:
        return "brackets"

    @property
    def description(self) -> str:
        return "Controls the use of brackets within arrays"


class BracesRule(_SpacesInsideRule):
    opening = "{"
    closing = "}"
    noun = "braces"

    @property
    def rule_id(self) -> str:
        return "braces"

    @property
    def description(self) -> str:
        return "Controls the use of braces within mappings"


class _SeparatorRule(BaseRule):
    """Spacing around a separator character such as ':' or ','"""

    separator = ""
    noun = ""

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("max-spaces-before", 0)
        config.set_param("min-spaces-after", 1)
        config.set_param("max-spaces-after", 1)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        self._require_non_negative(config, "max-spaces-before", "min-spaces-after", "max-spaces-after")

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        max_before = _int_param(config, "max-spaces-before", 0)
        min_after = _int_param(config, "min-spaces-after", 1)
        max_after = _int_param(config, "max-spaces-after", 1)
        problems = []

        for line_no, line in context.lines():
            if common.is_comment_only_line(line):
                continue
            code = self._code_part(line)
            for index in _unquoted_positions(code, self.separator):
                if not self._applies(code, index):
                    continue

                before = common.count_run(code, index - 1, -1)
                # Leading indentation is not "space before"
                if before and before < index and before > max_before:
                    problems.append(
                        self._problem(
                            config,
                            line_no,
                            index + 1,
                            f"too many spaces before {self.noun}, expected at most {max_before}",
                        )
                    )

                after = common.count_run(code, index + 1, 1)
                if index + 1 + after >= len(code):
                    continue
                if after < min_after:
                    problems.append(
                        self._problem(
                            config,
                            line_no,
                            index + 2,
                            f"too few spaces after {self.noun}, expected at least {min_after}",
                        )
                    )
                elif after > max_after:
                    problems.append(
                        self._problem(
                            config,
                            line_no,
                            index + 2,
                            f"too many spaces after {self.noun}, expected at most {max_after}",
                        )
                    )

        return problems

    def _code_part(self, line: str) -> str:
        for index in _unquoted_positions(line, "#"):
            if index == 0 or line[index - 1] in " \t":
                return line[:index].rstrip()
        return line

    def _applies(self, code: str, index: int) -> bool:
        return True


class ColonsRule(_SeparatorRule):
    separator = ":"
    noun = "colon"

    @property
    def rule_id(self) -> str:
        return "colons"

    @property
    def description(self) -> str:
        return "Controls the number of spaces before and after colons"

    def _applies(self, code: str, index: int) -> bool:
        # URLs and times ("http://", "12:30") are plain scalars, not separators
        if code[index + 1 : index + 3] == "//":
            return False
        following = code[index + 1 : index + 2]
        return not (index > 0 and code[index - 1].isdigit() and following.isdigit())


class CommasRule(_SeparatorRule):
    separator = ","
    noun = "comma"

    @property
    def rule_id(self) -> str:
        return "commas"

    @property
    def description(self) -> str:
        return "Controls the number of spaces before and after commas"


class HyphensRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "hyphens"

    @property
    def description(self) -> str:
        return "Controls the use of hyphens in sequences"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("max-spaces-after", 1)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        self._require_positive(config, "max-spaces-after")

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        max_after = _int_param(config, "max-spaces-after", 1)
        problems = []

        for line_no, line in context.lines():
            stripped = line.lstrip()
            if not stripped.startswith("-") or _NOT_SEQUENCE_ITEM.match(stripped):
                continue
            hyphen = len(line) - len(stripped)
            after = common.count_run(line, hyphen + 1, 1)
            if hyphen + 1 + after >= len(line):
                continue
            if after == 0:
                problems.append(self._problem(config, line_no, hyphen + 2, "missing space after hyphen"))
            elif after > max_after:
                problems.append(
                    self._problem(
                        config,
                        line_no,
                        hyphen + 2,
                        f"too many spaces after hyphen, expected at most {max_after}",
                    )
                )

        return problems
