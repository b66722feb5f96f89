from ..config import RuleConfig
from ..context import LintContext
from ..models import Problem, Severity
from . import common
from .base import BaseRule

DEFAULT_MAX_LINE_LENGTH = 80


class LineLengthRule(BaseRule):
    def __init__(self, default_max: int = DEFAULT_MAX_LINE_LENGTH):
        self.default_max = default_max

    @property
    def rule_id(self) -> str:
        return "line-length"

    @property
    def description(self) -> str:
        return "Checks that lines do not exceed a maximum length"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=True, level=Severity.ERROR)
        config.set_param("max", self.default_max)
        config.set_param("allow-non-breakable-words", False)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        self._require_positive(config, "max")

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        max_length = config.get_int("max") or self.default_max
        allow_non_breakable = bool(config.get_bool("allow-non-breakable-words"))
        problems = []

        for line_no, line in context.lines():
            length = len(line)
            if length <= max_length:
                continue
            if allow_non_breakable and self._is_non_breakable(line):
                continue
            problems.append(
                self._problem(config, line_no, max_length + 1, f"line too long ({length} > {max_length} characters)")
            )

        return problems

    def _is_non_breakable(self, line: str) -> bool:
        text = line.lstrip()
        if text.startswith("#"):
            text = text.lstrip("#").lstrip()
        elif text.startswith("- "):
            text = text[2:].lstrip()
        return " " not in text


class TrailingSpacesRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "trailing-spaces"

    @property
    def description(self) -> str:
        return "Checks for trailing whitespace at the end of lines"

    def default_config(self) -> RuleConfig:
        return RuleConfig(enabled=True, level=Severity.ERROR)

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        problems = []
        for line_no, line in context.lines():
            start = common.trailing_whitespace_start(line)
            if start is not None:
                problems.append(self._problem(config, line_no, start + 1, "trailing whitespace"))
        return problems


class EmptyLinesRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "empty-lines"

    @property
    def description(self) -> str:
        return "Controls the number of consecutive empty lines"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("max", 2)
        config.set_param("max-start", 0)
        config.set_param("max-end", 1)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        self._require_non_negative(config, "max", "max-start", "max-end")

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        max_empty = config.get_int("max")
        max_start = config.get_int("max-start")
        max_end = config.get_int("max-end")
        max_empty = 2 if max_empty is None else max_empty
        max_start = 0 if max_start is None else max_start
        max_end = 1 if max_end is None else max_end

        lines = [line for _, line in context.lines()]
        if not lines:
            return []
        problems = []

        leading = 0
        for line in lines:
            if not common.is_empty_line(line):
                break
            leading += 1
        if leading > max_start:
            problems.append(
                self._problem(config, 1, 1, f"too many blank lines at beginning of file ({leading} > {max_start})")
            )

        trailing = 0
        for line in reversed(lines):
            if not common.is_empty_line(line):
                break
            trailing += 1
        if trailing > max_end and trailing != len(lines):
            problems.append(
                self._problem(config, len(lines), 1, f"too many blank lines at end of file ({trailing} > {max_end})")
            )

        consecutive = 0
        for line_no, line in enumerate(lines, start=1):
            if common.is_empty_line(line):
                consecutive += 1
                continue
            # Runs at the very start are reported above
            if consecutive > max_empty and consecutive != line_no - 1:
                problems.append(
                    self._problem(config, line_no - 1, 1, f"too many blank lines ({consecutive} > {max_empty})")
                )
            consecutive = 0

        return problems


class IndentationRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "indentation"

    @property
    def description(self) -> str:
        return "Controls indentation consistency"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("spaces", 2)
        config.set_param("indent-sequences", True)
        config.set_param("check-multi-line-strings", False)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        self._require_positive(config, "spaces")

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        spaces = config.get_int("spaces") or 2
        indent_sequences = config.get_bool("indent-sequences")
        indent_sequences = True if indent_sequences is None else indent_sequences
        problems = []

        for line_no, line in context.lines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            tab = line.find("\t")
            if tab != -1 and tab < common.count_leading_whitespace(line):
                problems.append(self._problem(config, line_no, tab + 1, "found character '\\t' instead of spaces"))
                continue

            indent = common.count_leading_whitespace(line)
            is_sequence_item = stripped.startswith("- ") or stripped == "-"
            if is_sequence_item and not indent_sequences:
                continue
            if indent % spaces != 0:
                problems.append(
                    self._problem(
                        config, line_no, indent + 1, f"wrong indentation: expected a multiple of {spaces}, got {indent}"
                    )
                )

        return problems


class NewLineAtEndOfFileRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "new-line-at-end-of-file"

    @property
    def description(self) -> str:
        return "Requires a new line character at the end of files"

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        content = context.content
        if not content or content.endswith("\n"):
            return []
        last_line = context.line_count()
        column = len(context.get_line(last_line) or "") + 1
        return [self._problem(config, last_line, column, "no new line character at the end of file")]
