import logging
from bisect import bisect_right

from .config import RuleConfig, parse_config_value
from .context import split_lines
from .directives import (
    ConfigParams,
    Directive,
    DirectiveParser,
    Disable,
    DisableLine,
    Enable,
    IgnoreFile,
    IgnoreSection,
    Scope,
    SetParam,
)
from .errors import DirectiveParseError

logger = logging.getLogger(__name__)

ALL_RULES = "*"


class _ScopedRuleSet:
    """A set of disabled rule ids whose history is kept by starting line.

    Each change is recorded against the line of the directive that caused it,
    so queries see the state in effect at a given line rather than the final
    state of the file.
    """

    def __init__(self):
        self.current: set[str] = set()
        self._starts: list[int] = []
        self._snapshots: list[frozenset[str]] = []

    def clear(self):
        self.current = set()
        self._starts.clear()
        self._snapshots.clear()

    def record(self, line: int):
        snapshot = frozenset(self.current)
        if self._starts and self._starts[-1] == line:
            self._snapshots[-1] = snapshot
        else:
            self._starts.append(line)
            self._snapshots.append(snapshot)

    def at(self, line: int) -> frozenset[str]:
        index = bisect_right(self._starts, line) - 1
        if index < 0:
            return frozenset()
        return self._snapshots[index]

    def disable(self, rules: frozenset[str], line: int):
        if rules:
            self.current.update(rules)
        else:
            self.current = {ALL_RULES}
        self.record(line)

    def enable(self, rules: frozenset[str], line: int):
        if rules:
            self.current.difference_update(rules)
        else:
            self.current = set()
        self.record(line)


class InlineState:
    """Per-file state built by replaying `# yl:` directives top to bottom.

    Construct one per file and throw it away afterwards; nothing here is
    meant to outlive a single lint run.
    """

    def __init__(self, parser: DirectiveParser | None = None):
        self._parser = parser or DirectiveParser()
        self.directives: dict[int, list[Directive]] = {}
        self._overrides: dict[str, RuleConfig] = {}
        self._param_events: list[tuple[int, str, str, object]] = []
        self._block = _ScopedRuleSet()
        self._section = _ScopedRuleSet()
        self._line_disabled: dict[int, set[str]] = {}
        self._file_ignored = False

    @classmethod
    def from_content(cls, content: str, parser: DirectiveParser | None = None) -> "InlineState":
        state = cls(parser)
        state.process(content)
        return state

    def reset(self):
        self.directives = {}
        self._overrides = {}
        self._param_events = []
        self._block.clear()
        self._section.clear()
        self._line_disabled = {}
        self._file_ignored = False

    def process(self, content: str):
        """Scan every line, recording and applying directives as they appear"""
        self.reset()

        for line_number, line in enumerate(split_lines(content), start=1):
            comment_start = line.find("#")
            if comment_start == -1:
                continue

            try:
                directive = self._parser.parse(line[comment_start:])
            except DirectiveParseError as exc:
                raise DirectiveParseError(f"line {line_number}: {exc.message}", line=line_number) from exc
            if directive is None:
                continue

            logger.debug("Directive on line %d: %r", line_number, directive)
            self.directives.setdefault(line_number, []).append(directive)
            self.apply(line_number, directive)

    def apply(self, line_number: int, directive: Directive):
        if isinstance(directive, IgnoreFile):
            self._file_ignored = True
        elif isinstance(directive, Disable):
            if directive.scope == Scope.SECTION:
                self._section.disable(directive.rules, line_number)
            elif directive.scope == Scope.LINE:
                self._disable_line(directive.rules, line_number)
            else:
                self._block.disable(directive.rules, line_number)
        elif isinstance(directive, DisableLine):
            self._disable_line(directive.rules, line_number)
        elif isinstance(directive, IgnoreSection):
            self._section.disable(directive.rules, line_number)
        elif isinstance(directive, Enable):
            # An empty rule list resets every scope, it does not undo the last disable
            self._block.enable(directive.rules, line_number)
            self._section.enable(directive.rules, line_number)
        elif isinstance(directive, SetParam):
            self._set_param(line_number, directive.rule, directive.param, directive.value)
        elif isinstance(directive, ConfigParams):
            for key, value in directive.params.items():
                self._set_param(line_number, directive.rule, key, value)
        else:
            raise TypeError(f"Unknown directive {directive!r}")

    def _disable_line(self, rules: frozenset[str], line_number: int):
        line_rules = self._line_disabled.setdefault(line_number, set())
        if rules:
            line_rules.update(rules)
        else:
            line_rules.add(ALL_RULES)

    def _set_param(self, line_number: int, rule_id: str, key: str, raw_value: str):
        value = parse_config_value(raw_value)
        self._overrides.setdefault(rule_id, RuleConfig()).set_param(key, value)
        self._param_events.append((line_number, rule_id, key, value))

    def is_file_ignored(self) -> bool:
        return self._file_ignored

    def is_rule_disabled(self, rule_id: str, line: int) -> bool:
        if self._file_ignored:
            return True

        line_rules = self._line_disabled.get(line)
        if line_rules and (ALL_RULES in line_rules or rule_id in line_rules):
            return True

        block_rules = self._block.at(line)
        if ALL_RULES in block_rules or rule_id in block_rules:
            return True

        section_rules = self._section.at(line)
        return ALL_RULES in section_rules or rule_id in section_rules

    def get_rule_config_override(self, rule_id: str, line: int | None = None) -> RuleConfig | None:
        """Parameters set inline for a rule.

        Without a line this is everything the file sets; with a line only
        directives on or before it count.
        """
        if line is None:
            override = self._overrides.get(rule_id)
            return override.copy() if override is not None else None

        override = None
        for event_line, event_rule, key, value in self._param_events:
            if event_line > line:
                break
            if event_rule == rule_id:
                if override is None:
                    override = RuleConfig()
                override.set_param(key, value)
        return override

    @property
    def block_disabled(self) -> frozenset[str]:
        return frozenset(self._block.current)

    @property
    def section_disabled(self) -> frozenset[str]:
        return frozenset(self._section.current)

    def line_disabled(self, line: int) -> frozenset[str]:
        return frozenset(self._line_disabled.get(line, ()))
