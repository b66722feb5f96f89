"""Parsing of `# yl:` comment directives.

The textual grammar is part of the public interface because it lives in
users' YAML files:

    # yl:disable [rule, ...]
    # yl:disable-line [rule, ...]
    # yl:enable [rule, ...]
    # yl:set rule.param=value
    # yl:config rule param=value,param=value
    # yl:ignore-file
    # yl:ignore-section [rule, ...]

An empty rule list means "all rules".
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from .errors import DirectiveParseError


class Scope(Enum):
    """How long a directive's effect lasts"""

    LINE = "line"
    BLOCK = "block"
    SECTION = "section"
    FILE = "file"


@dataclass(frozen=True)
class Disable:
    rules: frozenset[str] = frozenset()
    scope: Scope = Scope.BLOCK


@dataclass(frozen=True)
class DisableLine:
    rules: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Enable:
    rules: frozenset[str] = frozenset()
    scope: Scope = Scope.BLOCK


@dataclass(frozen=True)
class SetParam:
    rule: str
    param: str
    value: str


@dataclass(frozen=True)
class ConfigParams:
    rule: str
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class IgnoreFile:
    pass


@dataclass(frozen=True)
class IgnoreSection:
    rules: frozenset[str] = frozenset()


Directive = Disable | DisableLine | Enable | SetParam | ConfigParams | IgnoreFile | IgnoreSection

# Longer verbs first so "disable-line" is not read as "disable"
DIRECTIVE_PATTERN = re.compile(
    r"#\s*yl:\s*(disable-line|ignore-file|ignore-section|disable|enable|config|set)(?=\s|$)(?:\s+(.*))?"
)
SET_PATTERN = re.compile(r"([A-Za-z0-9_-]+)\.([A-Za-z0-9_-]+)=([^\s,]+)")


def parse_rule_list(args: str) -> frozenset[str]:
    return frozenset(token.strip() for token in args.split(",") if token.strip())


class DirectiveParser:
    """Turns one comment string into at most one directive"""

    def parse(self, comment: str) -> Directive | None:
        match = DIRECTIVE_PATTERN.search(comment.strip())
        if match is None:
            return None

        verb = match.group(1)
        args = (match.group(2) or "").strip()

        if verb == "disable":
            return Disable(parse_rule_list(args), Scope.BLOCK)
        if verb == "disable-line":
            return DisableLine(parse_rule_list(args))
        if verb == "enable":
            return Enable(parse_rule_list(args), Scope.BLOCK)
        if verb == "set":
            return self._parse_set(args)
        if verb == "config":
            return self._parse_config(args)
        if verb == "ignore-file":
            return IgnoreFile()
        return IgnoreSection(parse_rule_list(args))

    def _parse_set(self, args: str) -> SetParam:
        match = SET_PATTERN.search(args)
        if match is None:
            raise DirectiveParseError(
                f"Invalid set directive format '{args}'. Expected: rule.param=value"
            )
        rule, param, value = match.groups()
        return SetParam(rule, param, value)

    def _parse_config(self, args: str) -> ConfigParams:
        parts = args.split(None, 1)
        if not parts:
            raise DirectiveParseError("Config directive requires a rule name")

        params = {}
        if len(parts) > 1:
            for segment in parts[1].split(","):
                # Segments without '=' are skipped, unlike `set`
                key, sep, value = segment.strip().partition("=")
                if not sep:
                    continue
                params[key.strip()] = value.strip()
        return ConfigParams(parts[0], params)


def parse_directive(comment: str) -> Directive | None:
    return DirectiveParser().parse(comment)
