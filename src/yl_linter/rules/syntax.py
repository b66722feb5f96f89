import re

import yaml

from ..config import RuleConfig
from ..context import LintContext
from ..models import Problem
from . import common
from .base import BaseRule

ANCHOR_PATTERN = re.compile(r"(?<![\w*&])&([^\s:,\[\]{}]+)")
ALIAS_PATTERN = re.compile(r"(?<![\w*&])\*([^\s:,\[\]{}]+)")


class KeyDuplicatesRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "key-duplicates"

    @property
    def description(self) -> str:
        return "Forbids duplicated keys in a mapping"

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        problems = []
        # One {key: first_line} mapping per open indentation level
        indent_stack = [0]
        level_keys: list[dict[str, int]] = [{}]

        for line_no, line in context.lines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if stripped in ("---", "..."):
                indent_stack, level_keys = [0], [{}]
                continue

            indent = common.count_leading_whitespace(line)
            while len(indent_stack) > 1 and indent < indent_stack[-1]:
                indent_stack.pop()
                level_keys.pop()
            if indent > indent_stack[-1]:
                indent_stack.append(indent)
                level_keys.append({})

            split = common.key_value_split(line)
            if split is None:
                continue
            key = split[0]
            if not key or key.startswith(("-", "#")) or "[" in key or "{" in key:
                continue
            if len(key) >= 2 and key[0] == key[-1] and key[0] in "\"'":
                key = key[1:-1]

            keys = level_keys[-1]
            if key in keys:
                problems.append(
                    self._problem(
                        config,
                        line_no,
                        indent + 1,
                        f'found duplicate key "{key}" (first occurrence at line {keys[key]})',
                    )
                )
            else:
                keys[key] = line_no

        return problems


class DocumentStructureRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "document-structure"

    @property
    def description(self) -> str:
        return "Requires document start and end markers"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("require-document-start", True)
        config.set_param("require-document-end", False)
        return config

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        require_start = config.get_bool("require-document-start")
        require_start = True if require_start is None else require_start
        require_end = bool(config.get_bool("require-document-end"))
        lines = [line for _, line in context.lines() if not common.is_comment_only_line(line)]
        problems = []

        if require_start and (not lines or not lines[0].strip().startswith("---")):
            problems.append(self._problem(config, 1, 1, 'missing document start "---"'))

        if require_end and (not lines or lines[-1].strip() not in ("...", "---")):
            problems.append(
                self._problem(config, max(context.line_count(), 1), 1, 'missing document end "..." or "---"')
            )

        return problems


class AnchorsRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "anchors"

    @property
    def description(self) -> str:
        return "Validates YAML anchors and aliases"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("forbid-undeclared-aliases", True)
        config.set_param("forbid-duplicated-anchors", False)
        config.set_param("forbid-unused-anchors", False)
        return config

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        forbid_undeclared = config.get_bool("forbid-undeclared-aliases")
        forbid_undeclared = True if forbid_undeclared is None else forbid_undeclared
        forbid_duplicated = bool(config.get_bool("forbid-duplicated-anchors"))
        forbid_unused = bool(config.get_bool("forbid-unused-anchors"))

        problems = []
        anchors: dict[str, tuple[int, int]] = {}
        used: set[str] = set()

        for line_no, line in context.lines():
            code = self._strip_comment(line)
            for match in ANCHOR_PATTERN.finditer(code):
                name = match.group(1)
                if forbid_duplicated and name in anchors:
                    problems.append(
                        self._problem(config, line_no, match.start() + 1, f'found duplicated anchor "{name}"')
                    )
                anchors[name] = (line_no, match.start() + 1)
            for match in ALIAS_PATTERN.finditer(code):
                name = match.group(1)
                used.add(name)
                if forbid_undeclared and name not in anchors:
                    problems.append(
                        self._problem(config, line_no, match.start() + 1, f'found undeclared alias "{name}"')
                    )

        if forbid_unused:
            for name, (line_no, column) in anchors.items():
                if name not in used:
                    problems.append(self._problem(config, line_no, column, f'found unused anchor "{name}"'))

        return problems

    def _strip_comment(self, line: str) -> str:
        pos = line.find(" #")
        if line.lstrip().startswith("#"):
            return ""
        return line if pos == -1 else line[:pos]


class YamlSyntaxRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "yaml-syntax"

    @property
    def description(self) -> str:
        return "Validates YAML syntax and reports parse errors"

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        try:
            for _ in yaml.safe_load_all(context.content):
                pass
        except yaml.MarkedYAMLError as exc:
            mark = exc.problem_mark or exc.context_mark
            line, column = (mark.line + 1, mark.column + 1) if mark is not None else (1, 1)
            message = exc.problem or exc.context or "invalid YAML"
            return [self._problem(config, line, column, f"syntax error: {message}")]
        except yaml.YAMLError as exc:
            return [self._problem(config, 1, 1, f"syntax error: {exc}")]

        problems = []
        for line_no, line in context.lines():
            indent = line[: common.count_leading_whitespace(line)]
            if "\t" in indent:
                problems.append(self._problem(config, line_no, indent.index("\t") + 1, "found tab character in indentation"))
            if line.endswith("\t"):
                problems.append(self._problem(config, line_no, len(line), "found trailing tab character"))
        return problems


class CommentsRule(BaseRule):
    @property
    def rule_id(self) -> str:
        return "comments"

    @property
    def description(self) -> str:
        return "Controls comment formatting and placement"

    def default_config(self) -> RuleConfig:
        config = RuleConfig(enabled=False)
        config.set_param("require-starting-space", True)
        config.set_param("min-spaces-from-content", 2)
        return config

    def validate_config(self, config: RuleConfig) -> None:
        self._require_non_negative(config, "min-spaces-from-content")

    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        require_space = config.get_bool("require-starting-space")
        require_space = True if require_space is None else require_space
        min_spaces = config.get_int("min-spaces-from-content")
        min_spaces = 2 if min_spaces is None else min_spaces
        problems = []

        for line_no, line in context.lines():
            pos = self._comment_start(line)
            if pos is None:
                continue

            comment = line[pos:]
            # Shebangs and "#!" / "##" banners are left alone
            if require_space and len(comment) > 1 and comment[1] not in " \t#!":
                problems.append(self._problem(config, line_no, pos + 2, "missing starting space in comment"))

            before = line[:pos]
            if before.strip():
                gap = len(before) - len(before.rstrip())
                if gap < min_spaces:
                    problems.append(
                        self._problem(
                            config, line_no, pos + 1, f"too few spaces before comment, expected at least {min_spaces}"
                        )
                    )

        return problems

    def _comment_start(self, line: str) -> int | None:
        """Index of the first '#' outside quotes, or None"""
        quote = None
        for index, char in enumerate(line):
            if quote:
                if char == quote:
                    quote = None
            elif char in "\"'":
                quote = char
            elif char == "#" and (index == 0 or line[index - 1] in " \t"):
                return index
        return None
