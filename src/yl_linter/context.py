from functools import cached_property
from pathlib import Path
from typing import Any, Iterator

import yaml


def split_lines(content: str) -> list[str]:
    """Split on newlines the way rules count lines.

    A trailing newline does not produce an extra empty line and a single
    carriage return before each newline is dropped.
    """
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class LintContext:
    """Read-only view of one file handed to every rule"""

    def __init__(self, path: Path | str, content: str):
        self._path = Path(path)
        self._content = content
        self._lines = split_lines(content)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def content(self) -> str:
        return self._content

    @property
    def file_name(self) -> str:
        return self._path.name or "<unknown>"

    def lines(self) -> Iterator[tuple[int, str]]:
        """Yield (line_number, text) pairs, 1-based"""
        return enumerate(self._lines, start=1)

    def get_line(self, line_number: int) -> str | None:
        if line_number < 1 or line_number > len(self._lines):
            return None
        return self._lines[line_number - 1]

    def line_count(self) -> int:
        return len(self._lines)

    def yaml(self) -> Any | None:
        """Generic parse of the content, or None when it is not valid YAML"""
        return self._parsed_yaml

    @cached_property
    def _parsed_yaml(self) -> Any | None:
        try:
            return yaml.safe_load(self._content)
        except yaml.YAMLError:
            return None
