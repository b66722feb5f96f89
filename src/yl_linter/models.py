from dataclasses import dataclass
from enum import Enum
from functools import total_ordering


class Severity(str, Enum):
    """Problem severity levels, ordered info < warning < error"""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @classmethod
    def _missing_(cls, value):
        # Accept "ERROR", "Warning", ... from config files
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None

    # str already defines __le__, __gt__ and __ge__, so total_ordering would keep them
    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


@total_ordering
@dataclass(frozen=True)
class Problem:
    """A single diagnostic found in a YAML file.

    Problems sort by (line, column, severity), then by the remaining fields.
    Equality compares every field.
    """

    line: int
    column: int
    severity: Severity
    rule_id: str
    message: str
    suggestion: str | None = None

    @classmethod
    def with_suggestion(
        cls,
        line: int,
        column: int,
        severity: Severity,
        rule_id: str,
        message: str,
        suggestion: str,
    ) -> "Problem":
        return cls(line, column, severity, rule_id, message, suggestion)

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.line, self.column, self.severity.rank)

    @property
    def _order_key(self) -> tuple:
        # Ties on sort_key fall back to the remaining fields so ordering agrees with ==
        return (*self.sort_key, self.rule_id, self.message, self.suggestion is not None, self.suggestion or "")

    def formatted_message(self) -> str:
        return f"{self.message} ({self.rule_id})"

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.formatted_message()}"

    def __lt__(self, other):
        if not isinstance(other, Problem):
            return NotImplemented
        return self._order_key < other._order_key
