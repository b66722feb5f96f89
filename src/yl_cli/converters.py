from pathlib import Path

from yl_linter.models import Problem

from .models import ProblemRecord


def problem_to_record(path: Path | str, problem: Problem) -> ProblemRecord:
    """Convert an internal dataclass problem to an external Pydantic record"""
    return ProblemRecord(
        path=str(path),
        line=problem.line,
        column=problem.column,
        severity=problem.severity.value,
        rule=problem.rule_id,
        message=problem.message,
        suggestion=problem.suggestion,
    )
