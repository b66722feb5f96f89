from pathlib import Path


class LintError(Exception):
    """Base class for every error the linter core raises"""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None


class DirectiveParseError(LintError):
    """A `# yl:` comment that looks like a directive but is malformed"""

    def __init__(self, message: str, line: int | None = None, path: Path | str | None = None):
        super().__init__(message, path)
        self.line = line


class ConfigValidationError(LintError):
    """A resolved rule configuration rejected by the rule's validator"""

    def __init__(self, message: str, rule_id: str | None = None, path: Path | str | None = None):
        super().__init__(message, path)
        self.rule_id = rule_id


class RuleExecutionError(LintError):
    """A rule's check raised while linting a file"""

    def __init__(self, message: str, rule_id: str, path: Path | str | None = None):
        super().__init__(message, path)
        self.rule_id = rule_id


class ConfigLoadError(LintError):
    """A configuration file could not be read or validated"""
