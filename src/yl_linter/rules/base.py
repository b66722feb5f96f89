from abc import ABC, abstractmethod

from ..config import RuleConfig
from ..context import LintContext
from ..errors import ConfigValidationError
from ..models import Problem, Severity


class BaseRule(ABC):
    """Abstract base class for all linting rules.

    Rules are stateless: `check` must depend only on the context and the
    config it is given, so the same instance may serve any number of files.
    """

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'line-length')."""
        pass

    @property
    def description(self) -> str:
        """Human-readable summary of what this rule checks."""
        return "No description available"

    def default_config(self) -> RuleConfig:
        """Configuration used when the base config has no entry for this rule."""
        return RuleConfig(enabled=False, level=Severity.ERROR)

    def validate_config(self, config: RuleConfig) -> None:
        """Raise ConfigValidationError if `config` is unusable. Accepts anything by default."""
        return None

    @abstractmethod
    def check(self, context: LintContext, config: RuleConfig) -> list[Problem]:
        """Run the check and return found problems."""
        pass

    # Helper method for consistent problem creation
    def _problem(
        self,
        config: RuleConfig,
        line: int,
        column: int,
        message: str,
        suggestion: str | None = None,
    ) -> Problem:
        return Problem(
            line=line,
            column=column,
            severity=config.level,
            rule_id=self.rule_id,
            message=message,
            suggestion=suggestion,
        )

    def _require_positive(self, config: RuleConfig, key: str) -> None:
        if key not in config.params:
            return
        value = config.get_int(key)
        if value is None:
            raise ConfigValidationError(f"{key} must be an integer, got {config.params[key]!r}", self.rule_id)
        if value <= 0:
            raise ConfigValidationError(f"{key} must be a positive integer, got {value}", self.rule_id)

    def _require_non_negative(self, config: RuleConfig, *keys: str) -> None:
        for key in keys:
            if key not in config.params:
                continue
            value = config.get_int(key)
            if value is None or value < 0:
                raise ConfigValidationError(
                    f"{key} must be a non-negative integer, got {config.params[key]!r}", self.rule_id
                )


Rule = BaseRule
