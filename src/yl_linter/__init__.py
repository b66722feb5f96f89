"""
yl - YAML linter core

This package provides:
- Rule registry with built-in style, syntax, formatting and semantic rules
- Inline `# yl:` directives (disable, enable, set, config, ignore)
- Per-file rule configuration resolution
- Parallel linting of files and directories
"""

__version__ = "0.1.0"

from .config import Config, RuleConfig, load_config
from .context import LintContext
from .directives import DirectiveParser, parse_directive
from .engine import LinterEngine, lint_content, lint_file, lint_paths
from .errors import ConfigLoadError, ConfigValidationError, DirectiveParseError, LintError, RuleExecutionError
from .inline import InlineState
from .models import Problem, Severity
from .registry import RuleRegistry, default_registry
from .resolver import resolve_rule_config
from .rules import BaseRule, Rule

__all__ = [
    "LinterEngine",
    "lint_content",
    "lint_file",
    "lint_paths",
    "Problem",
    "Severity",
    "Config",
    "RuleConfig",
    "load_config",
    "LintContext",
    "DirectiveParser",
    "parse_directive",
    "InlineState",
    "RuleRegistry",
    "default_registry",
    "resolve_rule_config",
    "BaseRule",
    "Rule",
    "LintError",
    "DirectiveParseError",
    "ConfigValidationError",
    "RuleExecutionError",
    "ConfigLoadError",
]
