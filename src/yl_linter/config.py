import fnmatch
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigLoadError
from .models import Severity

if TYPE_CHECKING:
    from .registry import RuleRegistry

logger = logging.getLogger(__name__)

DEFAULT_IGNORE = [
    "*.generated.yaml",
    "*.generated.yml",
    ".git/**",
    "node_modules/**",
]
DEFAULT_YAML_FILES = ["*.yaml", "*.yml", ".yamllint"]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_WILDCARDS = ("*", "?", "[")


def parse_config_value(value: str) -> bool | int | str:
    """Coerce a directive value: bool, then int, else the raw string"""
    if value == "true":
        return True
    if value == "false":
        return False
    if _INT_PATTERN.fullmatch(value):
        return int(value)
    return value


def _check_param_value(value: Any) -> Any:
    if isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_check_param_value(item) for item in value]
    raise ValueError(f"unsupported parameter value {value!r} (expected bool, int, string or list)")


class RuleConfig(BaseModel):
    """Enabled flag, severity and named parameters for one rule"""

    model_config = ConfigDict(validate_assignment=True)

    enabled: bool = True
    level: Severity = Severity.ERROR
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, level: Any) -> Any:
        return level.lower() if isinstance(level, str) else level

    @field_validator("params")
    @classmethod
    def _validate_params(cls, params: dict[str, Any]) -> dict[str, Any]:
        return {str(key): _check_param_value(value) for key, value in params.items()}

    def get_bool(self, key: str) -> bool | None:
        value = self.params.get(key)
        return value if isinstance(value, bool) else None

    def get_int(self, key: str) -> int | None:
        value = self.params.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def get_string(self, key: str) -> str | None:
        value = self.params.get(key)
        return value if isinstance(value, str) else None

    def get_list(self, key: str) -> list | None:
        value = self.params.get(key)
        return value if isinstance(value, list) else None

    def set_param(self, key: str, value: Any) -> None:
        self.params[key] = _check_param_value(value)

    def copy(self) -> "RuleConfig":
        return self.model_copy(deep=True)


def _has_wildcard(pattern: str) -> bool:
    return any(char in pattern for char in _WILDCARDS)


def _glob_matches(path: Path, pattern: str) -> bool:
    posix = path.as_posix()
    if fnmatch.fnmatchcase(path.name, pattern) or fnmatch.fnmatchcase(posix, pattern):
        return True
    # Let "dir/**" style patterns match anywhere below the root
    return fnmatch.fnmatchcase(posix, f"*/{pattern}")


class Config(BaseModel):
    """Base, file-independent configuration shared by every lint worker"""

    model_config = ConfigDict(populate_by_name=True)

    rules: dict[str, RuleConfig] = Field(default_factory=dict)
    ignore: list[str] = Field(default_factory=lambda: DEFAULT_IGNORE.copy())
    yaml_files: list[str] = Field(default_factory=lambda: DEFAULT_YAML_FILES.copy(), alias="yaml-files")

    @field_validator("rules", mode="before")
    @classmethod
    def _normalize_rules(cls, rules: Any) -> Any:
        if not isinstance(rules, dict):
            return rules
        return {rule_id: _normalize_rule_entry(rule_id, entry) for rule_id, entry in rules.items()}

    def get_rule_config(self, rule_id: str, registry: "RuleRegistry | None" = None) -> RuleConfig:
        """Owned copy of the effective base config for a rule"""
        explicit = self.rules.get(rule_id)
        if explicit is not None:
            return explicit.copy()
        if registry is not None:
            rule = registry.get(rule_id)
            if rule is not None:
                return rule.default_config()
        return RuleConfig()

    def is_file_ignored(self, path: Path | str) -> bool:
        path = Path(path)
        for pattern in self.ignore:
            if _has_wildcard(pattern):
                if _glob_matches(path, pattern):
                    return True
            elif pattern in path.as_posix():
                return True
        return False

    def is_yaml_file(self, path: Path | str) -> bool:
        path = Path(path)
        for pattern in self.yaml_files:
            if _has_wildcard(pattern):
                if _glob_matches(path, pattern):
                    return True
            elif path.as_posix().endswith(pattern):
                return True
        return False

    @classmethod
    def default(cls) -> "Config":
        """Configuration listing every built-in rule with its default settings"""
        from .registry import RuleRegistry

        registry = RuleRegistry.with_default_rules()
        return cls(rules={rule.rule_id: rule.default_config() for rule in registry.rules()})

    @classmethod
    def strict(cls) -> "Config":
        config = cls.default()
        for rule_config in config.rules.values():
            rule_config.level = Severity.ERROR
        return config

    @classmethod
    def relaxed(cls) -> "Config":
        config = cls.default()
        for rule_config in config.rules.values():
            rule_config.level = Severity.WARNING
        return config

    @classmethod
    def preset(cls, name: str) -> "Config":
        presets = {"default": cls.default, "strict": cls.strict, "relaxed": cls.relaxed}
        if name not in presets:
            raise ConfigLoadError(f"Unknown configuration preset '{name}' (expected one of {', '.join(presets)})")
        return presets[name]()


def _normalize_rule_entry(rule_id: str, entry: Any) -> Any:
    """Accept `enable`/`disable` shorthands and flat parameter keys"""
    if isinstance(entry, RuleConfig):
        return entry
    if entry in ("enable", "disable"):
        return {"enabled": entry == "enable"}
    if not isinstance(entry, dict):
        raise ValueError(f"rule '{rule_id}' must be a mapping or one of 'enable'/'disable'")

    normalized = {"params": dict(entry.get("params") or {})}
    for key, value in entry.items():
        if key in ("enabled", "level"):
            normalized[key] = value
        elif key != "params":
            normalized["params"][key] = value
    return normalized


def load_config(path: Path | str) -> Config:
    """Load a base configuration from one YAML file.

    Rules missing from the file fall back to their built-in defaults when
    resolved. There is no discovery and no `extends` handling.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Failed to read config file {path}: {exc}", path) from exc

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"Failed to parse config file {path}: {exc}", path) from exc

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config file {path} must contain a mapping", path)
    if "extends" in data:
        logger.warning("Ignoring 'extends' in %s: configuration inheritance is not supported", path)
        data = {key: value for key, value in data.items() if key != "extends"}

    try:
        config = Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid config file {path}: {exc}", path) from exc

    logger.debug("Loaded config %s with %d rule entries", path, len(config.rules))
    return config
