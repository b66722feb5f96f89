from .config import Config, RuleConfig
from .inline import InlineState
from .registry import RuleRegistry


def resolve_rule_config(
    rule_id: str,
    config: Config,
    registry: RuleRegistry | None = None,
    inline_state: InlineState | None = None,
) -> RuleConfig:
    """Effective configuration of one rule for one file.

    The base config entry replaces the rule default wholesale; inline
    `set`/`config` parameters are then merged key by key. Inline directives
    never touch `enabled` or `level`.
    """
    resolved = config.get_rule_config(rule_id, registry)

    if inline_state is not None:
        override = inline_state.get_rule_config_override(rule_id)
        if override is not None:
            for key, value in override.params.items():
                resolved.set_param(key, value)

    return resolved
