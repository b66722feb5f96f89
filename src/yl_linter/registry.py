import logging
from importlib import metadata
from typing import Iterator

from .rules.base import BaseRule

logger = logging.getLogger(__name__)

PLUGIN_ENTRY_POINT_GROUP = "yl.rules"


class RuleRegistry:
    """Registry mapping rule ids to rule instances.

    Rules are stateless and cheap to build, so every thread that lints
    creates its own registry instead of sharing one.
    """

    def __init__(self):
        self._rules: dict[str, BaseRule] = {}

    def register(self, rule: BaseRule):
        if rule.rule_id in self._rules:
            logger.debug("Replacing registered rule '%s'", rule.rule_id)
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> BaseRule | None:
        return self._rules.get(rule_id)

    def rules(self) -> list[BaseRule]:
        return list(self._rules.values())

    def rule_ids(self) -> list[str]:
        return list(self._rules)

    def __iter__(self) -> Iterator[BaseRule]:
        return iter(self.rules())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    @classmethod
    def with_default_rules(cls) -> "RuleRegistry":
        registry = cls()
        registry._load_builtin_rules()
        return registry

    def _load_builtin_rules(self):
        from .rules.formatting import BracesRule, BracketsRule, ColonsRule, CommasRule, HyphensRule
        from .rules.semantic import (
            FloatValuesRule,
            KeyOrderingRule,
            OctalValuesRule,
            QuotedStringsRule,
            TruthyRule,
        )
        from .rules.style import (
            EmptyLinesRule,
            IndentationRule,
            LineLengthRule,
            NewLineAtEndOfFileRule,
            TrailingSpacesRule,
        )
        from .rules.syntax import (
            AnchorsRule,
            CommentsRule,
            DocumentStructureRule,
            KeyDuplicatesRule,
            YamlSyntaxRule,
        )

        for rule in (
            LineLengthRule(),
            TrailingSpacesRule(),
            EmptyLinesRule(),
            IndentationRule(),
            NewLineAtEndOfFileRule(),
            KeyDuplicatesRule(),
            DocumentStructureRule(),
            AnchorsRule(),
            YamlSyntaxRule(),
            CommentsRule(),
            BracketsRule(),
            BracesRule(),
            ColonsRule(),
            CommasRule(),
            HyphensRule(),
            TruthyRule(),
            QuotedStringsRule(),
            KeyOrderingRule(),
            FloatValuesRule(),
            OctalValuesRule(),
        ):
            self.register(rule)

    def load_plugins(self, group: str = PLUGIN_ENTRY_POINT_GROUP) -> int:
        """Register rules published by installed distributions.

        Each entry point must load a BaseRule subclass or a zero-argument
        factory returning a BaseRule instance. Returns the number loaded.
        """
        loaded = 0
        for entry_point in metadata.entry_points(group=group):
            factory = entry_point.load()
            rule = factory()
            if not isinstance(rule, BaseRule):
                raise TypeError(
                    f"Plugin '{entry_point.name}' ({entry_point.value}) did not produce a rule, got {type(rule).__name__}"
                )
            logger.debug("Loaded plugin rule '%s' from %s", rule.rule_id, entry_point.value)
            self.register(rule)
            loaded += 1
        return loaded


def default_registry(include_plugins: bool = False) -> RuleRegistry:
    registry = RuleRegistry.with_default_rules()
    if include_plugins:
        registry.load_plugins()
    return registry
