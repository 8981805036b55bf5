"""Rule registry: stores and orders roof pattern rules."""

from __future__ import annotations

from roof_engine.models import DetectionContext
from roof_engine.rules.base import PatternRule


class PatternRuleRegistry:
    """
    Central registry for all pattern rules.

    Rules are registered at startup. During detection, the registry
    returns the applicable rules sorted by priority.
    """

    def __init__(self) -> None:
        self._rules: dict[str, PatternRule] = {}

    def register(self, rule: PatternRule) -> None:
        """Register a pattern rule."""
        self._rules[rule.get_id()] = rule

    def unregister(self, rule_id: str) -> None:
        """Remove a rule from the registry."""
        self._rules.pop(rule_id, None)

    def get_rule(self, rule_id: str) -> PatternRule | None:
        return self._rules.get(rule_id)

    def list_rules(self) -> list[PatternRule]:
        """Return all registered rules."""
        return list(self._rules.values())

    def get_applicable_rules(self, context: DetectionContext) -> list[PatternRule]:
        """
        Return rules that apply to the given context, sorted by priority.

        Respects DetectionConfig.enabled_rules and disabled_rules.
        """
        config = context.config
        candidates = list(self._rules.values())

        # If enabled_rules is specified, only use those
        if config.enabled_rules:
            candidates = [r for r in candidates if r.get_id() in config.enabled_rules]

        # Remove explicitly disabled rules
        if config.disabled_rules:
            candidates = [r for r in candidates if r.get_id() not in config.disabled_rules]

        applicable = [r for r in candidates if r.applies(context)]

        # Stable sort: equal priorities keep registration order
        applicable.sort(key=lambda r: r.priority)
        return applicable


def create_default_registry() -> PatternRuleRegistry:
    """Create a registry with all standard pattern rules."""
    from roof_engine.rules.ridge import RidgeFeatureRule
    from roof_engine.rules.simple_outline import SimpleOutlineRule
    from roof_engine.rules.l_shape import LShapeRule
    from roof_engine.rules.symmetry import SymmetryRule

    registry = PatternRuleRegistry()
    registry.register(RidgeFeatureRule())
    registry.register(SimpleOutlineRule())
    registry.register(LShapeRule())
    registry.register(SymmetryRule())
    return registry
