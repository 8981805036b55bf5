"""Simple outlines: triangles and quadrilaterals of moderate proportions."""

from __future__ import annotations

from roof_engine.rules.base import PatternRule
from roof_engine.models import DetectionContext, PatternCandidate, RoofPattern


class SimpleOutlineRule(PatternRule):
    """A four-sided footprint is a plain gable; no subdivision is needed."""

    priority = 20

    def get_id(self) -> str:
        return "pattern.simple_outline"

    def get_name(self) -> str:
        return "Simple Outline"

    def applies(self, context: DetectionContext) -> bool:
        return context.box is not None and 3 <= len(context.points) <= 4

    def evaluate(self, context: DetectionContext) -> PatternCandidate | None:
        aspect = context.box.aspect_ratio
        if aspect > context.config.max_simple_aspect:
            return None
        clean = context.rectangularity >= context.config.min_rectangularity
        return PatternCandidate(
            rule_id=self.get_id(),
            pattern=RoofPattern.GABLE,
            confidence=0.9 if clean else 0.7,
            description=(
                f"{'Rectangular' if clean else 'Simple'} {len(context.points)}-sided outline"
                f" (aspect {aspect:.2f}); single gable, no split needed."
            ),
        )
