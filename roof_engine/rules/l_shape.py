"""L-shaped outlines: six square corners, exactly one of them reflex."""

from __future__ import annotations

from roof_engine.rules.base import PatternRule
from roof_engine.models import DetectionContext, PatternCandidate, RoofPattern, SplitLine


class LShapeRule(PatternRule):
    """
    Suggests cutting the L into two rectangles by extending either edge
    that meets at the inside corner.
    """

    priority = 30

    def get_id(self) -> str:
        return "pattern.l_shape"

    def get_name(self) -> str:
        return "L-Shape"

    def applies(self, context: DetectionContext) -> bool:
        return (
            context.box is not None
            and len(context.points) == 6
            and len(context.reflex_indices) == 1
            and context.orthogonal
        )

    def evaluate(self, context: DetectionContext) -> PatternCandidate | None:
        ring = context.points
        r = context.reflex_indices[0]
        corner = ring[r]
        incoming = corner - ring[r - 1]
        outgoing_back = corner - ring[(r + 1) % len(ring)]
        reach = context.box.diagonal

        lines = [
            SplitLine(start=corner, end=corner + incoming.normalized() * reach),
            SplitLine(start=corner, end=corner + outgoing_back.normalized() * reach),
        ]
        splits = self.valid_splits(context, lines)
        return PatternCandidate(
            rule_id=self.get_id(),
            pattern=RoofPattern.L_SHAPE,
            confidence=0.85,
            suggested_splits=splits,
            description=(
                f"L-shaped outline with an inside corner at vertex {r};"
                f" {len(splits)} cut(s) separate the two wings."
            ),
        )
