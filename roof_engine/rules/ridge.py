"""Ridge-based classification: trust digitized ridge and hip lines.

A roof whose ridges run along the outline's long axis near its middle is a
gable, or a hip when hip lines were also traced. Each ridge, extended to
the outline boundary, is offered as a split line.
"""

from __future__ import annotations
import math

from roof_engine.rules.base import PatternRule
from roof_engine.models import (
    DetectionContext, LinearFeatureType, PatternCandidate, RoofPattern,
)


class RidgeFeatureRule(PatternRule):
    """Classifies from traced ridge/hip features."""

    priority = 10  # Traced features beat shape guesses

    def get_id(self) -> str:
        return "pattern.ridge"

    def get_name(self) -> str:
        return "Ridge Features"

    def applies(self, context: DetectionContext) -> bool:
        return (
            context.box is not None
            and any(len(f.geometry) >= 2 for f in context.features_of(LinearFeatureType.RIDGE))
        )

    def evaluate(self, context: DetectionContext) -> PatternCandidate | None:
        box = context.box
        cfg = context.config
        ridges = [f for f in context.features_of(LinearFeatureType.RIDGE) if len(f.geometry) >= 2]
        hips = context.features_of(LinearFeatureType.HIP)

        aligned = True
        lines = []
        for ridge in ridges:
            start, end = ridge.geometry[0], ridge.geometry[-1]
            direction = end - start
            if direction.length() < 1e-9:
                continue
            angle = math.degrees(direction.angle_to(box.long_axis))
            angle = min(angle, 180.0 - angle)
            _, offset = box.to_local(start.lerp(end, 0.5))
            central = box.half_width < 1e-9 or abs(offset) <= cfg.central_tolerance * box.half_width
            if angle > cfg.parallel_tolerance_deg or not central:
                aligned = False
            lines.append(self.extended_line(start.lerp(end, 0.5), direction, box.diagonal))

        if not lines:
            return None

        splits = self.valid_splits(context, lines)
        pattern = RoofPattern.HIP if hips else RoofPattern.GABLE
        confidence = 0.95 if aligned else 0.75
        placement = "centered along the long axis" if aligned else "off the main axis"
        return PatternCandidate(
            rule_id=self.get_id(),
            pattern=pattern,
            confidence=confidence,
            suggested_splits=splits,
            description=(
                f"{pattern.value.capitalize()} roof from {len(ridges)} traced ridge(s)"
                f" and {len(hips)} hip(s), {placement}."
            ),
        )
