"""Mirror symmetry about the oriented box axes.

Every vertex, reflected about an axis, must land near some vertex of the
outline. "Near" is a fraction of the box diagonal, so the test scales with
the building and rejects sloppy near-symmetric digitizing.
"""

from __future__ import annotations
import math

from roof_engine.rules.base import PatternRule
from roof_engine.models import DetectionContext, PatternCandidate, RoofPattern


class SymmetryRule(PatternRule):
    """Symmetric outlines split cleanly along their mirror axis."""

    priority = 40

    def get_id(self) -> str:
        return "pattern.symmetry"

    def get_name(self) -> str:
        return "Symmetry Axis"

    def applies(self, context: DetectionContext) -> bool:
        return context.box is not None and len(context.points) >= 3

    def evaluate(self, context: DetectionContext) -> PatternCandidate | None:
        box = context.box
        cfg = context.config
        tolerance = cfg.symmetry_tolerance * box.diagonal
        if tolerance <= 0:
            return None
        local = [box.to_local(p) for p in context.points]

        axes = []
        long_err = self._mirror_error(local, flip_long=False)
        if long_err <= tolerance:
            reach = box.half_length + cfg.axis_overshoot * box.diagonal
            axes.append((long_err, "long", self.extended_line(box.center, box.long_axis, reach)))
        short_err = self._mirror_error(local, flip_long=True)
        if short_err <= tolerance:
            reach = box.half_width + cfg.axis_overshoot * box.diagonal
            axes.append((short_err, "short", self.extended_line(box.center, box.short_axis, reach)))
        if not axes:
            return None

        axes.sort(key=lambda a: a[0])  # Stable: long axis first on ties
        tightness = 1.0 - axes[0][0] / tolerance
        splits = self.valid_splits(context, [line for _, _, line in axes])
        names = " and ".join(name for _, name, _ in axes)
        return PatternCandidate(
            rule_id=self.get_id(),
            pattern=RoofPattern.SYMMETRIC,
            confidence=round(0.5 + 0.35 * tightness, 4),
            suggested_splits=splits,
            description=(
                f"Outline mirrors about its {names} axis"
                f" (worst vertex mismatch {axes[0][0]:.3g}, tolerance {tolerance:.3g})."
            ),
        )

    def _mirror_error(self, local: list[tuple[float, float]], flip_long: bool) -> float:
        """Largest distance from a reflected vertex to its nearest vertex."""
        worst = 0.0
        for a, b in local:
            ra, rb = (-a, b) if flip_long else (a, -b)
            nearest = min(math.hypot(ra - x, rb - y) for x, y in local)
            worst = max(worst, nearest)
        return worst
