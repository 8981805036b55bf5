"""Outline analysis: convex hull, oriented box, reflex corners."""

from __future__ import annotations
import math
from typing import Sequence

from roof_engine.models import DetectionContext, OrientedBox, Point2D, Vector2D
from roof_engine.core import metrics


class OutlineAnalyzer:
    """Analyzes a building outline before the pattern rules run."""

    def analyze(self, context: DetectionContext) -> None:
        """Run all analysis passes and populate the context."""
        ring = metrics.normalize_ring(context.points)
        context.points = ring
        if len(ring) < 3:
            return
        context.area = metrics.area(ring)
        context.hull = convex_hull(ring)
        context.box = oriented_box(context.hull)
        context.reflex_indices = reflex_vertices(ring)
        context.orthogonal = all(
            abs(angle - 90.0) <= context.config.corner_tolerance_deg
            for angle in turn_angles(ring)
        )


def _cross(o: Point2D, a: Point2D, b: Point2D) -> float:
    return (a - o).cross(b - o)


def convex_hull(points: Sequence[Point2D]) -> list[Point2D]:
    """Monotone chain hull, counterclockwise in a y-up frame."""
    pts = sorted(set((p.x, p.y) for p in points))
    if len(pts) < 3:
        return [Point2D(x=x, y=y) for x, y in pts]
    pp = [Point2D(x=x, y=y) for x, y in pts]

    lower: list[Point2D] = []
    for p in pp:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)
    upper: list[Point2D] = []
    for p in reversed(pp):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)
    return lower[:-1] + upper[:-1]


def oriented_box(hull: Sequence[Point2D]) -> OrientedBox | None:
    """Minimum-area rectangle; one of its sides is collinear with a hull edge."""
    n = len(hull)
    if n < 3:
        return None

    best: tuple[float, Vector2D, float, float, float, float] | None = None
    for i in range(n):
        u = (hull[(i + 1) % n] - hull[i]).normalized()
        if u.length() == 0:
            continue
        v = u.perpendicular()
        a_vals = [p.x * u.x + p.y * u.y for p in hull]
        b_vals = [p.x * v.x + p.y * v.y for p in hull]
        a_min, a_max = min(a_vals), max(a_vals)
        b_min, b_max = min(b_vals), max(b_vals)
        box_area = (a_max - a_min) * (b_max - b_min)
        if best is None or box_area < best[0] * (1 - 1e-9):
            best = (box_area, u, a_min, a_max, b_min, b_max)

    if best is None:
        return None
    _, u, a_min, a_max, b_min, b_max = best
    v = u.perpendicular()
    a_mid = (a_min + a_max) / 2
    b_mid = (b_min + b_max) / 2
    center = Point2D(x=u.x * a_mid + v.x * b_mid, y=u.y * a_mid + v.y * b_mid)
    half_a = (a_max - a_min) / 2
    half_b = (b_max - b_min) / 2
    if half_a >= half_b:
        return OrientedBox(center=center, long_axis=u, short_axis=v,
                           half_length=half_a, half_width=half_b)
    return OrientedBox(center=center, long_axis=v, short_axis=-u,
                       half_length=half_b, half_width=half_a)


def turn_angles(ring: Sequence[Point2D]) -> list[float]:
    """Absolute turning angle at each vertex, in degrees."""
    n = len(ring)
    angles = []
    for i in range(n):
        v1 = ring[i] - ring[i - 1]
        v2 = ring[(i + 1) % n] - ring[i]
        angles.append(abs(math.degrees(math.atan2(v1.cross(v2), v1.dot(v2)))))
    return angles


def reflex_vertices(ring: Sequence[Point2D]) -> list[int]:
    """Indices of vertices whose interior angle exceeds 180 degrees."""
    orientation = 1.0 if metrics.signed_area(ring) >= 0 else -1.0
    n = len(ring)
    reflex = []
    for i in range(n):
        v1 = ring[i] - ring[i - 1]
        v2 = ring[(i + 1) % n] - ring[i]
        # Sine of the turn, so the test does not depend on scale
        if v1.cross(v2) * orientation < -1e-12 * v1.length() * v2.length():
            reflex.append(i)
    return reflex
