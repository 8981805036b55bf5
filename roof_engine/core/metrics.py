"""Polygon measurements: area, perimeter, centroid, cleanup, unit conversion.

Tolerances are relative to the size of the polygon at hand, so the same
outline behaves the same in canvas pixels, feet or WGS84 degrees.
"""

from __future__ import annotations
import math
from typing import Sequence

from roof_engine.models import Point2D
from roof_engine.core.errors import DegeneratePolygon


TOLERANCE = 1e-9  # Relative to the polygon's extent


def extent(points: Sequence[Point2D]) -> float:
    """Larger side of the bounding box; 0 for no points."""
    if not points:
        return 0.0
    min_x, min_y, max_x, max_y = bounding_box(points)
    return max(max_x - min_x, max_y - min_y)


def tolerance_for(points: Sequence[Point2D], rel: float = TOLERANCE) -> float:
    """Absolute distance below which two vertices of ``points`` are the same."""
    return rel * extent(points)


def _same(a: Point2D, b: Point2D, tol: float) -> bool:
    return abs(a.x - b.x) <= tol and abs(a.y - b.y) <= tol


def normalize_ring(points: Sequence[Point2D], tol: float | None = None) -> list[Point2D]:
    """Drop consecutive duplicates and the closing duplicate, if any."""
    if tol is None:
        tol = tolerance_for(points)
    ring: list[Point2D] = []
    for p in points:
        if ring and _same(ring[-1], p, tol):
            continue
        ring.append(p)
    while len(ring) > 1 and _same(ring[0], ring[-1], tol):
        ring.pop()
    return ring


def _shoelace(ring: Sequence[Point2D]) -> float:
    # Relative to the first vertex, so far-from-origin frames keep precision
    ox, oy = ring[0].x, ring[0].y
    n = len(ring)
    s = 0.0
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        s += (a.x - ox) * (b.y - oy) - (b.x - ox) * (a.y - oy)
    return 0.5 * s


def signed_area(points: Sequence[Point2D]) -> float:
    """Shoelace area. Positive for counterclockwise rings in a y-up frame."""
    ring = normalize_ring(points)
    if len(ring) < 3:
        return 0.0
    return _shoelace(ring)


def area(points: Sequence[Point2D]) -> float:
    return abs(signed_area(points))


def is_negligible_area(value: float, points: Sequence[Point2D], rel: float = TOLERANCE) -> bool:
    """True when ``value`` is zero at the scale of ``points``."""
    size = extent(points)
    return abs(value) <= rel * size * size


def perimeter(points: Sequence[Point2D]) -> float:
    """Length of the closed ring through whatever vertices exist."""
    ring = normalize_ring(points)
    n = len(ring)
    if n < 2:
        return 0.0
    return sum(ring[i].distance_to(ring[(i + 1) % n]) for i in range(n))


def polyline_length(points: Sequence[Point2D]) -> float:
    """Length of an open polyline."""
    return sum(points[i].distance_to(points[i + 1]) for i in range(len(points) - 1))


def centroid(points: Sequence[Point2D]) -> Point2D:
    """Area-weighted centroid; the vertex mean for rings without area."""
    ring = normalize_ring(points)
    if not ring:
        raise DegeneratePolygon("centroid of an empty polygon")
    n = len(ring)
    a = _shoelace(ring) if n >= 3 else 0.0
    if is_negligible_area(a, ring):
        return Point2D(
            x=sum(p.x for p in ring) / n,
            y=sum(p.y for p in ring) / n,
        )
    ox, oy = ring[0].x, ring[0].y
    cx = cy = 0.0
    for i in range(n):
        px, py = ring[i].x - ox, ring[i].y - oy
        qx, qy = ring[(i + 1) % n].x - ox, ring[(i + 1) % n].y - oy
        w = px * qy - qx * py
        cx += (px + qx) * w
        cy += (py + qy) * w
    return Point2D(x=ox + cx / (6.0 * a), y=oy + cy / (6.0 * a))


def bounding_box(points: Sequence[Point2D]) -> tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y)"""
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def point_in_polygon(point: Point2D, points: Sequence[Point2D]) -> bool:
    """Even-odd ray casting. Points on the boundary may go either way."""
    ring = normalize_ring(points)
    inside = False
    n = len(ring)
    j = n - 1
    for i in range(n):
        a, b = ring[i], ring[j]
        if (a.y > point.y) != (b.y > point.y):
            x_cross = (b.x - a.x) * (point.y - a.y) / (b.y - a.y) + a.x
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def project_to_segment(point: Point2D, start: Point2D, end: Point2D) -> Point2D:
    """Closest point to ``point`` on the segment ``start``-``end``."""
    d = end - start
    length_sq = d.dot(d)
    if length_sq == 0:
        return start
    t = max(0.0, min(1.0, (point - start).dot(d) / length_sq))
    return start.lerp(end, t)


def distance_to_segment(point: Point2D, start: Point2D, end: Point2D) -> float:
    return point.distance_to(project_to_segment(point, start, end))


def closest_edge(point: Point2D, points: Sequence[Point2D], threshold: float) -> int | None:
    """Index of the nearest edge within ``threshold`` of ``point``, or None."""
    ring = normalize_ring(points)
    n = len(ring)
    best = None
    best_distance = math.inf
    for i in range(n):
        a, b = ring[i], ring[(i + 1) % n]
        if a.distance_to(b) == 0:
            continue
        distance = distance_to_segment(point, a, b)
        if distance < threshold and distance < best_distance:
            best, best_distance = i, distance
    return best


def snap_to_edge(point: Point2D, points: Sequence[Point2D], threshold: float) -> Point2D | None:
    """Project ``point`` onto the nearest edge within ``threshold``."""
    ring = normalize_ring(points)
    edge = closest_edge(point, ring, threshold)
    if edge is None:
        return None
    return project_to_segment(point, ring[edge], ring[(edge + 1) % len(ring)])


def remove_collinear_points(points: Sequence[Point2D], angle_tolerance: float = 5.0) -> list[Point2D]:
    """Drop vertices that turn less than ``angle_tolerance`` degrees.

    Spikes (turns close to 180 degrees) are dropped too. The input is
    returned unchanged if fewer than 3 vertices would survive.
    """
    ring = normalize_ring(points)
    if len(ring) < 4:
        return ring
    kept: list[Point2D] = []
    n = len(ring)
    for i in range(n):
        prev, curr, nxt = ring[i - 1], ring[i], ring[(i + 1) % n]
        v1 = curr - prev
        v2 = nxt - curr
        turn = abs(math.degrees(math.atan2(v1.cross(v2), v1.dot(v2))))
        if turn > angle_tolerance and abs(turn - 180.0) > angle_tolerance:
            kept.append(curr)
    return kept if len(kept) >= 3 else ring


def _douglas_peucker(chain: list[Point2D], tolerance: float) -> list[Point2D]:
    if len(chain) <= 2:
        return chain
    start, end = chain[0], chain[-1]
    worst, worst_index = 0.0, 0
    for i in range(1, len(chain) - 1):
        distance = distance_to_segment(chain[i], start, end)
        if distance > worst:
            worst, worst_index = distance, i
    if worst <= tolerance:
        return [start, end]
    left = _douglas_peucker(chain[:worst_index + 1], tolerance)
    right = _douglas_peucker(chain[worst_index:], tolerance)
    return left[:-1] + right


def simplify_ring(points: Sequence[Point2D], tolerance: float) -> list[Point2D]:
    """Douglas-Peucker simplification of a closed ring.

    The ring is cut at its first vertex and the vertex farthest from it,
    and both chains are simplified. A result with fewer than 3 vertices is
    discarded in favour of the input ring.
    """
    ring = normalize_ring(points)
    if tolerance <= 0 or len(ring) < 4:
        return ring
    far = max(range(1, len(ring)), key=lambda i: ring[0].distance_to(ring[i]))
    first = _douglas_peucker(ring[:far + 1], tolerance)
    second = _douglas_peucker(ring[far:] + [ring[0]], tolerance)
    simplified = first[:-1] + second[:-1]
    return simplified if len(simplified) >= 3 else ring


def cleanup_ring(
    points: Sequence[Point2D],
    simplify_tolerance: float = 0.0,
    remove_collinear: bool = True,
    angle_tolerance: float = 5.0,
) -> list[Point2D]:
    """Simplify, then drop near-collinear vertices."""
    ring = simplify_ring(points, simplify_tolerance)
    if remove_collinear:
        ring = remove_collinear_points(ring, angle_tolerance)
    return ring


def area_to_sqft(raw_area: float, feet_per_unit: float) -> float:
    """Convert projected-unit area to square feet."""
    return raw_area * feet_per_unit * feet_per_unit


def length_to_ft(raw_length: float, feet_per_unit: float) -> float:
    return raw_length * feet_per_unit


def area_sqft(points: Sequence[Point2D], feet_per_unit: float = 1.0) -> float:
    return area_to_sqft(area(points), feet_per_unit)


def perimeter_ft(points: Sequence[Point2D], feet_per_unit: float = 1.0) -> float:
    return length_to_ft(perimeter(points), feet_per_unit)
