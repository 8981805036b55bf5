"""Line-polygon splitting: cut one facet into two along a drawn line.

The cut is a finite segment. It must cross the polygon boundary at exactly
two distinct points (edge crossings or vertices), and the chord between
them must run through the polygon's interior. The first child walks the
ring forward from the first crossing to the second, the second child walks
on from the second crossing back around to the first.
"""

from __future__ import annotations
import logging
from typing import NamedTuple, Sequence

from roof_engine.models import Point2D, SplitLine
from roof_engine.core.errors import DegeneratePolygon, DoesNotBisect
from roof_engine.core import metrics


logger = logging.getLogger(__name__)

PARAM_TOLERANCE = 1e-9   # Parametric slack on edge/cut extents
POINT_TOLERANCE = 1e-7   # Crossings closer than this (relative to polygon size) merge


class SplitResult(NamedTuple):
    facet1: list[Point2D]
    facet2: list[Point2D]


class _Crossing(NamedTuple):
    edge: int       # Index of the edge's start vertex
    t: float        # Position along the edge, 0 <= t < 1
    point: Point2D


def _intersect(
    p: Point2D, p2: Point2D, q: Point2D, q2: Point2D,
) -> tuple[float, float] | None:
    """Parameters (t on p->p2, u on q->q2) of the segment intersection, or None."""
    r = p2 - p
    s = q2 - q
    denom = r.cross(s)
    if abs(denom) <= PARAM_TOLERANCE * r.length() * s.length():
        return None  # Parallel or collinear: the neighbouring edges report the hit
    qp = q - p
    t = qp.cross(s) / denom
    u = qp.cross(r) / denom
    if -PARAM_TOLERANCE <= t <= 1 + PARAM_TOLERANCE and -PARAM_TOLERANCE <= u <= 1 + PARAM_TOLERANCE:
        return t, u
    return None


def find_crossings(ring: Sequence[Point2D], line: SplitLine) -> list[_Crossing]:
    """Distinct boundary crossings of ``line``, in ring order."""
    n = len(ring)
    merge_tol = POINT_TOLERANCE * metrics.extent(ring)

    crossings: list[_Crossing] = []
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        hit = _intersect(a, b, line.start, line.end)
        if hit is None:
            continue
        t, _ = hit
        if t >= 1 - PARAM_TOLERANCE:
            crossing = _Crossing(edge=(i + 1) % n, t=0.0, point=b)
        elif t <= PARAM_TOLERANCE:
            crossing = _Crossing(edge=i, t=0.0, point=a)
        else:
            crossing = _Crossing(edge=i, t=t, point=a.lerp(b, t))
        if any(crossing.point.distance_to(c.point) <= merge_tol for c in crossings):
            continue
        crossings.append(crossing)

    crossings.sort(key=lambda c: (c.edge, c.t))
    return crossings


def _append(points: list[Point2D], p: Point2D, tol: float) -> None:
    if not points or points[-1].distance_to(p) > tol:
        points.append(p)


def split(polygon: Sequence[Point2D], line: SplitLine) -> SplitResult:
    """Split ``polygon`` along ``line`` into two sub-polygons.

    Raises DegeneratePolygon for fewer than 3 distinct vertices and
    DoesNotBisect when the line does not divide the polygon in two.
    """
    ring = metrics.normalize_ring(polygon)
    if len(ring) < 3:
        raise DegeneratePolygon(f"cannot split a polygon with {len(ring)} distinct vertices")
    tol = metrics.tolerance_for(ring)
    if line.length <= tol:
        raise DoesNotBisect()

    crossings = find_crossings(ring, line)
    logger.debug("split line %s crosses %d time(s)", line, len(crossings))
    if len(crossings) != 2:
        raise DoesNotBisect()

    first, second = crossings
    if first.edge == second.edge:
        raise DoesNotBisect()
    if not metrics.point_in_polygon(first.point.lerp(second.point, 0.5), ring):
        raise DoesNotBisect()

    n = len(ring)
    facet1: list[Point2D] = [first.point]
    k = (first.edge + 1) % n
    while True:
        if k == second.edge and second.t == 0.0:
            break
        _append(facet1, ring[k], tol)
        if k == second.edge:
            break
        k = (k + 1) % n
    _append(facet1, second.point, tol)

    facet2: list[Point2D] = [second.point]
    k = (second.edge + 1) % n
    while True:
        if k == first.edge and first.t == 0.0:
            break
        _append(facet2, ring[k], tol)
        if k == first.edge:
            break
        k = (k + 1) % n
    _append(facet2, first.point, tol)

    facet1 = metrics.normalize_ring(facet1, tol)
    facet2 = metrics.normalize_ring(facet2, tol)
    if len(facet1) < 3 or len(facet2) < 3:
        raise DoesNotBisect()
    if any(metrics.is_negligible_area(metrics.area(f), ring) for f in (facet1, facet2)):
        raise DoesNotBisect()

    return SplitResult(facet1=facet1, facet2=facet2)


def try_split(polygon: Sequence[Point2D], line: SplitLine) -> SplitResult | None:
    """``split`` for callers that only want to know whether a line works."""
    try:
        return split(polygon, line)
    except (DoesNotBisect, DegeneratePolygon):
        return None


def snap_line(polygon: Sequence[Point2D], line: SplitLine, threshold: float) -> SplitLine:
    """Move each endpoint of ``line`` onto the nearest edge within ``threshold``.

    Hand-drawn cuts tend to stop just short of, or just past, the edge they
    were aimed at. Endpoints with no edge in reach are left alone.
    """
    if threshold <= 0:
        return line
    snapped = []
    for point in (line.start, line.end):
        on_edge = metrics.snap_to_edge(point, polygon, threshold)
        snapped.append(point if on_edge is None else on_edge)
    return SplitLine(start=snapped[0], end=snapped[1])
