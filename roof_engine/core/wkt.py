"""WKT codec for building outlines and linear features at the storage boundary.

Coordinates are ``lng lat`` pairs. The closing vertex a WKT ring repeats is
stripped on the way in and added on the way out.
"""

from __future__ import annotations
import math
import re
from typing import Sequence

from roof_engine.models import GeoPoint
from roof_engine.core.errors import DegeneratePolygon, InvalidMeasurement


_POLYGON_RE = re.compile(r"^\s*POLYGON\s*\(\s*\(([^()]*)\)", re.IGNORECASE)
_LINESTRING_RE = re.compile(r"^\s*LINESTRING\s*\(([^()]*)\)", re.IGNORECASE)


def _parse_coords(body: str) -> list[GeoPoint]:
    """``lng lat`` pairs; a pair that does not parse rejects the whole geometry."""
    if not body.strip():
        return []
    points = []
    for pair in body.split(","):
        parts = pair.split()
        if len(parts) not in (2, 3, 4):
            raise InvalidMeasurement(f"bad WKT coordinate pair: {pair.strip()!r}")
        try:
            lng, lat = float(parts[0]), float(parts[1])
        except ValueError as exc:
            raise InvalidMeasurement(f"bad WKT coordinate pair: {pair.strip()!r}") from exc
        if not (math.isfinite(lng) and math.isfinite(lat)):
            raise InvalidMeasurement(f"non-finite WKT coordinate pair: {pair.strip()!r}")
        points.append(GeoPoint(lng=lng, lat=lat))
    return points


def parse_polygon(wkt: str) -> list[GeoPoint]:
    """Outer ring of a WKT POLYGON, without the closing duplicate."""
    match = _POLYGON_RE.match(wkt or "")
    if not match:
        raise DegeneratePolygon(f"not a WKT POLYGON: {wkt!r:.60}")
    points = _parse_coords(match.group(1))
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    return points


def parse_linestring(wkt: str) -> list[GeoPoint]:
    match = _LINESTRING_RE.match(wkt or "")
    if not match:
        raise ValueError(f"not a WKT LINESTRING: {wkt!r:.60}")
    return _parse_coords(match.group(1))


def format_polygon(points: Sequence[GeoPoint]) -> str:
    if len(points) < 3:
        raise DegeneratePolygon("a WKT POLYGON needs at least 3 vertices")
    ring = list(points)
    if ring[0] != ring[-1]:
        ring.append(ring[0])
    return "POLYGON((" + ", ".join(f"{p.lng} {p.lat}" for p in ring) + "))"


def format_linestring(points: Sequence[GeoPoint]) -> str:
    return "LINESTRING(" + ", ".join(f"{p.lng} {p.lat}" for p in points) + ")"
