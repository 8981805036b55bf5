"""Web Mercator projection between WGS84 degrees and canvas pixels.

The planar frame is a canvas of ``ctx.width`` x ``ctx.height`` pixels whose
center shows ``ctx.center`` at ``ctx.zoom``. X grows east, Y grows south.
Longitude maps linearly; latitude goes through ``ln(tan(pi/4 + lat/2))`` and
back through its exact inverse, so ``to_geo(to_planar(g))`` returns ``g``.
"""

from __future__ import annotations
import math
from typing import Iterable, Sequence

from roof_engine.models import GeoPoint, Point2D, ProjectionContext
from roof_engine.core.errors import DegeneratePolygon


TILE_SIZE = 256
EARTH_CIRCUMFERENCE_M_PER_PX = 156543.03392  # Ground resolution at zoom 0, equator
FEET_PER_METER = 3.28084


def world_size(zoom: float) -> float:
    """Width of the whole world in pixels at ``zoom``."""
    return TILE_SIZE * math.pow(2.0, zoom)


def _mercator_y(lat: float) -> float:
    lat_rad = math.radians(lat)
    return math.log(math.tan(math.pi / 4 + lat_rad / 2))


def _inverse_mercator_y(n: float) -> float:
    return math.degrees(2.0 * math.atan(math.exp(n)) - math.pi / 2)


def _world_xy(geo: GeoPoint, scale: float) -> tuple[float, float]:
    x = (geo.lng + 180.0) * (scale / 360.0)
    y = scale / 2 - _mercator_y(geo.lat) * scale / (2 * math.pi)
    return x, y


def to_planar(geo: GeoPoint, ctx: ProjectionContext) -> Point2D:
    scale = world_size(ctx.zoom)
    cx, cy = _world_xy(ctx.center, scale)
    px, py = _world_xy(geo, scale)
    return Point2D(x=ctx.width / 2 + (px - cx), y=ctx.height / 2 + (py - cy))


def to_geo(point: Point2D, ctx: ProjectionContext) -> GeoPoint:
    scale = world_size(ctx.zoom)
    cx, cy = _world_xy(ctx.center, scale)
    px = point.x - ctx.width / 2 + cx
    py = point.y - ctx.height / 2 + cy
    lng = px * 360.0 / scale - 180.0
    n = (scale / 2 - py) * (2 * math.pi) / scale
    return GeoPoint(lng=lng, lat=_inverse_mercator_y(n))


def project_ring(points: Iterable[GeoPoint], ctx: ProjectionContext) -> list[Point2D]:
    return [to_planar(p, ctx) for p in points]


def unproject_ring(points: Iterable[Point2D], ctx: ProjectionContext) -> list[GeoPoint]:
    return [to_geo(p, ctx) for p in points]


def meters_per_pixel(lat: float, zoom: float) -> float:
    """Standard Web Mercator ground resolution."""
    return EARTH_CIRCUMFERENCE_M_PER_PX * math.cos(math.radians(lat)) / math.pow(2.0, zoom)


def feet_per_pixel(ctx: ProjectionContext) -> float:
    """Ground resolution at the context center, in feet."""
    return meters_per_pixel(ctx.center.lat, ctx.zoom) * FEET_PER_METER


def context_for_outline(
    outline: Sequence[GeoPoint],
    zoom: float = 20.0,
    width: float = 640.0,
    height: float = 640.0,
) -> ProjectionContext:
    """Center a projection context on the outline's bounding box."""
    if not outline:
        raise DegeneratePolygon("cannot build a projection context for an empty outline")
    lngs = [p.lng for p in outline]
    lats = [p.lat for p in outline]
    center = GeoPoint(
        lng=(min(lngs) + max(lngs)) / 2,
        lat=(min(lats) + max(lats)) / 2,
    )
    return ProjectionContext(center=center, zoom=zoom, width=width, height=height)
