"""Geometric primitives used throughout the engine."""

from __future__ import annotations
import math
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict


class GeoPoint(BaseModel):
    """WGS84 position in degrees."""
    model_config = ConfigDict(frozen=True)

    lng: float
    lat: float

    def as_pair(self) -> tuple[float, float]:
        return (self.lng, self.lat)


class Point2D(BaseModel):
    """Point in a planar frame (canvas pixels or feet)."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def lerp(self, other: Point2D, t: float) -> Point2D:
        return Point2D(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
        )

    def as_pair(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: Point2D | Vector2D) -> Point2D:
        return Point2D(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Point2D) -> Vector2D:
        return Vector2D(x=self.x - other.x, y=self.y - other.y)


class Vector2D(BaseModel):
    """2D vector for direction calculations."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalized(self) -> Vector2D:
        ln = self.length()
        if ln == 0:
            return Vector2D(x=0.0, y=0.0)
        return Vector2D(x=self.x / ln, y=self.y / ln)

    def perpendicular(self) -> Vector2D:
        """90-degree counterclockwise rotation."""
        return Vector2D(x=-self.y, y=self.x)

    def dot(self, other: Vector2D) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2D) -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def angle_to(self, other: Vector2D) -> float:
        """Angle between two vectors in radians."""
        norms = self.length() * other.length()
        if norms == 0:
            return 0.0
        d = self.dot(other) / norms
        d = max(-1.0, min(1.0, d))
        return math.acos(d)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(x=self.x * scalar, y=self.y * scalar)

    def __neg__(self) -> Vector2D:
        return Vector2D(x=-self.x, y=-self.y)


class SplitLine(BaseModel):
    """A user-drawn cut, in the same frame as the polygon it splits."""
    model_config = ConfigDict(frozen=True)

    start: Point2D
    end: Point2D

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


def points_from_pairs(pairs: Iterable[Sequence[float]]) -> list[Point2D]:
    """Build planar points from ``[[x, y], ...]`` wire data."""
    return [Point2D(x=float(p[0]), y=float(p[1])) for p in pairs]


def geo_points_from_pairs(pairs: Iterable[Sequence[float]]) -> list[GeoPoint]:
    """Build geographic points from ``[[lng, lat], ...]`` wire data."""
    return [GeoPoint(lng=float(p[0]), lat=float(p[1])) for p in pairs]


def split_line_from_pairs(start: Sequence[float], end: Sequence[float]) -> SplitLine:
    return SplitLine(
        start=Point2D(x=float(start[0]), y=float(start[1])),
        end=Point2D(x=float(end[0]), y=float(end[1])),
    )
