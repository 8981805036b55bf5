"""Error taxonomy for the roof geometry engine.

Every error is deterministic and raised immediately to the caller; nothing
in the engine retries.
"""

from __future__ import annotations


class RoofGeometryError(ValueError):
    """Base class for all engine errors."""


class DoesNotBisect(RoofGeometryError):
    """A split line does not cross the target polygon at exactly two points."""

    def __init__(self, message: str = "split line does not properly divide the facet") -> None:
        super().__init__(message)


class DegeneratePolygon(RoofGeometryError):
    """Fewer than 3 distinct vertices where a real polygon is required."""


class InvalidMeasurement(RoofGeometryError):
    """Negative or non-finite numeric input."""


class UnknownPitchLabel(RoofGeometryError, KeyError):
    """A pitch label that is not in the pitch table."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"unknown pitch label: {label!r}")

    def __str__(self) -> str:
        return self.args[0]
