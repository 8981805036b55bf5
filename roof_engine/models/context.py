"""Detection context: accumulates state during a pattern detection pass."""

from __future__ import annotations
from pydantic import BaseModel, Field

from .geometry import Point2D, SplitLine, Vector2D
from .parameters import DetectionConfig
from .roof import LinearFeature, LinearFeatureType, RoofPattern, RoofPatternDetection


class OrientedBox(BaseModel):
    """Minimum-area bounding rectangle of an outline."""
    center: Point2D
    long_axis: Vector2D    # Unit vector
    short_axis: Vector2D   # Unit vector, perpendicular to long_axis
    half_length: float
    half_width: float

    @property
    def diagonal(self) -> float:
        return 2.0 * (self.half_length ** 2 + self.half_width ** 2) ** 0.5

    @property
    def aspect_ratio(self) -> float:
        if self.half_width < 1e-12:
            return float("inf")
        return self.half_length / self.half_width

    @property
    def area(self) -> float:
        return 4.0 * self.half_length * self.half_width

    def to_local(self, p: Point2D) -> tuple[float, float]:
        """(along long axis, along short axis) relative to the center."""
        d = p - self.center
        return d.dot(self.long_axis), d.dot(self.short_axis)


class PatternCandidate(BaseModel):
    """One rule's opinion about the outline."""
    rule_id: str
    pattern: RoofPattern
    confidence: float
    description: str
    suggested_splits: list[SplitLine] = []

    def to_detection(self) -> RoofPatternDetection:
        return RoofPatternDetection(
            pattern=self.pattern,
            confidence=self.confidence,
            suggested_splits=self.suggested_splits,
            description=self.description,
        )


class DetectionContext(BaseModel):
    """
    Holds all state during a single detection pass.

    The analyzer adds outline metadata (hull, oriented box, reflex corners).
    Rules add candidates.
    The detector orchestrates the flow.
    """
    # Input
    points: list[Point2D]
    features: list[LinearFeature] = []
    config: DetectionConfig = Field(default_factory=DetectionConfig)

    # Analysis results (populated by the analyzer)
    hull: list[Point2D] = []
    box: OrientedBox | None = None
    area: float = 0.0
    reflex_indices: list[int] = []
    orthogonal: bool = False

    # Output (populated by rules)
    candidates: list[PatternCandidate] = []

    @property
    def rectangularity(self) -> float:
        if self.box is None or self.box.area <= 0:
            return 0.0
        return self.area / self.box.area

    def add_candidate(self, candidate: PatternCandidate) -> None:
        self.candidates.append(candidate)

    def features_of(self, kind: LinearFeatureType) -> list[LinearFeature]:
        return [f for f in self.features if f.type == kind]
