"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel, Field

from roof_engine.models import (
    Facet, LinearFeatureTotals, LinearFeatureType, MaterialQuantities,
    MeasurementParams, RoofPatternDetection, points_from_pairs,
)

Pair = tuple[float, float]


class FeatureInput(BaseModel):
    """Linear feature as sent from the frontend."""
    type: LinearFeatureType
    geometry: list[Pair]


class FacetPayload(BaseModel):
    """Facet on the wire: points as ``[x, y]`` pairs."""
    id: str
    points: list[Pair]
    area: float
    color: str
    pitch: str | None = None
    direction: str | None = None

    @classmethod
    def from_facet(cls, facet: Facet) -> FacetPayload:
        return cls(
            id=facet.id,
            points=[p.as_pair() for p in facet.points],
            area=facet.area,
            color=facet.color,
            pitch=facet.pitch,
            direction=facet.direction,
        )

    def to_facet(self) -> Facet:
        return Facet(
            id=self.id,
            points=tuple(points_from_pairs(self.points)),
            area=self.area,
            color=self.color,
            pitch=self.pitch,
            direction=self.direction,
        )


class LinePayload(BaseModel):
    start: Pair
    end: Pair


class DetectionPayload(BaseModel):
    pattern: str
    confidence: float
    suggested_splits: list[LinePayload] = []
    description: str = ""

    @classmethod
    def from_detection(cls, detection: RoofPatternDetection) -> DetectionPayload:
        return cls(
            pattern=detection.pattern.value,
            confidence=detection.confidence,
            suggested_splits=[
                LinePayload(start=s.start.as_pair(), end=s.end.as_pair())
                for s in detection.suggested_splits
            ],
            description=detection.description,
        )


class MeasureRequest(BaseModel):
    """Request body for the /measure endpoint. Give ``outline`` ([lng, lat] pairs) or ``wkt``."""
    outline: list[Pair] | None = None
    wkt: str | None = None
    features: list[FeatureInput] = []
    params: MeasurementParams = Field(default_factory=MeasurementParams)


class MeasureResponse(BaseModel):
    """Response from the /measure endpoint."""
    plan_area_sqft: float
    perimeter_ft: float
    pitch: str
    pitch_multiplier: float
    roof_area_sqft: float
    waste_percent: float
    total_area_sqft: float
    squares: float
    feet_per_pixel: float
    linear_totals: LinearFeatureTotals
    materials: MaterialQuantities
    facets: list[FacetPayload]
    detection: DetectionPayload


class SplitRequest(BaseModel):
    """Request body for the /split endpoint."""
    facets: list[FacetPayload]
    facet_id: str
    line: LinePayload
    feet_per_unit: float = Field(default=1.0, gt=0)
    snap_distance: float = Field(default=0.0, ge=0)  # Same units as the facet points


class SplitResponse(BaseModel):
    facets: list[FacetPayload]


class DetectRequest(BaseModel):
    """Planar outline plus optional planar features."""
    points: list[Pair]
    features: list[FeatureInput] = []


class PitchRow(BaseModel):
    label: str
    multiplier: float


class RuleInfo(BaseModel):
    id: str
    name: str
