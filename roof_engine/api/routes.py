"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from roof_engine.models import (
    GeoLinearFeature, LinearFeature, geo_points_from_pairs, points_from_pairs,
    split_line_from_pairs,
)
from roof_engine.core import metrics, pitch, wkt
from roof_engine.services.measurement_service import MeasurementService
from roof_engine.api.schemas import (
    DetectionPayload, DetectRequest, FacetPayload, MeasureRequest, MeasureResponse,
    PitchRow, RuleInfo, SplitRequest, SplitResponse,
)

router = APIRouter()

# Shared service instance
_service = MeasurementService()


@router.post("/measure", response_model=MeasureResponse)
async def measure(request: MeasureRequest) -> MeasureResponse:
    """Measure a building outline given as [lng, lat] pairs or WKT."""
    if request.outline is not None:
        outline = geo_points_from_pairs(request.outline)
    elif request.wkt is not None:
        outline = wkt.parse_polygon(request.wkt)
    else:
        raise HTTPException(status_code=422, detail="either outline or wkt is required")
    features = [
        GeoLinearFeature(type=f.type, geometry=tuple(geo_points_from_pairs(f.geometry)))
        for f in request.features
    ]
    result = _service.measure(outline, request.params, features)

    return MeasureResponse(
        **result.model_dump(exclude={"facets", "detection", "linear_totals", "materials"}),
        linear_totals=result.linear_totals,
        materials=result.materials,
        facets=[FacetPayload.from_facet(f) for f in result.facets],
        detection=DetectionPayload.from_detection(result.detection),
    )


@router.post("/split", response_model=SplitResponse)
async def split_facet(request: SplitRequest) -> SplitResponse:
    """Split one facet along a drawn line."""
    facets = [f.to_facet() for f in request.facets]
    line = split_line_from_pairs(request.line.start, request.line.end)
    try:
        result = _service.split_facet(
            facets, request.facet_id, line, request.feet_per_unit, request.snap_distance,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"unknown facet {request.facet_id!r}") from exc
    return SplitResponse(facets=[FacetPayload.from_facet(f) for f in result])


@router.post("/detect", response_model=DetectionPayload)
async def detect(request: DetectRequest) -> DetectionPayload:
    """Classify a planar outline and suggest split lines."""
    features = []
    for f in request.features:
        geometry = points_from_pairs(f.geometry)
        features.append(LinearFeature(
            type=f.type, geometry=tuple(geometry), length_ft=metrics.polyline_length(geometry),
        ))
    detection = _service.detect(points_from_pairs(request.points), features)
    return DetectionPayload.from_detection(detection)


@router.get("/pitches", response_model=list[PitchRow])
async def list_pitches() -> list[PitchRow]:
    """The pitch multiplier table, steepness ascending."""
    return [PitchRow(label=e.label, multiplier=e.multiplier) for e in pitch.PITCH_TABLE]


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules() -> list[RuleInfo]:
    """List all registered pattern rules."""
    return [RuleInfo(**r) for r in _service.list_rules()]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
