"""High-level measurement service: facade for the API layer."""

from __future__ import annotations
import logging
import math
import re
from typing import Sequence

from roof_engine.models import (
    FACET_COLORS, Facet, GeoLinearFeature, GeoPoint, LinearFeature, LinearFeatureTotals,
    MaterialQuantities, MeasurementParams, Point2D, ProjectionContext, RoofMeasurement,
    RoofPattern, RoofPatternDetection, SplitLine, DetectionConfig, facet_color,
)
from roof_engine.core import materials, metrics, pitch, projection, splitter, wkt
from roof_engine.core.detector import RoofPatternDetector
from roof_engine.core.registry import PatternRuleRegistry


logger = logging.getLogger(__name__)

_FACET_ID_RE = re.compile(r"^facet-(\d+)$")


class MeasurementService:
    """Validates input, delegates to the engine, assembles results."""

    def __init__(self, registry: PatternRuleRegistry | None = None) -> None:
        self.detector = RoofPatternDetector(registry)

    def measure(
        self,
        outline: Sequence[GeoPoint],
        params: MeasurementParams | None = None,
        features: Sequence[GeoLinearFeature] | None = None,
    ) -> RoofMeasurement:
        """
        Measure a building outline given in WGS84 degrees.

        An outline with fewer than 3 distinct vertices measures as zero
        rather than failing; the perimeter still covers whatever segments
        exist.
        """
        if params is None:
            params = MeasurementParams()
        multiplier = pitch.multiplier_for(params.pitch)

        if not outline:
            return self._empty_measurement(params, multiplier, 0.0, 0.0)
        ctx = projection.context_for_outline(
            outline, zoom=params.zoom, width=params.frame_width, height=params.frame_height,
        )
        fpp = projection.feet_per_pixel(ctx)
        ring = metrics.normalize_ring(projection.project_ring(outline, ctx))
        if len(ring) < 3:
            return self._empty_measurement(params, multiplier, metrics.perimeter_ft(ring, fpp), fpp)
        if params.simplify_tolerance_ft > 0:
            ring = metrics.cleanup_ring(ring, simplify_tolerance=params.simplify_tolerance_ft / fpp)

        planar_features = self.project_features(features or [], ctx, params.pitch)
        totals = LinearFeatureTotals.from_features(planar_features)

        plan_area = metrics.area_sqft(ring, fpp)
        roof_area = pitch.roof_area(plan_area, params.pitch)
        total_area = pitch.total_with_waste(roof_area, params.waste_percent)
        squares = pitch.squares(total_area)

        measurement = RoofMeasurement(
            plan_area_sqft=plan_area,
            perimeter_ft=metrics.perimeter_ft(ring, fpp),
            pitch=params.pitch,
            pitch_multiplier=multiplier,
            roof_area_sqft=roof_area,
            waste_percent=params.waste_percent,
            total_area_sqft=total_area,
            squares=squares,
            feet_per_pixel=fpp,
            linear_totals=totals,
            materials=materials.derive_materials(squares, totals, params.coverage),
            facets=[self.initial_facet(ring, fpp, pitch=params.pitch)],
            detection=self.detector.detect(ring, planar_features, params.detection),
        )
        logger.info(
            "measured %d-vertex outline: plan %.1f sqft, roof %.1f sqft, %.2f squares (%s)",
            len(ring), plan_area, roof_area, squares, measurement.detection.pattern.value,
        )
        return measurement

    def measure_wkt(
        self,
        polygon_wkt: str,
        params: MeasurementParams | None = None,
        features: Sequence[GeoLinearFeature] | None = None,
    ) -> RoofMeasurement:
        return self.measure(wkt.parse_polygon(polygon_wkt), params, features)

    def project_features(
        self,
        features: Sequence[GeoLinearFeature],
        ctx: ProjectionContext,
        pitch_label: str | None = None,
    ) -> list[LinearFeature]:
        """
        Planar copies of map-digitized features, with lengths in feet.

        Map lengths are plan lengths; with a pitch, rakes, hips and valleys
        are converted to their sloped length.
        """
        fpp = projection.feet_per_pixel(ctx)
        projected = []
        for feature in features:
            geometry = projection.project_ring(feature.geometry, ctx)
            length_ft = metrics.length_to_ft(metrics.polyline_length(geometry), fpp)
            if pitch_label is not None:
                length_ft = pitch.true_length(feature.type, length_ft, pitch_label)
            projected.append(LinearFeature(
                type=feature.type,
                geometry=tuple(geometry),
                length_ft=length_ft,
            ))
        return projected

    def initial_facet(
        self, points: Sequence[Point2D], feet_per_unit: float = 1.0, pitch: str | None = None,
    ) -> Facet:
        """Facet 0: the whole outline."""
        ring = metrics.normalize_ring(points)
        return Facet(
            id="facet-0",
            points=tuple(ring),
            area=metrics.area_sqft(ring, feet_per_unit),
            color=facet_color(0),
            pitch=pitch,
        )

    def split_facet(
        self,
        facets: Sequence[Facet],
        facet_id: str,
        line: SplitLine,
        feet_per_unit: float = 1.0,
        snap_distance: float = 0.0,
    ) -> tuple[Facet, ...]:
        """
        Replace one facet by the two halves of a split.

        Returns a new facet set; the children take the parent's position,
        inherit its pitch and are re-measured. Line endpoints within
        ``snap_distance`` of an edge are moved onto it first. Each child
        faces away from the cut, which is taken as its high side.
        """
        index = next((i for i, f in enumerate(facets) if f.id == facet_id), None)
        if index is None:
            raise KeyError(f"no facet with id {facet_id!r}")
        parent = facets[index]

        line = splitter.snap_line(parent.points, line, snap_distance)
        result = splitter.split(parent.points, line)

        others = list(facets[:index]) + list(facets[index + 1:])
        colors = self._free_colors(others, 2, start=len(facets) - 1)
        next_number = self._next_facet_number(facets)
        children = []
        for offset, points in enumerate((result.facet1, result.facet2)):
            children.append(Facet(
                id=f"facet-{next_number + offset}",
                points=tuple(points),
                area=metrics.area_sqft(points, feet_per_unit),
                color=colors[offset],
                pitch=parent.pitch,
                direction=pitch.cardinal_direction(self._facing_azimuth(points, line)),
            ))
        logger.info(
            "split %s (%.1f sqft) into %s (%.1f) and %s (%.1f)",
            parent.id, parent.area, children[0].id, children[0].area,
            children[1].id, children[1].area,
        )
        return tuple(facets[:index]) + tuple(children) + tuple(facets[index + 1:])

    def detect(
        self,
        points: Sequence[Point2D],
        features: Sequence[LinearFeature] | None = None,
        config: DetectionConfig | None = None,
    ) -> RoofPatternDetection:
        return self.detector.detect(points, features, config)

    def list_rules(self) -> list[dict[str, str]]:
        return [
            {"id": r.get_id(), "name": r.get_name()}
            for r in self.detector.registry.list_rules()
        ]

    def _empty_measurement(
        self, params: MeasurementParams, multiplier: float, perimeter_ft: float, fpp: float,
    ) -> RoofMeasurement:
        logger.warning("outline has fewer than 3 distinct vertices; measuring as zero")
        return RoofMeasurement(
            plan_area_sqft=0.0,
            perimeter_ft=perimeter_ft,
            pitch=params.pitch,
            pitch_multiplier=multiplier,
            roof_area_sqft=0.0,
            waste_percent=params.waste_percent,
            total_area_sqft=0.0,
            squares=0.0,
            feet_per_pixel=fpp,
            linear_totals=LinearFeatureTotals(),
            materials=MaterialQuantities(),
            facets=[],
            detection=RoofPatternDetection(
                pattern=RoofPattern.COMPLEX,
                confidence=0.0,
                description="Outline has fewer than 3 distinct vertices; nothing to measure.",
            ),
        )

    def _free_colors(self, in_use: Sequence[Facet], count: int, start: int) -> list[str]:
        """``count`` palette colors not worn by ``in_use``, cycling from ``start``."""
        taken = {f.color for f in in_use}
        n = len(FACET_COLORS)
        free = [facet_color(start + i) for i in range(n) if facet_color(start + i) not in taken]
        # Palette exhausted: repeat by position
        while len(free) < count:
            free.append(facet_color(start + len(free)))
        return free[:count]

    def _facing_azimuth(self, points: Sequence[Point2D], line: SplitLine) -> float:
        """Compass azimuth of the normal from ``line`` toward the facet (canvas y points south)."""
        normal = (line.end - line.start).perpendicular()
        if (metrics.centroid(points) - line.start).dot(normal) < 0:
            normal = -normal
        return math.degrees(math.atan2(normal.x, -normal.y)) % 360.0

    def _next_facet_number(self, facets: Sequence[Facet]) -> int:
        numbers = []
        for f in facets:
            match = _FACET_ID_RE.match(f.id)
            if match:
                numbers.append(int(match.group(1)))
        return max(numbers, default=len(facets) - 1) + 1
