from .geometry import (
    GeoPoint, Point2D, Vector2D, SplitLine,
    points_from_pairs, geo_points_from_pairs, split_line_from_pairs,
)
from .roof import (
    Facet, FACET_COLORS, facet_color, LinearFeature, GeoLinearFeature,
    LinearFeatureType, LinearFeatureTotals, Tags, RoofPattern, RoofPatternDetection,
)
from .parameters import ProjectionContext, DetectionConfig, MaterialCoverage, MeasurementParams
from .context import DetectionContext, OrientedBox, PatternCandidate
from .history import FacetHistory
from .estimate import (
    PitchEntry, WasteScenario, WasteRecommendation, MaterialQuantities, RoofMeasurement,
)

__all__ = [
    "GeoPoint", "Point2D", "Vector2D", "SplitLine",
    "points_from_pairs", "geo_points_from_pairs", "split_line_from_pairs",
    "Facet", "FACET_COLORS", "facet_color", "LinearFeature", "GeoLinearFeature",
    "LinearFeatureType", "LinearFeatureTotals", "Tags", "RoofPattern", "RoofPatternDetection",
    "ProjectionContext", "DetectionConfig", "MaterialCoverage", "MeasurementParams",
    "DetectionContext", "OrientedBox", "PatternCandidate",
    "FacetHistory",
    "PitchEntry", "WasteScenario", "WasteRecommendation", "MaterialQuantities", "RoofMeasurement",
]
