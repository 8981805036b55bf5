"""Engine parameters and configuration."""

from __future__ import annotations
from pydantic import BaseModel, Field

from .geometry import GeoPoint


class ProjectionContext(BaseModel):
    """Fixes the planar frame: map center, zoom and canvas size in pixels."""
    center: GeoPoint
    zoom: float = 20.0
    width: float = 640.0
    height: float = 640.0


class DetectionConfig(BaseModel):
    """Tolerances and thresholds for roof pattern detection."""
    symmetry_tolerance: float = 0.05      # Fraction of the OBB diagonal
    confident_threshold: float = 0.9     # Stop at the first candidate this confident
    max_simple_aspect: float = 4.0       # Long/short side ratio for a simple outline
    min_rectangularity: float = 0.95     # Outline area / OBB area for a clean rectangle
    parallel_tolerance_deg: float = 10.0  # Ridge vs. long axis
    central_tolerance: float = 0.25      # Ridge offset from the long axis, fraction of half-width
    corner_tolerance_deg: float = 10.0   # Deviation from 90 degrees for orthogonal corners
    axis_overshoot: float = 0.02         # Suggested lines overshoot the outline by this fraction of the diagonal
    enabled_rules: list[str] = []        # Empty = use all registered defaults
    disabled_rules: list[str] = []       # Explicitly disable specific rules


class MaterialCoverage(BaseModel):
    """Coverage per purchasable unit."""
    bundles_per_square: float = 3.0
    ridge_cap_ft_per_bundle: float = 33.0
    valley_ft_per_roll: float = 50.0
    drip_edge_ft_per_stick: float = 10.0
    starter_ft_per_bundle: float = 105.0
    underlayment_squares_per_roll: float = 10.0
    ice_water_squares_per_roll: float = 2.0
    ice_water_band_ft: float = 3.0       # Width laid along eaves and valleys


class MeasurementParams(BaseModel):
    """User-adjustable parameters for a building measurement."""
    pitch: str = "6/12"
    waste_percent: float = Field(default=10.0, ge=0)
    zoom: float = 20.0
    frame_width: float = 640.0
    frame_height: float = 640.0
    simplify_tolerance_ft: float = Field(default=0.0, ge=0)  # Outline cleanup; 0 keeps every vertex
    coverage: MaterialCoverage = Field(default_factory=MaterialCoverage)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
