"""Estimate output models: pitch table rows, waste, materials, measurements."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict

from .roof import Facet, LinearFeatureTotals, RoofPatternDetection


class PitchEntry(BaseModel):
    """One row of the pitch table."""
    model_config = ConfigDict(frozen=True)

    label: str         # "flat" or "n/12"
    rise: int          # Inches of rise per 12 of run
    multiplier: float  # Roof area / plan area


class WasteScenario(BaseModel):
    waste_percent: float
    total_area_sqft: float
    squares: float


class WasteRecommendation(BaseModel):
    band: str                        # simple | moderate | cut_up | extreme
    base_percent: float
    adders: list[tuple[str, float]] = []
    total_percent: float
    justification: str = ""


class MaterialQuantities(BaseModel):
    """Whole purchasable units."""
    shingle_bundles: int = 0
    ridge_cap_bundles: int = 0
    valley_rolls: int = 0
    drip_edge_sticks: int = 0
    starter_bundles: int = 0
    underlayment_rolls: int = 0
    ice_water_rolls: int = 0


class RoofMeasurement(BaseModel):
    """Everything the engine derives from one building outline."""
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
    facets: list[Facet]
    detection: RoofPatternDetection
