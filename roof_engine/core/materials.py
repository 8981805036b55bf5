"""Material quantities from roof area and linear feature totals.

Each quantity is ``ceil(measured / coverage_per_unit)``.
"""

from __future__ import annotations
import math

from roof_engine.models import LinearFeatureTotals, MaterialCoverage
from roof_engine.models.estimate import MaterialQuantities
from roof_engine.core.pitch import require_measurement


DEFAULT_COVERAGE = MaterialCoverage()


def _units(measured: float, per_unit: float) -> int:
    # Round away float noise first so 66/33 is 2, not 3.
    return int(math.ceil(round(measured / per_unit, 9)))


def shingle_bundles(squares: float, coverage: MaterialCoverage = DEFAULT_COVERAGE) -> int:
    squares = require_measurement("squares", squares)
    return _units(squares * coverage.bundles_per_square, 1.0)


def ridge_cap_bundles(
    ridge_ft: float, hip_ft: float, coverage: MaterialCoverage = DEFAULT_COVERAGE,
) -> int:
    total = require_measurement("ridge length", ridge_ft) + require_measurement("hip length", hip_ft)
    return _units(total, coverage.ridge_cap_ft_per_bundle)


def valley_rolls(valley_ft: float, coverage: MaterialCoverage = DEFAULT_COVERAGE) -> int:
    return _units(require_measurement("valley length", valley_ft), coverage.valley_ft_per_roll)


def drip_edge_sticks(
    eave_ft: float, rake_ft: float, coverage: MaterialCoverage = DEFAULT_COVERAGE,
) -> int:
    total = require_measurement("eave length", eave_ft) + require_measurement("rake length", rake_ft)
    return _units(total, coverage.drip_edge_ft_per_stick)


def starter_bundles(
    eave_ft: float, rake_ft: float, coverage: MaterialCoverage = DEFAULT_COVERAGE,
) -> int:
    total = require_measurement("eave length", eave_ft) + require_measurement("rake length", rake_ft)
    return _units(total, coverage.starter_ft_per_bundle)


def underlayment_rolls(squares: float, coverage: MaterialCoverage = DEFAULT_COVERAGE) -> int:
    return _units(require_measurement("squares", squares), coverage.underlayment_squares_per_roll)


def ice_water_rolls(
    eave_ft: float, valley_ft: float, coverage: MaterialCoverage = DEFAULT_COVERAGE,
) -> int:
    """Ice & water shield laid in a band along eaves and valleys."""
    band_ft = require_measurement("eave length", eave_ft) + require_measurement("valley length", valley_ft)
    band_squares = band_ft * coverage.ice_water_band_ft / 100.0
    return _units(band_squares, coverage.ice_water_squares_per_roll)


def derive_materials(
    squares: float,
    totals: LinearFeatureTotals,
    coverage: MaterialCoverage = DEFAULT_COVERAGE,
) -> MaterialQuantities:
    return MaterialQuantities(
        shingle_bundles=shingle_bundles(squares, coverage),
        ridge_cap_bundles=ridge_cap_bundles(totals.ridge, totals.hip, coverage),
        valley_rolls=valley_rolls(totals.valley, coverage),
        drip_edge_sticks=drip_edge_sticks(totals.eave, totals.rake, coverage),
        starter_bundles=starter_bundles(totals.eave, totals.rake, coverage),
        underlayment_rolls=underlayment_rolls(squares, coverage),
        ice_water_rolls=ice_water_rolls(totals.eave, totals.valley, coverage),
    )
