"""Pitch multipliers, waste allowance and roofing squares.

The multipliers are the contract downstream reports and estimates key off,
so they are stored as rounded constants rather than recomputed.
"""

from __future__ import annotations
import math
from typing import Iterable, Sequence

from roof_engine.models import Facet, LinearFeatureType
from roof_engine.models.estimate import PitchEntry, WasteRecommendation, WasteScenario
from roof_engine.core.errors import InvalidMeasurement, UnknownPitchLabel


PITCH_TABLE: tuple[PitchEntry, ...] = (
    PitchEntry(label="flat", rise=0, multiplier=1.0000),
    PitchEntry(label="1/12", rise=1, multiplier=1.0035),
    PitchEntry(label="2/12", rise=2, multiplier=1.0138),
    PitchEntry(label="3/12", rise=3, multiplier=1.0308),
    PitchEntry(label="4/12", rise=4, multiplier=1.0541),
    PitchEntry(label="5/12", rise=5, multiplier=1.0833),
    PitchEntry(label="6/12", rise=6, multiplier=1.1180),
    PitchEntry(label="7/12", rise=7, multiplier=1.1577),
    PitchEntry(label="8/12", rise=8, multiplier=1.2019),
    PitchEntry(label="9/12", rise=9, multiplier=1.2500),
    PitchEntry(label="10/12", rise=10, multiplier=1.3017),
    PitchEntry(label="11/12", rise=11, multiplier=1.3566),
    PitchEntry(label="12/12", rise=12, multiplier=1.4142),
)

_BY_LABEL = {entry.label: entry for entry in PITCH_TABLE}

STANDARD_WASTE_PERCENTS = (10, 12, 15, 20)
SQFT_PER_SQUARE = 100.0
DEFAULT_PITCH = "6/12"


def require_measurement(name: str, value: float) -> float:
    """Reject negative, NaN and infinite inputs."""
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidMeasurement(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(value) or value < 0:
        raise InvalidMeasurement(f"{name} must be a finite non-negative number, got {value!r}")
    return value


def pitch_entry(label: str) -> PitchEntry:
    """Exact, case-sensitive table lookup."""
    entry = _BY_LABEL.get(label) if isinstance(label, str) else None
    if entry is None:
        raise UnknownPitchLabel(label)
    return entry


def multiplier_for(label: str) -> float:
    """Exact table lookup; unknown labels raise UnknownPitchLabel."""
    return pitch_entry(label).multiplier


def nearest_pitch(multiplier: float) -> str:
    """Table label whose multiplier is closest; ties go to the earlier entry."""
    multiplier = require_measurement("multiplier", multiplier)
    best = PITCH_TABLE[0]
    best_diff = abs(best.multiplier - multiplier)
    for entry in PITCH_TABLE[1:]:
        diff = abs(entry.multiplier - multiplier)
        if diff < best_diff:
            best, best_diff = entry, diff
    return best.label


def roof_area(plan_area: float, label: str) -> float:
    return require_measurement("plan area", plan_area) * multiplier_for(label)


def total_with_waste(area: float, waste_percent: float) -> float:
    area = require_measurement("roof area", area)
    waste_percent = require_measurement("waste percent", waste_percent)
    return area * (1 + waste_percent / 100)


def squares(total_area: float) -> float:
    return require_measurement("total area", total_area) / SQFT_PER_SQUARE


def waste_table(
    area: float, percents: Iterable[float] = STANDARD_WASTE_PERCENTS,
) -> list[WasteScenario]:
    """Total area and squares for each waste allowance."""
    rows = []
    for pct in percents:
        total = total_with_waste(area, pct)
        rows.append(WasteScenario(waste_percent=pct, total_area_sqft=total, squares=squares(total)))
    return rows


def slope_factor(rise: float, run: float = 12.0) -> float:
    """sqrt(1 + (rise/run)^2), the unrounded multiplier."""
    p = require_measurement("rise", rise) / run
    return math.sqrt(1 + p * p)


def rake_length(run_ft: float, label: str) -> float:
    """True rake length from its horizontal run: sqrt(run^2 + rise^2)."""
    run_ft = require_measurement("rake run", run_ft)
    rise = run_ft * pitch_entry(label).rise / 12.0
    return math.hypot(run_ft, rise)


def hip_valley_length(plan_ft: float, label: str) -> float:
    """True hip or valley length from its plan length.

    Assumes a 90 degree corner between two planes of equal pitch, where the
    hip runs diagonally: plan * sqrt(1 + p^2 / 2) with p = rise / 12.
    """
    plan_ft = require_measurement("hip/valley plan length", plan_ft)
    p = pitch_entry(label).rise / 12.0
    return plan_ft * math.sqrt(1 + p * p / 2)


def true_length(kind: LinearFeatureType, plan_ft: float, label: str) -> float:
    """Sloped length of a map-digitized feature.

    Ridges and eaves are level and step flashing is measured along the wall
    line, so only rakes, hips and valleys change.
    """
    if kind == LinearFeatureType.RAKE:
        return rake_length(plan_ft, label)
    if kind in (LinearFeatureType.HIP, LinearFeatureType.VALLEY):
        return hip_valley_length(plan_ft, label)
    return require_measurement("plan length", plan_ft)


def pitch_degrees(label: str) -> float:
    entry = pitch_entry(label)
    return math.degrees(math.atan(entry.rise / 12.0))


def pitch_from_degrees(degrees: float) -> str:
    """Nearest whole-inch pitch label for a slope angle, capped at 12/12."""
    degrees = require_measurement("pitch degrees", degrees)
    if degrees < 2:
        return "flat"
    rise = round(math.tan(math.radians(min(degrees, 89.0))) * 12)
    rise = max(1, min(12, rise))
    return f"{rise}/12"


def predominant_pitch(facets: Sequence[Facet], default: str = DEFAULT_PITCH) -> str:
    """Pitch carrying the most roof area among facets that have one."""
    weights: dict[str, float] = {}
    for facet in facets:
        if facet.pitch:
            weights[facet.pitch] = weights.get(facet.pitch, 0.0) + facet.area
    if not weights:
        return default
    return max(weights.items(), key=lambda kv: kv[1])[0]


def recommend_waste(
    planes: int,
    valleys: int = 0,
    dormers: int = 0,
    penetrations: int = 0,
    pitch: str = DEFAULT_PITCH,
) -> WasteRecommendation:
    """Waste allowance from roof complexity counts, capped at 25%."""
    if planes <= 4 and valleys <= 1 and dormers == 0:
        band, base = "simple", 10.0
    elif planes <= 8 and valleys <= 3 and dormers <= 2:
        band, base = "moderate", 12.0
    elif planes <= 12 or valleys <= 6 or dormers <= 4:
        band, base = "cut_up", 15.0
    else:
        band, base = "extreme", 20.0

    adders: list[tuple[str, float]] = []
    rise = pitch_entry(pitch).rise
    if rise >= 8:
        adders.append((f"Steep pitch ({pitch})", 5.0 if rise >= 10 else 3.0))
    if valleys >= 4:
        adders.append((f"High valley count ({valleys})", 3.0))
    if dormers >= 2:
        adders.append((f"Multiple dormers ({dormers})", 3.0))
    if penetrations >= 8:
        adders.append((f"Many penetrations ({penetrations})", 2.0))

    total = min(base + sum(pct for _, pct in adders), 25.0)
    justification = (
        f"Base: {base:g}% ({band} roof with {planes} planes, {valleys} valleys, {dormers} dormers). "
    )
    if adders:
        justification += "Adders: " + ", ".join(f"+{pct:g}% for {reason}" for reason, pct in adders) + "."
    else:
        justification += "No additional complexity adders."
    return WasteRecommendation(
        band=band, base_percent=base, adders=adders,
        total_percent=total, justification=justification,
    )


def cardinal_direction(azimuth: float) -> str:
    """Eight-point compass label for an azimuth in degrees (0 = north)."""
    normalized = azimuth % 360.0
    labels = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
    return labels[int(((normalized + 22.5) % 360.0) // 45.0)]
