"""Roof output models: facets, linear features, pattern detections."""

from __future__ import annotations
import math
from enum import Enum
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from roof_engine.core.errors import InvalidMeasurement
from .geometry import GeoPoint, Point2D, SplitLine


class LinearFeatureType(str, Enum):
    RIDGE = "ridge"
    HIP = "hip"
    VALLEY = "valley"
    EAVE = "eave"
    RAKE = "rake"
    STEP = "step"


class RoofPattern(str, Enum):
    GABLE = "gable"
    HIP = "hip"
    L_SHAPE = "l_shape"
    SYMMETRIC = "symmetric"
    COMPLEX = "complex"


# Facet fill colors, picked by facet count.
FACET_COLORS: tuple[str, ...] = (
    "#3b82f6",  # blue
    "#10b981",  # green
    "#f59e0b",  # amber
    "#ef4444",  # red
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#f97316",  # orange
)


def facet_color(index: int) -> str:
    return FACET_COLORS[index % len(FACET_COLORS)]


class Facet(BaseModel):
    """A single roof plane. Area is square feet, derived at creation."""
    model_config = ConfigDict(frozen=True)

    id: str
    points: tuple[Point2D, ...]
    area: float
    color: str
    pitch: str | None = None
    direction: str | None = None


class LinearFeature(BaseModel):
    """A ridge/hip/valley/... polyline in the planar frame."""
    model_config = ConfigDict(frozen=True)

    type: LinearFeatureType
    geometry: tuple[Point2D, ...]
    length_ft: float = 0.0


class GeoLinearFeature(BaseModel):
    """A linear feature as digitized on the map."""
    model_config = ConfigDict(frozen=True)

    type: LinearFeatureType
    geometry: tuple[GeoPoint, ...]


class Tags(BaseModel):
    """Open-ended measurement tags (``{"lf.ridge": 48, ...}``)."""
    model_config = ConfigDict(frozen=True)

    values: dict[str, float | str] = {}

    def number(self, key: str, default: float = 0.0) -> float:
        """Return a tag as a finite, non-negative float."""
        raw = self.values.get(key)
        if raw is None or raw == "":
            return default
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidMeasurement(f"tag {key!r} is not numeric: {raw!r}") from exc
        if not math.isfinite(value) or value < 0:
            raise InvalidMeasurement(f"tag {key!r} must be a non-negative number, got {raw!r}")
        return value


class LinearFeatureTotals(BaseModel):
    """Total length in feet per linear feature type."""
    ridge: float = 0.0
    hip: float = 0.0
    valley: float = 0.0
    eave: float = 0.0
    rake: float = 0.0
    step: float = 0.0

    @property
    def ridge_hip(self) -> float:
        return self.ridge + self.hip

    @property
    def eave_rake(self) -> float:
        return self.eave + self.rake

    @property
    def valley_step(self) -> float:
        return self.valley + self.step

    @classmethod
    def from_features(cls, features: Iterable[LinearFeature]) -> LinearFeatureTotals:
        sums = {t.value: 0.0 for t in LinearFeatureType}
        for feature in features:
            sums[feature.type.value] += feature.length_ft
        return cls(**sums)

    @classmethod
    def from_tags(cls, tags: Tags | Mapping[str, float | str]) -> LinearFeatureTotals:
        """Read ``lf.<type>`` keys from a tag map."""
        if not isinstance(tags, Tags):
            tags = Tags(values=dict(tags))
        return cls(**{t.value: tags.number(f"lf.{t.value}") for t in LinearFeatureType})


class RoofPatternDetection(BaseModel):
    """Heuristic roof-shape classification with proposed cut lines."""
    pattern: RoofPattern
    confidence: float
    suggested_splits: list[SplitLine] = []
    description: str = ""
