"""Roof pattern detector: orchestrates outline analysis and rule evaluation."""

from __future__ import annotations
import logging
from typing import Sequence

from roof_engine.models import (
    DetectionConfig, DetectionContext, LinearFeature, Point2D,
    RoofPattern, RoofPatternDetection,
)
from roof_engine.core.registry import PatternRuleRegistry, create_default_registry
from roof_engine.core.analyzer import OutlineAnalyzer


logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.2


class RoofPatternDetector:
    """
    Stateless pattern detector.

    Takes an outline + optional linear features, runs analysis, evaluates
    applicable rules, and returns the winning classification.
    """

    def __init__(self, registry: PatternRuleRegistry | None = None) -> None:
        self.registry = registry or create_default_registry()
        self.analyzer = OutlineAnalyzer()

    def detect(
        self,
        points: Sequence[Point2D],
        features: Sequence[LinearFeature] | None = None,
        config: DetectionConfig | None = None,
    ) -> RoofPatternDetection:
        if config is None:
            config = DetectionConfig()

        context = DetectionContext(
            points=list(points),
            features=list(features or []),
            config=config,
        )

        # Analysis phase: hull, oriented box, reflex corners
        self.analyzer.analyze(context)
        if len(context.points) < 3 or context.box is None:
            return RoofPatternDetection(
                pattern=RoofPattern.COMPLEX,
                confidence=0.0,
                description=f"Outline has {len(context.points)} distinct vertices; nothing to classify.",
            )

        # Evaluation phase: first confident candidate wins, else the best one
        for rule in self.registry.get_applicable_rules(context):
            candidate = rule.evaluate(context)
            if candidate is None:
                continue
            logger.debug("rule %s -> %s (%.2f)", rule.get_id(), candidate.pattern.value, candidate.confidence)
            context.add_candidate(candidate)
            if candidate.confidence >= config.confident_threshold:
                break

        if not context.candidates:
            return RoofPatternDetection(
                pattern=RoofPattern.COMPLEX,
                confidence=FALLBACK_CONFIDENCE,
                description=(
                    f"Insufficient signal to classify a {len(context.points)}-vertex outline;"
                    " draw split lines manually."
                ),
            )

        best = context.candidates[0]
        for candidate in context.candidates[1:]:
            if candidate.confidence > best.confidence:
                best = candidate
        return best.to_detection()
