"""Abstract base class for all roof pattern rules.

Every rule in the system implements this interface. Rules are:
- Self-contained: each recognizes one kind of roof outline
- Composable: multiple rules run in sequence via the registry
- Conditional: each rule decides if it applies to the current context
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod

from roof_engine.models import DetectionContext, PatternCandidate, Point2D, SplitLine, Vector2D
from roof_engine.core import splitter


logger = logging.getLogger(__name__)


class PatternRule(ABC):
    """
    Base class for all pattern rules.

    Subclasses implement `applies()` and `evaluate()`.
    The detector queries the registry, filters by `applies()`,
    sorts by `priority`, and calls `evaluate()` in order.
    """

    # Lower priority = runs first. Default 100.
    priority: int = 100

    @abstractmethod
    def get_id(self) -> str:
        """Unique identifier for this rule (e.g., 'pattern.symmetry')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name (e.g., 'Symmetry Axis')."""
        ...

    @abstractmethod
    def applies(self, context: DetectionContext) -> bool:
        """Return True if this rule should run for the given context."""
        ...

    @abstractmethod
    def evaluate(self, context: DetectionContext) -> PatternCandidate | None:
        """
        Classify the outline, or return None when the rule has no opinion.

        The context provides the outline, linear features and the analysis
        results (hull, oriented box, reflex corners).
        """
        ...

    # Helpers shared by the concrete rules

    def extended_line(self, origin: Point2D, direction: Vector2D, reach: float) -> SplitLine:
        """Segment through ``origin`` along ``direction``, ``reach`` to each side."""
        d = direction.normalized()
        return SplitLine(start=origin + d * -reach, end=origin + d * reach)

    def valid_splits(self, context: DetectionContext, lines: list[SplitLine]) -> list[SplitLine]:
        """Keep the lines that actually split the outline in two."""
        valid = []
        for line in lines:
            if splitter.try_split(context.points, line) is None:
                logger.warning("%s: discarding suggested split %s", self.get_id(), line)
                continue
            valid.append(line)
        return valid
