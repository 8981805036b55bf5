"""Immutable undo history of facet sets."""

from __future__ import annotations
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from .roof import Facet


class FacetHistory(BaseModel):
    """
    A stack of facet-set snapshots.

    Facets are frozen and snapshots are tuples, so a snapshot can never be
    changed through another snapshot. ``push`` and ``pop`` return new
    histories and leave the receiver untouched.
    """
    model_config = ConfigDict(frozen=True)

    snapshots: tuple[tuple[Facet, ...], ...] = ()

    @classmethod
    def start(cls, facets: Iterable[Facet]) -> FacetHistory:
        return cls(snapshots=(tuple(facets),))

    @property
    def depth(self) -> int:
        return len(self.snapshots)

    @property
    def current(self) -> tuple[Facet, ...]:
        if not self.snapshots:
            return ()
        return self.snapshots[-1]

    @property
    def can_undo(self) -> bool:
        return len(self.snapshots) > 1

    def push(self, facets: Iterable[Facet]) -> FacetHistory:
        return FacetHistory(snapshots=self.snapshots + (tuple(facets),))

    def pop(self) -> tuple[FacetHistory, tuple[Facet, ...]]:
        """Drop the latest snapshot; return the new history and the dropped set."""
        if not self.snapshots:
            raise IndexError("pop from empty facet history")
        return FacetHistory(snapshots=self.snapshots[:-1]), self.snapshots[-1]
