"""Coord — an immutable grid position."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Coord:
    """A grid position, equal and hashable by value.

    Attributes:
        x: Column index.
        y: Row index.
    """

    x: int
    y: int

    @property
    def row_major(self) -> tuple[int, int]:
        """Sort key scanning top-to-bottom, left-to-right."""
        return (self.y, self.x)

    def precedes(self, other: Coord) -> bool:
        """Return True if this position sorts strictly before ``other``."""
        return self.row_major < other.row_major
