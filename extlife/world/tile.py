"""Tile — a fixed slot in the board grid.

A tile never changes occupancy after the board is built; only the
occupant's internal state changes from tick to tick.  Neighbours are held
as coordinates so the board stays the single owner of every tile.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extlife.life.cell import Cell
    from extlife.world.coord import Coord


@dataclass
class Tile:
    """A single slot in the board grid.

    Attributes:
        coord: Position of this tile.
        energy_modifier: Static bonus/penalty applied to a living occupant
            each ordinary tick.
        neighbours: Coordinates of the up-to-8 adjacent tiles.
        cell: The occupying cell, if any.
    """

    coord: Coord
    energy_modifier: int = 0
    neighbours: tuple[Coord, ...] = field(default=(), repr=False)
    cell: Cell | None = field(default=None, repr=False)

    @property
    def is_interactable(self) -> bool:
        """Return True if the tile carries a non-zero modifier."""
        return self.energy_modifier != 0
