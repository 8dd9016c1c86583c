"""Board — the fixed rectangular grid of tiles.

The board owns every tile, builds the 8-neighbourhood adjacency once at
construction (no wraparound), and answers read-only aggregate queries over
a supplied generation snapshot.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from extlife.exceptions import IntegrityError
from extlife.life.cell import Cell, CellVariant
from extlife.world.coord import Coord
from extlife.world.tile import Tile

if TYPE_CHECKING:
    from numpy.random import Generator

    from extlife.simulation.generation import Generation

_OFFSETS = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@dataclass(frozen=True)
class EnergyStats:
    """Summary of living cells' energy at one step.

    ``minimum`` and ``maximum`` are None when no cell is alive.
    """

    count: int
    mean: float
    minimum: int | None
    maximum: int | None

    @classmethod
    def of(cls, energies: Sequence[int]) -> EnergyStats:
        if not energies:
            return cls(count=0, mean=0.0, minimum=None, maximum=None)
        arr = np.asarray(energies, dtype=np.int64)
        return cls(
            count=int(arr.size),
            mean=float(arr.mean()),
            minimum=int(arr.min()),
            maximum=int(arr.max()),
        )


@dataclass(eq=False)
class Board:
    """A bounded 2D grid of tiles, each holding one cell.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        tiles: All tiles in row-major order (``tiles[y * width + x]``).
    """

    width: int
    height: int
    tiles: list[Tile] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build the tiles, their adjacency, and a dead standard cell on each."""
        if self.width <= 0 or self.height <= 0:
            msg = f"Board dimensions must be positive, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.tiles = []
        for y in range(self.height):
            for x in range(self.width):
                coord = Coord(x, y)
                tile = Tile(coord=coord, neighbours=self._adjacent(coord))
                tile.cell = Cell(coord=coord)
                self.tiles.append(tile)

    def _adjacent(self, coord: Coord) -> tuple[Coord, ...]:
        result = []
        for dx, dy in _OFFSETS:
            nx, ny = coord.x + dx, coord.y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                result.append(Coord(nx, ny))
        return tuple(result)

    # -- Access ----------------------------------------------------------------

    def contains(self, coord: Coord) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def tile(self, coord: Coord) -> Tile:
        """Return the tile at ``coord``.

        Raises:
            IndexError: If the coordinate is out of bounds.
        """
        if not self.contains(coord):
            msg = f"({coord.x}, {coord.y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.tiles[coord.y * self.width + coord.x]

    def tile_at(self, x: int, y: int) -> Tile:
        return self.tile(Coord(x, y))

    def cell(self, coord: Coord) -> Cell:
        """Return the cell occupying the tile at ``coord``.

        Raises:
            IndexError: If the coordinate is out of bounds.
            IntegrityError: If the tile has no occupant.
        """
        return self.occupant(self.tile(coord))

    @staticmethod
    def occupant(tile: Tile) -> Cell:
        if tile.cell is None:
            msg = f"Missing cell on tile ({tile.coord.x}, {tile.coord.y})"
            raise IntegrityError(msg)
        return tile.cell

    def cells(self) -> list[Cell]:
        """Return every cell in row-major order."""
        return [self.occupant(tile) for tile in self.tiles]

    def neighbours(self, coord: Coord) -> list[Tile]:
        """Return the up-to-8 tiles adjacent to ``coord``."""
        return [self.tile(n) for n in self.tile(coord).neighbours]

    def neighbour_cells(self, coord: Coord) -> list[Cell]:
        return [self.occupant(t) for t in self.neighbours(coord)]

    # -- Setup -----------------------------------------------------------------

    def set_energy_modifier(self, coord: Coord, modifier: int) -> None:
        """Make the tile at ``coord`` interactable with a static bonus/penalty."""
        self.tile(coord).energy_modifier = modifier

    def reset_cells(self, variants: Mapping[Coord, CellVariant] | None = None) -> None:
        """Place a fresh dead cell on every tile.

        Args:
            variants: Variant per coordinate; unlisted tiles get a standard cell.
        """
        variants = variants or {}
        for coord in variants:
            self.tile(coord)
        for tile in self.tiles:
            variant = variants.get(tile.coord, CellVariant.STANDARD)
            tile.cell = Cell(coord=tile.coord, variant=variant)

    def populate(
        self,
        rng: Generator,
        *,
        density: float = 0.3,
        variant_weights: Mapping[CellVariant, float] | None = None,
    ) -> dict[Coord, CellVariant]:
        """Pick a random initial population.

        Does not touch the cells; pass the result to
        ``Generation.create_initial(game, variants=...)``.

        Args:
            rng: Seeded random generator.
            density: Probability that a tile starts alive.
            variant_weights: Relative weight per variant; standard only if
                omitted.

        Returns:
            Mapping from each initially-alive coordinate to its variant.
        """
        if not 0.0 <= density <= 1.0:
            msg = f"density must be within [0, 1], got {density}"
            raise ValueError(msg)
        weights = dict(variant_weights or {CellVariant.STANDARD: 1.0})
        kinds = list(weights)
        probs = np.asarray([weights[k] for k in kinds], dtype=np.float64)
        if probs.sum() <= 0 or (probs < 0).any():
            msg = "variant weights must be non-negative and not all zero"
            raise ValueError(msg)
        probs /= probs.sum()

        chosen: dict[Coord, CellVariant] = {}
        for tile in self.tiles:
            if rng.random() < density:
                chosen[tile.coord] = kinds[int(rng.choice(len(kinds), p=probs))]
        return chosen

    # -- Queries ---------------------------------------------------------------

    def count_alive_neighbours(self, coord: Coord, generation: Generation) -> int:
        """Count neighbours of ``coord`` alive in ``generation``."""
        return sum(
            1 for n in self.tile(coord).neighbours if generation.is_alive(n)
        )

    def alive_cells(self, generation: Generation) -> list[Cell]:
        """Return the cells alive in ``generation``, row-major."""
        return [
            self.occupant(tile)
            for tile in self.tiles
            if generation.is_alive(tile.coord)
        ]

    def count_alive(self, generation: Generation) -> int:
        return len(self.alive_cells(generation))

    def count_by_variant(self, generation: Generation) -> dict[CellVariant, int]:
        """Count living cells per variant; variants with no living cell are omitted."""
        counts: dict[CellVariant, int] = {}
        for cell in self.alive_cells(generation):
            counts[cell.variant] = counts.get(cell.variant, 0) + 1
        return counts

    def group_by_alive_neighbours(self, generation: Generation) -> dict[int, list[Cell]]:
        """Group living cells by how many living neighbours they have."""
        groups: dict[int, list[Cell]] = {}
        for cell in self.alive_cells(generation):
            n = self.count_alive_neighbours(cell.coord, generation)
            groups.setdefault(n, []).append(cell)
        return groups

    def group_by_energy(self, generation: Generation) -> dict[int, list[Cell]]:
        """Group living cells by their recorded energy."""
        groups: dict[int, list[Cell]] = {}
        for cell in self.alive_cells(generation):
            groups.setdefault(generation.energy_of(cell.coord), []).append(cell)
        return groups

    def highest_energy_cell(self, generation: Generation) -> Cell | None:
        """Return the living cell with the most energy.

        Ties go to the first cell in row-major order (lowest row, then
        lowest column).  Returns None if nothing is alive.
        """
        best: Cell | None = None
        best_energy = 0
        for cell in self.alive_cells(generation):
            energy = generation.energy_of(cell.coord)
            if best is None or energy > best_energy:
                best, best_energy = cell, energy
        return best

    def time_series_stats(
        self,
        history: Sequence[Generation],
        start: int,
        end: int,
    ) -> dict[int, EnergyStats]:
        """Summarise living cells' energy for each step in ``[start, end]``.

        Args:
            history: Generations to draw from, in any order.
            start: First step (inclusive).
            end: Last step (inclusive).

        Returns:
            Mapping from step to its EnergyStats.  Steps absent from
            ``history`` are skipped.
        """
        if start > end:
            msg = f"start ({start}) must not exceed end ({end})"
            raise ValueError(msg)
        stats: dict[int, EnergyStats] = {}
        for generation in history:
            if start <= generation.step <= end:
                energies = [
                    generation.energy_of(c.coord) for c in self.alive_cells(generation)
                ]
                stats[generation.step] = EnergyStats.of(energies)
        return dict(sorted(stats.items()))
