"""Generation — an immutable-after-creation snapshot of the board.

A generation records, for every tile's cell, whether it was alive and
how much energy it held at one step.  Snapshots are keyed by coordinate
so they never alias the live cells they describe.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from extlife.life.cell import CellVariant
from extlife.world.coord import Coord

if TYPE_CHECKING:
    from extlife.life.cell import Cell
    from extlife.simulation.game import Game
    from extlife.world.board import Board


@dataclass(eq=False)
class Generation:
    """The recorded state of every cell at one step.

    Attributes:
        step: Step index, 0 for the initial generation.
        board: Board the snapshot describes.
        game: Game whose history this generation belongs to.
        alive_states: Alive flag per coordinate.
        energy_states: Energy per coordinate.
    """

    step: int
    board: Board | None = None
    game: Game | None = None
    alive_states: dict[Coord, bool] = field(default_factory=dict, repr=False)
    energy_states: dict[Coord, int] = field(default_factory=dict, repr=False)

    @classmethod
    def create_initial(
        cls,
        game: Game,
        *,
        alive: Iterable[Coord] = (),
        variants: Mapping[Coord, CellVariant] | None = None,
    ) -> Generation:
        """Set up the board's cells and start the game's history at step 0.

        Every tile gets a fresh cell.  Coordinates in ``variants`` start
        alive with the given variant, coordinates in ``alive`` start alive
        as standard cells, and everything else is a dead standard cell.
        Any previous history of ``game`` is discarded.

        Args:
            game: The game to initialise.
            alive: Coordinates of initially-alive standard cells.
            variants: Initially-alive coordinates with explicit variants.

        Returns:
            The new step-0 generation, already appended to ``game``.
        """
        if game is None:
            raise ValueError("game must not be None")
        board = game.board
        variants = dict(variants or {})
        alive = list(alive)
        for coord in alive:
            board.tile(coord)
        board.reset_cells(variants)
        for coord in [*alive, *variants]:
            board.cell(coord).alive = True

        initial = cls(step=0, board=board)
        game.clear_generations()
        game.add_generation(initial)
        initial.snap_cells()
        return initial

    @classmethod
    def following(cls, current: Generation) -> Generation:
        """Return an empty generation for the step after ``current``."""
        return cls(step=current.step + 1, board=current.board, game=current.game)

    def snap_cells(self) -> None:
        """Capture every live cell's alive flag and energy into this snapshot."""
        if self.board is None:
            raise ValueError("cannot snapshot a generation without a board")
        alive: dict[Coord, bool] = {}
        energy: dict[Coord, int] = {}
        for cell in self.board.cells():
            alive[cell.coord] = cell.alive
            energy[cell.coord] = cell.energy
        self.alive_states = alive
        self.energy_states = energy

    def is_alive(self, coord: Coord) -> bool:
        return self.alive_states.get(coord, False)

    def energy_of(self, coord: Coord) -> int:
        return self.energy_states.get(coord, 0)

    def alive_cells(self) -> list[Cell]:
        """Return the board's cells that are alive in this snapshot."""
        if self.board is None:
            return []
        return self.board.alive_cells(self)
