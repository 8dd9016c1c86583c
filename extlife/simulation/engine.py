"""EvolutionEngine — advances a game one generation at a time.

Each tick reads a single prior generation and runs five phases in order:

1. Pairwise interaction between adjacent cells, once per pair, in
   row-major order.
2. Infection maturation: infected ordinary cells turn predatory.
3. Per-cell next state and energy from the prior snapshot, the variant
   rule and the active event.
4. Bankruptcy clamp: no cell lives on negative energy.
5. Simultaneous commit of every cell's new state, captured into the next
   generation.

Nothing a cell decides in phases 1-4 is visible to another cell until
phase 5.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from loguru import logger

from extlife.exceptions import ConfigurationError
from extlife.life.cell import SocialState
from extlife.life.variants import tracked_energy
from extlife.simulation.events import EventType, apply_event
from extlife.simulation.generation import Generation

if TYPE_CHECKING:
    from extlife.life.cell import Cell
    from extlife.simulation.game import Game
    from extlife.world.board import Board
    from extlife.world.coord import Coord

Interaction = Callable[["Cell", "Cell"], None]

# Events that keep the prior energy as baseline, ignoring tile modifiers.
_BASELINE_EVENTS = frozenset(
    {EventType.BLOOM, EventType.FAMINE, EventType.CATACLYSM},
)


def no_interaction(cell: Cell, neighbour: Cell) -> None:
    """Default phase-1 interaction: adjacent cells do not affect each other."""


@dataclass
class _Tick:
    """Working state of one tick, discarded after the commit."""

    energy: dict[Coord, int]
    outcomes: dict[Coord, tuple[bool, int]] = field(default_factory=dict)
    drained: set[Coord] = field(default_factory=set)
    infections: dict[Coord, bool] = field(default_factory=dict)
    pacified: set[Coord] = field(default_factory=set)


@dataclass
class EvolutionEngine:
    """Computes successive generations of a game.

    The engine holds no simulation state; the event schedule is passed to
    ``run``/``step`` and stored on the game.

    Attributes:
        interaction: Called as ``interaction(cell, neighbour)`` exactly once
            per adjacent pair during phase 1, ``cell`` being the one that
            comes first in row-major order.
    """

    interaction: Interaction = no_interaction

    # -- Driving loop ------------------------------------------------------------

    def run(
        self,
        game: Game,
        steps: int,
        schedule: Mapping[int, EventType] | None = None,
    ) -> Game:
        """Advance ``game`` by ``steps`` generations.

        Args:
            game: The game to advance; its latest generation is the start.
            steps: Number of ticks to compute.
            schedule: Step index -> event.  When given it replaces the
                game's stored schedule; when omitted no events fire.

        Returns:
            The same game, with ``steps`` generations appended.  If a tick
            fails, the generations computed before it stay in the history
            and the error propagates.
        """
        if game is None:
            raise ValueError("game must not be None")
        if steps is None or steps < 0:
            msg = f"steps must be non-negative, got {steps}"
            raise ValueError(msg)
        if schedule is not None:
            game.event_schedule = {int(k): EventType.parse(v) for k, v in schedule.items()}
            schedule = game.event_schedule

        logger.info(
            "[Engine] running '{}' for {} step(s) from step {} ({} event(s) scheduled)",
            game.name,
            steps,
            game.latest.step,
            len(schedule or {}),
        )
        for _ in range(steps):
            self.step(game, schedule)
        logger.info(
            "[Engine] '{}' now at step {} with {} alive",
            game.name,
            game.latest.step,
            game.board.count_alive(game.latest),
        )
        return game

    def step(
        self,
        game: Game,
        schedule: Mapping[int, EventType] | None = None,
    ) -> Generation:
        """Apply any event scheduled at the current step, then evolve once.

        Returns:
            The new generation, already appended to ``game``.
        """
        if game is None:
            raise ValueError("game must not be None")
        current = game.latest
        event = (schedule or {}).get(current.step)
        if event is not None and event is not EventType.CATACLYSM:
            apply_event(game.board, event)
            current.snap_cells()
        following = self.evolve(current, event)
        game.add_generation(following)
        return following

    # -- Single tick -------------------------------------------------------------

    def evolve(self, current: Generation, event: EventType | None = None) -> Generation:
        """Compute the generation that follows ``current``.

        Live cells are updated to the new state and the returned generation
        holds their snapshot.  The caller is responsible for adding it to
        the game's history.

        Args:
            current: The prior generation.
            event: The event active for this tick, if any.

        Raises:
            ValueError: If ``current`` is None.
            ConfigurationError: If ``current`` has no board or game.
        """
        if current is None:
            raise ValueError("current generation must not be None")
        board, game = current.board, current.game
        if board is None or game is None:
            raise ConfigurationError("Generation must have an associated board and game")

        self._interact(board)
        self._mature_infections(board)

        tick = _Tick(energy=dict(current.energy_states))
        for tile in board.tiles:
            cell = board.occupant(tile)
            tick.outcomes[cell.coord] = self._next_state(
                board,
                current,
                cell,
                tile.energy_modifier,
                event,
                tick,
            )

        following = Generation.following(current)
        self._commit(board, tick)
        following.snap_cells()
        logger.debug(
            "[Engine] step {} -> {} (event={}, alive={}, drained={})",
            current.step,
            following.step,
            event.value if event else None,
            sum(following.alive_states.values()),
            len(tick.drained),
        )
        return following

    def alive_cells(self, generation: Generation) -> dict[Coord, Cell]:
        """Map each coordinate alive in ``generation`` to its cell."""
        if generation is None:
            raise ValueError("generation must not be None")
        return {cell.coord: cell for cell in generation.alive_cells()}

    # -- Phases ------------------------------------------------------------------

    def _interact(self, board: Board) -> None:
        ordered = sorted(board.cells(), key=lambda c: c.coord.row_major)
        for cell in ordered:
            for neighbour in board.neighbour_cells(cell.coord):
                if cell.coord.precedes(neighbour.coord):
                    self.interaction(cell, neighbour)

    @staticmethod
    def _mature_infections(board: Board) -> None:
        for cell in board.cells():
            if cell.infected and cell.social_state is SocialState.ORDINARY:
                cell.social_state = SocialState.PREDATORY
                cell.infected = False

    def _next_state(
        self,
        board: Board,
        current: Generation,
        cell: Cell,
        modifier: int,
        event: EventType | None,
        tick: _Tick,
    ) -> tuple[bool, int]:
        prev = current.energy_of(cell.coord)
        base = prev
        if event not in _BASELINE_EVENTS and cell.alive and event is not EventType.SANCTUARY:
            base += modifier

        was_alive = cell.alive
        next_alive = cell.evolve(board.count_alive_neighbours(cell.coord, current))
        tick.energy[cell.coord] = tracked_energy(
            cell.variant,
            tick.energy.get(cell.coord, prev),
            was_alive,
            next_alive,
        )

        if event is EventType.CATACLYSM and was_alive:
            prev = base = 0

        if event is EventType.SANCTUARY and cell.is_predatory:
            new_energy = prev
            tick.pacified.add(cell.coord)
        elif cell.is_predatory:
            new_energy = tick.energy[cell.coord] + self._drain(board, cell, event, tick)
        elif event is EventType.BLOOM:
            if was_alive:
                new_energy = base + 3 if next_alive else base - 1
            else:
                new_energy = min(0, base + 2)
        elif event is EventType.FAMINE:
            bonus = (1 if next_alive else -1) if was_alive else 0
            new_energy = base + bonus
        elif not was_alive and next_alive:
            new_energy = 0
        else:
            bonus = (1 if next_alive else -1) if was_alive else (1 if next_alive else 0)
            new_energy = base + bonus

        if new_energy < 0 and next_alive:
            next_alive = False
        return next_alive, new_energy

    @staticmethod
    def _drain(board: Board, predator: Cell, event: EventType | None, tick: _Tick) -> int:
        """Absorb the energy of every living ordinary neighbour.

        Each victim yields its working energy for this tick, so a victim
        already drained by an earlier predator yields nothing.  Victims are
        infected, or cured under a blood moon.
        """
        absorbed = 0
        for neighbour in board.neighbour_cells(predator.coord):
            if neighbour.social_state is not SocialState.ORDINARY or not neighbour.alive:
                continue
            absorbed += tick.energy.get(neighbour.coord, 0)
            tick.energy[neighbour.coord] = 0
            tick.drained.add(neighbour.coord)
            tick.infections[neighbour.coord] = event is not EventType.BLOOD_MOON
        return absorbed

    @staticmethod
    def _commit(board: Board, tick: _Tick) -> None:
        for coord, (alive, energy) in tick.outcomes.items():
            cell = board.cell(coord)
            cell.alive = alive
            cell.energy = 0 if coord in tick.drained else energy
        for coord, infected in tick.infections.items():
            board.cell(coord).infected = infected
        for coord in tick.pacified:
            board.cell(coord).social_state = SocialState.ORDINARY
