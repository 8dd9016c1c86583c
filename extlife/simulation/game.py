"""Game — aggregate root for one simulation.

Owns a board, the ordered generation history, and the event schedule
that was last used to drive it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from extlife.life.cell import SocialState
from extlife.simulation.events import EventType
from extlife.simulation.generation import Generation
from extlife.world.board import Board, EnergyStats
from extlife.world.coord import Coord


@dataclass(eq=False)
class Game:
    """One simulation: board, history, and event schedule.

    Attributes:
        name: Human-readable name.
        board: The board the game is played on.
        generations: History in step order, starting at step 0.
        event_schedule: Mapping from step index to the event applied
            before that step is evolved.
        game_id: Identifier assigned by a repository on first save.
    """

    name: str
    board: Board
    generations: list[Generation] = field(default_factory=list, repr=False)
    event_schedule: dict[int, EventType] = field(default_factory=dict)
    game_id: int | None = None

    @classmethod
    def create(cls, name: str, width: int, height: int) -> Game:
        """Build a game on a fresh ``width`` x ``height`` board.

        The board starts with dead standard cells and the history holds a
        matching step-0 generation.
        """
        game = cls(name=name, board=Board(width=width, height=height))
        Generation.create_initial(game)
        return game

    @property
    def start(self) -> Generation:
        return self.generations[0]

    @property
    def latest(self) -> Generation:
        return self.generations[-1]

    def add_generation(self, generation: Generation) -> None:
        """Append ``generation`` to the history and link it to this game."""
        generation.game = self
        self.generations.append(generation)

    def clear_generations(self) -> None:
        self.generations.clear()

    def generation(self, step: int) -> Generation:
        """Return the generation recorded for ``step``.

        Raises:
            KeyError: If no generation has that step.
        """
        for generation in self.generations:
            if generation.step == step:
                return generation
        raise KeyError(step)

    def set_social_state(self, state: SocialState, coords: Iterable[Coord]) -> None:
        """Assign ``state`` to the cells at every coordinate in ``coords``."""
        for coord in coords:
            self.board.cell(coord).social_state = state

    def time_series_stats(self, start: int, end: int) -> dict[int, EnergyStats]:
        """Per-step energy statistics over ``[start, end]`` of this history."""
        return self.board.time_series_stats(self.generations, start, end)
