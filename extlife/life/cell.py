"""Cell — the living occupant of a tile.

A cell's variant is fixed for its lifetime.  Everything else (alive flag,
energy, social state, infection) is mutated in place by the evolution
engine at the end of each tick; generations only record snapshots of it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from extlife.life.variants import CellVariant, survival_rule
from extlife.world.coord import Coord


class SocialState(Enum):
    """Ordinary cells are prey; predatory cells drain their neighbours."""

    ORDINARY = "ordinary"
    PREDATORY = "predatory"


@dataclass(eq=False)
class Cell:
    """A single simulated cell.

    Cells compare by identity: the same instance lives on its tile for the
    whole game.

    Attributes:
        coord: Position of the tile this cell occupies.
        variant: Survival-rule variant.
        alive: Whether the cell is currently alive.
        energy: Life points (may be negative).
        social_state: Ordinary or predatory.
        infected: Set by a predator's drain; matures into the predatory
            state at the start of the next tick.
        grace: Consecutive would-be deaths survived (resilient only).
    """

    coord: Coord
    variant: CellVariant = CellVariant.STANDARD
    alive: bool = False
    energy: int = 0
    social_state: SocialState = SocialState.ORDINARY
    infected: bool = False
    grace: int = 0

    @property
    def x(self) -> int:
        return self.coord.x

    @property
    def y(self) -> int:
        return self.coord.y

    @property
    def is_predatory(self) -> bool:
        """Return True if this cell is in the predatory social state."""
        return self.social_state is SocialState.PREDATORY

    def evolve(self, alive_neighbours: int) -> bool:
        """Return whether this cell is alive next tick.

        Delegates to the variant's survival rule.  Only the rule's private
        bookkeeping (the resilient grace counter) is touched; the alive flag
        itself is committed later by the engine.

        Args:
            alive_neighbours: Number of neighbours alive before the tick.
        """
        return survival_rule(self.variant)(self, alive_neighbours)

    def __repr__(self) -> str:
        state = "alive" if self.alive else "dead"
        return (
            f"Cell({self.coord.x}, {self.coord.y}, {self.variant.value}, "
            f"{state}, energy={self.energy}, {self.social_state.value})"
        )
