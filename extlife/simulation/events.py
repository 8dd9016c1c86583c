"""Global events that perturb the board's energy economy.

Eager events mutate the board as soon as they are scheduled, before the
tick that observes them:

- BLOOM: no board mutation; its bonuses are computed during the tick.
- FAMINE: every cell loses 1 energy and dies if that leaves it negative.
- SANCTUARY: every living cell gains 1 energy, or 3 if predatory.

CATACLYSM and BLOOD_MOON have no eager effect.  The engine folds both into
the tick itself: cataclysm zeroes the energy baseline of living cells, and
blood moon turns a predator's infection into a cure.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable

from loguru import logger

if TYPE_CHECKING:
    from extlife.world.board import Board


class EventType(Enum):
    """Board-wide perturbations that can be scheduled at a step."""

    BLOOM = "bloom"
    FAMINE = "famine"
    CATACLYSM = "cataclysm"
    SANCTUARY = "sanctuary"
    BLOOD_MOON = "blood_moon"

    @classmethod
    def parse(cls, name: str | EventType) -> EventType:
        """Look up an event by value or name, case-insensitively.

        Raises:
            ValueError: If ``name`` matches no event.
        """
        if isinstance(name, EventType):
            return name
        key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
        for event in cls:
            if event.value == key:
                return event
        msg = f"Unknown event '{name}'"
        raise ValueError(msg)


def _famine(board: Board) -> None:
    for cell in board.cells():
        cell.energy -= 1
        if cell.energy < 0:
            cell.alive = False


def _sanctuary(board: Board) -> None:
    for cell in board.cells():
        if cell.alive:
            cell.energy += 3 if cell.is_predatory else 1


_EAGER: dict[EventType, Callable[[Board], None]] = {
    EventType.FAMINE: _famine,
    EventType.SANCTUARY: _sanctuary,
}


def apply_event(board: Board, event: EventType) -> None:
    """Apply the eager board mutation of ``event``.

    Events without an eager effect (bloom, blood moon, cataclysm) leave
    the board untouched.

    Args:
        board: The board to mutate in place.
        event: The scheduled event.
    """
    if board is None or event is None:
        raise ValueError("board and event are required")
    handler = _EAGER.get(event)
    if handler is None:
        if event is EventType.CATACLYSM:
            logger.warning("[Events] cataclysm has no eager effect; resolved during the tick")
        else:
            logger.debug("[Events] {} has no eager effect", event.value)
        return
    logger.debug("[Events] applying {} to {}x{} board", event.value, board.width, board.height)
    handler(board)
