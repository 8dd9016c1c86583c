"""Plain-text rendering of a generation snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extlife.simulation.generation import Generation

ALIVE = "C"
DEAD = "0"


def visualize(generation: Generation) -> str:
    """Render ``generation`` as one line per row, ``C`` alive and ``0`` dead.

    Every row, including the last, ends with a newline.
    """
    if generation is None or generation.board is None:
        raise ValueError("generation must reference a board")
    board = generation.board
    rows = []
    for y in range(board.height):
        rows.append(
            "".join(
                ALIVE if generation.is_alive(board.tile_at(x, y).coord) else DEAD
                for x in range(board.width)
            ),
        )
    return "".join(f"{row}\n" for row in rows)
