"""Conversion between games and plain, YAML-safe dictionaries.

Grids are stored row by row so a saved file reads like the board:

    cells:
      - [[standard, true, 3, ordinary, false, 0], ...]   # row 0
    generations:
      - step: 0
        alive: [[true, false, ...], ...]
        energy: [[3, 0, ...], ...]
"""

from __future__ import annotations

from typing import Any

from extlife.life.cell import Cell, CellVariant, SocialState
from extlife.simulation.events import EventType
from extlife.simulation.game import Game
from extlife.simulation.generation import Generation
from extlife.world.board import Board
from extlife.world.coord import Coord

FORMAT_VERSION = 1


def game_to_dict(game: Game, *, game_id: int | None = None) -> dict[str, Any]:
    """Serialise the whole aggregate: board, tiles, cells, history, schedule.

    Args:
        game: The game to serialise.
        game_id: Identifier to record instead of ``game.game_id``.
    """
    board = game.board
    rows = range(board.height)
    cols = range(board.width)
    return {
        "version": FORMAT_VERSION,
        "id": game.game_id if game_id is None else game_id,
        "name": game.name,
        "width": board.width,
        "height": board.height,
        "modifiers": [[board.tile_at(x, y).energy_modifier for x in cols] for y in rows],
        "cells": [[_cell_to_list(board.cell(Coord(x, y))) for x in cols] for y in rows],
        "generations": [
            {
                "step": gen.step,
                "alive": [[gen.is_alive(Coord(x, y)) for x in cols] for y in rows],
                "energy": [[gen.energy_of(Coord(x, y)) for x in cols] for y in rows],
            }
            for gen in game.generations
        ],
        "events": {int(step): event.value for step, event in sorted(game.event_schedule.items())},
    }


def game_from_dict(data: dict[str, Any]) -> Game:
    """Rebuild a game, with live cells and every generation, from ``data``.

    Raises:
        ValueError: If the payload is malformed or of an unknown version.
    """
    if not isinstance(data, dict):
        msg = f"Expected a mapping, got {type(data).__name__}"
        raise ValueError(msg)
    version = data.get("version")
    if version != FORMAT_VERSION:
        msg = f"Unsupported game format version: {version!r}"
        raise ValueError(msg)
    try:
        board = Board(width=int(data["width"]), height=int(data["height"]))
        for y, row in enumerate(data["cells"]):
            for x, raw in enumerate(row):
                coord = Coord(x, y)
                tile = board.tile(coord)
                tile.cell = _cell_from_list(coord, raw)
                tile.energy_modifier = int(data["modifiers"][y][x])

        game = Game(
            name=str(data["name"]),
            board=board,
            event_schedule={
                int(step): EventType(value) for step, value in (data.get("events") or {}).items()
            },
            game_id=data.get("id"),
        )
        for raw in data["generations"]:
            gen = Generation(step=int(raw["step"]), board=board)
            for y, row in enumerate(raw["alive"]):
                for x, alive in enumerate(row):
                    gen.alive_states[Coord(x, y)] = bool(alive)
                    gen.energy_states[Coord(x, y)] = int(raw["energy"][y][x])
            game.add_generation(gen)
    except (KeyError, IndexError, TypeError) as exc:
        msg = f"Malformed game payload: {exc!r}"
        raise ValueError(msg) from exc
    return game


def _cell_to_list(cell: Cell) -> list[Any]:
    return [
        cell.variant.value,
        cell.alive,
        cell.energy,
        cell.social_state.value,
        cell.infected,
        cell.grace,
    ]


def _cell_from_list(coord: Coord, raw: list[Any]) -> Cell:
    variant, alive, energy, social_state, infected, grace = raw
    return Cell(
        coord=coord,
        variant=CellVariant(variant),
        alive=bool(alive),
        energy=int(energy),
        social_state=SocialState(social_state),
        infected=bool(infected),
        grace=int(grace),
    )
