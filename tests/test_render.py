"""Tests for extlife.render.text."""

import pytest

from extlife.render.text import visualize
from extlife.simulation.engine import EvolutionEngine
from extlife.simulation.game import Game
from extlife.simulation.generation import Generation
from extlife.world.coord import Coord


def test_visualize_blinker() -> None:
    game = Game.create("render", 3, 3)
    start = Generation.create_initial(game, alive=[Coord(1, 0), Coord(1, 1), Coord(1, 2)])
    assert visualize(start) == "0C0\n0C0\n0C0\n"

    EvolutionEngine().run(game, 1)
    assert visualize(game.latest) == "000\nCCC\n000\n"


def test_visualize_rectangular() -> None:
    game = Game.create("wide", 4, 2)
    start = Generation.create_initial(game, alive=[Coord(3, 1)])
    assert visualize(start) == "0000\n000C\n"


def test_visualize_requires_board() -> None:
    with pytest.raises(ValueError):
        visualize(Generation(step=0))
