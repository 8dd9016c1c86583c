"""Shared fixtures for the extlife test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from extlife.simulation.config import SimulationConfig
from extlife.simulation.engine import EvolutionEngine
from extlife.simulation.game import Game
from extlife.world.board import Board


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_board() -> Board:
    """A small 8x8 board for fast tests."""
    return Board(width=8, height=8)


@pytest.fixture
def engine() -> EvolutionEngine:
    """An engine with the default (no-op) interaction."""
    return EvolutionEngine()


@pytest.fixture
def game3() -> Game:
    """A fresh 3x3 game, all cells dead."""
    return Game.create("test-3x3", 3, 3)


@pytest.fixture
def game6() -> Game:
    """A fresh 6x6 game, all cells dead."""
    return Game.create("test-6x6", 6, 6)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()
