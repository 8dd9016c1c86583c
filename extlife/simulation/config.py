"""Config — load simulation parameters from YAML files.

A run is described entirely in YAML: board size, seeded random
population, per-tile energy modifiers and the event schedule.  The file is
parsed into a typed dataclass here and turned into a ready-to-run game by
``build_game``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from extlife.exceptions import ConfigError
from extlife.life.cell import CellVariant
from extlife.simulation.events import EventType
from extlife.simulation.game import Game
from extlife.simulation.generation import Generation
from extlife.world.coord import Coord


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        name: Name given to the game.
        seed: RNG seed for the initial population.
        board_width: Number of grid columns.
        board_height: Number of grid rows.
        initial_density: Probability that a tile starts alive.
        initial_energy: Energy given to every cell at step 0.
        steps: Generations to compute in a run.
        variant_weights: Relative weight of each variant among the
            initially-alive cells.
        events: Step index -> event.
        tile_modifiers: Static energy bonus/penalty per coordinate.
    """

    name: str = "extlife"
    seed: int = 42
    board_width: int = 32
    board_height: int = 32
    initial_density: float = 0.3
    initial_energy: int = 0
    steps: int = 100

    variant_weights: dict[CellVariant, float] = field(
        default_factory=lambda: {CellVariant.STANDARD: 1.0},
    )
    events: dict[int, EventType] = field(default_factory=dict)
    tile_modifiers: dict[Coord, int] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigError: If a value cannot be interpreted.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            msg = f"{path}: top level must be a mapping"
            raise ConfigError(msg)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationConfig:
        defaults = cls()
        try:
            return cls(
                name=str(data.get("name", defaults.name)),
                seed=int(data.get("seed", defaults.seed)),
                board_width=int(data.get("board_width", defaults.board_width)),
                board_height=int(data.get("board_height", defaults.board_height)),
                initial_density=float(
                    data.get("initial_density", defaults.initial_density),
                ),
                initial_energy=int(data.get("initial_energy", defaults.initial_energy)),
                steps=int(data.get("steps", defaults.steps)),
                variant_weights=_parse_weights(data.get("variant_weights"))
                or defaults.variant_weights,
                events={
                    int(step): EventType.parse(name)
                    for step, name in (data.get("events") or {}).items()
                },
                tile_modifiers={
                    Coord(int(m["x"]), int(m["y"])): int(m["modifier"])
                    for m in data.get("tile_modifiers") or []
                },
            )
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Invalid simulation config: {exc}"
            raise ConfigError(msg) from exc

    def build_game(self) -> Game:
        """Create a game with a seeded random initial population.

        Raises:
            ConfigError: If a tile modifier lies outside the board.
        """
        game = Game.create(self.name, self.board_width, self.board_height)
        rng = np.random.default_rng(self.seed)
        variants = game.board.populate(
            rng,
            density=self.initial_density,
            variant_weights=self.variant_weights,
        )
        initial = Generation.create_initial(game, variants=variants)
        for coord, modifier in self.tile_modifiers.items():
            if not game.board.contains(coord):
                msg = f"tile modifier at ({coord.x}, {coord.y}) is outside the board"
                raise ConfigError(msg)
            game.board.set_energy_modifier(coord, modifier)
        if self.initial_energy:
            for cell in game.board.cells():
                cell.energy = self.initial_energy
            initial.snap_cells()
        game.event_schedule = dict(self.events)
        return game


def _parse_weights(raw: dict[str, float] | None) -> dict[CellVariant, float]:
    if not raw:
        return {}
    return {CellVariant(str(name).lower()): float(w) for name, w in raw.items()}
