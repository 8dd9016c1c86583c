"""Entry point for ``python -m extlife``.

Loads a YAML config, builds a seeded game, runs it through its event
schedule and prints the final board.  Optionally saves the game and/or
opens a Pygame window to watch it evolve.
"""

from __future__ import annotations

import argparse
import pathlib
import sys

from loguru import logger

from extlife.persistence.repository import YamlGameRepository
from extlife.render.text import visualize
from extlife.simulation.config import SimulationConfig
from extlife.simulation.engine import EvolutionEngine

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, build the game, run or view it."""
    parser = argparse.ArgumentParser(
        prog="extlife",
        description="extlife - extended Game of Life with energy, variants and events",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Generations to compute (default: from config)",
    )
    parser.add_argument(
        "--save",
        type=pathlib.Path,
        default=None,
        help="Directory to save the finished game into",
    )
    parser.add_argument(
        "--gui",
        action="store_true",
        help="Open a Pygame window instead of running headless",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=16,
        help="Pixel size per tile in the GUI (default: 16)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every generation",
    )
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    config = SimulationConfig.from_yaml(args.config)
    steps = config.steps if args.steps is None else args.steps
    game = config.build_game()
    engine = EvolutionEngine()

    if args.gui:
        from extlife.ui.pygame_client import PygameRenderer

        PygameRenderer(
            engine=engine,
            game=game,
            cell_size=args.cell_size,
            max_steps=steps,
        ).run()
    else:
        engine.run(game, steps, game.event_schedule)

    final = game.latest
    print(visualize(final), end="")
    counts = game.board.count_by_variant(final)
    summary = ", ".join(f"{v.value}={n}" for v, n in counts.items()) or "none"
    print(f"step {final.step}: {game.board.count_alive(final)} alive ({summary})")

    if args.save is not None:
        game_id = YamlGameRepository(args.save).save(game)
        print(f"saved as game {game_id} in {args.save}")


if __name__ == "__main__":
    main()
