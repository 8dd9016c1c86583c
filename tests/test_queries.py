"""Tests for the board's aggregate queries over generation snapshots."""

import pytest

from extlife.life.cell import CellVariant
from extlife.simulation.engine import EvolutionEngine
from extlife.simulation.game import Game
from extlife.simulation.generation import Generation
from extlife.world.board import EnergyStats
from extlife.world.coord import Coord

BLOCK = [Coord(1, 1), Coord(2, 1), Coord(1, 2), Coord(2, 2)]


class TestCounts:
    """Counting living cells."""

    def test_count_all_dead(self, game6: Game) -> None:
        start = Generation.create_initial(game6)
        assert game6.board.count_alive(start) == 0

    def test_count_by_variant(self, game3: Game) -> None:
        start = Generation.create_initial(
            game3,
            variants={
                Coord(0, 0): CellVariant.TERRITORIAL,
                Coord(1, 1): CellVariant.TERRITORIAL,
                Coord(2, 2): CellVariant.GREGARIOUS,
                Coord(1, 2): CellVariant.STANDARD,
                Coord(1, 0): CellVariant.RESILIENT,
            },
        )
        counts = game3.board.count_by_variant(start)
        assert counts == {
            CellVariant.TERRITORIAL: 2,
            CellVariant.GREGARIOUS: 1,
            CellVariant.STANDARD: 1,
            CellVariant.RESILIENT: 1,
        }
        assert game3.board.count_alive(start) == 5

    def test_count_by_variant_all_dead(self, game3: Game) -> None:
        start = Generation.create_initial(game3)
        assert game3.board.count_by_variant(start) == {}


class TestGrouping:
    """Grouping living cells."""

    def test_group_by_alive_neighbours_lonely(self, game6: Game) -> None:
        start = Generation.create_initial(game6, alive=[Coord(1, 1)])
        groups = game6.board.group_by_alive_neighbours(start)
        assert list(groups) == [0]
        assert len(groups[0]) == 1

    def test_group_by_alive_neighbours_block(self, game6: Game) -> None:
        start = Generation.create_initial(game6, alive=[*BLOCK, Coord(4, 4)])
        groups = game6.board.group_by_alive_neighbours(start)
        assert len(groups[3]) == 4
        assert [c.coord for c in groups[0]] == [Coord(4, 4)]

    def test_group_by_energy(self, game6: Game) -> None:
        start = Generation.create_initial(game6, alive=BLOCK)
        game6.board.cell(Coord(1, 1)).energy = 5
        game6.board.cell(Coord(0, 0)).energy = 5
        start.snap_cells()
        groups = game6.board.group_by_energy(start)
        assert [c.coord for c in groups[5]] == [Coord(1, 1)]
        assert len(groups[0]) == 3


class TestHighestEnergy:
    """Maximum-energy lookup with row-major tie-break."""

    def _run_block(self, game: Game, modifiers: dict[Coord, int]) -> Generation:
        Generation.create_initial(game, alive=BLOCK)
        for coord, value in modifiers.items():
            game.board.set_energy_modifier(coord, value)
        EvolutionEngine().run(game, 1)
        return game.latest

    def test_blinker(self, game6: Game) -> None:
        Generation.create_initial(game6, alive=[Coord(2, 1), Coord(2, 2), Coord(3, 3)])
        game6.board.set_energy_modifier(Coord(2, 1), 3)
        EvolutionEngine().run(game6, 1)
        # (2,1) holds more energy but is dead
        assert game6.board.highest_energy_cell(game6.latest).coord == Coord(2, 2)

    def test_tie_prefers_lower_row(self, game6: Game) -> None:
        nxt = self._run_block(game6, {Coord(1, 2): 4, Coord(2, 1): 4})
        assert game6.board.highest_energy_cell(nxt).coord == Coord(2, 1)

    def test_tie_prefers_lower_column(self, game6: Game) -> None:
        nxt = self._run_block(game6, {Coord(2, 1): 4, Coord(1, 1): 4})
        assert game6.board.highest_energy_cell(nxt).coord == Coord(1, 1)

    def test_nobody_alive(self, game6: Game) -> None:
        start = Generation.create_initial(game6)
        assert game6.board.highest_energy_cell(start) is None


class TestTimeSeries:
    """Per-step energy statistics over history."""

    def test_single_cell_dies(self, game6: Game) -> None:
        Generation.create_initial(game6, alive=[Coord(1, 1)])
        EvolutionEngine().run(game6, 2)

        assert len(game6.time_series_stats(0, 0)) == 1

        stats = game6.time_series_stats(0, 1)
        assert list(stats) == [0, 1]
        assert stats[0] == EnergyStats(count=1, mean=0.0, minimum=0, maximum=0)
        assert stats[1].count == 0
        assert stats[1].mean == pytest.approx(0.0)
        assert stats[1].minimum is None

    def test_block_statistics(self, game6: Game) -> None:
        Generation.create_initial(game6, alive=BLOCK)
        game6.board.set_energy_modifier(Coord(1, 1), 3)
        EvolutionEngine().run(game6, 2)

        stats = game6.time_series_stats(1, 2)
        assert stats[1] == EnergyStats(count=4, mean=1.75, minimum=1, maximum=4)
        assert stats[2].maximum == 8

    def test_range_validation(self, game6: Game) -> None:
        with pytest.raises(ValueError):
            game6.time_series_stats(2, 1)
