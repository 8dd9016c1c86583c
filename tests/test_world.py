"""Tests for extlife.world — coordinates, tiles, and the board grid."""

import pytest
from numpy.random import Generator

from extlife.exceptions import IntegrityError
from extlife.life.cell import CellVariant
from extlife.world.board import Board
from extlife.world.coord import Coord
from extlife.world.tile import Tile


class TestCoord:
    """Tests for the Coord value type."""

    def test_equal_and_hash_by_value(self) -> None:
        assert Coord(1, 2) == Coord(1, 2)
        assert len({Coord(1, 2), Coord(1, 2), Coord(2, 1)}) == 2

    def test_row_major_order(self) -> None:
        assert Coord(5, 0).precedes(Coord(0, 1))
        assert Coord(0, 1).precedes(Coord(1, 1))
        assert not Coord(1, 1).precedes(Coord(1, 1))
        assert not Coord(0, 2).precedes(Coord(3, 1))


class TestTile:
    """Tests for the Tile dataclass."""

    def test_default_values(self) -> None:
        tile = Tile(coord=Coord(0, 0))
        assert tile.energy_modifier == 0
        assert tile.cell is None
        assert not tile.is_interactable


class TestBoard:
    """Tests for the Board grid."""

    def test_dimensions(self, small_board: Board) -> None:
        assert small_board.width == 8
        assert small_board.height == 8
        assert len(small_board.tiles) == 64

    def test_rejects_empty_board(self) -> None:
        with pytest.raises(ValueError):
            Board(width=0, height=3)

    def test_tiles_row_major(self, small_board: Board) -> None:
        coords = [t.coord for t in small_board.tiles]
        assert coords == sorted(coords, key=lambda c: c.row_major)

    def test_tile_at_valid(self, small_board: Board) -> None:
        tile = small_board.tile_at(3, 5)
        assert tile.coord == Coord(3, 5)

    def test_tile_out_of_bounds(self, small_board: Board) -> None:
        with pytest.raises(IndexError):
            small_board.tile(Coord(8, 0))

    def test_every_tile_has_dead_standard_cell(self, small_board: Board) -> None:
        for cell in small_board.cells():
            assert cell.variant is CellVariant.STANDARD
            assert not cell.alive
            assert cell.energy == 0

    def test_neighbours_corner(self, small_board: Board) -> None:
        assert len(small_board.neighbours(Coord(0, 0))) == 3

    def test_neighbours_edge(self, small_board: Board) -> None:
        assert len(small_board.neighbours(Coord(3, 0))) == 5

    def test_neighbours_center(self, small_board: Board) -> None:
        neighbours = small_board.neighbours(Coord(3, 3))
        assert len(neighbours) == 8
        assert Coord(3, 3) not in {t.coord for t in neighbours}

    def test_no_wraparound(self, small_board: Board) -> None:
        coords = {t.coord for t in small_board.neighbours(Coord(7, 7))}
        assert coords == {Coord(6, 6), Coord(7, 6), Coord(6, 7)}

    def test_set_energy_modifier(self, small_board: Board) -> None:
        small_board.set_energy_modifier(Coord(2, 2), -3)
        assert small_board.tile(Coord(2, 2)).energy_modifier == -3
        assert small_board.tile(Coord(2, 2)).is_interactable

    def test_missing_occupant_is_integrity_error(self, small_board: Board) -> None:
        small_board.tile(Coord(1, 1)).cell = None
        with pytest.raises(IntegrityError):
            small_board.cell(Coord(1, 1))
        with pytest.raises(IntegrityError):
            small_board.cells()

    def test_reset_cells_assigns_variants(self, small_board: Board) -> None:
        old = small_board.cell(Coord(0, 0))
        small_board.reset_cells({Coord(1, 0): CellVariant.RESILIENT})
        assert small_board.cell(Coord(0, 0)) is not old
        assert small_board.cell(Coord(1, 0)).variant is CellVariant.RESILIENT
        assert small_board.cell(Coord(0, 0)).variant is CellVariant.STANDARD

    def test_populate_is_seeded(self) -> None:
        import numpy as np

        board = Board(width=16, height=16)
        weights = {CellVariant.STANDARD: 1.0, CellVariant.GREGARIOUS: 1.0}
        a = board.populate(np.random.default_rng(7), density=0.4, variant_weights=weights)
        b = board.populate(np.random.default_rng(7), density=0.4, variant_weights=weights)
        assert a == b
        assert 0 < len(a) < 256
        assert set(a.values()) <= set(weights)

    def test_populate_respects_density_zero(self, rng: Generator) -> None:
        board = Board(width=8, height=8)
        assert board.populate(rng, density=0.0) == {}

    def test_populate_rejects_bad_density(self, rng: Generator, small_board: Board) -> None:
        with pytest.raises(ValueError):
            small_board.populate(rng, density=1.5)
