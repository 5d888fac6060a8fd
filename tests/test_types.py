# tests/test_types.py
"""
Grid and cell-state model: lookups, copies and boundary validation.
"""

from __future__ import annotations

import pytest

from grassfire.core.types import (
    Grid,
    InvalidGrid,
    Layer,
    FREE,
    OBSTACLE,
    DESTINATION,
    START,
    OFF_GRID,
)
from grassfire.core.neighbors import adjacent, EXPANSION_ORDER, BACKTRACK_ORDER
from grassfire.app.maps import grid_from_rows


def test_off_grid_matches_no_state() -> None:
    for state in (FREE, OBSTACLE, DESTINATION, START, Layer(3)):
        assert OFF_GRID != state
        assert state != OFF_GRID


def test_layers_compare_by_depth() -> None:
    assert Layer(2) == Layer(2)
    assert Layer(2) != Layer(3)
    assert START == Layer(0)
    assert Layer(0) != FREE


def test_negative_layer_rejected() -> None:
    with pytest.raises(ValueError):
        Layer(-1)


def test_at_is_bounds_checked() -> None:
    grid = Grid.empty(3, 2, start=(0, 0), goal=(2, 1))

    assert grid.at((0, 0)) == START
    assert grid.at((2, 1)) == DESTINATION
    assert grid.at((1, 1)) == FREE
    assert grid.at((3, 0)) is OFF_GRID
    assert grid.at((-1, 0)) is OFF_GRID
    assert grid.at((0, 2)) is OFF_GRID


def test_scan_is_row_major() -> None:
    grid = Grid.empty(2, 2, start=(0, 0), goal=(1, 1))
    assert [c for c, _ in grid.scan()] == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_copy_is_independent() -> None:
    grid = Grid.empty(2, 2, start=(0, 0), goal=(1, 1))
    other = grid.copy()

    other.set((1, 0), OBSTACLE)

    assert grid.at((1, 0)) == FREE
    assert other.at((1, 0)) == OBSTACLE


def test_neighbour_orders() -> None:
    grid = Grid.empty(3, 3, start=(0, 0), goal=(2, 2))

    forward = [n for n, _ in adjacent(grid, (1, 1), EXPANSION_ORDER)]
    backward = [n for n, _ in adjacent(grid, (1, 1), BACKTRACK_ORDER)]

    assert forward == [(2, 1), (1, 0), (0, 1), (1, 2)]
    assert backward == [(2, 1), (1, 2), (0, 1), (1, 0)]


def test_corner_neighbours_report_off_grid() -> None:
    grid = Grid.empty(2, 2, start=(0, 0), goal=(1, 1))
    states = [s for _, s in adjacent(grid, (0, 0), EXPANSION_ORDER)]
    assert states == [FREE, OFF_GRID, OFF_GRID, FREE]


def test_validate_accepts_good_grid() -> None:
    grid_from_rows(["S.x", "..D"]).validate()


def test_validate_rejects_missing_destination() -> None:
    grid = Grid.empty(3, 1, start=(0, 0), goal=(2, 0))
    grid.set((2, 0), FREE)
    with pytest.raises(InvalidGrid):
        grid.validate()


def test_validate_rejects_second_start() -> None:
    grid = Grid.empty(3, 1, start=(0, 0), goal=(2, 0))
    grid.set((1, 0), START)
    with pytest.raises(InvalidGrid):
        grid.validate()


def test_validate_rejects_leftover_stamps() -> None:
    grid = Grid.empty(3, 1, start=(0, 0), goal=(2, 0))
    grid.set((1, 0), Layer(1))
    with pytest.raises(InvalidGrid):
        grid.validate()


def test_validate_rejects_ragged_rows() -> None:
    grid = Grid.empty(3, 2, start=(0, 0), goal=(2, 1))
    grid.cells[0].pop()
    with pytest.raises(InvalidGrid):
        grid.validate()


def test_validate_rejects_out_of_bounds_start() -> None:
    grid = Grid.empty(3, 2, start=(0, 0), goal=(2, 1))
    grid.start = (5, 5)
    with pytest.raises(InvalidGrid):
        grid.validate()
