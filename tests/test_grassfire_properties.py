# tests/test_grassfire_properties.py
"""
Seeded sweeps over random grids, checked against an independent queue BFS.

Covers:
- layer numbers equal true orthogonal distance
- the kept path is a single chain of optimal length
- nothing but the path keeps a layer
- obstacles, start and destination survive the search
"""

from __future__ import annotations

from collections import deque
from typing import Dict

import pytest

from grassfire.core.types import Grid, Cell, Layer, Obstacle, Destination, OBSTACLE, DESTINATION, START
from grassfire.core.generator import random_grid
from grassfire.core.wavefront import expand
from grassfire.core.grassfire import search

SEEDS = list(range(40))


def true_distances(grid: Grid) -> Dict[Cell, int]:
    """Plain queue BFS from start; obstacles and the destination are not entered."""
    dist = {grid.start: 0}
    queue = deque([grid.start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            n = (x + dx, y + dy)
            if not grid.in_bounds(n) or n in dist:
                continue
            if isinstance(grid.at(n), (Obstacle, Destination)):
                continue
            dist[n] = dist[(x, y)] + 1
            queue.append(n)
    return dist


def goal_distance(grid: Grid, dist: Dict[Cell, int]):
    gx, gy = grid.goal
    around = [dist[n] for n in ((gx + 1, gy), (gx - 1, gy), (gx, gy + 1), (gx, gy - 1)) if n in dist]
    return min(around) + 1 if around else None


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reachable(seed: int) -> bool:
    grid = random_grid(9, 12, 0.25, seed=seed)
    return goal_distance(grid, true_distances(grid)) is not None


# chain checks only make sense where the destination can be reached
REACHABLE_SEEDS = [s for s in SEEDS if reachable(s)]


def test_sweep_keeps_most_seeds() -> None:
    assert len(REACHABLE_SEEDS) >= len(SEEDS) // 2


@pytest.mark.parametrize("seed", SEEDS)
def test_layers_match_true_distance(seed: int) -> None:
    grid = random_grid(9, 12, 0.3, seed=seed)
    dist = true_distances(grid)

    exp = expand(grid)
    layers = grid.layers()

    for cell, depth in layers.items():
        assert dist[cell] == depth
    if not exp.found:
        # exhaustion means every reachable cell got stamped
        assert set(layers) == set(dist)


@pytest.mark.parametrize("seed", SEEDS)
def test_search_outcome_matches_reachability(seed: int) -> None:
    grid = random_grid(9, 12, 0.3, seed=seed)
    expected = goal_distance(grid, true_distances(grid))

    outcome = search(grid)

    assert outcome.found == (expected is not None)
    if outcome.found:
        assert outcome.length == expected


@pytest.mark.parametrize("seed", REACHABLE_SEEDS)
def test_kept_path_is_one_optimal_chain(seed: int) -> None:
    grid = random_grid(9, 12, 0.25, seed=seed)
    expected = goal_distance(grid, true_distances(grid))

    outcome = search(grid)
    layers = outcome.grid.layers()
    chain = sorted(layers, key=layers.get)

    assert len(layers) == expected
    assert [layers[c] for c in chain] == list(range(expected))
    assert chain[0] == grid.start
    for a, b in zip(chain, chain[1:]):
        assert manhattan(a, b) == 1
    assert manhattan(chain[-1], grid.goal) == 1
    assert outcome.path == chain + [grid.goal]


@pytest.mark.parametrize("seed", SEEDS)
def test_fixed_cells_survive(seed: int) -> None:
    grid = random_grid(8, 8, 0.35, seed=seed)
    before = grid.copy()

    outcome = search(grid)
    after = outcome.grid

    assert after.cells_where(OBSTACLE) == before.cells_where(OBSTACLE)
    assert after.cells_where(DESTINATION) == [before.goal]
    assert after.cells_where(START) == [before.start]
    for (cell, old), (_, new) in zip(before.scan(), after.scan()):
        assert new == old or isinstance(new, Layer)


@pytest.mark.parametrize("seed", SEEDS[:10])
def test_reference_size_grid(seed: int) -> None:
    grid = random_grid(36, 20, 1 / 3, seed=seed)
    expected = goal_distance(grid, true_distances(grid))

    outcome = search(grid)

    assert outcome.found == (expected is not None)
    if outcome.found:
        assert len(outcome.grid.layers()) == expected
