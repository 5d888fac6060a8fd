# grassfire/core/generator.py
#!/usr/bin/env python3
"""Random grids: one start, one destination, obstacles scattered at a fixed chance."""

import random
from typing import Optional

from grassfire.core.types import Grid, CellState, FREE, OBSTACLE, DESTINATION, START


def random_grid(rows: int, cols: int, obstacle_chance: float = 1 / 3,
                seed: Optional[int] = None, rng: Optional[random.Random] = None) -> Grid:
    """
    Build a rows x cols grid.

    Start and destination are drawn uniformly from distinct cells; every
    other cell becomes an obstacle with probability `obstacle_chance`.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"grid must be non-empty, got {rows}x{cols}")
    if rows * cols < 2:
        raise ValueError("grid needs at least two cells for a start and a destination")
    if not 0.0 <= obstacle_chance <= 1.0:
        raise ValueError(f"obstacle_chance must be within [0, 1], got {obstacle_chance}")

    rng = rng or random.Random(seed)
    total = rows * cols
    start_idx = rng.randrange(total)
    goal_idx = rng.randrange(total)
    while goal_idx == start_idx:
        goal_idx = rng.randrange(total)

    flat: list[CellState] = []
    for i in range(total):
        if i == start_idx:
            flat.append(START)
        elif i == goal_idx:
            flat.append(DESTINATION)
        elif rng.random() < obstacle_chance:
            flat.append(OBSTACLE)
        else:
            flat.append(FREE)

    cells = [flat[r * cols:(r + 1) * cols] for r in range(rows)]
    start = (start_idx % cols, start_idx // cols)
    goal = (goal_idx % cols, goal_idx // cols)
    return Grid(cols, rows, cells, start, goal)
