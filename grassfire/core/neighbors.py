# grassfire/core/neighbors.py
#!/usr/bin/env python3
"""
Orthogonal neighbour traversal shared by both search phases.

Each phase scans neighbours in its own fixed order. The orders differ and the
first match wins, so changing either one changes which of several equally
short paths is kept.
"""

from typing import Iterator, Tuple

from grassfire.core.types import Grid, Cell

Direction = Tuple[int, int]  # (dcol, drow)

EAST: Direction = (1, 0)
NORTH: Direction = (0, -1)
WEST: Direction = (-1, 0)
SOUTH: Direction = (0, 1)

# forward stamping
EXPANSION_ORDER: Tuple[Direction, ...] = (EAST, NORTH, WEST, SOUTH)
# stepping back from the destination
BACKTRACK_ORDER: Tuple[Direction, ...] = (EAST, SOUTH, WEST, NORTH)


def adjacent(grid: Grid, c: Cell, order: Tuple[Direction, ...]) -> Iterator[Tuple[Cell, object]]:
    """Yield (neighbour, state) in `order`; off-grid neighbours come back as OFF_GRID."""
    x, y = c
    for dx, dy in order:
        n = (x + dx, y + dy)
        yield n, grid.at(n)
