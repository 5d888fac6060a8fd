# grassfire/core/backtrack.py
#!/usr/bin/env python3
"""
Path reconstruction over a stamped grid.

Walks from the destination back to the start one layer at a time. At each
layer the first neighbour (in BACKTRACK_ORDER) holding that layer is kept
and every other cell of the layer goes back to Free, so only one shortest
path survives, still labelled with its distances from the start.
"""

import logging
from typing import List, Optional

from grassfire.core.types import Grid, Cell, Layer, FREE
from grassfire.core.neighbors import adjacent, BACKTRACK_ORDER

log = logging.getLogger(__name__)


def prune_layer(grid: Grid, depth: int, keep: Optional[Cell] = None) -> int:
    """Reset every Layer(depth) cell except `keep` to Free. Returns the count."""
    target = Layer(depth)
    removed = 0
    for cell, state in grid.scan():
        if state == target and cell != keep:
            grid.set(cell, FREE)
            removed += 1
    return removed


def _predecessor(grid: Grid, c: Cell, depth: int) -> Optional[Cell]:
    target = Layer(depth)
    for n, state in adjacent(grid, c, BACKTRACK_ORDER):
        if state == target:
            return n
    return None


def reconstruct(grid: Grid, destination: Cell, depth: int) -> List[Cell]:
    """
    Keep one shortest path and scrub the rest.

    `depth` is the expansion counter as it stood after the pass that found
    the destination. That layer was only partially stamped and never
    touches the path, so it is cleared before walking back.

    Returns the path from start to destination, both inclusive.
    """
    current = destination
    chain: List[Cell] = [destination]

    prune_layer(grid, depth, keep=current)
    while depth > 0:
        prev = _predecessor(grid, current, depth)
        if prev is not None:
            prune_layer(grid, depth, keep=prev)
            current = prev
            chain.append(current)
        depth -= 1

    origin = _predecessor(grid, current, 0)
    if origin is not None:
        chain.append(origin)
    chain.reverse()
    if chain[0] != grid.start:
        # only reachable if the grid was not a fresh expansion
        log.warning("reconstructed path starts at %s, not at start %s", chain[0], grid.start)
    return chain
