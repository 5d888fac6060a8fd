# grassfire/core/wavefront.py
#!/usr/bin/env python3
"""
Wavefront ("grassfire") expansion.

Every pass rescans the whole grid for cells holding Layer(depth) and stamps
their free neighbours with Layer(depth + 1). A pass stops early the moment a
neighbour turns out to be the destination. The rescan costs rows * cols per
layer; there is no work queue, so traversal order is always row-major and
then EXPANSION_ORDER around each cell.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from grassfire.core.types import Grid, Cell, Layer, FREE, DESTINATION
from grassfire.core.neighbors import adjacent, EXPANSION_ORDER

log = logging.getLogger(__name__)


@dataclass
class LayerResult:
    depth: int                                    # layer that was expanded
    stamped: List[Cell] = field(default_factory=list)
    parents: List[Cell] = field(default_factory=list)
    destination: Optional[Cell] = None

    @property
    def progressed(self) -> bool:
        return bool(self.stamped) or self.destination is not None


@dataclass
class Expansion:
    depth: int = 0                 # counter after the last pass
    passes: int = 0
    stamped: int = 0
    destination: Optional[Cell] = None

    @property
    def found(self) -> bool:
        return self.destination is not None


def expand_layer(grid: Grid, depth: int) -> LayerResult:
    """Run one pass over every Layer(depth) cell."""
    res = LayerResult(depth=depth)
    frontier = Layer(depth)
    nxt = Layer(depth + 1)

    for cell, state in grid.scan():
        if state != frontier:
            continue
        res.parents.append(cell)
        for n, n_state in adjacent(grid, cell, EXPANSION_ORDER):
            if n_state == DESTINATION:
                res.destination = n
                return res
            if n_state == FREE:
                grid.set(n, nxt)
                res.stamped.append(n)
    return res


def expand(grid: Grid) -> Expansion:
    """
    Stamp layers until the destination is reached or a pass changes nothing.

    The returned depth is always one past the layer whose pass ended the
    search, which is where reconstruction starts pruning.
    """
    exp = Expansion()
    while True:
        res = expand_layer(grid, exp.depth)
        exp.passes += 1
        exp.stamped += len(res.stamped)
        exp.depth += 1
        log.debug("layer %d: %d parents, %d stamped", res.depth, len(res.parents), len(res.stamped))

        if res.destination is not None:
            exp.destination = res.destination
            break
        if not res.progressed:
            break
    return exp
