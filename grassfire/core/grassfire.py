# grassfire/core/grassfire.py
#!/usr/bin/env python3
"""
Grassfire search: wavefront expansion followed by path reconstruction.

Two ways in:
- search(grid) runs both phases to completion and returns an Outcome.
- GrassfireAlgo follows the viewer's init(grid) / reset() / step() API and
  expands one layer per step(), then reconstructs on the step after the
  destination is reached.

Both mutate the grid they are given. Pass grid.copy() to keep the original.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from grassfire.core.types import Grid, Cell, StepResult, Outcome, PathFound, NoPathFound
from grassfire.core.wavefront import expand, expand_layer
from grassfire.core.backtrack import reconstruct

log = logging.getLogger(__name__)


def search(grid: Grid) -> Outcome:
    """Find one shortest path from start to destination, or report none."""
    grid.validate()

    exp = expand(grid)
    if not exp.found:
        log.info("no path after %d layers (%d cells stamped)", exp.passes, exp.stamped)
        return NoPathFound(grid=grid, depth=exp.depth)

    path = reconstruct(grid, exp.destination, exp.depth)
    log.info("path found: %d moves, %d cells stamped", len(path) - 1, exp.stamped)
    return PathFound(grid=grid, depth=exp.depth, path=path)


@dataclass
class GrassfireAlgo:
    name: str = "Grassfire"

    grid: Optional[Grid] = None
    pristine: Optional[Grid] = None
    depth: int = 0
    passes: int = 0
    stamped_count: int = 0
    destination: Optional[Cell] = None
    path: List[Cell] = field(default_factory=list)
    done: bool = False
    no_path: bool = False

    def init(self, grid: Grid) -> None:
        grid.validate()
        self.grid = grid
        self.pristine = grid.copy()
        self.reset()

    def reset(self) -> None:
        """Put the grid back the way init() found it and start over."""
        if self.grid is None:
            return
        self.grid.cells = [row[:] for row in self.pristine.cells]
        self.depth = 0
        self.passes = 0
        self.stamped_count = 0
        self.destination = None
        self.path = []
        self.done = False
        self.no_path = False

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=self.path, metrics=self._metrics())

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if self.destination is not None:
            self.path = reconstruct(self.grid, self.destination, self.depth)
            self.done = True
            return StepResult(status="done", current=self.destination, path=self.path,
                              metrics=self._metrics())

        res = expand_layer(self.grid, self.depth)
        self.passes += 1
        self.depth += 1
        self.stamped_count += len(res.stamped)

        if res.destination is not None:
            self.destination = res.destination
            return StepResult(status="running", opened=res.stamped, closed=res.parents,
                              current=res.destination, metrics=self._metrics())

        if not res.progressed:
            self.no_path = True
            return StepResult(status="no_path", closed=res.parents, metrics=self._metrics())

        return StepResult(status="running", opened=res.stamped, closed=res.parents,
                          metrics=self._metrics())

    def outcome(self) -> Optional[Outcome]:
        """Outcome once the run is finished, else None."""
        if self.done:
            return PathFound(grid=self.grid, depth=self.depth, path=self.path)
        if self.no_path:
            return NoPathFound(grid=self.grid, depth=self.depth)
        return None

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "depth": self.depth,
            "passes": self.passes,
            "stamped": self.stamped_count,
            "path_len": max(0, len(self.path) - 1),
        }
