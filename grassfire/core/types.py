# grassfire/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any, Iterator, Union

Cell = Tuple[int, int]  # (col, row)


class InvalidGrid(ValueError):
    """Raised before a search when the grid breaks the start/destination rules."""


# ---------- cell states ----------

@dataclass(frozen=True)
class Free:
    pass


@dataclass(frozen=True)
class Obstacle:
    pass


@dataclass(frozen=True)
class Destination:
    pass


@dataclass(frozen=True)
class Layer:
    depth: int

    def __post_init__(self):
        if self.depth < 0:
            raise ValueError(f"layer depth must be >= 0, got {self.depth}")


CellState = Union[Free, Obstacle, Destination, Layer]

FREE = Free()
OBSTACLE = Obstacle()
DESTINATION = Destination()
START = Layer(0)


class _OffGrid:
    """Result of a lookup outside the grid. Equal to nothing but itself."""

    def __repr__(self) -> str:
        return "OFF_GRID"


OFF_GRID = _OffGrid()


# ---------- grid ----------

@dataclass
class Grid:
    width: int
    height: int
    cells: List[List[CellState]]       # [row][col]
    start: Cell
    goal: Cell

    @classmethod
    def empty(cls, width: int, height: int, start: Cell, goal: Cell) -> "Grid":
        cells: List[List[CellState]] = [[FREE] * width for _ in range(height)]
        sx, sy = start
        gx, gy = goal
        cells[sy][sx] = START
        cells[gy][gx] = DESTINATION
        return cls(width, height, cells, start, goal)

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, c: Cell):
        """Bounds-checked lookup; OFF_GRID outside the grid."""
        if not self.in_bounds(c):
            return OFF_GRID
        x, y = c
        return self.cells[y][x]

    def set(self, c: Cell, state: CellState) -> None:
        x, y = c
        self.cells[y][x] = state

    def scan(self) -> Iterator[Tuple[Cell, CellState]]:
        """Every cell in row-major order (top row first, left to right)."""
        for row in range(self.height):
            for col in range(self.width):
                yield (col, row), self.cells[row][col]

    def cells_where(self, state: CellState) -> List[Cell]:
        return [c for c, s in self.scan() if s == state]

    def layers(self) -> Dict[Cell, int]:
        return {c: s.depth for c, s in self.scan() if isinstance(s, Layer)}

    def copy(self) -> "Grid":
        return Grid(
            self.width,
            self.height,
            [row[:] for row in self.cells],
            self.start,
            self.goal,
        )

    def validate(self) -> None:
        """Check the shape and the single Start / single Destination rule."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidGrid(f"grid must be non-empty, got {self.width}x{self.height}")
        if len(self.cells) != self.height or any(len(r) != self.width for r in self.cells):
            raise InvalidGrid("cells size mismatch")
        if not self.in_bounds(self.start):
            raise InvalidGrid(f"start {self.start} out of bounds")
        if not self.in_bounds(self.goal):
            raise InvalidGrid(f"goal {self.goal} out of bounds")

        starts = self.cells_where(START)
        goals = self.cells_where(DESTINATION)
        if starts != [self.start]:
            raise InvalidGrid(f"expected a single start at {self.start}, found {starts}")
        if goals != [self.goal]:
            raise InvalidGrid(f"expected a single destination at {self.goal}, found {goals}")
        stamped = [c for c, d in self.layers().items() if d > 0]
        if stamped:
            raise InvalidGrid(f"grid already holds layer stamps at {stamped[:5]}")


# ---------- step / outcome ----------

@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Outcome:
    grid: Grid
    depth: int

    @property
    def found(self) -> bool:
        return isinstance(self, PathFound)


@dataclass
class PathFound(Outcome):
    path: List[Cell] = field(default_factory=list)   # start .. destination

    @property
    def length(self) -> int:
        """Number of orthogonal moves from start to destination."""
        return len(self.path) - 1


@dataclass
class NoPathFound(Outcome):
    pass
