# grassfire/app/maps.py
#!/usr/bin/env python3
"""
Map files -> Grid.

JSON maps come in one of two shapes:

    {"width": 4, "height": 3, "start": [0, 0], "goal": [3, 2],
     "cells": [[0, 0, 0, 0], [1, 1, 0, 1], [0, 0, 0, 0]]}

where 1 is an obstacle and anything else is free, or

    {"rows": ["S...", "xx.x", "...D"]}

using the same symbols as grid_from_rows().
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

from grassfire.core.types import Grid, Cell, CellState, InvalidGrid, FREE, OBSTACLE, DESTINATION, START

SYMBOLS = {
    ".": FREE,
    "*": FREE,
    "x": OBSTACLE,
    "S": START,
    "0": START,
    "D": DESTINATION,
}


def _tokens(line: str) -> List[str]:
    """Separated rows ("S . x", or tab separated as render_grid prints) or packed ("S.x")."""
    parts = line.split()
    if len(parts) > 1:
        return parts
    return list(line.strip())


def grid_from_rows(lines: Sequence[str]) -> Grid:
    """Parse rows like "S . x", "S\\t.\\tx" or "S.x" into a Grid."""
    if isinstance(lines, (str, bytes)) or not isinstance(lines, (list, tuple)):
        raise InvalidGrid(f"rows must be a list of strings, got {type(lines).__name__}")

    cells: List[List[CellState]] = []
    start: Optional[Cell] = None
    goal: Optional[Cell] = None

    for row, line in enumerate(lines):
        if not isinstance(line, str):
            raise InvalidGrid(f"row {row} must be a string, got {type(line).__name__}")
        out: List[CellState] = []
        for col, ch in enumerate(_tokens(line)):
            if ch not in SYMBOLS:
                raise InvalidGrid(f"unknown symbol {ch!r} at row {row}, col {col}")
            state = SYMBOLS[ch]
            if state == START:
                if start is not None:
                    raise InvalidGrid(f"second start at {(col, row)}")
                start = (col, row)
            elif state == DESTINATION:
                if goal is not None:
                    raise InvalidGrid(f"second destination at {(col, row)}")
                goal = (col, row)
            out.append(state)
        cells.append(out)

    if not cells:
        raise InvalidGrid("empty map")
    if start is None:
        raise InvalidGrid("map has no start")
    if goal is None:
        raise InvalidGrid("map has no destination")

    grid = Grid(len(cells[0]), len(cells), cells, start, goal)
    grid.validate()
    return grid


def _coord(data: dict, key: str) -> Cell:
    value = data[key]
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)):
        raise InvalidGrid(f"{key} must be a [col, row] pair of integers, got {value!r}")
    return (value[0], value[1])


def _from_cells(data: dict) -> Grid:
    try:
        width = int(data["width"])
        height = int(data["height"])
        start = _coord(data, "start")
        goal = _coord(data, "goal")
        raw = data["cells"]
    except (KeyError, TypeError, ValueError) as ex:
        raise InvalidGrid(f"malformed map: {ex}") from ex

    if not isinstance(raw, list) or not all(isinstance(r, list) for r in raw):
        raise InvalidGrid("cells must be a list of rows")
    if len(raw) != height or any(len(r) != width for r in raw):
        raise InvalidGrid("cells size mismatch")
    sx, sy = start; gx, gy = goal
    if not (0 <= sx < width and 0 <= sy < height):
        raise InvalidGrid("start out of bounds")
    if not (0 <= gx < width and 0 <= gy < height):
        raise InvalidGrid("goal out of bounds")
    if start == goal:
        raise InvalidGrid("start and goal must differ")

    cells: List[List[CellState]] = [[OBSTACLE if v == 1 else FREE for v in r] for r in raw]
    cells[sy][sx] = START
    cells[gy][gx] = DESTINATION
    grid = Grid(width, height, cells, start, goal)
    grid.validate()
    return grid


def load_map(path: Path) -> Grid:
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as ex:
            raise InvalidGrid(f"{path}: not valid JSON ({ex})") from ex
    if not isinstance(data, dict):
        raise InvalidGrid(f"{path}: expected a JSON object")
    if "rows" in data:
        return grid_from_rows(data["rows"])
    return _from_cells(data)
