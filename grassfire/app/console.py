# grassfire/app/console.py
#!/usr/bin/env python3
"""Plain-text rendering: x obstacle, D destination, * free, layer numbers (0 = start)."""

from grassfire.core.types import Grid, Free, Obstacle, Destination, Layer


def cell_symbol(state) -> str:
    if isinstance(state, Obstacle):
        return "x"
    if isinstance(state, Destination):
        return "D"
    if isinstance(state, Free):
        return "*"
    if isinstance(state, Layer):
        return str(state.depth)
    raise TypeError(f"not a cell state: {state!r}")


def render_grid(grid: Grid, sep: str = "\t") -> str:
    lines = []
    for row in grid.cells:
        lines.append("".join(cell_symbol(s) + sep for s in row))
    return "\n".join(lines) + "\n"
