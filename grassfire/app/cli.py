# grassfire/app/cli.py
#!/usr/bin/env python3
"""
Generate (or load) a grid, search it, report.

    python -m grassfire [--rows R] [--cols C] [--obstacles P] [--seed N]
                        [--map FILE] [--gui] [-v]

Exit status: 0 path found, 1 no path, 2 bad input.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from grassfire.config import resolve_settings, configure_logging
from grassfire.core.types import InvalidGrid
from grassfire.core.generator import random_grid
from grassfire.core.grassfire import search
from grassfire.app.console import render_grid
from grassfire.app.maps import load_map

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grassfire",
        description="Shortest orthogonal path on a grid with obstacles (grassfire search).",
    )
    parser.add_argument("--rows", type=int, help="Grid rows (default 36 or GRASSFIRE_ROWS).")
    parser.add_argument("--cols", type=int, help="Grid columns (default 20 or GRASSFIRE_COLS).")
    parser.add_argument("--obstacles", type=float, dest="obstacle_chance",
                        help="Chance that a cell is an obstacle, 0..1 (default 1/3).")
    parser.add_argument("--seed", type=int, help="Seed for the random grid.")
    parser.add_argument("--map", type=Path, help="Load a JSON map instead of generating one.")
    parser.add_argument("--gui", action="store_true", help="Open the pygame viewer.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for INFO logs, -vv for DEBUG.")
    return parser


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)

    try:
        settings = resolve_settings().override(
            rows=ns.rows, cols=ns.cols, obstacle_chance=ns.obstacle_chance, seed=ns.seed,
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    level = settings.log_level
    if ns.verbose == 1:
        level = logging.INFO
    elif ns.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    try:
        if ns.map is not None:
            grid = load_map(ns.map)
        else:
            grid = random_grid(settings.rows, settings.cols, settings.obstacle_chance, seed=settings.seed)
    except (InvalidGrid, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log.info("grid %dx%d, start %s, goal %s", grid.width, grid.height, grid.start, grid.goal)

    if ns.gui:
        from grassfire.app.viewer import Viewer
        Viewer(grid, settings).run()
        return 0

    t0 = time.perf_counter()
    try:
        outcome = search(grid)
    except InvalidGrid as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    run_ms = 1000 * (time.perf_counter() - t0)

    print("Path found." if outcome.found else "No path found.", end="")
    print(f" ({run_ms:.0f} ms).\n")
    print(render_grid(outcome.grid), end="")
    return 0 if outcome.found else 1


if __name__ == "__main__":
    sys.exit(main())
