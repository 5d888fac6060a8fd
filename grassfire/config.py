# grassfire/config.py
#!/usr/bin/env python3
"""
Defaults and environment overrides.

Resolution order: module defaults, then GRASSFIRE_* environment variables,
then whatever the CLI passes in explicitly.
"""

import logging
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

NUM_ROWS = 36
NUM_COLS = 20
OBSTACLE_CHANCE = 1 / 3

REPO_ROOT = Path(__file__).resolve().parents[1]
MAP_DIR = REPO_ROOT / "maps"


@dataclass(frozen=True)
class Settings:
    rows: int = NUM_ROWS
    cols: int = NUM_COLS
    obstacle_chance: float = OBSTACLE_CHANCE
    seed: Optional[int] = None
    log_level: int = logging.WARNING

    def override(self, **kwargs) -> "Settings":
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(env: Mapping[str, str], name: str) -> Optional[float]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_level(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"{name} must be a logging level name, got {raw!r}")
    return level


def resolve_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    return Settings().override(
        rows=_env_int(env, "GRASSFIRE_ROWS"),
        cols=_env_int(env, "GRASSFIRE_COLS"),
        obstacle_chance=_env_float(env, "GRASSFIRE_OBSTACLE_CHANCE"),
        seed=_env_int(env, "GRASSFIRE_SEED"),
        log_level=_env_level(env, "GRASSFIRE_LOG_LEVEL"),
    )


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a stdout handler to the root logger unless one is already there."""
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
