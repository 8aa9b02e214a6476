"""
Game constants for Invisisnake.
"""

import math
from typing import Any, Dict, Tuple

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen orientation: y grows downward
DIRECTION_VECTORS: Dict[str, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES: Dict[str, str] = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Levels and lives
MIN_LEVEL = 1
MAX_LEVEL = 10
STARTING_LIVES = 3

# Terminal overlay reveal delay
OVERLAY_DELAY_MS = 1000

# Power-ups
POWERUP_MIN_LEVEL = 2
POWERUP_CHANCE_PER_TURN = 0.25
POWERUP_MIN_SNAKE_LENGTH = 10
POWERUP_TTL_BONUS = 3

# Hazards
HAZARD_MIN_LEVEL = 3
HAZARD_CHANCE_PER_TURN = 0.12

# A level is cleared once fewer than this share of cells are empty
WIN_EMPTY_FRACTION = 0.15

# Random placement tries before the row-major scan
FREE_CELL_ATTEMPTS = 128


def is_opposite(a: str, b: str) -> bool:
    return OPPOSITES.get(a) == b


def size_for_level(level: int) -> int:
    """Board edge length for a level (boards are square)."""
    return max(3, 2 + level)


def max_hazards_for_level(level: int) -> int:
    return max(0, level - 2)


def clamp_level(raw: Any) -> int:
    """
    Parse level picker input.

    Numeric input is floored and clamped to [MIN_LEVEL, MAX_LEVEL].
    Anything that is not a finite number (None, "", "abc", NaN) becomes 1.
    """
    if isinstance(raw, bool) or raw is None:
        return MIN_LEVEL
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return MIN_LEVEL
    if math.isnan(value):
        return MIN_LEVEL
    if math.isinf(value):
        return MAX_LEVEL if value > 0 else MIN_LEVEL
    return max(MIN_LEVEL, min(MAX_LEVEL, math.floor(value)))
