"""
Domain entities for the Invisisnake turn engine.

This module contains the board, snake, snapshot and effect types. They are
plain immutable values with no knowledge of timers, randomness or I/O.
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, clamp_level, size_for_level
from .board import Board, Cell
from .snake import Snake
from .game_state import GameState, PowerUp, PLAYING, DEAD, WON
from .effects import (
    Effect,
    Moved,
    AteFruit,
    PickedUp,
    PowerUpSpawned,
    PowerUpExpired,
    HazardSpawned,
    SpawnBlocked,
    Died,
    Won,
)

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'clamp_level', 'size_for_level',
    'Board', 'Cell',
    'Snake',
    'GameState', 'PowerUp', 'PLAYING', 'DEAD', 'WON',
    'Effect', 'Moved', 'AteFruit', 'PickedUp', 'PowerUpSpawned', 'PowerUpExpired',
    'HazardSpawned', 'SpawnBlocked', 'Died', 'Won',
]
