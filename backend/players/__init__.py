"""
Player and input implementations for Invisisnake.

This module contains the player abstraction, an automated random player and
the keyboard translation layer that feed directions to the turn engine.
"""

from .base import Player
from .random_player import RandomPlayer
from .keyboard import KeyboardTranslator, CONTINUE, KEY_BINDINGS

__all__ = [
    'Player',
    'RandomPlayer',
    'KeyboardTranslator',
    'CONTINUE',
    'KEY_BINDINGS',
]
