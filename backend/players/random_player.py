"""
Random player implementation - picks random safe moves.
"""

from typing import List, Optional

from domain.constants import DIRECTION_VECTORS, VALID_MOVES, is_opposite
from domain.game_state import GameState
from services.random_source import RandomSource, SystemRandomSource
from .base import Player


class RandomPlayer(Player):
    """
    Picks a direction that neither reverses the snake nor runs into a hazard
    or its own body.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or SystemRandomSource()

    def get_move(self, game_state: GameState) -> str:
        snake = game_state.snake
        head_x, head_y = snake.head

        allowed: List[str] = [
            move for move in sorted(VALID_MOVES)
            if snake.length == 1 or not is_opposite(move, game_state.direction)
        ]

        # The tail is still on the board when the head moves, so it counts
        valid_moves: List[str] = []
        for move in allowed:
            dx, dy = DIRECTION_VECTORS[move]
            target = game_state.board.wrap((head_x + dx, head_y + dy))
            if target in game_state.hazards or snake.contains(target):
                continue
            valid_moves.append(move)

        # If no valid moves, just return any legal one (we'll die anyway)
        if not valid_moves:
            return allowed[self.rng.randrange(len(allowed))]

        return valid_moves[self.rng.randrange(len(valid_moves))]
