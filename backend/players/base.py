"""
Base player interface for driving the turn engine.
"""

from domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    A player looks at the current snapshot and returns the direction to
    request next.
    """

    def get_move(self, game_state: GameState) -> str:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError
