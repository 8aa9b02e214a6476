"""
GameState entity - an immutable snapshot of the board after a turn.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Set

from .board import Board, Cell
from .constants import RIGHT
from .snake import Snake

# Snapshot status
PLAYING = "playing"
DEAD = "dead"
WON = "won"


@dataclass(frozen=True)
class PowerUp:
    """A power-up cell with the number of turns it has left on the board."""

    cell: Cell
    ttl: int

    def decayed(self) -> Optional["PowerUp"]:
        """Return this power-up one turn older, or None once it runs out."""
        ttl = self.ttl - 1
        if ttl <= 0:
            return None
        return PowerUp(cell=self.cell, ttl=ttl)


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        board: grid dimensions for the current level
        snake: the snake, head first
        direction: current heading
        fruit: fruit cell, None only once the board is full
        power_up: the single power-up on the board, if any
        hazards: persistent hazard cells
        reveal_turns: turns left on the reveal effect (0 = inactive)
        score: fruit eaten during this life
        level: current level (1-10)
        lives: lives remaining
        turn: accepted turns so far in this life
        status: PLAYING, DEAD or WON
        crash_cell: cell where the snake died, if it did
    """

    board: Board
    snake: Snake
    direction: str = RIGHT
    fruit: Optional[Cell] = None
    power_up: Optional[PowerUp] = None
    hazards: FrozenSet[Cell] = frozenset()
    reveal_turns: int = 0
    score: int = 0
    level: int = 1
    lives: int = 3
    turn: int = 0
    status: str = PLAYING
    crash_cell: Optional[Cell] = None

    @property
    def is_terminal(self) -> bool:
        return self.status != PLAYING

    def replace(self, **changes) -> "GameState":
        return dataclasses.replace(self, **changes)

    def occupied_cells(self) -> Set[Cell]:
        """Cells held by the snake, hazards, fruit and power-up."""
        occupied = set(self.snake.positions)
        occupied.update(self.hazards)
        if self.fruit is not None:
            occupied.add(self.fruit)
        if self.power_up is not None:
            occupied.add(self.power_up.cell)
        return occupied

    def free_cell_count(self) -> int:
        return self.board.total_cells - len(self.occupied_cells())

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view consumed by renderers."""
        return {
            "cols": self.board.cols,
            "rows": self.board.rows,
            "snake": [list(p) for p in self.snake.positions],
            "direction": self.direction,
            "fruit": list(self.fruit) if self.fruit is not None else None,
            "power_up": (
                {"cell": list(self.power_up.cell), "ttl": self.power_up.ttl}
                if self.power_up is not None else None
            ),
            "hazards": sorted([list(h) for h in self.hazards]),
            "reveal_turns": self.reveal_turns,
            "score": self.score,
            "level": self.level,
            "lives": self.lives,
            "turn": self.turn,
            "status": self.status,
            "crash_cell": list(self.crash_cell) if self.crash_cell is not None else None,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = fruit
        P = power-up
        X = hazard
        H = snake head
        o = snake body
        * = crash cell
        (0,0) is the top left, matching the screen orientation of moves.
        """
        board = [['.' for _ in range(self.board.cols)] for _ in range(self.board.rows)]

        if self.fruit is not None:
            fx, fy = self.fruit
            board[fy][fx] = 'F'
        if self.power_up is not None:
            px, py = self.power_up.cell
            board[py][px] = 'P'
        for hx, hy in self.hazards:
            board[hy][hx] = 'X'

        for pos_idx, (x, y) in enumerate(self.snake.positions):
            board[y][x] = 'H' if pos_idx == 0 else 'o'

        if self.crash_cell is not None:
            cx, cy = self.crash_cell
            board[cy][cx] = '*'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.board.rows)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.board.cols)))
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState level={self.level} turn={self.turn} status={self.status}, "
            f"length={self.snake.length}, fruit={self.fruit}, score={self.score}, lives={self.lives}>"
        )
