"""
Free-cell placement shared by fruit, power-up and hazard spawning.
"""

from typing import Collection, Optional

from domain.board import Board, Cell
from domain.constants import FREE_CELL_ATTEMPTS

from services.random_source import RandomSource


def find_free_cell(
    board: Board,
    excluded: Collection[Cell],
    rng: RandomSource,
    attempts: int = FREE_CELL_ATTEMPTS,
) -> Optional[Cell]:
    """
    Pick a cell not in ``excluded``.

    Tries uniform random cells first (x drawn before y), then falls back to a
    row-major scan for the first free cell.

    Returns:
        The chosen cell, or None when the board has no free cell.
    """
    excluded = set(excluded)
    if len(excluded) >= board.total_cells:
        return None

    for _ in range(attempts):
        x = rng.randrange(board.cols)
        y = rng.randrange(board.rows)
        if (x, y) not in excluded:
            return (x, y)

    for cell in board.cells():
        if cell not in excluded:
            return cell
    return None
