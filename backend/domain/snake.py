"""
Snake entity for the turn engine.
"""

from typing import Iterable, Tuple

from .board import Cell


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: tuple of (x, y) from head at index 0 to tail at the end

    Snakes are values: moving produces a new Snake and leaves this one intact,
    so snapshots holding a Snake never change underneath a reader.
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: Iterable[Cell]):
        cells = tuple(tuple(p) for p in positions)
        if not cells:
            raise ValueError("Snake needs at least one cell")
        if len(set(cells)) != len(cells):
            raise ValueError(f"Snake cells must be unique: {cells}")
        self._positions: Tuple[Cell, ...] = cells

    @property
    def positions(self) -> Tuple[Cell, ...]:
        return self._positions

    @property
    def head(self) -> Cell:
        """Return the head position (first element)."""
        return self._positions[0]

    @property
    def tail(self) -> Cell:
        return self._positions[-1]

    @property
    def length(self) -> int:
        return len(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self):
        return iter(self._positions)

    def contains(self, cell: Cell) -> bool:
        return cell in self._positions

    def advance(self, new_head: Cell, grow: bool) -> "Snake":
        """
        Return the snake after its head enters new_head.

        The tail is kept when growing and dropped otherwise.
        """
        body = self._positions if grow else self._positions[:-1]
        return Snake((new_head,) + body)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Snake):
            return NotImplemented
        return self._positions == other._positions

    def __hash__(self) -> int:
        return hash(self._positions)

    def __repr__(self) -> str:
        return f"Snake({list(self._positions)})"
