"""
Board geometry - a square toroidal grid whose size is derived from the level.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

from .constants import WIN_EMPTY_FRACTION, size_for_level

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Board:
    """
    Grid dimensions. Cells are (x, y) with 0 <= x < cols and 0 <= y < rows.
    Edges wrap: leaving one side enters the opposite side at the same offset.
    """

    cols: int
    rows: int

    def __post_init__(self):
        if self.cols < 1 or self.rows < 1:
            raise ValueError(f"Board dimensions must be positive, got {self.cols}x{self.rows}")

    @classmethod
    def for_level(cls, level: int) -> "Board":
        size = size_for_level(level)
        return cls(cols=size, rows=size)

    @property
    def total_cells(self) -> int:
        return self.cols * self.rows

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.cols and 0 <= y < self.rows

    def wrap(self, cell: Cell) -> Cell:
        x, y = cell
        return (x % self.cols, y % self.rows)

    def center(self) -> Cell:
        return (self.cols // 2, self.rows // 2)

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for y in range(self.rows):
            for x in range(self.cols):
                yield (x, y)

    def win_threshold(self) -> int:
        """Minimum number of empty cells a board must keep to stay in play."""
        return math.ceil(self.total_cells * WIN_EMPTY_FRACTION)
