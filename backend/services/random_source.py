"""
Random sources for spawn rolls and free-cell placement.

The engine never touches the module-level ``random`` generator. Everything
goes through a RandomSource so a session can run unseeded while tests replay
an exact sequence of draws.
"""

import random
from typing import Iterable, List, Optional, Protocol


class RandomSource(Protocol):
    def random(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def randrange(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        ...


class SystemRandomSource:
    """Unseeded (or optionally seeded) source backed by random.Random."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randrange(self, n: int) -> int:
        return self._rng.randrange(n)


class SeededRandomSource(SystemRandomSource):
    def __init__(self, seed: int):
        super().__init__(seed)


class ScriptedRandomSource:
    """
    Replays a fixed list of floats.

    randrange(n) consumes one float and returns int(value * n), the same
    floor-of-scaled-float draw the placement code expects.
    """

    def __init__(self, values: Iterable[float]):
        self._values: List[float] = list(values)
        self._index = 0

    @property
    def consumed(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index

    def random(self) -> float:
        if self._index >= len(self._values):
            raise IndexError(f"Scripted random source exhausted after {self._index} draws")
        value = self._values[self._index]
        self._index += 1
        return value

    def randrange(self, n: int) -> int:
        return min(n - 1, int(self.random() * n))
