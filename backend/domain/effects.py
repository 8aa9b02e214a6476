"""
Effects emitted by a turn.

The renderer, audio and level controller react to these; none of them reach
back into the engine.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from .board import Cell

# Death reasons
DEATH_HAZARD = "hazard"
DEATH_SELF = "self"

# Win reasons
WIN_BOARD_FULL = "board_full"
WIN_THRESHOLD = "threshold"


@dataclass(frozen=True)
class Effect:
    kind: str = field(init=False, default="effect")

    @property
    def is_terminal(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Moved(Effect):
    head: Cell
    kind: str = field(init=False, default="moved")


@dataclass(frozen=True)
class AteFruit(Effect):
    cell: Cell
    score: int
    kind: str = field(init=False, default="ate_fruit")


@dataclass(frozen=True)
class PickedUp(Effect):
    cell: Cell
    reveal_turns: int
    kind: str = field(init=False, default="picked_up")


@dataclass(frozen=True)
class PowerUpSpawned(Effect):
    cell: Cell
    ttl: int
    kind: str = field(init=False, default="power_up_spawned")


@dataclass(frozen=True)
class PowerUpExpired(Effect):
    cell: Cell
    kind: str = field(init=False, default="power_up_expired")


@dataclass(frozen=True)
class HazardSpawned(Effect):
    cell: Cell
    kind: str = field(init=False, default="hazard_spawned")


@dataclass(frozen=True)
class SpawnBlocked(Effect):
    """Power-up spawning is off for the rest of the turn that emitted this."""

    kind: str = field(init=False, default="spawn_blocked")


@dataclass(frozen=True)
class Died(Effect):
    cell: Cell
    reason: str
    lives_remaining: int
    kind: str = field(init=False, default="died")

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Won(Effect):
    reason: str
    kind: str = field(init=False, default="won")

    @property
    def is_terminal(self) -> bool:
        return True
