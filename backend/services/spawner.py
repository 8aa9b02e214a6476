"""
Spawn and decay rules for power-ups and hazards.

Each helper takes the values it needs and returns the new value along with
the effects it emitted, so the turn engine can thread them through a single
turn without touching any shared state.
"""

import logging
import math
from typing import FrozenSet, List, Optional, Tuple

from domain.board import Board, Cell
from domain.constants import (
    HAZARD_CHANCE_PER_TURN,
    HAZARD_MIN_LEVEL,
    POWERUP_CHANCE_PER_TURN,
    POWERUP_MIN_LEVEL,
    POWERUP_MIN_SNAKE_LENGTH,
    POWERUP_TTL_BONUS,
    max_hazards_for_level,
)
from domain.effects import Effect, HazardSpawned, PowerUpExpired, PowerUpSpawned
from domain.game_state import PowerUp
from domain.snake import Snake

from services.placement import find_free_cell
from services.random_source import RandomSource

logger = logging.getLogger(__name__)


def power_up_ttl(head: Cell, cell: Cell) -> int:
    """Turns a fresh power-up stays up: its distance from the head plus a margin."""
    distance = math.hypot(cell[0] - head[0], cell[1] - head[1])
    return max(1, math.ceil(distance)) + POWERUP_TTL_BONUS


def decay(
    power_up: Optional[PowerUp],
    reveal_turns: int,
    picked_up: bool,
) -> Tuple[Optional[PowerUp], int, List[Effect]]:
    """
    Age the power-up and the reveal counter by one turn.

    On the turn a power-up is picked up the reveal counter has just been set
    and is left alone.
    """
    effects: List[Effect] = []
    if power_up is not None:
        aged = power_up.decayed()
        if aged is None:
            effects.append(PowerUpExpired(cell=power_up.cell))
        power_up = aged
    if reveal_turns > 0 and not picked_up:
        reveal_turns -= 1
    return power_up, reveal_turns, effects


def maybe_spawn_power_up(
    board: Board,
    level: int,
    head: Cell,
    snake: Snake,
    fruit: Optional[Cell],
    hazards: FrozenSet[Cell],
    power_up: Optional[PowerUp],
    reveal_turns: int,
    spawn_blocked: bool,
    rng: RandomSource,
) -> Tuple[Optional[PowerUp], List[Effect]]:
    """
    Roll for a new power-up.

    The chance roll is only drawn once every deterministic condition holds,
    and the placement draws follow it.
    """
    if spawn_blocked:
        return power_up, []
    if level < POWERUP_MIN_LEVEL:
        return power_up, []
    if power_up is not None:
        return power_up, []
    if reveal_turns > 0:
        return power_up, []
    if snake.length < POWERUP_MIN_SNAKE_LENGTH:
        return power_up, []
    if rng.random() > POWERUP_CHANCE_PER_TURN:
        return power_up, []

    excluded = set(snake.positions)
    if fruit is not None:
        excluded.add(fruit)
    excluded.update(hazards)
    cell = find_free_cell(board, excluded, rng)
    if cell is None:
        logger.debug("No free cell for a power-up, skipping spawn")
        return power_up, []

    spawned = PowerUp(cell=cell, ttl=power_up_ttl(head, cell))
    return spawned, [PowerUpSpawned(cell=spawned.cell, ttl=spawned.ttl)]


def maybe_spawn_hazard(
    board: Board,
    level: int,
    head: Cell,
    snake: Snake,
    fruit: Optional[Cell],
    hazards: FrozenSet[Cell],
    power_up: Optional[PowerUp],
    rng: RandomSource,
) -> Tuple[FrozenSet[Cell], List[Effect]]:
    """Roll for a new hazard, up to the level's hazard cap."""
    if level < HAZARD_MIN_LEVEL:
        return hazards, []
    if len(hazards) >= max_hazards_for_level(level):
        return hazards, []
    if rng.random() > HAZARD_CHANCE_PER_TURN:
        return hazards, []

    excluded = set(snake.positions)
    if fruit is not None:
        excluded.add(fruit)
    if power_up is not None:
        excluded.add(power_up.cell)
    excluded.update(hazards)
    excluded.add(head)
    cell = find_free_cell(board, excluded, rng)
    if cell is None:
        logger.debug("No free cell for a hazard, skipping spawn")
        return hazards, []

    return hazards | {cell}, [HazardSpawned(cell=cell)]
