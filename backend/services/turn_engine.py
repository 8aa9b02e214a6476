"""
Turn engine - resolves one direction input into the next board snapshot.

``step`` is a pure function of (state, direction, random source). The
``TurnEngine`` wrapper holds the current snapshot, replaces it wholesale after
every turn and publishes the turn's effects to subscribers such as the level
controller and audio cues.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from domain.board import Board
from domain.constants import (
    DIRECTION_VECTORS,
    RIGHT,
    STARTING_LIVES,
    VALID_MOVES,
    is_opposite,
)
from domain.effects import (
    DEATH_HAZARD,
    DEATH_SELF,
    WIN_BOARD_FULL,
    WIN_THRESHOLD,
    AteFruit,
    Died,
    Effect,
    Moved,
    PickedUp,
    SpawnBlocked,
    Won,
)
from domain.game_state import DEAD, PLAYING, WON, GameState
from domain.snake import Snake

from services.placement import find_free_cell
from services.random_source import RandomSource, SystemRandomSource
from services.spawner import decay, maybe_spawn_hazard, maybe_spawn_power_up

logger = logging.getLogger(__name__)

EffectListener = Callable[[Effect, GameState], None]


@dataclass(frozen=True)
class TurnResult:
    """
    Outcome of one step.

    Attributes:
        state: snapshot after the turn (the input snapshot if not accepted)
        effects: effects in the order they happened
        accepted: False when the input was ignored (terminal state,
            reversal, unknown direction)
        spawn_blocked: a power-up was picked up, so none could spawn this turn
    """

    state: GameState
    effects: List[Effect] = field(default_factory=list)
    accepted: bool = True
    spawn_blocked: bool = False

    @property
    def terminal_effect(self) -> Optional[Effect]:
        for effect in self.effects:
            if effect.is_terminal:
                return effect
        return None


def new_game(level: int, lives: int = STARTING_LIVES, rng: Optional[RandomSource] = None) -> GameState:
    """
    Fresh snapshot for a life at the given level: a one-cell snake in the
    center heading right, one fruit, nothing else.
    """
    rng = rng or SystemRandomSource()
    board = Board.for_level(level)
    start = board.center()
    fruit = find_free_cell(board, {start}, rng)
    if fruit is None:
        fruit = (0, 0)
    return GameState(
        board=board,
        snake=Snake([start]),
        direction=RIGHT,
        fruit=fruit,
        level=level,
        lives=lives,
    )


def _ignored(state: GameState) -> TurnResult:
    return TurnResult(state=state, effects=[], accepted=False)


def step(state: GameState, direction: str, rng: RandomSource) -> TurnResult:
    """
    Apply one direction input.

    Order matters and follows the turn rules:
      1) reject reversal (length > 1) and unknown directions
      2) compute the wrapped head
      3) lethal checks against hazards, then the whole pre-move body
      4) push the head
      5) fruit: grow, score, place a new fruit (or win on a full board);
         otherwise drop the tail
      6) power-up pickup
      7) power-up and reveal decay
      8) win check on the empty-cell threshold
      9) power-up then hazard spawn rolls
    """
    if state.is_terminal:
        return _ignored(state)
    if direction not in VALID_MOVES:
        return _ignored(state)
    if state.snake.length > 1 and is_opposite(direction, state.direction):
        return _ignored(state)

    board = state.board
    hx, hy = state.snake.head
    dx, dy = DIRECTION_VECTORS[direction]
    new_head = board.wrap((hx + dx, hy + dy))
    turn = state.turn + 1

    death_reason = None
    if new_head in state.hazards:
        death_reason = DEATH_HAZARD
    elif state.snake.contains(new_head):
        death_reason = DEATH_SELF
    if death_reason is not None:
        lives = max(0, state.lives - 1)
        logger.info(
            "Snake died at %s (%s) on level %d turn %d, %d lives left",
            new_head, death_reason, state.level, turn, lives,
        )
        dead = state.replace(status=DEAD, crash_cell=new_head, lives=lives, turn=turn)
        return TurnResult(
            state=dead,
            effects=[Died(cell=new_head, reason=death_reason, lives_remaining=lives)],
        )

    effects: List[Effect] = []
    status = PLAYING
    fruit = state.fruit
    score = state.score
    power_up = state.power_up
    reveal_turns = state.reveal_turns
    hazards = state.hazards

    ate_fruit = fruit is not None and new_head == fruit
    snake = state.snake.advance(new_head, grow=ate_fruit)

    if ate_fruit:
        score += 1
        effects.append(AteFruit(cell=new_head, score=score))
        excluded = set(snake.positions)
        excluded.update(hazards)
        if power_up is not None:
            excluded.add(power_up.cell)
        fruit = find_free_cell(board, excluded, rng)
        if fruit is None:
            status = WON
            effects.append(Won(reason=WIN_BOARD_FULL))
    else:
        effects.append(Moved(head=new_head))

    picked_up = power_up is not None and new_head == power_up.cell
    if picked_up:
        reveal_turns = snake.length
        effects.append(PickedUp(cell=power_up.cell, reveal_turns=reveal_turns))
        effects.append(SpawnBlocked())
        power_up = None

    power_up, reveal_turns, decay_effects = decay(power_up, reveal_turns, picked_up)
    effects.extend(decay_effects)

    after = state.replace(
        snake=snake,
        direction=direction,
        fruit=fruit,
        power_up=power_up,
        reveal_turns=reveal_turns,
        score=score,
        turn=turn,
        status=status,
    )

    if status == PLAYING and after.free_cell_count() < board.win_threshold():
        status = WON
        effects.append(Won(reason=WIN_THRESHOLD))
        after = after.replace(status=status)

    if status == WON:
        logger.info("Level %d cleared on turn %d with score %d", state.level, turn, score)
        return TurnResult(state=after, effects=effects, spawn_blocked=picked_up)

    power_up, spawn_effects = maybe_spawn_power_up(
        board, state.level, new_head, snake, fruit, hazards,
        power_up, reveal_turns, picked_up, rng,
    )
    effects.extend(spawn_effects)
    hazards, hazard_effects = maybe_spawn_hazard(
        board, state.level, new_head, snake, fruit, hazards, power_up, rng,
    )
    effects.extend(hazard_effects)

    after = after.replace(power_up=power_up, hazards=hazards)
    logger.debug("Turn %d: %s -> head %s, length %d", turn, direction, new_head, snake.length)
    return TurnResult(state=after, effects=effects, spawn_blocked=picked_up)


class TurnEngine:
    """
    Holds the current snapshot and runs turns against it.

    Readers only ever see whole snapshots: ``snapshot`` is swapped in one
    assignment after a turn resolves.
    """

    def __init__(self, state: GameState, rng: Optional[RandomSource] = None):
        self._state = state
        self.rng = rng or SystemRandomSource()
        self._listeners: List[EffectListener] = []
        self.last_result: Optional[TurnResult] = None

    @property
    def snapshot(self) -> GameState:
        return self._state

    def subscribe(self, listener: EffectListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EffectListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def reset(self, state: GameState) -> None:
        logger.debug("Engine reset: %r", state)
        self._state = state
        self.last_result = None

    def step(self, direction: str) -> TurnResult:
        result = step(self._state, direction, self.rng)
        self.last_result = result
        if not result.accepted:
            return result
        self._state = result.state
        for effect in result.effects:
            self._publish(effect, result.state)
        return result

    def _publish(self, effect: Effect, state: GameState) -> None:
        for listener in list(self._listeners):
            try:
                listener(effect, state)
            except Exception as e:
                logger.exception(f"Effect listener failed on {effect.kind}: {e}")
