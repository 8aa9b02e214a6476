"""
Level and lives bookkeeping on top of the turn engine.

Phases:
  playing        - turns are being resolved
  life_lost      - died with lives left; continue retries the same level
  game_over      - died on the last life; continue restarts at level 1
  level_cleared  - won; continue advances one level (lives carry over)

The controller never advances on its own: every terminal phase waits for an
explicit acknowledge() call. The overlay for a terminal phase is revealed by a
deferred timer that is cancelled whenever the board is reset first.
"""

import logging
from typing import Any, Optional

from domain.constants import MAX_LEVEL, MIN_LEVEL, OVERLAY_DELAY_MS, STARTING_LIVES, clamp_level
from domain.effects import Died, Effect, Won
from domain.game_state import GameState

from services.overlay_timer import ThreadingScheduler, TimerHandle
from services.turn_engine import TurnEngine, new_game

logger = logging.getLogger(__name__)

PLAYING = "playing"
LIFE_LOST = "life_lost"
GAME_OVER = "game_over"
LEVEL_CLEARED = "level_cleared"


class LevelController:
    def __init__(
        self,
        engine: TurnEngine,
        overlay_delay_ms: int = OVERLAY_DELAY_MS,
        scheduler=None,
    ):
        self.engine = engine
        self.overlay_delay_ms = overlay_delay_ms
        self.scheduler = scheduler or ThreadingScheduler()
        self.phase = PLAYING
        self.overlay_visible = False
        self.selected_level = engine.snapshot.level
        self._overlay_timer: Optional[TimerHandle] = None
        engine.subscribe(self._on_effect)

    @property
    def level(self) -> int:
        return self.engine.snapshot.level

    @property
    def lives(self) -> int:
        return self.engine.snapshot.lives

    def _on_effect(self, effect: Effect, state: GameState) -> None:
        if isinstance(effect, Died):
            if effect.lives_remaining > 0:
                self.phase = LIFE_LOST
            else:
                self.phase = GAME_OVER
                self.selected_level = MIN_LEVEL
            logger.info(f"Level {state.level}: {self.phase}, {effect.lives_remaining} lives left")
            self._schedule_overlay()
        elif isinstance(effect, Won):
            self.phase = LEVEL_CLEARED
            logger.info(f"Level {state.level} cleared with score {state.score}")
            self._schedule_overlay()

    def _schedule_overlay(self) -> None:
        self._cancel_overlay()
        self.overlay_visible = False
        self._overlay_timer = self.scheduler.call_later(self.overlay_delay_ms, self._reveal_overlay)

    def _reveal_overlay(self) -> None:
        if self.engine.snapshot.is_terminal:
            self.overlay_visible = True

    def _cancel_overlay(self) -> None:
        if self._overlay_timer is not None:
            self._overlay_timer.cancel()
            self._overlay_timer = None

    def _start(self, level: int, lives: int) -> None:
        self._cancel_overlay()
        self.overlay_visible = False
        self.phase = PLAYING
        self.selected_level = level
        self.engine.reset(new_game(level, lives, self.engine.rng))
        logger.info(f"Starting level {level} with {lives} lives")

    def acknowledge(self) -> bool:
        """
        Handle a "continue" signal.

        A cleared level advances straight away. A lost life or game over only
        continues once its overlay is showing.

        Returns:
            True if the board was rebuilt.
        """
        if self.phase == LEVEL_CLEARED:
            self._start(min(MAX_LEVEL, self.level + 1), self.lives)
            return True
        if not self.overlay_visible:
            return False
        if self.phase == LIFE_LOST:
            self._start(self.level, self.lives)
            return True
        if self.phase == GAME_OVER:
            self._start(MIN_LEVEL, STARTING_LIVES)
            return True
        return False

    def select_level(self, raw: Any) -> int:
        """Start the picked level with full lives. Input is clamped, never rejected."""
        level = clamp_level(raw)
        self._start(level, STARTING_LIVES)
        return level

    def to_dict(self) -> dict:
        return {
            "phase": self.phase,
            "overlay_visible": self.overlay_visible,
            "selected_level": self.selected_level,
            "level": self.level,
            "lives": self.lives,
        }
