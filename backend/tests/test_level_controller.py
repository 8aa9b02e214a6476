"""
Tests for level progression, lives and the deferred overlay.
"""

import os
import sys

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.board import Board  # noqa: E402
from domain.constants import LEFT, RIGHT  # noqa: E402
from domain.game_state import GameState  # noqa: E402
from domain.snake import Snake  # noqa: E402
from services.level_controller import (  # noqa: E402
    GAME_OVER,
    LEVEL_CLEARED,
    LIFE_LOST,
    PLAYING,
    LevelController,
)
from services.overlay_timer import ManualScheduler  # noqa: E402
from services.random_source import SeededRandomSource  # noqa: E402
from services.turn_engine import TurnEngine, new_game  # noqa: E402


def build(level=3, lives=3):
    rng = SeededRandomSource(1234)
    engine = TurnEngine(new_game(level, lives, rng), rng)
    scheduler = ManualScheduler()
    controller = LevelController(engine, overlay_delay_ms=1000, scheduler=scheduler)
    return engine, controller, scheduler


def die(engine, level=3, lives=3):
    """Put the snake right in front of a hazard and walk into it."""
    engine.reset(GameState(
        board=Board.for_level(level),
        snake=Snake([(1, 1)]),
        direction=RIGHT,
        fruit=(0, 0),
        hazards=frozenset({(2, 1)}),
        level=level,
        lives=lives,
    ))
    return engine.step(RIGHT)


def win(engine, level=1, lives=3):
    """Fill a 3x3 board by eating the last free cell."""
    snake = [(1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2)]
    engine.reset(GameState(
        board=Board(3, 3),
        snake=Snake(snake),
        direction=LEFT,
        fruit=(0, 0),
        level=level,
        lives=lives,
    ))
    return engine.step(LEFT)


class TestLifeLost:
    def test_death_with_lives_left(self):
        engine, controller, _ = build()
        die(engine, lives=3)

        assert controller.phase == LIFE_LOST
        assert controller.lives == 2
        assert not controller.overlay_visible

    def test_overlay_appears_after_delay(self):
        engine, controller, scheduler = build()
        die(engine)

        scheduler.advance(999)
        assert not controller.overlay_visible
        scheduler.advance(1)
        assert controller.overlay_visible

    def test_continue_ignored_until_overlay(self):
        engine, controller, scheduler = build()
        die(engine)

        assert controller.acknowledge() is False
        assert controller.phase == LIFE_LOST

        scheduler.advance(1000)
        assert controller.acknowledge() is True
        assert controller.phase == PLAYING

    def test_retry_keeps_level_and_remaining_lives(self):
        engine, controller, scheduler = build(level=3)
        die(engine, level=3, lives=3)
        scheduler.advance(1000)
        controller.acknowledge()

        state = engine.snapshot
        assert state.level == 3
        assert state.lives == 2
        assert state.board == Board(5, 5)
        assert state.snake.positions == ((2, 2),)
        assert state.score == 0
        assert state.hazards == frozenset()
        assert not state.is_terminal
        assert not controller.overlay_visible


class TestGameOver:
    def test_last_life_is_game_over(self):
        engine, controller, _ = build(level=5)
        die(engine, level=5, lives=1)

        assert controller.phase == GAME_OVER
        assert controller.lives == 0
        assert controller.selected_level == 1

    def test_continue_restarts_level_one_with_full_lives(self):
        engine, controller, scheduler = build(level=5)
        die(engine, level=5, lives=1)
        scheduler.advance(1000)
        assert controller.acknowledge()

        assert engine.snapshot.level == 1
        assert engine.snapshot.lives == 3
        assert engine.snapshot.board == Board(3, 3)
        assert controller.phase == PLAYING


class TestLevelCleared:
    def test_win_clears_level(self):
        engine, controller, _ = build(level=1)
        win(engine, level=1, lives=2)
        assert controller.phase == LEVEL_CLEARED

    def test_continue_advances_without_waiting_and_keeps_lives(self):
        engine, controller, _ = build(level=1)
        win(engine, level=4, lives=2)

        assert controller.acknowledge()
        assert engine.snapshot.level == 5
        assert engine.snapshot.lives == 2
        assert engine.snapshot.board == Board(7, 7)

    def test_level_ten_stays_at_ten(self):
        engine, controller, _ = build(level=1)
        win(engine, level=10, lives=3)
        controller.acknowledge()
        assert engine.snapshot.level == 10

    def test_overlay_for_win(self):
        engine, controller, scheduler = build(level=1)
        win(engine)
        scheduler.advance(1000)
        assert controller.overlay_visible


class TestLevelSelection:
    def test_select_level_resets_lives(self):
        engine, controller, scheduler = build(level=3)
        die(engine, level=3, lives=3)
        scheduler.advance(1000)
        controller.acknowledge()
        assert engine.snapshot.lives == 2

        assert controller.select_level(6) == 6
        assert engine.snapshot.lives == 3
        assert engine.snapshot.board == Board(8, 8)
        assert controller.selected_level == 6

    def test_select_level_clamps_input(self):
        engine, controller, _ = build()
        assert controller.select_level("abc") == 1
        assert controller.select_level("7.9") == 7
        assert controller.select_level(99) == 10
        assert engine.snapshot.level == 10

    def test_select_level_cancels_pending_overlay(self):
        engine, controller, scheduler = build()
        die(engine)
        controller.select_level(4)

        scheduler.advance(5000)
        assert not controller.overlay_visible
        assert controller.phase == PLAYING
        assert scheduler.pending_count == 0

    def test_continue_while_playing_does_nothing(self):
        engine, controller, _ = build()
        state = engine.snapshot
        assert controller.acknowledge() is False
        assert engine.snapshot is state

    def test_to_dict(self):
        _, controller, _ = build(level=2)
        data = controller.to_dict()
        assert data == {
            "phase": PLAYING,
            "overlay_visible": False,
            "selected_level": 2,
            "level": 2,
            "lives": 3,
        }
