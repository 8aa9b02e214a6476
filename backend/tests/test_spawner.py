"""
Tests for free-cell placement and the power-up / hazard spawn rules.
"""

import os
import sys

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.board import Board  # noqa: E402
from domain.game_state import PowerUp  # noqa: E402
from domain.snake import Snake  # noqa: E402
from services.placement import find_free_cell  # noqa: E402
from services.random_source import ScriptedRandomSource, SeededRandomSource  # noqa: E402
from services.spawner import (  # noqa: E402
    decay,
    maybe_spawn_hazard,
    maybe_spawn_power_up,
    power_up_ttl,
)


class TestFindFreeCell:
    """Tests for the shared placement primitive."""

    def test_first_free_random_cell(self):
        rng = ScriptedRandomSource([0.0, 0.0, 0.5, 0.5])
        cell = find_free_cell(Board(3, 3), {(0, 0)}, rng)
        assert cell == (1, 1)
        assert rng.consumed == 4

    def test_full_board_returns_none_without_drawing(self):
        board = Board(3, 3)
        rng = ScriptedRandomSource([])
        assert find_free_cell(board, set(board.cells()), rng) is None

    def test_falls_back_to_row_major_scan(self):
        rng = ScriptedRandomSource([0.0] * 4)
        cell = find_free_cell(Board(3, 3), {(0, 0)}, rng, attempts=2)
        assert cell == (1, 0)

    def test_never_returns_excluded_cell(self):
        board = Board(4, 4)
        excluded = {(x, y) for x, y in board.cells() if (x + y) % 2 == 0}
        rng = SeededRandomSource(11)
        for _ in range(50):
            cell = find_free_cell(board, excluded, rng)
            assert cell not in excluded
            assert board.contains(cell)


class TestPowerUpTtl:
    def test_ttl_on_head_cell_has_minimum_distance(self):
        assert power_up_ttl((0, 0), (0, 0)) == 4

    def test_ttl_rounds_distance_up(self):
        assert power_up_ttl((0, 0), (3, 4)) == 8
        assert power_up_ttl((1, 1), (2, 2)) == 5


class TestDecay:
    def test_decay_counts_down_both(self):
        power_up, reveal, effects = decay(PowerUp((1, 1), 3), 2, picked_up=False)
        assert power_up == PowerUp((1, 1), 2)
        assert reveal == 1
        assert effects == []

    def test_reveal_floor_zero(self):
        _, reveal, _ = decay(None, 0, picked_up=False)
        assert reveal == 0

    def test_reveal_untouched_on_pickup_turn(self):
        _, reveal, _ = decay(None, 10, picked_up=True)
        assert reveal == 10


class TestSpawnRules:
    """Direct tests for the spawn gates."""

    def _power_up_args(self, **overrides):
        snake = Snake([(x, 0) for x in range(9, -1, -1)])
        args = dict(
            board=Board(12, 12),
            level=2,
            head=snake.head,
            snake=snake,
            fruit=(5, 5),
            hazards=frozenset(),
            power_up=None,
            reveal_turns=0,
            spawn_blocked=False,
        )
        args.update(overrides)
        return args

    def test_spawn_blocked_skips_roll(self):
        rng = ScriptedRandomSource([])
        power_up, effects = maybe_spawn_power_up(rng=rng, **self._power_up_args(spawn_blocked=True))
        assert power_up is None
        assert effects == []

    def test_short_snake_skips_roll(self):
        short = Snake([(1, 1)])
        rng = ScriptedRandomSource([])
        power_up, _ = maybe_spawn_power_up(rng=rng, **self._power_up_args(snake=short, head=short.head))
        assert power_up is None

    def test_existing_power_up_kept(self):
        existing = PowerUp((7, 7), 2)
        rng = ScriptedRandomSource([])
        power_up, _ = maybe_spawn_power_up(rng=rng, **self._power_up_args(power_up=existing))
        assert power_up is existing

    def test_roll_at_exact_chance_succeeds(self):
        rng = ScriptedRandomSource([0.25, 0.5, 0.5])
        power_up, effects = maybe_spawn_power_up(rng=rng, **self._power_up_args())
        assert power_up is not None
        assert power_up.cell == (6, 6)
        assert len(effects) == 1

    def test_power_up_avoids_hazards_and_fruit(self):
        rng = ScriptedRandomSource([0.0] + [0.45] * 4 + [0.5, 0.5])
        power_up, _ = maybe_spawn_power_up(
            rng=rng, **self._power_up_args(hazards=frozenset({(5, 5)}), fruit=(5, 5))
        )
        assert power_up.cell == (6, 6)

    def test_hazard_never_on_head_fruit_or_power_up(self):
        """Only (1,1) is free on a 2x2 board; the fallback scan finds it."""
        board = Board(2, 2)
        snake = Snake([(0, 0)])
        rng = ScriptedRandomSource([0.0] * 257)
        hazards, effects = maybe_spawn_hazard(
            board=board,
            level=3,
            head=(0, 0),
            snake=snake,
            fruit=(1, 0),
            hazards=frozenset(),
            power_up=PowerUp((0, 1), 3),
            rng=rng,
        )
        assert hazards == frozenset({(1, 1)})
        assert len(effects) == 1

    def test_hazard_skipped_when_board_full(self):
        board = Board(2, 2)
        hazards, effects = maybe_spawn_hazard(
            board=board,
            level=4,
            head=(0, 0),
            snake=Snake([(0, 0), (1, 0)]),
            fruit=(1, 1),
            hazards=frozenset({(0, 1)}),
            power_up=None,
            rng=ScriptedRandomSource([0.0]),
        )
        assert hazards == frozenset({(0, 1)})
        assert effects == []

    def test_hazard_roll_above_chance_fails(self):
        hazards, effects = maybe_spawn_hazard(
            board=Board(5, 5),
            level=3,
            head=(2, 2),
            snake=Snake([(2, 2)]),
            fruit=(0, 0),
            hazards=frozenset(),
            power_up=None,
            rng=ScriptedRandomSource([0.13]),
        )
        assert hazards == frozenset()
        assert effects == []
