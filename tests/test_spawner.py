"""
Tests for the piece source and spawn/top-out handling.
"""

from collections import Counter
from dataclasses import replace

import pytest

from quiz_tetris.game import GameState, Piece, PieceSpawner, TetrominoType, empty_grid


@pytest.fixture
def spawner():
    return PieceSpawner(width=10, height=20, seed=42)


class TestRandomPiece:
    def test_all_kinds_appear_roughly_uniformly(self, spawner):
        counts = Counter(spawner.random_piece() for _ in range(7000))
        assert set(counts) == set(TetrominoType)
        assert all(800 < n < 1200 for n in counts.values())

    def test_seed_makes_sequence_reproducible(self):
        a = PieceSpawner(seed=5)
        b = PieceSpawner(seed=5)
        assert [a.random_piece() for _ in range(50)] == [b.random_piece() for _ in range(50)]


class TestSpawn:
    def test_spawns_next_piece_at_top_centre(self, spawner):
        state = replace(spawner.new_state(), next_piece=TetrominoType.T)
        spawned = spawner.spawn(state)
        assert spawned.current_piece == Piece(TetrominoType.T, x=4, y=0, rotation=0)
        assert isinstance(spawned.next_piece, TetrominoType)
        assert not spawned.game_over

    def test_new_state_is_empty(self, spawner):
        state = spawner.new_state()
        assert state.current_piece is None
        assert not state.grid.any()
        assert state.score == 0 and state.level == 1 and state.lines == 0
        assert not state.is_playing and not state.game_over

    def test_overlap_at_spawn_ends_the_game(self, spawner):
        grid = empty_grid()
        grid[0:2, 4:6] = 3
        state = GameState(grid=grid, current_piece=None, next_piece=TetrominoType.O, is_playing=True)
        topped = spawner.spawn(state)
        assert topped.game_over
        assert topped.current_piece is None
        assert not topped.is_playing

    def test_stack_below_spawn_rows_is_fine(self, spawner):
        grid = empty_grid()
        grid[2:, 4:6] = 3
        state = GameState(grid=grid, current_piece=None, next_piece=TetrominoType.O, is_playing=True)
        assert not spawner.spawn(state).game_over
