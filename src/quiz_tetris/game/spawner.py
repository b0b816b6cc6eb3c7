from __future__ import annotations

import random
from dataclasses import replace
from typing import Optional

from .grid import collides, empty_grid
from .pieces import Piece, TetrominoType
from .state import GameState


class PieceSpawner:
    """Uniform, memoryless piece source plus spawn placement and top-out check."""

    def __init__(self, width: int = 10, height: int = 20, spawn_y: int = 0,
                 seed: Optional[int] = None) -> None:
        self.width = int(width)
        self.height = int(height)
        self.spawn_y = int(spawn_y)
        self.rng = random.Random(seed)

    def random_piece(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def spawn_position(self, kind: TetrominoType) -> Piece:
        return Piece(kind=kind, x=self.width // 2 - 1, y=self.spawn_y, rotation=0)

    def spawn(self, state: GameState) -> GameState:
        piece = self.spawn_position(state.next_piece)
        # Immediate collision check: if it overlaps, the stack has topped out
        if collides(state.grid, piece):
            return replace(state, current_piece=None, game_over=True, is_playing=False)
        return replace(state, current_piece=piece, next_piece=self.random_piece())

    def new_state(self) -> GameState:
        return GameState(
            grid=empty_grid(self.width, self.height),
            current_piece=None,
            next_piece=self.random_piece(),
        )
