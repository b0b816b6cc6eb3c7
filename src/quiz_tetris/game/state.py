from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .grid import Grid
from .pieces import Piece, TetrominoType


@dataclass(frozen=True)
class GameState:
    """Snapshot of one game. Updated with ``dataclasses.replace``, never in place."""

    grid: Grid
    current_piece: Optional[Piece]
    next_piece: TetrominoType
    score: int = 0
    level: int = 1
    lines: int = 0
    lines_in_level: int = 0
    game_over: bool = False
    is_playing: bool = False

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])
