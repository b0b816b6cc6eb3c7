"""Game module for Quiz Tetris.

Exports the core game engine and supporting classes:
- TetrominoType, Piece, shape_for: Shape table and piece placements
- collides, place, clear_lines, drop_distance, ghost_piece: Grid operations
- ScoringRules, QuizScoring, apply_points: Scoring policy
- PieceSpawner: Random piece source and spawn/top-out check
- GameState: Immutable game snapshot
- TetrisEngine, Direction, MoveResult: Movement dispatch
- QuizSession, GamePhase: Phase state machine and timers
"""

from .pieces import Piece, TetrominoType, shape_for
from .grid import ClearResult, clear_lines, collides, drop_distance, empty_grid, ghost_piece, place
from .rules import QuizScoring, ScoringRules, apply_points
from .state import GameState
from .spawner import PieceSpawner
from .core import Direction, MoveResult, TetrisEngine
from .session import AnswerOutcome, GamePhase, QuizSession

__all__ = [
    "Piece",
    "TetrominoType",
    "shape_for",
    "ClearResult",
    "clear_lines",
    "collides",
    "drop_distance",
    "empty_grid",
    "ghost_piece",
    "place",
    "QuizScoring",
    "ScoringRules",
    "apply_points",
    "GameState",
    "PieceSpawner",
    "Direction",
    "MoveResult",
    "TetrisEngine",
    "AnswerOutcome",
    "GamePhase",
    "QuizSession",
]
