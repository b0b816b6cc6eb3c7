from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple

from quiz_tetris.audio.sounds import SoundCue

from .grid import clear_lines, collides, drop_distance, place
from .rules import ScoringRules
from .spawner import PieceSpawner
from .state import GameState


class Direction(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    HARD_DROP = 4


@dataclass(frozen=True)
class MoveResult:
    state: GameState
    moved: bool = False
    landed: bool = False
    lines_cleared: int = 0
    score_delta: int = 0
    needs_question: bool = False
    cues: Tuple[SoundCue, ...] = ()


class TetrisEngine:
    """Movement, locking and line clearing over immutable ``GameState`` values."""

    def __init__(self, spawner: Optional[PieceSpawner] = None, rules: Optional[ScoringRules] = None) -> None:
        self.spawner = spawner or PieceSpawner()
        self.rules = rules or ScoringRules()

    def new_state(self) -> GameState:
        return self.spawner.new_state()

    def spawn(self, state: GameState) -> GameState:
        return self.spawner.spawn(state)

    def move(self, state: GameState, direction: Direction) -> MoveResult:
        piece = state.current_piece
        if not state.is_playing or piece is None or state.game_over:
            return MoveResult(state)

        if direction in (Direction.LEFT, Direction.RIGHT):
            dx = -1 if direction == Direction.LEFT else 1
            if collides(state.grid, piece, dx=dx):
                return MoveResult(state)
            return MoveResult(replace(state, current_piece=piece.shifted(dx=dx)), moved=True,
                              cues=(SoundCue.MOVE,))

        if direction == Direction.ROTATE:
            # No kick search: a colliding rotation is simply rejected
            if collides(state.grid, piece, drotation=1):
                return MoveResult(state)
            return MoveResult(replace(state, current_piece=piece.shifted(drotation=1)), moved=True,
                              cues=(SoundCue.ROTATE,))

        if direction == Direction.DOWN:
            if not collides(state.grid, piece, dy=1):
                return MoveResult(replace(state, current_piece=piece.shifted(dy=1)), moved=True)
            return self._land(state, bonus=0, cues=(SoundCue.LAND,))

        if direction == Direction.HARD_DROP:
            distance = drop_distance(state.grid, piece)
            dropped = replace(state, current_piece=piece.shifted(dy=distance))
            return self._land(dropped, bonus=self.rules.hard_drop_bonus(distance),
                              cues=(SoundCue.HARD_DROP,), moved=distance > 0)

        raise ValueError(f"Unknown direction: {direction!r}")

    def _land(self, state: GameState, bonus: int, cues: Tuple[SoundCue, ...], moved: bool = False) -> MoveResult:
        assert state.current_piece is not None
        result = clear_lines(place(state.grid, state.current_piece))
        lines = result.lines_cleared
        delta = self.rules.score_for_lines(lines, state.level) + bonus

        if lines == 4:
            cues += (SoundCue.TETRIS,)
        elif lines > 0:
            cues += (SoundCue.LINE_CLEAR,)
        elif SoundCue.LAND not in cues:
            cues += (SoundCue.LAND,)

        new_state = replace(
            state,
            grid=result.grid,
            current_piece=None,
            score=state.score + delta,
            lines=state.lines + lines,
            lines_in_level=state.lines_in_level + lines,
        )
        if lines > 0:
            # Pause the drop loop until the quiz question is answered
            new_state = replace(new_state, is_playing=False)
        else:
            new_state = self.spawn(new_state)
        return MoveResult(
            new_state,
            moved=moved,
            landed=True,
            lines_cleared=lines,
            score_delta=delta,
            needs_question=lines > 0,
            cues=cues,
        )
