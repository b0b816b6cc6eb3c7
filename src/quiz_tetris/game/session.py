"""Game session: phase state machine, quiz flow and timers.

A ``QuizSession`` owns one ``GameState`` and sequences the menu, question,
playing, game-over and game-complete phases. Everything runs on a single
asyncio event loop; the gravity drop, the session clock and the quiz
countdown are tasks that ``_sync_timers`` arms or cancels after every
transition. Without a running loop the timers stay idle and the session can
be stepped by hand.

Question fetches and answer grading suspend. A generation counter, bumped on
every restart, lets late results for a superseded run be dropped instead of
mutating the fresh one.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Coroutine, List, Optional

import numpy as np

from quiz_tetris.audio.sounds import SilentSoundEffects, SoundCue, SoundEffects
from quiz_tetris.config import AppConfig, load_config
from quiz_tetris.questions.bank import FALLBACK_QUESTIONS
from quiz_tetris.questions.model import Question
from quiz_tetris.questions.provider import QuestionProvider, StaticQuestionProvider
from quiz_tetris.scores.leaderboard import HighScoreEntry, InMemoryLeaderboard, Leaderboard, ScoreRecord

from .core import Direction, MoveResult, TetrisEngine
from .grid import ghost_piece
from .pieces import Piece
from .rules import QuizScoring, apply_points
from .spawner import PieceSpawner
from .state import GameState

logger = logging.getLogger(__name__)


class GamePhase(str, Enum):
    MENU = "menu"
    QUESTION = "question"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    GAME_COMPLETE = "game_complete"


@dataclass(frozen=True)
class AnswerOutcome:
    question: Question
    choice: Optional[int]
    is_correct: bool
    elapsed: int
    points: int


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _cancel(task: Optional[asyncio.Task]) -> None:
    # A timer never cancels itself; its loop guard makes it exit instead
    if task is not None and not task.done() and task is not asyncio.current_task():
        task.cancel()


class QuizSession:
    def __init__(
        self,
        engine: Optional[TetrisEngine] = None,
        provider: Optional[QuestionProvider] = None,
        leaderboard: Optional[Leaderboard] = None,
        sounds: Optional[SoundEffects] = None,
        config: Optional[AppConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or load_config()
        board = self.config.board
        self.engine = engine or TetrisEngine(
            PieceSpawner(board.width, board.height, board.spawn_y, board.random_seed)
        )
        self.provider = provider or StaticQuestionProvider(seed=board.random_seed)
        self.leaderboard = leaderboard or InMemoryLeaderboard(self.config.leaderboard.max_entries)
        self.sounds = sounds or SilentSoundEffects()
        self.clock = clock
        self.quiz_scoring = QuizScoring(time_limit=self.config.quiz.time_limit)

        self.state: GameState = self.engine.new_state()
        self.phase = GamePhase.MENU
        self.questions_answered = 0
        self.used_question_ids: List[str] = []
        self.current_question: Optional[Question] = None
        self.last_answer: Optional[AnswerOutcome] = None
        self.game_time = 0

        self._generation = 0
        self._question_started_at: Optional[float] = None
        self._answer_submitted = False
        self._drop_task: Optional[asyncio.Task] = None
        self._clock_task: Optional[asyncio.Task] = None
        self._countdown_task: Optional[asyncio.Task] = None
        self._question_task: Optional[asyncio.Task] = None
        self._top_scores: Optional[List[HighScoreEntry]] = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def total_questions(self) -> int:
        return self.config.quiz.total_questions

    @property
    def generation(self) -> int:
        return self._generation

    def drop_interval_for(self, level: int) -> float:
        # Gravity stays constant across levels
        return self.config.timing.drop_interval

    def question_elapsed(self) -> float:
        if self._question_started_at is None:
            return 0.0
        return max(0.0, self.clock() - self._question_started_at)

    def time_remaining(self) -> int:
        limit = int(self.config.quiz.time_limit)
        return max(0, limit - int(math.floor(self.question_elapsed())))

    def ghost(self) -> Optional[Piece]:
        if self.state.current_piece is None:
            return None
        return ghost_piece(self.state.grid, self.state.current_piece)

    def board_view(self) -> np.ndarray:
        """Grid copy with the falling piece overlaid as negative tags."""
        view = self.state.grid.copy()
        piece = self.state.current_piece
        if piece is not None and not self.state.game_over:
            height, width = view.shape
            for x, y in piece.cells():
                if 0 <= y < height and 0 <= x < width:
                    view[y, x] = -int(piece.kind)
        return view

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------

    async def start(self) -> bool:
        """menu -> question: reset the run counters and fetch the first question."""
        if self.phase != GamePhase.MENU:
            return False
        self.questions_answered = 0
        self.used_question_ids = []
        self.phase = GamePhase.QUESTION
        self.state = replace(self.state, is_playing=False)
        await self._load_next_question(self._generation)
        return True

    def restart(self) -> None:
        """Any phase -> menu with a fully reset game."""
        self.shutdown()
        self.sounds.play(SoundCue.CLICK)
        self.state = self.engine.new_state()
        self.phase = GamePhase.MENU
        self.questions_answered = 0
        self.used_question_ids = []
        self.current_question = None
        self.last_answer = None
        self.game_time = 0
        self._question_started_at = None
        self._answer_submitted = False
        self._top_scores = None

    def shutdown(self) -> None:
        """Stop every timer and invalidate pending question work."""
        self._generation += 1
        for task in (self._drop_task, self._clock_task, self._countdown_task, self._question_task):
            _cancel(task)
        self._drop_task = self._clock_task = self._countdown_task = self._question_task = None

    async def play_again(self) -> bool:
        self.restart()
        return await self.start()

    def complete_question(self, is_correct: bool, elapsed: float) -> int:
        """question -> playing (or game_complete once every question is answered)."""
        if self.phase != GamePhase.QUESTION:
            logger.debug("Ignoring answer outside the question phase (%s)", self.phase.value)
            return 0
        points = self.quiz_scoring.answer_points(is_correct, elapsed)
        self.questions_answered += 1
        self.current_question = None
        self._question_started_at = None
        self._answer_submitted = False
        _cancel(self._countdown_task)
        self._countdown_task = None

        state = replace(self.state, score=apply_points(self.state.score, points))
        if self.questions_answered >= self.total_questions:
            self.state = replace(state, is_playing=False)
            self.phase = GamePhase.GAME_COMPLETE
            self.sounds.play(SoundCue.GAME_COMPLETE)
        else:
            self.sounds.play(SoundCue.RESUME)
            self.phase = GamePhase.PLAYING
            state = replace(state, is_playing=True)
            if state.current_piece is None:
                state = self.engine.spawn(state)
            self.state = state
            if state.game_over:
                self._enter_game_over()
        self._sync_timers()
        return points

    async def submit_answer(self, choice: Optional[int]) -> Optional[AnswerOutcome]:
        """Grade ``choice`` (``None`` means no answer), show the result, then resume."""
        question = self.current_question
        if self.phase != GamePhase.QUESTION or question is None or self._answer_submitted:
            return None
        self._answer_submitted = True
        _cancel(self._countdown_task)
        self._countdown_task = None

        generation = self._generation
        elapsed = int(math.floor(self.question_elapsed()))
        is_correct = question.is_correct(choice)
        self.sounds.play(SoundCue.CORRECT if is_correct else SoundCue.WRONG)
        outcome = AnswerOutcome(
            question=question,
            choice=choice,
            is_correct=is_correct,
            elapsed=elapsed,
            points=self.quiz_scoring.answer_points(is_correct, elapsed),
        )
        self.last_answer = outcome

        if self.config.quiz.explanation_dwell > 0:
            await asyncio.sleep(self.config.quiz.explanation_dwell)
        if generation != self._generation:
            logger.debug("Discarding answer to %s from a superseded session", question.id)
            return outcome
        self.complete_question(is_correct, elapsed)
        return outcome

    def move(self, direction: Direction) -> MoveResult:
        if self.phase != GamePhase.PLAYING:
            return MoveResult(self.state)
        result = self.engine.move(self.state, direction)
        self.state = result.state
        for cue in result.cues:
            self.sounds.play(cue, lines=result.lines_cleared)

        if self.state.game_over:
            self._enter_game_over()
        elif result.needs_question:
            self.phase = GamePhase.QUESTION
            self._question_task = self._create_task(self._load_next_question(self._generation))
        self._sync_timers()
        return result

    def handle_command(self, direction: Direction) -> Optional[MoveResult]:
        """Keyboard entry point: ignored outside active play."""
        if self.phase != GamePhase.PLAYING or not self.state.is_playing or self.state.game_over:
            return None
        return self.move(direction)

    def toggle_pause(self) -> None:
        if self.phase != GamePhase.PLAYING or self.state.game_over:
            return
        resume = not self.state.is_playing
        self.sounds.play(SoundCue.RESUME if resume else SoundCue.PAUSE)
        state = replace(self.state, is_playing=resume)
        if resume and state.current_piece is None:
            state = self.engine.spawn(state)
        self.state = state
        if state.game_over:
            self._enter_game_over()
        self._sync_timers()

    async def wait_for_question(self) -> None:
        """Wait until a question requested by a line clear has been loaded."""
        if self._question_task is not None:
            await self._question_task

    # ------------------------------------------------------------------
    # Leaderboard
    # ------------------------------------------------------------------

    def is_qualifying_score(self) -> bool:
        return self.leaderboard.is_qualifying_score(self.state.score)

    def top_scores(self, limit: int = 5) -> List[HighScoreEntry]:
        """Leaderboard snapshot, reloaded only after a score is recorded or the game restarts."""
        if self._top_scores is None:
            self._top_scores = self.leaderboard.list_top_scores()
        return self._top_scores[:limit]

    def record_score(self, name: str) -> ScoreRecord:
        record = self.leaderboard.record_score(name, self.state.score, self.state.level, self.state.lines)
        self._top_scores = None
        if record.stats.is_new_record:
            self.sounds.play(SoundCue.HIGH_SCORE)
        return record

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _enter_game_over(self) -> None:
        self.phase = GamePhase.GAME_OVER
        self.state = replace(self.state, is_playing=False)
        self.sounds.play(SoundCue.GAME_OVER)

    async def _load_next_question(self, generation: int) -> None:
        try:
            question = await self.provider.fetch_random_question(list(self.used_question_ids))
        except Exception as exc:  # a broken provider must not end the run
            logger.warning("Failed to load question (%s), using fallback", exc)
            question = FALLBACK_QUESTIONS[0]
        if generation != self._generation:
            logger.debug("Discarding question %s fetched for a superseded session", question.id)
            return
        self.current_question = question
        self.used_question_ids.append(question.id)
        self.phase = GamePhase.QUESTION
        self.state = replace(self.state, is_playing=False)
        self._question_started_at = self.clock()
        self._answer_submitted = False
        self._sync_timers()
        if _running_loop() is not None:
            self._countdown_task = self._create_task(self._countdown_loop(generation))

    def _timers_should_run(self) -> bool:
        return self.phase == GamePhase.PLAYING and self.state.is_playing and not self.state.game_over

    def _create_task(self, coro: Coroutine) -> asyncio.Task:
        return asyncio.get_running_loop().create_task(coro)

    def _sync_timers(self) -> None:
        if self._timers_should_run():
            if _running_loop() is None:
                return
            if self._drop_task is None or self._drop_task.done():
                self._drop_task = self._create_task(self._drop_loop())
            if self._clock_task is None or self._clock_task.done():
                self._clock_task = self._create_task(self._clock_loop())
        else:
            _cancel(self._drop_task)
            _cancel(self._clock_task)
            self._drop_task = None
            self._clock_task = None

    async def _drop_loop(self) -> None:
        while self._timers_should_run():
            await asyncio.sleep(self.drop_interval_for(self.state.level))
            if not self._timers_should_run():
                break
            self.move(Direction.DOWN)

    async def _clock_loop(self) -> None:
        while self._timers_should_run():
            await asyncio.sleep(self.config.timing.clock_interval)
            if not self._timers_should_run():
                break
            self.game_time += 1

    async def _countdown_loop(self, generation: int) -> None:
        last_remaining: Optional[int] = None
        while (
            generation == self._generation
            and self.phase == GamePhase.QUESTION
            and not self._answer_submitted
        ):
            remaining = self.time_remaining()
            if remaining != last_remaining:
                if 5 < remaining <= 10:
                    self.sounds.play(SoundCue.TIMER_TICK)
                elif 0 < remaining <= 5:
                    self.sounds.play(SoundCue.URGENT_BEEP)
                last_remaining = remaining
            if remaining <= 0:
                # Timeout counts as a wrong answer
                await self.submit_answer(None)
                return
            await asyncio.sleep(self.config.quiz.countdown_poll)
