from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Dict, Optional, Set

import pygame

from quiz_tetris.audio.sounds import SoundEffects, SynthSoundEffects
from quiz_tetris.config import AppConfig, load_config
from quiz_tetris.game import Direction, GamePhase, QuizSession
from quiz_tetris.questions.provider import CsvQuestionProvider
from quiz_tetris.scores.leaderboard import JsonLeaderboard
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_DIRECTION: Dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.ROTATE,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_SPACE: Direction.HARD_DROP,
}

ANSWER_KEYS: Dict[int, int] = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
}

CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)

MAX_NAME_LENGTH = 12


class KeyboardController:
    """Translates key presses into session actions for the current phase."""

    def __init__(self, session: QuizSession) -> None:
        self.session = session
        self.selected: Optional[int] = None
        self.name_entry: Optional[str] = None
        self._tasks: Set[asyncio.Task] = set()
        self._end_screen_seen = False

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _reset_ui(self) -> None:
        self.selected = None
        self.name_entry = None
        self._end_screen_seen = False

    def sync(self) -> bool:
        """Open the name prompt once per end screen. Returns True when it just opened."""
        if self.session.phase not in (GamePhase.GAME_OVER, GamePhase.GAME_COMPLETE):
            return False
        if self._end_screen_seen:
            return False
        self._end_screen_seen = True
        if self.session.is_qualifying_score():
            self.name_entry = ""
        return True

    def handle_key(self, key: int, text: str = "") -> None:
        if self.sync():
            # A key arriving as the end screen opens is never name text
            return
        session = self.session
        phase = session.phase

        if phase == GamePhase.MENU:
            if key in CONFIRM_KEYS:
                self._reset_ui()
                self._spawn(session.start())
            return

        if phase == GamePhase.QUESTION:
            if key in ANSWER_KEYS and (session.last_answer is None
                                       or session.last_answer.question is not session.current_question):
                self.selected = ANSWER_KEYS[key]
            elif key in CONFIRM_KEYS and self.selected is not None:
                choice, self.selected = self.selected, None
                self._spawn(session.submit_answer(choice))
            return

        if phase in (GamePhase.GAME_OVER, GamePhase.GAME_COMPLETE):
            if self.name_entry is not None:
                if key in CONFIRM_KEYS:
                    session.record_score(self.name_entry)
                    self.name_entry = None
                elif key == pygame.K_ESCAPE:
                    self.name_entry = None
                elif key == pygame.K_BACKSPACE:
                    self.name_entry = self.name_entry[:-1]
                elif text and text.isprintable() and len(self.name_entry) < MAX_NAME_LENGTH:
                    self.name_entry += text
                return
            if key == pygame.K_r:
                self._reset_ui()
                self._spawn(session.play_again())
            return

        # Playing
        if key == pygame.K_p:
            session.toggle_pause()
        elif key == pygame.K_r:
            self._reset_ui()
            session.restart()
        else:
            direction = KEY_TO_DIRECTION.get(key)
            if direction is not None:
                session.handle_command(direction)


def build_session(config: AppConfig, sounds: Optional[SoundEffects] = None) -> QuizSession:
    csv_path = config.quiz.questions_csv or str(Path(__file__).resolve().parent.parent / "data" / "questions.csv")
    return QuizSession(
        provider=CsvQuestionProvider(csv_path, seed=config.board.random_seed),
        leaderboard=JsonLeaderboard(config.leaderboard.path, config.leaderboard.max_entries),
        sounds=sounds or SynthSoundEffects(config.audio.volume, config.audio.enabled),
        config=config,
    )


async def run_async(config: AppConfig) -> None:
    session = build_session(config)
    controller = KeyboardController(session)
    renderer = Renderer(cell_size=28)
    screen = pygame.display.set_mode(renderer.window_size(config.board.width, config.board.height))
    pygame.display.set_caption("Quiz Tetris")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE and controller.name_entry is None:
                    running = False
                else:
                    controller.handle_key(event.key, event.unicode)
        controller.sync()
        renderer.draw(screen, session, controller.selected, controller.name_entry)
        await asyncio.sleep(1 / 60)
    session.shutdown()


def run(config: Optional[AppConfig] = None) -> None:
    pygame.init()
    try:
        asyncio.run(run_async(config or load_config()))
    finally:
        pygame.quit()


def main() -> None:  # pragma: no cover
    parser = argparse.ArgumentParser(description="Quiz Tetris")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(load_config(args.config))


if __name__ == "__main__":  # pragma: no cover
    main()
