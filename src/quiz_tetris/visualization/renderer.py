from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pygame

from quiz_tetris.game import GamePhase, QuizSession, shape_for
from quiz_tetris.scores.leaderboard import format_score

Color = Tuple[int, int, int]

WHITE: Color = (235, 235, 240)
DIM: Color = (150, 150, 165)
ACCENT: Color = (94, 234, 212)
GOOD: Color = (120, 220, 140)
BAD: Color = (235, 110, 110)


def _color_for_value(v: int) -> Color:
    palette = {
        0: (20, 20, 26),
        1: (34, 211, 238),   # I
        2: (250, 204, 21),   # O
        3: (192, 132, 252),  # T
        4: (251, 146, 60),   # L
        5: (96, 165, 250),   # J
        6: (74, 222, 128),   # S
        7: (248, 113, 113),  # Z
    }
    return palette.get(abs(v), (200, 200, 200))


def format_time(total_seconds: int) -> str:
    mins, secs = divmod(int(total_seconds), 60)
    return f"{mins:02d}:{secs:02d}"


def wrap_text(font: pygame.font.Font, text: str, width: int) -> List[str]:
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and font.size(candidate)[0] > width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, panel_width: int = 260) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self.font = pygame.font.SysFont(None, 26)
        self.small = pygame.font.SysFont(None, 22)
        self.big = pygame.font.SysFont(None, 44)

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (width * self.cell_size + self.margin * 3 + self.panel_width,
                height * self.cell_size + self.margin * 2)

    def _grid_surface(self, state: np.ndarray, session: QuizSession) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        ghost = session.ghost()
        if ghost is not None and session.phase == GamePhase.PLAYING:
            for x, y in ghost.cells():
                if 0 <= y < h and 0 <= x < w and state[y, x] == 0:
                    rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                    pygame.draw.rect(surf, _color_for_value(int(ghost.kind)), rect, 2)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int],
              color: Color = WHITE, font: Optional[pygame.font.Font] = None) -> int:
        font = font or self.font
        screen.blit(font.render(text, True, color), pos)
        return pos[1] + font.get_linesize()

    def _panel(self, screen: pygame.Surface, session: QuizSession, x0: int) -> None:
        state = session.state
        y = self.margin
        y = self._text(screen, "TETRIS TRAINING", (x0, y), ACCENT)
        y = self._text(screen, f"Score  {format_score(state.score)}", (x0, y + 8))
        y = self._text(screen, f"Level  {state.level}", (x0, y))
        y = self._text(screen, f"Lines  {state.lines}", (x0, y))
        y = self._text(screen, f"Time   {format_time(session.game_time)}", (x0, y))
        y = self._text(screen, f"Questions  {session.questions_answered} / {session.total_questions}", (x0, y))
        y = self._text(screen, "Next", (x0, y + 12), DIM)
        shape = shape_for(state.next_piece, 0)
        cell = self.cell_size // 2
        for py in range(shape.shape[0]):
            for px in range(shape.shape[1]):
                if shape[py, px]:
                    rect = pygame.Rect(x0 + px * cell, y + 4 + py * cell, cell - 1, cell - 1)
                    pygame.draw.rect(screen, _color_for_value(int(state.next_piece)), rect)
        y += 4 + 4 * cell + 12
        for line in ("<- -> move", "Down soft drop", "Up rotate", "Space hard drop", "P pause  R restart"):
            y = self._text(screen, line, (x0, y), DIM, self.small)

    def _overlay(self, screen: pygame.Surface) -> pygame.Surface:
        shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 200))
        screen.blit(shade, (0, 0))
        return screen

    def _question(self, screen: pygame.Surface, session: QuizSession, selected: Optional[int]) -> None:
        question = session.current_question
        self._overlay(screen)
        x0, width = self.margin * 2, screen.get_width() - self.margin * 4
        y = self.margin * 2
        if question is None:
            self._text(screen, "Loading question...", (x0, y))
            return
        header = f"Question {session.questions_answered + 1} of {session.total_questions}"
        y = self._text(screen, f"{header}    {session.time_remaining()}s", (x0, y), ACCENT)
        if question.scenario:
            for line in wrap_text(self.small, question.scenario, width):
                y = self._text(screen, line, (x0, y + 2), DIM, self.small)
        for line in wrap_text(self.font, question.prompt, width):
            y = self._text(screen, line, (x0, y + 6))
        answer = session.last_answer if session.last_answer and session.last_answer.question is question else None
        for i, option in enumerate(question.options):
            color = WHITE
            if answer is not None and i == question.correct_index:
                color = GOOD
            elif answer is not None and i == answer.choice:
                color = BAD
            elif i == selected:
                color = ACCENT
            for j, line in enumerate(wrap_text(self.small, option, width - 30)):
                y = self._text(screen, (f"{i + 1}. " if j == 0 else "   ") + line, (x0, y + 4), color, self.small)
        if answer is None:
            self._text(screen, "1-4 choose, Enter submit", (x0, y + 12), DIM, self.small)
            return
        verdict = f"Correct! +{answer.points}" if answer.is_correct else f"Wrong {answer.points}"
        y = self._text(screen, verdict, (x0, y + 12), GOOD if answer.is_correct else BAD)
        if question.explanation:
            for line in wrap_text(self.small, question.explanation, width):
                y = self._text(screen, line, (x0, y + 2), DIM, self.small)

    def _end_screen(self, screen: pygame.Surface, session: QuizSession, title: str, name: Optional[str]) -> None:
        self._overlay(screen)
        x0 = self.margin * 2
        y = self._text(screen, title, (x0, self.margin * 3), ACCENT, self.big)
        y = self._text(screen, f"Final score {format_score(session.state.score)}", (x0, y + 10))
        y = self._text(screen, f"Lines {session.state.lines}", (x0, y))
        if name is not None:
            y = self._text(screen, f"New high score! Name: {name}_", (x0, y + 16), GOOD)
            y = self._text(screen, "Enter to save, Esc to skip", (x0, y), DIM, self.small)
        y += 12
        for i, entry in enumerate(session.top_scores(5)):
            y = self._text(screen, f"{i + 1:>2}. {entry.player_name:<12} {format_score(entry.score):>8}",
                           (x0, y), DIM, self.small)
        self._text(screen, "R to play again", (x0, y + 12), WHITE, self.small)

    def draw(self, screen: pygame.Surface, session: QuizSession, selected: Optional[int] = None,
             name_entry: Optional[str] = None) -> None:
        screen.fill((10, 10, 14))
        if session.phase == GamePhase.MENU:
            y = self._text(screen, "TETRIS TRAINING", (self.margin * 2, self.margin * 3), ACCENT, self.big)
            y = self._text(screen, "Clear lines to trigger questions.", (self.margin * 2, y + 16))
            y = self._text(screen, "Answer fast for more points. Wrong = -50.", (self.margin * 2, y))
            top = session.top_scores(1)
            if top:
                y = self._text(screen, f"High score {format_score(top[0].score)}", (self.margin * 2, y + 12), DIM)
            self._text(screen, "Press Enter to start", (self.margin * 2, y + 24), GOOD)
            pygame.display.flip()
            return

        grid_surf = self._grid_surface(session.board_view(), session)
        screen.blit(grid_surf, (self.margin, self.margin))
        self._panel(screen, session, self.margin * 2 + grid_surf.get_width())
        if session.phase == GamePhase.PLAYING and not session.state.is_playing:
            self._text(screen, "PAUSED", (self.margin + 8, self.margin + 8), ACCENT, self.big)
        elif session.phase == GamePhase.QUESTION:
            self._question(screen, session, selected)
        elif session.phase == GamePhase.GAME_OVER:
            self._end_screen(screen, session, "GAME OVER", name_entry)
        elif session.phase == GamePhase.GAME_COMPLETE:
            self._end_screen(screen, session, "TRAINING COMPLETE", name_entry)
        pygame.display.flip()
