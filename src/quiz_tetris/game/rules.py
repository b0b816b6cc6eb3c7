from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 40, 100, 300, 1200)
    hard_drop_per_cell: int = 2

    def score_for_lines(self, lines: int, level: int) -> int:
        return self.line_clear_scores[lines] * level

    def hard_drop_bonus(self, distance: int) -> int:
        return self.hard_drop_per_cell * distance


@dataclass
class QuizScoring:
    """Points for a quiz answer: a flat penalty, or a base plus a speed bonus."""

    base_points: int = 100
    wrong_penalty: int = -50
    time_limit: float = 30.0

    def answer_points(self, is_correct: bool, elapsed_seconds: float) -> int:
        if not is_correct:
            return self.wrong_penalty
        t = min(max(float(elapsed_seconds), 0.0), self.time_limit)
        if t <= 5:
            bonus = 200.0
        elif t <= 15:
            bonus = max(100.0, 150 - (t - 5) * 5)
        elif t <= 25:
            bonus = max(50.0, 100 - (t - 15) * 5)
        else:
            bonus = max(0.0, 50 - (t - 25) * 10)
        return self.base_points + int(math.floor(bonus))


def apply_points(score: int, delta: int) -> int:
    """Add ``delta`` to ``score`` without letting the total drop below zero."""
    return max(0, score + delta)
