from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Question:
    id: str
    prompt: str
    options: Tuple[str, str, str, str]
    correct_index: int  # 0-based
    category: str = ""
    difficulty: int = 1
    scenario: Optional[str] = None
    explanation: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.options) != 4:
            raise ValueError(f"Question {self.id} must have 4 options, got {len(self.options)}")
        if not 0 <= self.correct_index < 4:
            raise ValueError(f"Question {self.id} has invalid correct index {self.correct_index}")

    def is_correct(self, choice: Optional[int]) -> bool:
        return choice is not None and choice == self.correct_index
