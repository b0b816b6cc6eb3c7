"""Question sources.

A provider hands out ``Question`` objects to the game session. Two concrete
sources exist: a static in-memory bank and a CSV file. The CSV provider never
raises on bad input; it logs a warning and serves the fallback bank instead.
"""

from __future__ import annotations

import asyncio
import csv
import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence

from .bank import FALLBACK_QUESTIONS, QUESTION_BANK
from .model import Question

logger = logging.getLogger(__name__)


class QuestionProvider(Protocol):
    async def fetch_random_question(self, exclude_ids: Iterable[str] = ()) -> Question: ...

    async def fetch_questions_for_level(self, level: int, count: int) -> List[Question]: ...


def pick_random(questions: Sequence[Question], exclude_ids: Iterable[str], rng: random.Random) -> Question:
    """Uniform pick among questions not yet used; reuse the whole pool once exhausted."""
    excluded = {str(qid) for qid in exclude_ids}
    available = [q for q in questions if q.id not in excluded]
    pool = available or list(questions)
    if not pool:
        raise LookupError("No questions available")
    return rng.choice(pool)


class StaticQuestionProvider:
    def __init__(self, questions: Optional[Sequence[Question]] = None, seed: Optional[int] = None) -> None:
        self.questions: List[Question] = list(questions if questions is not None else QUESTION_BANK)
        self.rng = random.Random(seed)

    async def fetch_random_question(self, exclude_ids: Iterable[str] = ()) -> Question:
        return pick_random(self.questions, exclude_ids, self.rng)

    async def fetch_questions_for_level(self, level: int, count: int) -> List[Question]:
        return [q for q in self.questions if q.difficulty == level][:count]


def parse_question_row(row: dict, index: int) -> Question:
    """Build a ``Question`` from one CSV record (header names as in the exported sheet)."""
    raw_id = (row.get("id") or "").strip()
    scenario = (row.get("scenario") or "").strip() or None
    explanation = (row.get("explanation") or "").strip() or None
    return Question(
        id=raw_id or str(index + 1),
        prompt=row["question"].strip(),
        options=(row["option1"], row["option2"], row["option3"], row["option4"]),
        correct_index=int(row["correctAnswer"]),
        category=(row.get("category") or "").strip(),
        difficulty=int(row.get("difficulty") or 1),
        scenario=scenario,
        explanation=explanation,
    )


def load_questions_csv(path: Path) -> List[Question]:
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = [row for row in reader if any((v or "").strip() for v in row.values())]
    return [parse_question_row(row, i) for i, row in enumerate(rows)]


class CsvQuestionProvider:
    """Questions read once from a CSV file and cached for the life of the provider."""

    def __init__(self, path: Path | str, seed: Optional[int] = None,
                 fallback: Sequence[Question] = FALLBACK_QUESTIONS) -> None:
        self.path = Path(path)
        self.rng = random.Random(seed)
        self.fallback = list(fallback)
        self._cached: Optional[List[Question]] = None

    async def get_questions(self) -> List[Question]:
        if self._cached is None:
            try:
                questions = await asyncio.to_thread(load_questions_csv, self.path)
                if not questions:
                    raise ValueError("no question rows")
            except (OSError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Question CSV %s failed to load (%s), using fallback data", self.path, exc)
                questions = self.fallback
            self._cached = questions
        return self._cached

    async def fetch_random_question(self, exclude_ids: Iterable[str] = ()) -> Question:
        return pick_random(await self.get_questions(), exclude_ids, self.rng)

    async def fetch_questions_for_level(self, level: int, count: int) -> List[Question]:
        return [q for q in await self.get_questions() if q.difficulty == level][:count]
