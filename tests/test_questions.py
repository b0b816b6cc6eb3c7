"""
Tests for question content and providers.
"""

import asyncio
import logging
import random

import pytest

from quiz_tetris.config import default_config_path
from quiz_tetris.questions import (
    FALLBACK_QUESTIONS,
    QUESTION_BANK,
    CsvQuestionProvider,
    Question,
    StaticQuestionProvider,
    load_questions_csv,
)
from quiz_tetris.questions.provider import pick_random

HEADER = "id,question,scenario,option1,option2,option3,option4,correctAnswer,category,difficulty,explanation\n"


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "questions.csv"
    path.write_text(
        HEADER
        + 'q1,"What is 2 + 2?",,3,4,5,6,1,Math,1,"Add them, carefully."\n'
        + "q2,Pick the vowel,A short scenario,b,c,a,d,2,Letters,2,\n"
        + ",,,,,,,,,,\n",
        encoding="utf-8",
    )
    return path


class TestQuestion:
    def test_requires_four_options(self):
        with pytest.raises(ValueError):
            Question(id="x", prompt="?", options=("a", "b", "c"), correct_index=0)

    def test_correct_index_in_range(self):
        with pytest.raises(ValueError):
            Question(id="x", prompt="?", options=("a", "b", "c", "d"), correct_index=4)

    def test_no_answer_is_never_correct(self):
        q = QUESTION_BANK[0]
        assert not q.is_correct(None)
        assert q.is_correct(q.correct_index)

    def test_bank_ids_are_unique(self):
        ids = [q.id for q in QUESTION_BANK]
        assert len(ids) == len(set(ids))
        assert len(QUESTION_BANK) >= 5


class TestPickRandom:
    def test_excludes_used_ids(self):
        rng = random.Random(0)
        used = [q.id for q in QUESTION_BANK[:-1]]
        for _ in range(20):
            assert pick_random(QUESTION_BANK, used, rng) is QUESTION_BANK[-1]

    def test_reuses_pool_once_exhausted(self):
        rng = random.Random(0)
        used = [q.id for q in QUESTION_BANK]
        assert pick_random(QUESTION_BANK, used, rng) in QUESTION_BANK

    def test_empty_pool_raises(self):
        with pytest.raises(LookupError):
            pick_random([], [], random.Random(0))


class TestStaticProvider:
    def test_fetch_for_level(self):
        provider = StaticQuestionProvider()
        questions = asyncio.run(provider.fetch_questions_for_level(1, 3))
        assert len(questions) <= 3
        assert all(q.difficulty == 1 for q in questions)


class TestCsvProvider:
    def test_parses_rows_and_skips_blank_lines(self, csv_file):
        questions = load_questions_csv(csv_file)
        assert [q.id for q in questions] == ["q1", "q2"]
        first, second = questions
        assert first.options == ("3", "4", "5", "6")
        assert first.correct_index == 1
        assert first.explanation == "Add them, carefully."
        assert first.scenario is None
        assert second.scenario == "A short scenario"
        assert second.difficulty == 2
        assert second.explanation is None

    def test_missing_id_uses_row_number(self, tmp_path):
        path = tmp_path / "q.csv"
        path.write_text(HEADER + ",Q?,,a,b,c,d,0,,,\n", encoding="utf-8")
        assert load_questions_csv(path)[0].id == "1"

    def test_fetch_random_excludes(self, csv_file):
        provider = CsvQuestionProvider(csv_file, seed=3)
        question = asyncio.run(provider.fetch_random_question(["q1"]))
        assert question.id == "q2"

    def test_missing_file_falls_back(self, tmp_path, caplog):
        provider = CsvQuestionProvider(tmp_path / "nope.csv")
        with caplog.at_level(logging.WARNING, logger="quiz_tetris.questions.provider"):
            question = asyncio.run(provider.fetch_random_question())
        assert question is FALLBACK_QUESTIONS[0]
        assert "fallback" in caplog.text

    def test_malformed_row_falls_back(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text(HEADER + "q1,Q?,,a,b,c,d,seven,,,\n", encoding="utf-8")
        provider = CsvQuestionProvider(path)
        assert asyncio.run(provider.get_questions()) == list(FALLBACK_QUESTIONS)

    def test_results_are_cached(self, csv_file):
        provider = CsvQuestionProvider(csv_file)

        async def load_twice():
            first = await provider.get_questions()
            csv_file.unlink()
            return first, await provider.get_questions()

        first, second = asyncio.run(load_twice())
        assert first is second

    def test_packaged_questions_load(self):
        path = default_config_path().parent / "questions.csv"
        questions = load_questions_csv(path)
        assert len(questions) >= 5
        assert all(0 <= q.correct_index < 4 for q in questions)
