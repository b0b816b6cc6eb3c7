"""Quiz content for Quiz Tetris.

- Question: a multiple-choice prompt with four options
- QUESTION_BANK / FALLBACK_QUESTIONS: built-in content
- QuestionProvider: the interface the game session talks to
- StaticQuestionProvider, CsvQuestionProvider: concrete sources
"""

from .model import Question
from .bank import FALLBACK_QUESTIONS, QUESTION_BANK
from .provider import CsvQuestionProvider, QuestionProvider, StaticQuestionProvider, load_questions_csv

__all__ = [
    "Question",
    "QUESTION_BANK",
    "FALLBACK_QUESTIONS",
    "QuestionProvider",
    "StaticQuestionProvider",
    "CsvQuestionProvider",
    "load_questions_csv",
]
