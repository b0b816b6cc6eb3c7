"""
Shared fixtures: fast timings, a controllable clock, and quiet collaborators.
"""

import pytest

from quiz_tetris.audio.sounds import SilentSoundEffects
from quiz_tetris.config import (
    AppConfig,
    AudioConfig,
    BoardConfig,
    LeaderboardConfig,
    QuizConfig,
    TimingConfig,
)
from quiz_tetris.game import QuizSession
from quiz_tetris.questions import StaticQuestionProvider
from quiz_tetris.scores import InMemoryLeaderboard


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_config(drop_interval=3600.0, clock_interval=3600.0, dwell=0.0, poll=0.01, seed=7):
    return AppConfig(
        board=BoardConfig(width=10, height=20, spawn_y=0, random_seed=seed),
        timing=TimingConfig(drop_interval=drop_interval, clock_interval=clock_interval),
        quiz=QuizConfig(
            total_questions=5,
            time_limit=30.0,
            explanation_dwell=dwell,
            countdown_poll=poll,
            questions_csv=None,
        ),
        leaderboard=LeaderboardConfig(path="unused.json", max_entries=10),
        audio=AudioConfig(enabled=True, volume=0.3),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sounds():
    return SilentSoundEffects()


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def make_session(clock, sounds):
    def _make(config=None, provider=None, leaderboard=None):
        return QuizSession(
            provider=provider or StaticQuestionProvider(seed=1),
            leaderboard=leaderboard or InMemoryLeaderboard(),
            sounds=sounds,
            config=config or make_config(),
            clock=clock,
        )
    return _make
