"""High score persistence for Quiz Tetris."""

from .leaderboard import (
    HighScoreEntry,
    HighScoreStats,
    InMemoryLeaderboard,
    JsonLeaderboard,
    Leaderboard,
    ScoreRecord,
    format_rank,
    format_score,
)

__all__ = [
    "HighScoreEntry",
    "HighScoreStats",
    "ScoreRecord",
    "Leaderboard",
    "InMemoryLeaderboard",
    "JsonLeaderboard",
    "format_rank",
    "format_score",
]
