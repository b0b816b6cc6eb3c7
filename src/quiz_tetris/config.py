"""
Configuration Loader
====================

Loads and validates quiz_tetris YAML configuration, providing typed access to
all tunable values. ``load_config()`` with no path reads the packaged
``data/default_config.yaml``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Playfield geometry and piece source."""
    width: int
    height: int
    spawn_y: int
    random_seed: Optional[int]


@dataclass(frozen=True)
class TimingConfig:
    """Recurring timers, in seconds."""
    drop_interval: float        # gravity tick while playing
    clock_interval: float       # session wall-clock tick


@dataclass(frozen=True)
class QuizConfig:
    """Question flow parameters."""
    total_questions: int
    time_limit: float
    explanation_dwell: float    # pause after grading before play resumes
    countdown_poll: float
    questions_csv: Optional[str]


@dataclass(frozen=True)
class LeaderboardConfig:
    path: str
    max_entries: int


@dataclass(frozen=True)
class AudioConfig:
    enabled: bool
    volume: float


@dataclass(frozen=True)
class AppConfig:
    """
    Complete application configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    timing: TimingConfig
    quiz: QuizConfig
    leaderboard: LeaderboardConfig
    audio: AudioConfig


def _validate_config(config: AppConfig) -> None:
    """Validate configuration consistency."""
    if config.board.width < 4 or config.board.height < 4:
        raise ValueError(
            f"Board must be at least 4x4, got {config.board.width}x{config.board.height}"
        )
    if config.timing.drop_interval <= 0 or config.timing.clock_interval <= 0:
        raise ValueError("Timer intervals must be positive")
    if config.quiz.total_questions < 1:
        raise ValueError(f"total_questions must be >= 1, got {config.quiz.total_questions}")
    if config.quiz.time_limit <= 0:
        raise ValueError(f"time_limit must be positive, got {config.quiz.time_limit}")
    if config.quiz.explanation_dwell < 0 or config.quiz.countdown_poll <= 0:
        raise ValueError("explanation_dwell must be >= 0 and countdown_poll > 0")
    if config.leaderboard.max_entries < 1:
        raise ValueError(f"leaderboard max_entries must be >= 1, got {config.leaderboard.max_entries}")
    if not 0.0 <= config.audio.volume <= 1.0:
        raise ValueError(f"audio volume must be in [0, 1], got {config.audio.volume}")


def default_config_path() -> Path:
    return Path(os.path.dirname(__file__)) / "data" / "default_config.yaml"


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load and validate configuration from YAML.

    Args:
        config_path: Path to a YAML file. If None, uses the packaged defaults.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    path = Path(config_path) if config_path is not None else default_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    board_data = raw.get("board", {})
    seed = board_data.get("random_seed")
    board = BoardConfig(
        width=int(board_data.get("width", 10)),
        height=int(board_data.get("height", 20)),
        spawn_y=int(board_data.get("spawn_y", 0)),
        random_seed=None if seed is None else int(seed),
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        drop_interval=float(timing_data.get("drop_interval", 1.0)),
        clock_interval=float(timing_data.get("clock_interval", 1.0)),
    )

    quiz_data = raw.get("quiz", {})
    csv_path = quiz_data.get("questions_csv")
    quiz = QuizConfig(
        total_questions=int(quiz_data.get("total_questions", 5)),
        time_limit=float(quiz_data.get("time_limit", 30.0)),
        explanation_dwell=float(quiz_data.get("explanation_dwell", 2.5)),
        countdown_poll=float(quiz_data.get("countdown_poll", 0.1)),
        questions_csv=None if not csv_path else str(csv_path),
    )

    lb_data = raw.get("leaderboard", {})
    leaderboard = LeaderboardConfig(
        path=str(lb_data.get("path", "~/.quiz_tetris/high_scores.json")),
        max_entries=int(lb_data.get("max_entries", 10)),
    )

    audio_data = raw.get("audio", {})
    audio = AudioConfig(
        enabled=bool(audio_data.get("enabled", True)),
        volume=float(audio_data.get("volume", 0.3)),
    )

    config = AppConfig(board=board, timing=timing, quiz=quiz, leaderboard=leaderboard, audio=audio)
    _validate_config(config)
    return config
