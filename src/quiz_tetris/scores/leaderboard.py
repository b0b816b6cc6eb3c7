from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

MAX_HIGH_SCORES = 10


@dataclass(frozen=True)
class HighScoreEntry:
    id: str
    player_name: str
    score: int
    level: int
    lines: int
    date: str
    timestamp: int  # ms since epoch, tie-break key


@dataclass(frozen=True)
class HighScoreStats:
    rank: int
    is_top3: bool
    is_new_record: bool
    total_players: int


@dataclass(frozen=True)
class ScoreRecord:
    entry: HighScoreEntry
    stats: HighScoreStats
    leaderboard: List[HighScoreEntry]


def sort_scores(entries: List[HighScoreEntry]) -> List[HighScoreEntry]:
    # Higher score first; for equal scores the earlier entry wins
    return sorted(entries, key=lambda e: (-e.score, e.timestamp))


class Leaderboard:
    """Top-N score table. Subclasses decide where entries are stored."""

    def __init__(self, max_entries: int = MAX_HIGH_SCORES, now: Callable[[], datetime] = datetime.now) -> None:
        self.max_entries = int(max_entries)
        self.now = now

    def _load(self) -> List[HighScoreEntry]:
        raise NotImplementedError

    def _save(self, entries: List[HighScoreEntry]) -> None:
        raise NotImplementedError

    def list_top_scores(self, limit: Optional[int] = None) -> List[HighScoreEntry]:
        limit = self.max_entries if limit is None else min(limit, self.max_entries)
        return sort_scores(self._load())[:limit]

    def record_score(self, name: str, score: int, level: int, lines: int) -> ScoreRecord:
        current = self.list_top_scores()
        moment = self.now()
        timestamp = int(moment.timestamp() * 1000)
        entry = HighScoreEntry(
            id=f"{timestamp}-{uuid.uuid4().hex[:9]}",
            player_name=name.strip() or "Anonymous",
            score=int(score),
            level=int(level),
            lines=int(lines),
            date=moment.strftime("%m/%d/%Y"),
            timestamp=timestamp,
        )
        ordered = sort_scores(current + [entry])
        rank = next(i for i, e in enumerate(ordered) if e.id == entry.id) + 1
        stats = HighScoreStats(
            rank=rank,
            is_top3=rank <= 3,
            is_new_record=rank == 1,
            total_players=max(len(current) + 1, rank),
        )
        kept = ordered[: self.max_entries]
        self._save(kept)
        return ScoreRecord(entry=entry, stats=stats, leaderboard=kept)

    def is_qualifying_score(self, score: int) -> bool:
        scores = self.list_top_scores()
        if len(scores) < self.max_entries:
            return True
        return score > scores[-1].score

    def score_rank(self, score: int) -> int:
        """Rank ``score`` would get without being recorded."""
        rank = 1
        for entry in self.list_top_scores():
            if score > entry.score:
                break
            rank += 1
        return rank

    def clear(self) -> None:
        self._save([])


class InMemoryLeaderboard(Leaderboard):
    def __init__(self, max_entries: int = MAX_HIGH_SCORES, now: Callable[[], datetime] = datetime.now) -> None:
        super().__init__(max_entries, now)
        self._entries: List[HighScoreEntry] = []

    def _load(self) -> List[HighScoreEntry]:
        return list(self._entries)

    def _save(self, entries: List[HighScoreEntry]) -> None:
        self._entries = list(entries)


class JsonLeaderboard(Leaderboard):
    """Scores kept in a JSON file; I/O problems degrade to an empty board."""

    def __init__(self, path: Path | str, max_entries: int = MAX_HIGH_SCORES,
                 now: Callable[[], datetime] = datetime.now) -> None:
        super().__init__(max_entries, now)
        self.path = Path(path).expanduser()

    def _load(self) -> List[HighScoreEntry]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [HighScoreEntry(**item) for item in data]
        except (OSError, ValueError, TypeError) as exc:
            logger.error("Error loading high scores from %s: %s", self.path, exc)
            return []

    def _save(self, entries: List[HighScoreEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = [asdict(e) for e in sort_scores(entries)[: self.max_entries]]
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Error saving high scores to %s: %s", self.path, exc)


def format_score(score: int) -> str:
    return f"{score:,}"


def format_rank(rank: int) -> str:
    if 11 <= rank % 100 <= 13:
        return f"{rank}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{rank}{suffix}"
