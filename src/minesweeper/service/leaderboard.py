"""
Leaderboard for won games.

Keeps high scores and answers fastest-first queries, optionally
filtered by difficulty.
"""
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..game.config import Difficulty
from ..game.session import Clock, ScoreSubmission


MAX_LIMIT = 100


@dataclass(frozen=True)
class HighScore:
    """One leaderboard entry."""

    id: int
    player_name: str
    difficulty: Difficulty
    duration_seconds: int
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "player_name": self.player_name,
            "difficulty": self.difficulty.value,
            "duration_seconds": self.duration_seconds,
            "created_at": self.created_at.isoformat(),
        }


class Leaderboard:
    """In-memory high score table."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock or datetime.now
        self._scores: List[HighScore] = []
        self._lock = threading.Lock()

    def record(self, submission: ScoreSubmission) -> HighScore:
        """Store a scoring hand-off as a new entry."""
        with self._lock:
            score = HighScore(
                id=len(self._scores) + 1,
                player_name=submission.player_name,
                difficulty=submission.difficulty,
                duration_seconds=submission.duration,
                created_at=self.clock(),
            )
            self._scores.append(score)
        return score

    def top(
        self, difficulty: Optional[Difficulty] = None, limit: int = 10
    ) -> List[HighScore]:
        """
        Fastest entries first.

        Args:
            difficulty: Only include this difficulty when given.
            limit: Maximum entries to return (1-100).

        Returns:
            Entries sorted by duration, then creation time, then id.
        """
        if not 1 <= limit <= MAX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIMIT}")
        with self._lock:
            scores = list(self._scores)
        if difficulty is not None:
            difficulty = Difficulty(difficulty)
            scores = [score for score in scores if score.difficulty == difficulty]
        ranked = sorted(
            scores,
            key=lambda score: (score.duration_seconds, score.created_at, score.id),
        )
        return ranked[:limit]

    def __len__(self) -> int:
        return len(self._scores)
