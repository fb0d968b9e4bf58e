"""
Game session module for Minesweeper.

Wraps a grid with status, timing and player identity, and enforces
the in-progress -> won/lost lifecycle.
"""
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

import numpy as np

from .cell import CellView
from .config import Difficulty, GameConfig
from .errors import InvalidConfiguration, InvalidMove, InvalidState, ScoringIneligible
from .grid import Grid
from .reveal import RevealOutcome, plan_reveal


Clock = Callable[[], datetime]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(str, Enum):
    """Possible states of a game session."""

    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"
    PAUSED = "paused"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


class MoveAction(str, Enum):
    """Moves a player can request on a cell."""

    REVEAL = "reveal"
    FLAG = "flag"
    UNFLAG = "unflag"


# ============================================================================
# Request / Result Data Classes
# ============================================================================

@dataclass
class MoveRequest:
    """Request to act on one cell."""

    row: int
    column: int
    action: MoveAction

    def __post_init__(self) -> None:
        for name in ("row", "column"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidMove(f"{name} must be an integer, got {value!r}")
        try:
            self.action = MoveAction(self.action)
        except ValueError:
            raise InvalidMove(f"Unknown action: {self.action!r}") from None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MoveRequest":
        missing = [key for key in ("row", "column", "action") if key not in data]
        if missing:
            raise InvalidMove(f"Move is missing {', '.join(missing)}")
        return cls(row=data["row"], column=data["column"], action=data["action"])


@dataclass(frozen=True)
class ScoreSubmission:
    """A won game handed off for the leaderboard."""

    player_name: str
    difficulty: Difficulty
    duration: int


@dataclass
class SessionSnapshot:
    """Externally visible session state (without the grid)."""

    status: GameStatus
    rows: int
    columns: int
    mine_count: int
    difficulty: Difficulty
    player_name: Optional[str]
    started_at: datetime
    ended_at: Optional[datetime]
    duration: Optional[int]
    revealed_count: int
    flagged_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "rows": self.rows,
            "columns": self.columns,
            "mine_count": self.mine_count,
            "difficulty": self.difficulty.value,
            "player_name": self.player_name,
            "started_at": self.started_at.isoformat(),
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "duration": self.duration,
            "revealed_count": self.revealed_count,
            "flagged_count": self.flagged_count,
        }


def compute_duration(started_at: datetime, ended_at: datetime) -> int:
    """Whole seconds between two timestamps, never less than 1."""
    seconds = int((ended_at - started_at).total_seconds() // 1)
    return max(1, seconds)


# ============================================================================
# Game Session
# ============================================================================

@dataclass
class GameSession:
    """
    One player's attempt on a grid.

    All mutations validate fully before touching the grid, so a failed
    call leaves the session unchanged. Once won or lost the session only
    answers queries.
    """

    grid: Grid
    difficulty: Difficulty = Difficulty.CUSTOM
    player_name: Optional[str] = None
    clock: Clock = field(default=datetime.now, repr=False)
    started_at: Optional[datetime] = None
    _status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    _ended_at: Optional[datetime] = field(default=None, init=False)
    _duration: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.difficulty = Difficulty(self.difficulty)
        if self.started_at is None:
            self.started_at = self.clock()

    @classmethod
    def new(
        cls,
        config: GameConfig,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> "GameSession":
        """
        Start a session with a freshly generated grid.

        Args:
            config: Validated game configuration.
            rng: Random source for mine placement.
            clock: Timestamp source (defaults to ``datetime.now``).

        Returns:
            New in-progress session.
        """
        grid = Grid.generate(config.rows, config.columns, config.mine_count, rng)
        return cls(
            grid=grid,
            difficulty=config.difficulty,
            player_name=config.player_name,
            clock=clock or datetime.now,
        )

    def restart(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> "GameSession":
        """Start a brand-new session with this one's configuration."""
        grid = Grid.generate(
            self.grid.rows, self.grid.columns, self.grid.mine_count, rng
        )
        return GameSession(
            grid=grid,
            difficulty=self.difficulty,
            player_name=self.player_name,
            clock=clock or self.clock,
        )

    # ========================================================================
    # Moves
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell, cascading through empty neighbors.

        Hitting a mine loses the game; uncovering the last safe cell
        wins it.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            What the reveal uncovered.
        """
        self._require_in_progress()
        outcome = plan_reveal(self.grid, row, col)

        self.grid.apply_reveal(outcome.newly_revealed)
        if outcome.hit_mine:
            self._finish(GameStatus.LOST)
        elif self.grid.revealed_count == self.grid.safe_cell_count:
            self._finish(GameStatus.WON)
        return outcome

    def flag(self, row: int, col: int) -> None:
        """Flag a hidden cell."""
        self._require_in_progress()
        self.grid.flag(row, col)

    def unflag(self, row: int, col: int) -> None:
        """Remove a flag."""
        self._require_in_progress()
        self.grid.unflag(row, col)

    def apply_move(self, move: MoveRequest) -> Optional[RevealOutcome]:
        """Dispatch a move request to reveal, flag or unflag."""
        if move.action == MoveAction.REVEAL:
            return self.reveal(move.row, move.column)
        if move.action == MoveAction.FLAG:
            self.flag(move.row, move.column)
        else:
            self.unflag(move.row, move.column)
        return None

    def _require_in_progress(self) -> None:
        if self._status != GameStatus.IN_PROGRESS:
            raise InvalidState(
                f"Game is {self._status.value}; no further moves are allowed"
            )

    def _finish(self, status: GameStatus) -> None:
        ended_at = self.clock()
        self._status = status
        self._ended_at = ended_at
        self._duration = compute_duration(self.started_at, ended_at)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def ended_at(self) -> Optional[datetime]:
        return self._ended_at

    @property
    def duration(self) -> Optional[int]:
        return self._duration

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def columns(self) -> int:
        return self.grid.columns

    @property
    def mine_count(self) -> int:
        return self.grid.mine_count

    @property
    def revealed_count(self) -> int:
        return self.grid.revealed_count

    @property
    def flagged_count(self) -> int:
        return self.grid.flagged_count

    @property
    def remaining_mines(self) -> int:
        """Mines not yet accounted for by flags, floored at zero."""
        return max(0, self.grid.mine_count - self.grid.flagged_count)

    @property
    def is_game_over(self) -> bool:
        return self._status.is_terminal

    @property
    def is_victory(self) -> bool:
        return self._status == GameStatus.WON

    def elapsed_seconds(self, now: Optional[datetime] = None) -> int:
        """Seconds played so far; the final duration once the game ended."""
        if self._duration is not None:
            return self._duration
        now = now or self.clock()
        return max(0, int((now - self.started_at).total_seconds()))

    # ========================================================================
    # Projections
    # ========================================================================

    def projection(self) -> List[List[CellView]]:
        """
        Grid as a caller may see it.

        Hidden cells report no mine and a zero count until the game is
        over; flags are always reported.
        """
        expose = self.is_game_over
        return [[cell.view(expose) for cell in line] for line in self.grid.cells]

    def observation(self) -> np.ndarray:
        """
        Projection encoded as a numpy array for agents.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = mine (revealed, or any mine once the game is over)
        """
        obs = np.full((self.rows, self.columns), -1, dtype=np.int8)
        for line in self.projection():
            for view in line:
                obs[view.row, view.column] = view.to_observation()
        return obs

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self._status,
            rows=self.rows,
            columns=self.columns,
            mine_count=self.mine_count,
            difficulty=self.difficulty,
            player_name=self.player_name,
            started_at=self.started_at,
            ended_at=self._ended_at,
            duration=self._duration,
            revealed_count=self.revealed_count,
            flagged_count=self.flagged_count,
        )

    # ========================================================================
    # Scoring
    # ========================================================================

    def scoring_handoff(self, player_name: Optional[str] = None) -> ScoreSubmission:
        """
        Turn a won game into a leaderboard submission.

        Args:
            player_name: Name to record; defaults to the session's player.

        Raises:
            ScoringIneligible: If the game is not won, has no duration,
                or no player name is available.
        """
        if self._status != GameStatus.WON:
            raise ScoringIneligible(
                f"Cannot save high score for game with status: "
                f"{self._status.value}. Only won games can be saved."
            )
        if self._duration is None:
            raise ScoringIneligible(
                "Cannot save high score: game duration is not available"
            )
        name = (player_name or self.player_name or "").strip()
        if not name:
            raise ScoringIneligible("Cannot save high score without a player name")
        return ScoreSubmission(
            player_name=name, difficulty=self.difficulty, duration=self._duration
        )

    # ========================================================================
    # Persistence
    # ========================================================================

    def to_record(self) -> Dict[str, Any]:
        """Full unfiltered state as JSON-compatible data."""
        return {
            "status": self._status.value,
            "difficulty": self.difficulty.value,
            "player_name": self.player_name,
            "rows": self.rows,
            "columns": self.columns,
            "started_at": self.started_at.isoformat(),
            "ended_at": self._ended_at.isoformat() if self._ended_at else None,
            "duration": self._duration,
            "cells": self.grid.to_records(),
        }

    @classmethod
    def from_record(
        cls, record: Mapping[str, Any], clock: Optional[Clock] = None
    ) -> "GameSession":
        """Rebuild a session from ``to_record`` output."""
        status = GameStatus(record["status"])
        ended_at = record.get("ended_at")
        duration = record.get("duration")
        if status.is_terminal and (ended_at is None or duration is None):
            raise InvalidConfiguration(
                f"Stored {status.value} game is missing its end time"
            )

        session = cls(
            grid=Grid.from_records(record["rows"], record["columns"], record["cells"]),
            difficulty=record["difficulty"],
            player_name=record.get("player_name"),
            clock=clock or datetime.now,
            started_at=datetime.fromisoformat(record["started_at"]),
        )
        session._status = status
        session._ended_at = datetime.fromisoformat(ended_at) if ended_at else None
        session._duration = duration
        return session
