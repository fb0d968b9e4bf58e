"""
Minesweeper game module.

Provides the core engine: configuration, cells, grid, mine layout,
reveal cascade and the game session state machine.
"""
from .cell import Cell, CellState, CellView
from .config import (
    GameConfig,
    Difficulty,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .errors import (
    MinesweeperError,
    InvalidConfiguration,
    InvalidMove,
    OutOfBounds,
    InvalidState,
    CellStateError,
    AlreadyRevealed,
    CellFlagged,
    CellRevealed,
    AlreadyFlagged,
    NotFlagged,
    SessionNotFound,
    ScoringIneligible,
)
from .grid import Grid
from .layout import generate_mines, count_adjacent_mines
from .reveal import RevealOutcome, plan_reveal, reveal
from .session import (
    GameSession,
    GameStatus,
    MoveAction,
    MoveRequest,
    ScoreSubmission,
    SessionSnapshot,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "GameConfig",
    "Difficulty",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "MinesweeperError",
    "InvalidConfiguration",
    "InvalidMove",
    "OutOfBounds",
    "InvalidState",
    "CellStateError",
    "AlreadyRevealed",
    "CellFlagged",
    "CellRevealed",
    "AlreadyFlagged",
    "NotFlagged",
    "SessionNotFound",
    "ScoringIneligible",
    "Grid",
    "generate_mines",
    "count_adjacent_mines",
    "RevealOutcome",
    "plan_reveal",
    "reveal",
    "GameSession",
    "GameStatus",
    "MoveAction",
    "MoveRequest",
    "ScoreSubmission",
    "SessionSnapshot",
    "MinesweeperEnv",
]
