"""
Error types raised by the Minesweeper engine.

Every error carries a stable ``kind`` string so callers at the service
boundary can tell failures apart without matching on messages.
"""
from typing import Dict


# ============================================================================
# Base Error
# ============================================================================

class MinesweeperError(Exception):
    """Base class for all engine and collaborator errors."""

    kind = "minesweeper_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        """Convert to a rejected-request payload."""
        return {"error": self.kind, "message": self.message}


# ============================================================================
# Configuration and Lookup Errors
# ============================================================================

class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions or mine count are not acceptable."""

    kind = "invalid_configuration"


class InvalidMove(MinesweeperError, ValueError):
    """Move request is malformed: unknown action or non-integer coordinates."""

    kind = "invalid_move"


class OutOfBounds(MinesweeperError, IndexError):
    """Move coordinates fall outside the grid."""

    kind = "out_of_bounds"

    def __init__(self, row: int, column: int, rows: int, columns: int) -> None:
        super().__init__(
            f"Cell ({row}, {column}) is outside the {rows}x{columns} grid"
        )
        self.row = row
        self.column = column


class SessionNotFound(MinesweeperError, KeyError):
    """Referenced game id does not exist."""

    kind = "session_not_found"

    def __init__(self, game_id: int) -> None:
        super().__init__(f"Game with ID {game_id} not found")
        self.game_id = game_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


# ============================================================================
# State Errors
# ============================================================================

class InvalidState(MinesweeperError):
    """Mutation attempted on a session that is not in progress."""

    kind = "invalid_state"


class CellStateError(MinesweeperError):
    """A move violates a precondition on the target cell's state."""

    kind = "cell_state_error"
    template = "Cell ({row}, {column}) cannot be changed"

    def __init__(self, row: int, column: int) -> None:
        super().__init__(self.template.format(row=row, column=column))
        self.row = row
        self.column = column


class AlreadyRevealed(CellStateError):
    kind = "already_revealed"
    template = "Cell ({row}, {column}) is already revealed"


class CellFlagged(CellStateError):
    kind = "cell_flagged"
    template = "Cell ({row}, {column}) is flagged; unflag it before revealing"


class CellRevealed(CellStateError):
    kind = "cell_revealed"
    template = "Cell ({row}, {column}) is revealed and cannot be flagged"


class AlreadyFlagged(CellStateError):
    kind = "already_flagged"
    template = "Cell ({row}, {column}) is already flagged"


class NotFlagged(CellStateError):
    kind = "not_flagged"
    template = "Cell ({row}, {column}) is not flagged"


class ScoringIneligible(MinesweeperError):
    """Session cannot be turned into a leaderboard entry."""

    kind = "scoring_ineligible"
