"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number), plus the
visibility-filtered view handed to callers.
"""
from enum import Enum
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(str, Enum):
    """Possible visual states of a cell."""

    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"


# Observation codes for hidden content
HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    A single ``state`` field means a cell can never be both revealed
    and flagged.

    Attributes:
        row: Row index in the grid.
        column: Column index in the grid.
        is_mine: Whether this cell contains a mine.
        adjacent_mine_count: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    row: int
    column: int
    is_mine: bool = False
    adjacent_mine_count: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if already revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def flag(self) -> bool:
        """
        Flag this cell.

        Returns:
            True if the flag was placed, False if cell is not hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.FLAGGED
        return True

    def unflag(self) -> bool:
        """
        Remove the flag from this cell.

        Returns:
            True if the flag was removed, False if cell was not flagged.
        """
        if self.state != CellState.FLAGGED:
            return False
        self.state = CellState.HIDDEN
        return True

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.column

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def view(self, expose: bool = False) -> "CellView":
        """
        Project this cell for a caller.

        Mine identity and count are only shown for revealed cells, or
        for every cell when ``expose`` is set (finished games).

        Args:
            expose: Show hidden content regardless of state.

        Returns:
            Visibility-filtered view of the cell.
        """
        visible = expose or self.is_revealed
        return CellView(
            row=self.row,
            column=self.column,
            is_mine=self.is_mine if visible else False,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
            adjacent_mine_count=(
                self.adjacent_mine_count if visible and not self.is_mine else 0
            ),
        )

    def to_record(self) -> Dict[str, Any]:
        """Full unfiltered state, for storage only."""
        return {
            "row": self.row,
            "column": self.column,
            "is_mine": self.is_mine,
            "adjacent_mine_count": self.adjacent_mine_count,
            "state": self.state.value,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Cell":
        return cls(
            row=record["row"],
            column=record["column"],
            is_mine=record["is_mine"],
            adjacent_mine_count=record["adjacent_mine_count"],
            state=CellState(record["state"]),
        )


# ============================================================================
# Projected Cell
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """Caller-safe view of a cell."""

    row: int
    column: int
    is_mine: bool
    is_revealed: bool
    is_flagged: bool
    adjacent_mine_count: int

    def to_observation(self) -> int:
        """
        Convert view to observation value for agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Mine (revealed, or exposed after the game ended)
        """
        if self.is_flagged:
            return FLAGGED_CODE
        if self.is_mine:
            return MINE_CODE
        if not self.is_revealed:
            return HIDDEN_CODE
        return self.adjacent_mine_count

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
