"""
Grid module for Minesweeper game.

Owns the matrix of cells, the mine layout and the incrementally
maintained reveal/flag counters.
"""
import random
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Set

from .cell import Cell, CellState
from .errors import (
    AlreadyFlagged,
    CellRevealed,
    InvalidConfiguration,
    NotFlagged,
    OutOfBounds,
)
from .layout import Position, count_adjacent_mines, generate_mines


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Minesweeper grid.

    Cells are only mutated through this class so that ``revealed_count``
    and ``flagged_count`` always match the cells; they are recounted by
    scanning only when a grid is loaded from records.
    """

    def __init__(self, rows: int, columns: int, mines: Iterable[Position]) -> None:
        """
        Build a grid with mines at the given positions.

        Args:
            rows: Number of rows.
            columns: Number of columns.
            mines: Mine positions.
        """
        if rows < 1 or columns < 1:
            raise InvalidConfiguration("Board dimensions must be positive")

        self.rows = rows
        self.columns = columns
        mines = set(mines)
        for row, col in mines:
            if not self.is_valid_position(row, col):
                raise InvalidConfiguration(
                    f"Mine ({row}, {col}) is outside the {rows}x{columns} grid"
                )
        if len(mines) >= rows * columns:
            raise InvalidConfiguration(
                f"Too many mines (max {rows * columns - 1})"
            )
        self.mine_count = len(mines)

        counts = count_adjacent_mines(rows, columns, mines)
        self._cells: List[List[Cell]] = [
            [
                Cell(
                    row=row,
                    column=col,
                    is_mine=(row, col) in mines,
                    adjacent_mine_count=int(counts[row, col]),
                )
                for col in range(columns)
            ]
            for row in range(rows)
        ]
        self._revealed_count = 0
        self._flagged_count = 0

    @classmethod
    def generate(
        cls,
        rows: int,
        columns: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> "Grid":
        """Build a grid with a freshly generated random layout."""
        return cls(rows, columns, generate_mines(rows, columns, mine_count, rng))

    @classmethod
    def from_records(
        cls, rows: int, columns: int, records: Iterable[Dict[str, Any]]
    ) -> "Grid":
        """
        Rebuild a grid from stored cell records.

        Adjacency counts are taken from the records as stored; the
        reveal and flag counters are recounted.
        """
        grid = cls.__new__(cls)
        grid.rows = rows
        grid.columns = columns
        grid._cells = [[None] * columns for _ in range(rows)]
        for record in records:
            cell = Cell.from_record(record)
            if not grid.is_valid_position(cell.row, cell.column):
                raise InvalidConfiguration(
                    f"Stored cell ({cell.row}, {cell.column}) is outside "
                    f"the {rows}x{columns} grid"
                )
            grid._cells[cell.row][cell.column] = cell
        if any(cell is None for line in grid._cells for cell in line):
            raise InvalidConfiguration("Stored grid is missing cells")

        grid.mine_count = sum(cell.is_mine for cell in grid)
        grid._revealed_count = sum(cell.is_revealed for cell in grid)
        grid._flagged_count = sum(cell.is_flagged for cell in grid)
        return grid

    # ========================================================================
    # Position Utilities (Low-level)
    # ========================================================================

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self.rows and 0 <= col < self.columns

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position, raising ``OutOfBounds`` if invalid."""
        if not self.is_valid_position(row, col):
            raise OutOfBounds(row, col, self.rows, self.columns)
        return self._cells[row][col]

    def __iter__(self) -> Iterator[Cell]:
        for line in self._cells:
            yield from line

    @property
    def cells(self) -> Sequence[Sequence[Cell]]:
        return self._cells

    # ========================================================================
    # Mutations
    # ========================================================================

    def apply_reveal(self, positions: Iterable[Position]) -> int:
        """
        Mark a planned set of positions revealed.

        Args:
            positions: Hidden, unflagged positions from a reveal plan.

        Returns:
            Number of cells newly revealed.
        """
        revealed = 0
        for row, col in positions:
            if self._cells[row][col].reveal():
                revealed += 1
        self._revealed_count += revealed
        return revealed

    def flag(self, row: int, col: int) -> None:
        """Place a flag on a hidden cell."""
        cell = self.get_cell(row, col)
        if cell.is_revealed:
            raise CellRevealed(row, col)
        if cell.is_flagged:
            raise AlreadyFlagged(row, col)
        cell.flag()
        self._flagged_count += 1

    def unflag(self, row: int, col: int) -> None:
        """Remove the flag from a flagged cell."""
        cell = self.get_cell(row, col)
        if not cell.is_flagged:
            raise NotFlagged(row, col)
        cell.unflag()
        self._flagged_count -= 1

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns

    @property
    def safe_cell_count(self) -> int:
        """Number of cells that are not mines."""
        return self.total_cells - self.mine_count

    @property
    def mine_positions(self) -> Set[Position]:
        return {cell.position for cell in self if cell.is_mine}

    def hidden_positions(self) -> List[Position]:
        """Positions that can still be revealed."""
        return [cell.position for cell in self if cell.state == CellState.HIDDEN]

    def to_records(self) -> List[Dict[str, Any]]:
        """Full unfiltered cell records, row-major, for storage."""
        return [cell.to_record() for cell in self]
