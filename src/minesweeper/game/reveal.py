"""
Reveal engine for Minesweeper.

Computes which cells a reveal uncovers, cascading through connected
empty cells, before anything on the grid changes.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import FrozenSet

from .errors import AlreadyRevealed, CellFlagged
from .grid import Grid
from .layout import Position


@dataclass(frozen=True)
class RevealOutcome:
    """
    Result of revealing one cell.

    Attributes:
        hit_mine: Whether the target was a mine.
        newly_revealed: Every position uncovered by this reveal.
    """

    hit_mine: bool
    newly_revealed: FrozenSet[Position] = field(default_factory=frozenset)


def plan_reveal(grid: Grid, row: int, col: int) -> RevealOutcome:
    """
    Work out what revealing a cell would uncover, without mutating.

    A mine ends the plan immediately. An empty cell (no adjacent mines)
    expands breadth-first: hidden, unflagged, non-mine neighbors are
    uncovered, and only those that are themselves empty are expanded
    further. Flagged cells are never uncovered.

    Args:
        grid: Grid to plan against.
        row: Target row.
        col: Target column.

    Returns:
        The planned outcome.

    Raises:
        OutOfBounds: If the target is outside the grid.
        AlreadyRevealed: If the target is already revealed.
        CellFlagged: If the target is flagged.
    """
    target = grid.get_cell(row, col)
    if target.is_revealed:
        raise AlreadyRevealed(row, col)
    if target.is_flagged:
        raise CellFlagged(row, col)

    if target.is_mine:
        return RevealOutcome(hit_mine=True, newly_revealed=frozenset({(row, col)}))

    revealed = {(row, col)}
    if target.adjacent_mine_count == 0:
        queue = deque([(row, col)])
        while queue:
            current_row, current_col = queue.popleft()
            for neighbor_row, neighbor_col in grid.neighbors(current_row, current_col):
                if (neighbor_row, neighbor_col) in revealed:
                    continue
                neighbor = grid.cells[neighbor_row][neighbor_col]
                if not neighbor.is_hidden or neighbor.is_mine:
                    continue
                revealed.add((neighbor_row, neighbor_col))
                if neighbor.adjacent_mine_count == 0:
                    queue.append((neighbor_row, neighbor_col))

    return RevealOutcome(hit_mine=False, newly_revealed=frozenset(revealed))


def reveal(grid: Grid, row: int, col: int) -> RevealOutcome:
    """Plan a reveal and apply it to the grid in one step."""
    outcome = plan_reveal(grid, row, col)
    grid.apply_reveal(outcome.newly_revealed)
    return outcome
