"""
Minefield layout for Minesweeper.

Places mines and derives adjacency counts. Both functions are pure:
randomness comes only from the ``rng`` the caller passes in.
"""
import random
from typing import Iterable, Optional, Set, Tuple

import numpy as np

from .errors import InvalidConfiguration


Position = Tuple[int, int]


# ============================================================================
# Mine Placement
# ============================================================================

def generate_mines(
    rows: int,
    columns: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
) -> Set[Position]:
    """
    Place mines uniformly at random without replacement.

    Samples (row, column) pairs and rejects duplicates until enough
    distinct positions are collected. No position is kept free for the
    first reveal.

    Args:
        rows: Number of rows.
        columns: Number of columns.
        mine_count: Number of mines to place.
        rng: Random source; a fresh unseeded one is used if omitted.

    Returns:
        Set of exactly ``mine_count`` distinct (row, column) positions.

    Raises:
        InvalidConfiguration: If dimensions are not positive or the mines
            would not leave at least one safe cell.
    """
    if rows < 1 or columns < 1:
        raise InvalidConfiguration("Board dimensions must be positive")
    if mine_count < 0:
        raise InvalidConfiguration("Number of mines cannot be negative")
    if mine_count >= rows * columns:
        raise InvalidConfiguration(
            f"Too many mines (max {rows * columns - 1})"
        )

    rng = rng or random.Random()
    mines: Set[Position] = set()
    while len(mines) < mine_count:
        mines.add((rng.randrange(rows), rng.randrange(columns)))
    return mines


# ============================================================================
# Adjacency Counts
# ============================================================================

def mine_mask(rows: int, columns: int, mines: Iterable[Position]) -> np.ndarray:
    """Boolean (rows, columns) array with True at each mine."""
    mask = np.zeros((rows, columns), dtype=bool)
    for row, col in mines:
        mask[row, col] = True
    return mask


def count_adjacent_mines(
    rows: int, columns: int, mines: Iterable[Position]
) -> np.ndarray:
    """
    Count mines among each cell's (up to 8) neighbors.

    The mine mask is zero-padded by one cell so that the eight shifted
    windows line up with the grid; summing them gives neighbor counts
    clipped at the edges.

    Args:
        rows: Number of rows.
        columns: Number of columns.
        mines: Mine positions.

    Returns:
        int8 array of shape (rows, columns); mine cells hold 0.
    """
    mask = mine_mask(rows, columns, mines)
    padded = np.pad(mask.astype(np.int8), 1)
    counts = np.zeros((rows, columns), dtype=np.int8)
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            counts += padded[
                1 + delta_row:1 + delta_row + rows,
                1 + delta_col:1 + delta_col + columns,
            ]
    counts[mask] = 0
    return counts
