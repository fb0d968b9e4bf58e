"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper.game import Cell, GameConfig, GameSession, Grid
from minesweeper.service import GameService


START = datetime(2024, 1, 1, 12, 0, 0)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


# ============================================================================
# Clock / Random Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """A controllable clock starting at a fixed time."""
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def corner_grid() -> Grid:
    """3x3 grid with a single mine at (0, 0)."""
    return Grid(3, 3, {(0, 0)})


@pytest.fixture
def tiny_grid() -> Grid:
    """2x2 grid with a single mine at (0, 0)."""
    return Grid(2, 2, {(0, 0)})


@pytest.fixture
def split_grid() -> Grid:
    """
    5x5 grid with a wall of mines down column 2.

    Columns 0-1 and 3-4 are separate regions.
    """
    return Grid(5, 5, {(row, 2) for row in range(5)})


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def corner_session(corner_grid: Grid, clock: FakeClock) -> GameSession:
    """Session over the 3x3 corner-mine grid."""
    return GameSession(grid=corner_grid, player_name="Alice", clock=clock)


@pytest.fixture
def tiny_session(tiny_grid: Grid, clock: FakeClock) -> GameSession:
    """Session over the 2x2 grid."""
    return GameSession(grid=tiny_grid, player_name="Alice", clock=clock)


@pytest.fixture
def split_session(split_grid: Grid, clock: FakeClock) -> GameSession:
    """Session over the 5x5 split grid."""
    return GameSession(grid=split_grid, clock=clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(row=0, column=0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(row=1, column=1, is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GameConfig:
    """Create a valid game configuration."""
    return GameConfig(rows=9, columns=9, mine_count=10, player_name="Alice")


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def service(rng: random.Random, clock: FakeClock) -> GameService:
    """Service with seeded layouts and a fake clock."""
    return GameService(rng=rng, clock=clock)
