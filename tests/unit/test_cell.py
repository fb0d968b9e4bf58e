"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, and projection.
"""
import pytest
from minesweeper.game import Cell, CellState, CellView


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self, hidden_cell: Cell) -> None:
        """New cell should not be a mine by default."""
        assert hidden_cell.is_mine is False

    def test_default_cell_is_hidden(self, hidden_cell: Cell) -> None:
        """New cell should be hidden by default."""
        assert hidden_cell.state == CellState.HIDDEN
        assert hidden_cell.is_hidden is True

    def test_default_cell_has_zero_adjacent_mines(self, hidden_cell: Cell) -> None:
        """New cell should have 0 adjacent mines by default."""
        assert hidden_cell.adjacent_mine_count == 0

    def test_position(self) -> None:
        """Position should be (row, column)."""
        assert Cell(row=3, column=7).position == (3, 7)


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_twice_returns_false(self, hidden_cell: Cell) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_revealed is True

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Flagged cell should not be revealed."""
        hidden_cell.flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flag behavior."""

    def test_flag_hidden_cell(self, hidden_cell: Cell) -> None:
        """Flagging hidden cell should succeed."""
        assert hidden_cell.flag() is True
        assert hidden_cell.state == CellState.FLAGGED

    def test_flag_revealed_cell_fails(self, hidden_cell: Cell) -> None:
        """Revealed cell cannot be flagged."""
        hidden_cell.reveal()
        assert hidden_cell.flag() is False
        assert hidden_cell.is_flagged is False

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging should return cell to hidden."""
        hidden_cell.flag()
        assert hidden_cell.unflag() is True
        assert hidden_cell.is_hidden is True

    def test_unflag_unflagged_cell_fails(self, hidden_cell: Cell) -> None:
        """Unflagging a cell without a flag should fail."""
        assert hidden_cell.unflag() is False

    def test_never_revealed_and_flagged(self, hidden_cell: Cell) -> None:
        """No sequence of calls makes a cell both revealed and flagged."""
        for action in ("flag", "reveal", "unflag", "reveal", "flag"):
            getattr(hidden_cell, action)()
            assert not (hidden_cell.is_revealed and hidden_cell.is_flagged)


# ============================================================================
# Projection Tests
# ============================================================================

class TestCellView:
    """Test visibility-filtered views."""

    def test_hidden_mine_is_not_exposed(self, mine_cell: Cell) -> None:
        """Hidden mine should look like an empty cell."""
        view = mine_cell.view()
        assert view.is_mine is False
        assert view.adjacent_mine_count == 0

    def test_hidden_count_is_not_exposed(self) -> None:
        """Hidden numbered cell should report zero."""
        cell = Cell(row=0, column=0, adjacent_mine_count=4)
        assert cell.view().adjacent_mine_count == 0

    def test_revealed_cell_shows_count(self) -> None:
        """Revealed cell should show its count."""
        cell = Cell(row=0, column=0, adjacent_mine_count=4)
        cell.reveal()
        assert cell.view().adjacent_mine_count == 4

    def test_exposed_view_shows_mine(self, mine_cell: Cell) -> None:
        """Finished games expose hidden mines."""
        assert mine_cell.view(expose=True).is_mine is True

    def test_flag_always_reported(self, mine_cell: Cell) -> None:
        """Flags are visible in every view."""
        mine_cell.flag()
        assert mine_cell.view().is_flagged is True
        assert mine_cell.view(expose=True).is_flagged is True

    @pytest.mark.parametrize(
        "view, expected",
        [
            (CellView(0, 0, False, False, False, 0), -1),
            (CellView(0, 0, False, False, True, 0), -2),
            (CellView(0, 0, False, True, False, 3), 3),
            (CellView(0, 0, True, True, False, 0), 9),
        ],
    )
    def test_observation_codes(self, view: CellView, expected: int) -> None:
        """Views should encode to the agent observation codes."""
        assert view.to_observation() == expected


# ============================================================================
# Record Tests
# ============================================================================

class TestCellRecord:
    """Test storage records."""

    def test_record_keeps_hidden_content(self, mine_cell: Cell) -> None:
        """Records hold the unfiltered state."""
        mine_cell.flag()
        restored = Cell.from_record(mine_cell.to_record())
        assert restored == mine_cell
