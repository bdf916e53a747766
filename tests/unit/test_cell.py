"""
Unit tests for Cell class.

Tests reveal behavior, the three-state mark cycle, and observation codes.
"""
from minesweeper import Cell, MarkState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        assert Cell().is_mine is False

    def test_default_cell_is_hidden_and_unmarked(self) -> None:
        """New cell should be hidden with no mark."""
        cell = Cell()
        assert cell.is_hidden is True
        assert cell.is_revealed is False
        assert cell.mark is MarkState.NONE

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        """New cell should have 0 adjacent mines by default."""
        assert Cell().adjacent_mines == 0


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_twice_returns_false(self, numbered_cell: Cell) -> None:
        """Revealing an open cell should fail."""
        assert numbered_cell.reveal() is False

    def test_reveal_flagged_cell_fails(self, hidden_cell: Cell) -> None:
        """Flags protect a cell from being revealed."""
        hidden_cell.cycle_mark()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_hidden is True

    def test_reveal_clears_question_mark(self, hidden_cell: Cell) -> None:
        """Question-marked cells open and lose their mark."""
        hidden_cell.cycle_mark()
        hidden_cell.cycle_mark()
        assert hidden_cell.reveal() is True
        assert hidden_cell.mark is MarkState.NONE

    def test_unveil_keeps_flag(self, mine_cell: Cell) -> None:
        """End-of-game unveil shows the cell and keeps its flag."""
        mine_cell.cycle_mark()
        mine_cell.unveil()
        assert mine_cell.is_revealed is True
        assert mine_cell.is_flagged is True


# ============================================================================
# Cell Mark Tests
# ============================================================================

class TestCellMark:
    """Test the none -> flagged -> questioned -> none cycle."""

    def test_full_cycle(self, hidden_cell: Cell) -> None:
        """Three cycles return to an unmarked cell."""
        assert hidden_cell.cycle_mark() is MarkState.FLAGGED
        assert hidden_cell.is_flagged is True
        assert hidden_cell.cycle_mark() is MarkState.QUESTIONED
        assert hidden_cell.is_questioned is True
        assert hidden_cell.cycle_mark() is MarkState.NONE

    def test_revealed_cell_mark_unchanged(self, numbered_cell: Cell) -> None:
        """Revealed cells cannot be marked."""
        assert numbered_cell.cycle_mark() is MarkState.NONE


# ============================================================================
# Observation Tests
# ============================================================================

class TestCellObservation:
    """Test numeric observation codes."""

    def test_hidden_cell_observation(self, hidden_cell: Cell) -> None:
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation(self, hidden_cell: Cell) -> None:
        hidden_cell.cycle_mark()
        assert hidden_cell.to_observation() == -2

    def test_questioned_cell_observation(self, hidden_cell: Cell) -> None:
        hidden_cell.cycle_mark()
        hidden_cell.cycle_mark()
        assert hidden_cell.to_observation() == -3

    def test_revealed_number_observation(self, numbered_cell: Cell) -> None:
        assert numbered_cell.to_observation() == 3

    def test_revealed_mine_observation(self, mine_cell: Cell) -> None:
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
