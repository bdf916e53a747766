"""
Cell module for Minesweeper game.

Represents individual cells on the game board: their content
(mine/number), whether they are revealed, and the player's mark.
"""
from enum import Enum
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class MarkState(Enum):
    """Player marks on an unrevealed cell."""

    NONE = "none"
    FLAGGED = "flagged"
    QUESTIONED = "questioned"


_NEXT_MARK = {
    MarkState.NONE: MarkState.FLAGGED,
    MarkState.FLAGGED: MarkState.QUESTIONED,
    MarkState.QUESTIONED: MarkState.NONE,
}

HIDDEN_CODE = -1
FLAGGED_CODE = -2
QUESTIONED_CODE = -3
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
            Not meaningful for mine cells.
        is_revealed: Whether the cell has been opened.
        mark: Player mark (none, flagged or questioned).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    is_revealed: bool = False
    mark: MarkState = MarkState.NONE

    def reveal(self) -> bool:
        """
        Reveal this cell, clearing any question mark.

        Returns:
            True if cell was revealed, False if already revealed or flagged.
        """
        if self.is_revealed or self.mark is MarkState.FLAGGED:
            return False
        self.is_revealed = True
        self.mark = MarkState.NONE
        return True

    def unveil(self) -> None:
        """Show the cell at game end regardless of its mark."""
        self.is_revealed = True

    def cycle_mark(self) -> MarkState:
        """
        Advance the mark: none -> flagged -> questioned -> none.

        Revealed cells keep their mark unchanged.

        Returns:
            The mark after the call.
        """
        if not self.is_revealed:
            self.mark = _NEXT_MARK[self.mark]
        return self.mark

    @property
    def is_hidden(self) -> bool:
        """Check if cell is still unrevealed."""
        return not self.is_revealed

    @property
    def is_flagged(self) -> bool:
        """Check if cell carries a flag."""
        return self.mark is MarkState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        """Check if cell carries a question mark."""
        return self.mark is MarkState.QUESTIONED

    def to_observation(self) -> int:
        """
        Convert cell to its numeric observation value.

        Returns:
            -1: Hidden unmarked cell
            -2: Flagged cell
            -3: Question-marked cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if not self.is_revealed:
            if self.mark is MarkState.FLAGGED:
                return FLAGGED_CODE
            if self.mark is MarkState.QUESTIONED:
                return QUESTIONED_CODE
            return HIDDEN_CODE
        if self.is_mine:
            return MINE_CODE
        return self.adjacent_mines
