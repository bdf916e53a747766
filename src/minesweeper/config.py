"""
Board configuration, difficulty presets and custom-settings validation.
"""
import math
from dataclasses import dataclass
from typing import Dict, Optional


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    The mine count is a target; placement clamps it to what fits outside
    the first click's safe area.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Requested number of mines.
    """

    rows: int = 9
    cols: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")

    @property
    def cell_count(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
MASTER = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)
CUSTOM_DEFAULT = BoardConfig(10, 10, 15)

LEVELS: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "master": MASTER,
    "expert": EXPERT,
    "custom": CUSTOM_DEFAULT,
}


# ============================================================================
# Custom Settings Validation
# ============================================================================

@dataclass(frozen=True)
class CustomLimits:
    """Bounds accepted for a user-defined board."""

    min_rows: int = 5
    max_rows: int = 30
    min_cols: int = 5
    max_cols: int = 50
    mine_percentage: float = 0.8


CUSTOM_LIMITS = CustomLimits()


def get_max_mines(rows: int, cols: int) -> int:
    """Maximum mines allowed for a custom grid of the given size."""
    return math.floor(rows * cols * CUSTOM_LIMITS.mine_percentage)


def validate_custom_settings(rows: int, cols: int, mines: int) -> Optional[str]:
    """
    Validate user-entered custom difficulty settings.

    Args:
        rows: Requested number of rows.
        cols: Requested number of columns.
        mines: Requested number of mines.

    Returns:
        Error message if invalid, None if valid.
    """
    limits = CUSTOM_LIMITS
    if not limits.min_rows <= rows <= limits.max_rows:
        return f"Rows must be between {limits.min_rows} and {limits.max_rows}"
    if not limits.min_cols <= cols <= limits.max_cols:
        return f"Columns must be between {limits.min_cols} and {limits.max_cols}"
    if mines < 1:
        return "Must have at least 1 mine"
    max_mines = get_max_mines(rows, cols)
    if mines > max_mines:
        return f"Mines cannot exceed {max_mines} (80% of cells)"
    return None
