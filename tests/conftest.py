"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Dict, List

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell  # noqa: E402


# ============================================================================
# Layout Helpers
# ============================================================================

def layout_snapshot(*rows: str) -> Dict:
    """
    Build a snapshot of a fresh in-progress board from a text layout.

    Each string is one row; ``*`` is a mine and any other character is a
    safe cell. Mines count as already placed.
    """
    height, width = len(rows), len(rows[0])
    mines = {
        (r, c) for r, line in enumerate(rows)
        for c, ch in enumerate(line) if ch == "*"
    }

    def adjacent(r: int, c: int) -> int:
        return sum(
            1 for dr in (-1, 0, 1) for dc in (-1, 0, 1)
            if (dr or dc) and (r + dr, c + dc) in mines
        )

    board: List[List[Dict]] = [
        [
            {
                "is_mine": (r, c) in mines,
                "is_revealed": False,
                "mark": "none",
                "adjacent_mines": 0 if (r, c) in mines else adjacent(r, c),
            }
            for c in range(width)
        ]
        for r in range(height)
    ]
    return {
        "config": {"rows": height, "cols": width, "mines": len(mines)},
        "board": board,
        "game_state": "playing",
        "flag_count": 0,
        "mines_placed": True,
    }


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory for boards with a fixed mine layout."""
    def factory(*rows: str) -> Board:
        return Board.deserialize(layout_snapshot(*rows))
    return factory


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine layouts."""
    return random.Random(20240611)


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(BoardConfig(), rng)


@pytest.fixture
def small_board(rng: random.Random) -> Board:
    """Create a small 3x3 board asking for 1 mine (clamped to none)."""
    return Board(BoardConfig(3, 3, 1), rng)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def numbered_board(make_board: Callable[..., Board]) -> Board:
    """
    A 4x4 board with two mines in the top corners.

        * 1 1 *
        1 1 1 1
        0 0 0 0
        0 0 0 0
    """
    return make_board(
        "*..*",
        "....",
        "....",
        "....",
    )


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell
