"""
Board module for Minesweeper game.

Implements the game board with deferred mine placement, cascading
reveal, mark cycling, chording, win/lose detection and snapshots.
"""
import json
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, MarkState
from .config import BoardConfig
from .snapshot import (
    InvalidSnapshotError,
    cell_from_dict,
    cell_to_dict,
    validate_snapshot,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


# Half-width of the square kept mine-free around the first reveal.
SAFE_RADIUS = 1
SAFE_AREA = (2 * SAFE_RADIUS + 1) ** 2


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Every player action is a no-op returning
    False when it does not apply; only snapshot decoding raises.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(
        default_factory=random.Random, repr=False, compare=False
    )
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _mines_placed: bool = False
    _flag_count: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    @classmethod
    def create(
        cls,
        rows: int,
        cols: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """Build a fresh board of the given size."""
        config = BoardConfig(rows, cols, mine_count)
        if rng is None:
            return cls(config)
        return cls(config, rng)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    def _place_mines(self, exclude_row: int, exclude_col: int) -> None:
        """
        Place mines at random outside the 3x3 block around a cell.

        The requested count is clamped to rows * cols - 9, which always
        leaves enough eligible cells for the rejection loop to finish.

        Args:
            exclude_row: Row of the first revealed cell.
            exclude_col: Column of the first revealed cell.
        """
        target = max(
            0, min(self.config.mine_count, self.config.cell_count - SAFE_AREA)
        )
        placed = 0
        while placed < target:
            row = self.rng.randrange(self.config.rows)
            col = self.rng.randrange(self.config.cols)
            if (
                abs(row - exclude_row) <= SAFE_RADIUS
                and abs(col - exclude_col) <= SAFE_RADIUS
            ):
                continue
            cell = self._grid[row][col]
            if cell.is_mine:
                continue
            cell.is_mine = True
            placed += 1

        self._mines_placed = True
        self._calculate_adjacent_mines()
        logger.debug(
            "Placed %d of %d requested mines around (%d, %d)",
            placed, self.config.mine_count, exclude_row, exclude_col,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row, col, cell in self.iter_cells():
            if not cell.is_mine:
                cell.adjacent_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for neighbor_row, neighbor_col in self._get_neighbors(row, col)
            if self._grid[neighbor_row][neighbor_col].is_mine
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
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
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On first reveal, places mines avoiding this cell and its
        neighbors. If the cell is empty (0 adjacent mines), opens the
        connected empty region and its numbered border. If the cell is
        a mine, the game is lost.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the board changed, False otherwise.
        """
        if not self.can_reveal(row, col):
            return False

        if not self._mines_placed:
            self._place_mines(row, col)

        cell = self._grid[row][col]
        if cell.is_mine:
            cell.reveal()
            self._end_game(GameState.LOST)
            return True

        self._flood_reveal(row, col)
        self._check_win_condition()
        return True

    def can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        return not cell.is_revealed and not cell.is_flagged

    def _flood_reveal(self, row: int, col: int) -> None:
        """Reveal a safe cell and cascade through empty neighbors."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue
            if cell.adjacent_mines > 0:
                continue
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.is_revealed and not neighbor.is_flagged:
                    stack.append((neighbor_row, neighbor_col))

    def cycle_mark(self, row: int, col: int) -> bool:
        """
        Cycle the mark on a cell: none -> flagged -> questioned -> none.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if the mark changed, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        if cell.is_revealed:
            return False

        previous = cell.mark
        current = cell.cycle_mark()
        if current is MarkState.FLAGGED:
            self._flag_count += 1
        elif previous is MarkState.FLAGGED:
            self._flag_count -= 1

        self._check_win_condition()
        return True

    def chord(self, row: int, col: int) -> bool:
        """
        Chord action: reveal all unflagged neighbors if flag count matches.

        Wrongly placed flags make this reveal a mine and lose the game.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if chord was performed, False otherwise.
        """
        if not self.can_chord(row, col):
            return False

        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            neighbor = self._grid[neighbor_row][neighbor_col]
            if not neighbor.is_revealed and not neighbor.is_flagged:
                self.reveal(neighbor_row, neighbor_col)

        return True

    def can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.is_revealed or cell.adjacent_mines == 0:
            return False
        flag_count = self._count_adjacent_flags(row, col)
        return flag_count == cell.adjacent_mines

    def _count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        return sum(
            1 for neighbor_row, neighbor_col in self._get_neighbors(row, col)
            if self._grid[neighbor_row][neighbor_col].is_flagged
        )

    # ========================================================================
    # Win/Lose Evaluation
    # ========================================================================

    def _check_win_condition(self) -> None:
        """Win when every safe cell is open or every mine is flagged."""
        if self._game_state != GameState.PLAYING:
            return
        if self._all_safe_cells_revealed() or self._all_mines_flagged():
            self._end_game(GameState.WON)

    def _all_safe_cells_revealed(self) -> bool:
        """Check if no unrevealed safe cell remains."""
        return all(
            cell.is_revealed or cell.is_mine
            for _, _, cell in self.iter_cells()
        )

    def _all_mines_flagged(self) -> bool:
        """
        Check if the flags sit exactly on the mines.

        With flag_count equal to the mines on the board and every mine
        flagged, no flag can be on a safe cell.
        """
        if not self._mines_placed:
            return False
        mines = [cell for _, _, cell in self.iter_cells() if cell.is_mine]
        if self._flag_count != len(mines):
            return False
        return all(cell.is_flagged for cell in mines)

    def _end_game(self, state: GameState) -> None:
        """Move to a final state and unveil the relevant cells."""
        self._game_state = state
        for _, _, cell in self.iter_cells():
            if state is GameState.WON or cell.is_mine:
                cell.unveil()
        logger.debug("Game over: %s", state.value)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self.config.rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self.config.cols

    @property
    def mine_count(self) -> int:
        """Requested number of mines."""
        return self.config.mine_count

    @property
    def flag_count(self) -> int:
        """Number of flagged cells."""
        return self._flag_count

    @property
    def remaining_mines(self) -> int:
        """Mine counter shown to the player; negative when over-flagged."""
        return self.config.mine_count - self._flag_count

    @property
    def mines_placed(self) -> bool:
        """Whether the first reveal has already placed mines."""
        return self._mines_placed

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (row, col, cell) in row-major order."""
        for row, cells in enumerate(self._grid):
            for col, cell in enumerate(cells):
                yield row, col, cell

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                -3 = question-marked
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row, col, cell in self.iter_cells():
            obs[row, col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (row, col) positions that can be revealed.
        """
        if not self.is_playing:
            return []
        return [
            (row, col) for row, col, cell in self.iter_cells()
            if not cell.is_revealed and not cell.is_flagged
        ]

    def reset(self) -> None:
        """Reset board to initial state for new game."""
        self._init_grid()
        self._game_state = GameState.PLAYING
        self._mines_placed = False
        self._flag_count = 0

    # ========================================================================
    # Snapshots
    # ========================================================================

    def serialize(self) -> Dict[str, Any]:
        """
        Capture the board as plain JSON-compatible data.

        Returns:
            Snapshot dict accepted by Board.deserialize.
        """
        return {
            "config": {
                "rows": self.config.rows,
                "cols": self.config.cols,
                "mines": self.config.mine_count,
            },
            "board": [[cell_to_dict(cell) for cell in cells] for cells in self._grid],
            "game_state": self._game_state.value,
            "flag_count": self._flag_count,
            "mines_placed": self._mines_placed,
        }

    @classmethod
    def deserialize(
        cls, data: Any, rng: Optional[random.Random] = None
    ) -> "Board":
        """
        Rebuild an independent board from a snapshot.

        Args:
            data: Snapshot produced by serialize.
            rng: Random source for a board whose mines are not placed yet.

        Raises:
            InvalidSnapshotError: If the snapshot is malformed.
        """
        validate_snapshot(data)
        config_data = data["config"]
        board = cls.create(
            config_data["rows"], config_data["cols"], config_data["mines"], rng
        )
        board._grid = [
            [cell_from_dict(cell_data) for cell_data in row_data]
            for row_data in data["board"]
        ]
        board._game_state = GameState(data["game_state"])
        board._flag_count = data["flag_count"]
        board._mines_placed = data["mines_placed"]
        return board

    def to_json(self) -> str:
        """Serialize the board to JSON text."""
        return json.dumps(self.serialize())

    @classmethod
    def from_json(
        cls, text: str, rng: Optional[random.Random] = None
    ) -> "Board":
        """
        Rebuild a board from JSON text.

        Raises:
            InvalidSnapshotError: If the text is not a valid snapshot.
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise InvalidSnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
        return cls.deserialize(data, rng)
