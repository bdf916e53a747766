"""
Gymnasium environment wrapper for Minesweeper.

Drives a Board through the standard reset/step interface so scripted
players and tests can exercise every board action.
"""
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board
from .cell import FLAGGED_CODE, HIDDEN_CODE, MINE_CODE, QUESTIONED_CODE
from .config import BoardConfig


class Action(IntEnum):
    """Board operation selected by an action index."""

    REVEAL = 0
    CYCLE_MARK = 1
    CHORD = 2


_RENDER_SYMBOLS = {
    HIDDEN_CODE: ".",
    FLAGGED_CODE: "F",
    QUESTIONED_CODE: "?",
    MINE_CODE: "*",
    0: " ",
}


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = question-marked cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 3 * rows * cols.
        ``action // cells`` picks the operation (see Action) and
        ``action % cells`` the cell at (i // cols, i % cols).

    Rewards:
        - +1 for an action that changed the board
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action the board ignored
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=QUESTIONED_CODE,
            high=MINE_CODE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(Action) * self.config.cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.board.rng.seed(seed)
        self.board.reset()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded operation and cell.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, row, col = self.decode_action(action)
        self._steps += 1

        reward = self._apply(kind, row, col)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[Action, int, int]:
        """Split an action index into (operation, row, col)."""
        kind, index = divmod(int(action), self.config.cell_count)
        row, col = divmod(index, self.config.cols)
        return Action(kind), row, col

    def encode_action(self, kind: Action, row: int, col: int) -> int:
        """Build the action index for an operation on a cell."""
        return int(kind) * self.config.cell_count + row * self.config.cols + col

    def _apply(self, kind: Action, row: int, col: int) -> float:
        """Run the board operation and score it."""
        if kind is Action.REVEAL:
            changed = self.board.reveal(row, col)
        elif kind is Action.CYCLE_MARK:
            changed = self.board.cycle_mark(row, col)
        else:
            changed = self.board.chord(row, col)

        if not changed:
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(
            1 for _, _, cell in self.board.iter_cells() if cell.is_revealed
        )
        return {
            "steps": self._steps,
            "revealed": revealed,
            "flags": self.board.flag_count,
            "remaining_mines": self.board.remaining_mines,
            "game_state": self.board.game_state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.board)
        if self.render_mode == "human":
            print(render_board(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions the board would accept.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.board.is_playing:
            return mask

        for row, col, cell in self.board.iter_cells():
            if cell.is_revealed:
                if self.board.can_chord(row, col):
                    mask[self.encode_action(Action.CHORD, row, col)] = True
                continue
            mask[self.encode_action(Action.CYCLE_MARK, row, col)] = True
            if not cell.is_flagged:
                mask[self.encode_action(Action.REVEAL, row, col)] = True
        return mask


def render_board(board: Board) -> str:
    """Render a board as text, one row per line."""
    obs = board.get_observation()
    lines = []
    for row in range(board.rows):
        symbols = [
            _RENDER_SYMBOLS.get(int(value), str(value)) for value in obs[row]
        ]
        lines.append(" ".join(symbols))
    return "\n".join(lines)
