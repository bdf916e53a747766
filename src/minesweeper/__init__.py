"""
Minesweeper game module.

Provides the core rule engine (board, cells, snapshots), difficulty
presets, saved-game persistence and a Gymnasium environment.
"""
from .cell import Cell, MarkState
from .config import (
    BoardConfig,
    BEGINNER,
    MASTER,
    EXPERT,
    CUSTOM_DEFAULT,
    LEVELS,
    CUSTOM_LIMITS,
    get_max_mines,
    validate_custom_settings,
)
from .snapshot import InvalidSnapshotError
from .board import Board, GameState
from .persistence import GamePersistence, JsonFileStore, SavedGame
from .environment import Action, MinesweeperEnv, render_board

__all__ = [
    "Cell",
    "MarkState",
    "BoardConfig",
    "BEGINNER",
    "MASTER",
    "EXPERT",
    "CUSTOM_DEFAULT",
    "LEVELS",
    "CUSTOM_LIMITS",
    "get_max_mines",
    "validate_custom_settings",
    "InvalidSnapshotError",
    "Board",
    "GameState",
    "GamePersistence",
    "JsonFileStore",
    "SavedGame",
    "Action",
    "MinesweeperEnv",
    "render_board",
]
