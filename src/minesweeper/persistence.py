"""
Saved-game persistence over a text key-value store.

Any ``MutableMapping[str, str]`` works as a store: a plain dict for tests,
or JsonFileStore for a game that survives restarts.
"""
import json
import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, MutableMapping, Optional, Union

from .board import Board
from .snapshot import InvalidSnapshotError, validate_snapshot

logger = logging.getLogger(__name__)

GAME_STATE_KEY = "minesweeper-saved-game"


# ============================================================================
# Saved Game Record
# ============================================================================

@dataclass
class SavedGame:
    """
    A saved in-progress game.

    Attributes:
        game_data: Board snapshot.
        level: Difficulty level key the game was started with.
        elapsed_time: Seconds on the game clock when saved.
        saved_at: Epoch milliseconds of the save.
    """

    game_data: Dict[str, Any]
    level: str
    elapsed_time: float
    saved_at: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain data for storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "SavedGame":
        """
        Build from stored data.

        Raises:
            InvalidSnapshotError: If a field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise InvalidSnapshotError("Saved game must be a mapping")
        game_data = data.get("game_data")
        level = data.get("level")
        elapsed_time = data.get("elapsed_time")
        saved_at = data.get("saved_at", 0)
        if not game_data or not isinstance(level, str) or not level:
            raise InvalidSnapshotError("Saved game is missing its board or level")
        if isinstance(elapsed_time, bool) or not isinstance(elapsed_time, (int, float)):
            raise InvalidSnapshotError("Saved game has no elapsed time")
        validate_snapshot(game_data)
        return cls(game_data, level, elapsed_time, int(saved_at))


# ============================================================================
# Game Persistence
# ============================================================================

class GamePersistence:
    """Saves, loads and clears the single in-progress game."""

    def __init__(
        self,
        store: MutableMapping[str, str],
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize persistence.

        Args:
            store: Text key-value store holding the save.
            clock: Source of the current time in seconds.
        """
        self.store = store
        self._clock = clock

    def save_game(self, board: Board, level: str, elapsed_time: float) -> None:
        """
        Save the board, or clear the save if the game is already over.

        Args:
            board: Board to save.
            level: Difficulty level key.
            elapsed_time: Seconds on the game clock.
        """
        if not board.is_playing:
            self.clear_saved_game()
            return

        saved = SavedGame(
            game_data=board.serialize(),
            level=level,
            elapsed_time=elapsed_time,
            saved_at=int(self._clock() * 1000),
        )
        self.store[GAME_STATE_KEY] = json.dumps(saved.to_dict())
        logger.debug("Saved %s game at %.1fs", level, elapsed_time)

    def load_game(self) -> Optional[SavedGame]:
        """
        Load the saved game.

        Unreadable saves are discarded.

        Returns:
            The saved game, or None if there is no usable save.
        """
        text = self.store.get(GAME_STATE_KEY)
        if not text:
            return None

        try:
            return SavedGame.from_dict(json.loads(text))
        except (ValueError, TypeError) as exc:
            logger.warning("Discarding unreadable saved game: %s", exc)
            self.clear_saved_game()
            return None

    def has_saved_game(self) -> bool:
        """Check if a usable saved game exists."""
        return self.load_game() is not None

    def clear_saved_game(self) -> None:
        """Remove the saved game, if any."""
        self.store.pop(GAME_STATE_KEY, None)

    @staticmethod
    def restore_game(saved: SavedGame) -> Board:
        """
        Rebuild the board of a saved game.

        Raises:
            InvalidSnapshotError: If the board data is malformed.
        """
        return Board.deserialize(saved.game_data)


# ============================================================================
# File-backed Store
# ============================================================================

class JsonFileStore(MutableMapping[str, str]):
    """String key-value store kept as one JSON object in a file."""

    def __init__(self, path: Union[str, Path]) -> None:
        """
        Initialize the store.

        Args:
            path: File holding the JSON object; created on first write.
        """
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as exc:
            logger.warning("Ignoring corrupt store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: not a JSON object", self.path)
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def __getitem__(self, key: str) -> str:
        return self._read()[key]

    def __setitem__(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def __delitem__(self, key: str) -> None:
        data = self._read()
        del data[key]
        self._write(data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._read())

    def __len__(self) -> int:
        return len(self._read())
