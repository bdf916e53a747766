"""
Snapshot format for saved boards.

A snapshot is a dict of JSON-compatible values::

    {
        "config": {"rows": int, "cols": int, "mines": int},
        "board": [[{"is_mine": bool, "is_revealed": bool,
                    "mark": "none" | "flagged" | "questioned",
                    "adjacent_mines": int}, ...], ...],
        "game_state": "playing" | "won" | "lost",
        "flag_count": int,
        "mines_placed": bool,
    }
"""
from typing import Any, Dict, Mapping

from .cell import Cell, MarkState


class InvalidSnapshotError(ValueError):
    """Raised when snapshot data cannot be turned back into a board."""


_CONFIG_FIELDS = ("rows", "cols", "mines")
_CELL_FIELDS = {
    "is_mine": bool,
    "is_revealed": bool,
    "mark": str,
    "adjacent_mines": int,
}
_GAME_STATES = ("playing", "won", "lost")
_TOP_LEVEL_FIELDS = {
    "config": dict,
    "board": list,
    "game_state": str,
    "flag_count": int,
    "mines_placed": bool,
}


# ============================================================================
# Cell Encoding
# ============================================================================

def cell_to_dict(cell: Cell) -> Dict[str, Any]:
    """Encode one cell; its position is implied by the grid."""
    return {
        "is_mine": cell.is_mine,
        "is_revealed": cell.is_revealed,
        "mark": cell.mark.value,
        "adjacent_mines": cell.adjacent_mines,
    }


def cell_from_dict(data: Mapping[str, Any]) -> Cell:
    """Decode one cell previously checked by validate_snapshot."""
    return Cell(
        is_mine=data["is_mine"],
        adjacent_mines=data["adjacent_mines"],
        is_revealed=data["is_revealed"],
        mark=MarkState(data["mark"]),
    )


# ============================================================================
# Validation
# ============================================================================

def _is_type(value: Any, expected: type) -> bool:
    # bool is a subclass of int; keep the two apart
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def _require_fields(data: Any, fields: Mapping[str, type], where: str) -> None:
    if not isinstance(data, dict):
        raise InvalidSnapshotError(f"{where} must be a mapping")
    for name, expected in fields.items():
        if name not in data:
            raise InvalidSnapshotError(f"{where} is missing '{name}'")
        if not _is_type(data[name], expected):
            raise InvalidSnapshotError(
                f"{where} field '{name}' must be {expected.__name__}"
            )


def _validate_cell(data: Any, row: int, col: int) -> None:
    where = f"cell ({row}, {col})"
    _require_fields(data, _CELL_FIELDS, where)
    try:
        MarkState(data["mark"])
    except ValueError as exc:
        raise InvalidSnapshotError(f"{where} has unknown mark {data['mark']!r}") from exc
    if not 0 <= data["adjacent_mines"] <= 8:
        raise InvalidSnapshotError(f"{where} adjacent count out of range")


def validate_snapshot(data: Any) -> None:
    """
    Check that snapshot data is complete and self-consistent.

    Args:
        data: Candidate snapshot.

    Raises:
        InvalidSnapshotError: On missing fields, wrong types, unknown
            marks, an unknown game state, grid shape not matching the
            declared size, mines on a board whose mines were never
            placed, or a flag count that disagrees with the flagged cells.
    """
    _require_fields(data, _TOP_LEVEL_FIELDS, "snapshot")
    if data["game_state"] not in _GAME_STATES:
        raise InvalidSnapshotError(f"Unknown game state: {data['game_state']!r}")
    config = data["config"]
    _require_fields(config, {name: int for name in _CONFIG_FIELDS}, "config")

    rows, cols = config["rows"], config["cols"]
    if rows < 1 or cols < 1:
        raise InvalidSnapshotError("Board dimensions must be positive")
    if config["mines"] < 0:
        raise InvalidSnapshotError("Number of mines cannot be negative")

    grid = data["board"]
    if len(grid) != rows:
        raise InvalidSnapshotError(
            f"Grid has {len(grid)} rows, config declares {rows}"
        )
    flagged = 0
    mines = 0
    for row, row_data in enumerate(grid):
        if not isinstance(row_data, list) or len(row_data) != cols:
            raise InvalidSnapshotError(
                f"Grid row {row} does not have {cols} cells"
            )
        for col, cell_data in enumerate(row_data):
            _validate_cell(cell_data, row, col)
            if cell_data["is_mine"]:
                mines += 1
            if cell_data["mark"] == MarkState.FLAGGED.value:
                flagged += 1

    if mines and not data["mines_placed"]:
        raise InvalidSnapshotError(
            f"Grid holds {mines} mines but mines_placed is false"
        )
    if data["flag_count"] != flagged:
        raise InvalidSnapshotError(
            f"flag_count {data['flag_count']} does not match {flagged} flagged cells"
        )
