"""
Command line interface: play in the terminal or watch random play.

Usage:
    python main.py play [--level LEVEL | --rows R --cols C --mines M]
    python main.py demo [--games N] [--level LEVEL] [--seed S]
"""
import argparse
import time
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np

from .board import Board
from .config import LEVELS, BoardConfig, validate_custom_settings
from .environment import Action, MinesweeperEnv, render_board
from .persistence import GamePersistence, JsonFileStore

DEFAULT_SAVE_FILE = Path.home() / ".minesweeper" / "saves.json"

HELP_TEXT = """Commands:
  r ROW COL   reveal a cell
  m ROW COL   cycle mark (flag -> question -> none)
  c ROW COL   chord around a revealed number
  save        save and keep playing
  quit        save and exit
  help        show this text"""


# ============================================================================
# Board Selection
# ============================================================================

def resolve_config(args: argparse.Namespace) -> BoardConfig:
    """
    Pick the board for a new game from command line options.

    Raises:
        ValueError: If custom settings are out of range.
    """
    if args.rows is None and args.cols is None and args.mines is None:
        return LEVELS[args.level]

    base = LEVELS["custom"]
    rows = args.rows if args.rows is not None else base.rows
    cols = args.cols if args.cols is not None else base.cols
    mines = args.mines if args.mines is not None else base.mine_count
    error = validate_custom_settings(rows, cols, mines)
    if error:
        raise ValueError(error)
    return BoardConfig(rows, cols, mines)


def format_status(board: Board) -> str:
    """One-line summary shown under the board."""
    return (
        f"Mines left: {board.remaining_mines}  "
        f"Flags: {board.flag_count}  "
        f"State: {board.game_state.value}"
    )


# ============================================================================
# Interactive Play
# ============================================================================

def _parse_move(parts: List[str]) -> Optional[tuple]:
    if len(parts) != 3:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def play(
    args: argparse.Namespace,
    input_fn: Callable[[str], str] = input,
) -> int:
    """Run an interactive game in the terminal."""
    persistence = GamePersistence(JsonFileStore(args.save_file))

    saved = None if args.new else persistence.load_game()
    if saved is not None:
        board = persistence.restore_game(saved)
        level = saved.level
        elapsed_before = saved.elapsed_time
        print(f"Resuming saved {level} game ({elapsed_before:.0f}s elapsed).")
    else:
        try:
            config = resolve_config(args)
        except ValueError as exc:
            print(f"Error: {exc}")
            return 2
        board = Board(config)
        level = args.level if config is LEVELS[args.level] else "custom"
        elapsed_before = 0.0

    started = time.monotonic()
    actions = {"r": board.reveal, "m": board.cycle_mark, "c": board.chord}

    print(HELP_TEXT)
    while board.is_playing:
        print()
        print(render_board(board))
        print(format_status(board))
        try:
            line = input_fn("> ")
        except EOFError:
            line = "quit"
        parts = line.strip().lower().split()
        if not parts:
            continue

        command = parts[0]
        elapsed = elapsed_before + time.monotonic() - started
        if command in ("quit", "q"):
            persistence.save_game(board, level, elapsed)
            print("Game saved.")
            return 0
        if command == "save":
            persistence.save_game(board, level, elapsed)
            print("Game saved.")
            continue
        if command == "help" or command not in actions:
            print(HELP_TEXT)
            continue

        move = _parse_move(parts)
        if move is None:
            print("Expected: " + command + " ROW COL")
            continue
        if not actions[command](*move):
            print("Nothing to do there.")

    persistence.clear_saved_game()
    print()
    print(render_board(board))
    elapsed = elapsed_before + time.monotonic() - started
    if board.is_won:
        print(f"*** WIN! *** ({elapsed:.0f}s)")
    else:
        print("*** LOST (hit mine) ***")
    return 0


# ============================================================================
# Demo
# ============================================================================

def demo(args: argparse.Namespace) -> int:
    """Watch random reveals play several games."""
    config = LEVELS[args.level]
    env = MinesweeperEnv(config=config, render_mode="ansi")
    env.action_space.seed(args.seed)
    cells = config.cell_count

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        # Open from the centre so the first move cascades.
        action = env.encode_action(Action.REVEAL, config.rows // 2, config.cols // 2)
        done = False
        info = {}
        while not done:
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            mask = env.get_action_mask()
            mask[cells:] = False
            if not done:
                action = int(env.action_space.sample(mask=mask.astype(np.int8)))

        print(f"=== Game {game + 1}/{args.games} | Steps {info['steps']} ===")
        print(env.render())
        if info["game_state"] == "WON":
            wins += 1
            print("*** WIN! ***\n")
        else:
            print("*** LOST (hit mine) ***\n")

    print(f"=== Final: {wins}/{args.games} wins ===")
    return 0


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--level", choices=sorted(LEVELS), default="beginner",
        help="Difficulty preset",
    )
    play_parser.add_argument("--rows", type=int, help="Custom board rows")
    play_parser.add_argument("--cols", type=int, help="Custom board columns")
    play_parser.add_argument("--mines", type=int, help="Custom mine count")
    play_parser.add_argument(
        "--save-file", type=Path, default=DEFAULT_SAVE_FILE,
        help="Where the in-progress game is kept",
    )
    play_parser.add_argument(
        "--new", action="store_true", help="Ignore any saved game"
    )

    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--level", choices=sorted(LEVELS), default="beginner",
        help="Difficulty preset",
    )
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "play":
        return play(args)
    if args.command == "demo":
        return demo(args)
    parser.print_help()
    return 0
