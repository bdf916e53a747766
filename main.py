#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--level {beginner,master,expert,custom}]
    python main.py play --rows R --cols C --mines M
    python main.py demo [--games N] [--seed S]
"""
from src.minesweeper.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
