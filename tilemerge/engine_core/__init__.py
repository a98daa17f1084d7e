"""
Engine Core - Deterministic board transitions.

The engine is the runtime that:
1. Holds boards as immutable values
2. Applies slide-and-merge moves
3. Spawns tiles from a seeded random stream
4. Detects terminal and winning boards
5. Audits boards for invalid tiles
"""

from .random_source import SeededRandom
from .validation import (
    InvalidBoardError,
    InvalidDirectionError,
    validate,
    is_valid_tile,
)
from .board import Board
from .action import Direction, DIRECTIONS, MoveResult
from .reducer import (
    new_board,
    apply_move,
    legal_moves,
    spawn_tile,
    is_terminal,
    has_reached_target,
    slide_row,
    combine_row,
    slide_row_left,
)

__all__ = [
    "SeededRandom",
    "InvalidBoardError",
    "InvalidDirectionError",
    "validate",
    "is_valid_tile",
    "Board",
    "Direction",
    "DIRECTIONS",
    "MoveResult",
    "new_board",
    "apply_move",
    "legal_moves",
    "spawn_tile",
    "is_terminal",
    "has_reached_target",
    "slide_row",
    "combine_row",
    "slide_row_left",
]
