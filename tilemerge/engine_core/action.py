"""
Moves - Directions and move results.

A move is one of four directions. Applying it to a board yields a
MoveResult; the board itself is never changed in place.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .validation import InvalidDirectionError

if TYPE_CHECKING:
    from .board import Board


class Direction(Enum):
    """The four slide directions, in enumeration (tie-break) order."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: Any) -> Direction:
        """
        Coerce a direction-like value into a Direction.

        Accepts Direction members, ints 0-3, and names such as
        "up", "LEFT" or single letters "U"/"R"/"D"/"L".

        Raises:
            InvalidDirectionError: For anything else
        """
        if isinstance(value, Direction):
            return value
        if isinstance(value, bool):
            raise InvalidDirectionError(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidDirectionError(value) from None
        if isinstance(value, str):
            key = value.strip().upper()
            for direction in cls:
                if key in (direction.name, direction.name[0]):
                    return direction
        raise InvalidDirectionError(value)


# Enumeration order used for every search and every tie-break
DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)


@dataclass(frozen=True)
class MoveResult:
    """
    Result of applying a direction to a board.

    Invariants:
    - moved=False implies board is the input board and score_gained == 0
    - score_gained is the sum of all tiles created by merges
    """
    board: Board
    score_gained: int = 0
    moved: bool = False

    @classmethod
    def unchanged(cls, board: Board) -> MoveResult:
        """Create a no-op result for an illegal direction."""
        return cls(board=board, score_gained=0, moved=False)
