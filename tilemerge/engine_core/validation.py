"""
Board Validation - Input guards and tile audits.

Two very different kinds of checks live here:
1. Shape guards (non-square board, bad direction) - raise immediately
2. Tile audits (non-power-of-two or negative values) - reported, never raised

The audit is a diagnostic path: a host can use it for anti-tamper checks
without interrupting play.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from .board import Board


# Smallest tile the game ever produces
MIN_TILE = 2


class InvalidBoardError(ValueError):
    """Raised when a board (or board-sized input) has an invalid shape."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors) if errors else "Invalid board")


class InvalidDirectionError(ValueError):
    """Raised for any value outside the four directions."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid direction {value!r}: expected one of up, right, down, left (0-3)"
        )


def check_shape(rows: Sequence[Sequence[Any]]) -> list[str]:
    """
    Check that rows form a non-empty square grid of integers.

    Returns error messages (empty if the shape is valid).
    """
    errors: list[str] = []
    size = len(rows)
    if size == 0:
        return ["Board must have at least one row"]

    for r, row in enumerate(rows):
        if len(row) != size:
            errors.append(f"Row {r} has {len(row)} cells, expected {size} (board must be square)")
            continue
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"Cell ({r}, {c}) is not an integer: {value!r}")

    return errors


def is_valid_tile(value: int) -> bool:
    """Check if value is a tile the game can produce (0 = empty)."""
    if value == 0:
        return True
    return value >= MIN_TILE and (value & (value - 1)) == 0


def validate(board: Board | Sequence[Sequence[Any]]) -> list[str]:
    """
    Audit every cell of a board.

    Accepts a Board or raw rows. Never raises for bad values;
    returns a list of findings (empty if the board is clean).
    """
    rows = getattr(board, "cells", board)
    findings: list[str] = []

    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int):
                findings.append(f"Invalid tile value {value!r} at position ({r}, {c})")
            elif value < 0:
                findings.append(f"Negative tile value {value} at position ({r}, {c})")
            elif not is_valid_tile(value):
                findings.append(f"Invalid tile value {value} at position ({r}, {c})")

    return findings
