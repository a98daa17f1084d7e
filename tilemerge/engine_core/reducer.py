"""
Reducer - Board transitions.

The reducer is the single place where boards change.
All transitions go through apply_move() and spawn_tile().

Design principles:
- Pure function: (board, direction) -> MoveResult
- Direction unification: rotate so the move points left, slide every
  row left, rotate back
- Randomness only through an explicit SeededRandom (spawning)
"""

from __future__ import annotations
from typing import Any, Sequence

from .action import Direction, DIRECTIONS, MoveResult
from .board import Board, Cells
from .random_source import SeededRandom


# Clockwise quarter turns that make each direction point left
ROTATIONS_TO_LEFT = {
    Direction.UP: 3,
    Direction.RIGHT: 2,
    Direction.DOWN: 1,
    Direction.LEFT: 0,
}


def new_board(size: int = 4) -> Board:
    """Create an empty size x size board."""
    return Board.empty(size)


def as_board(board: Board | Sequence[Sequence[Any]]) -> Board:
    """Accept a Board or plain nested rows."""
    if isinstance(board, Board):
        return board
    return Board.from_rows(board)


# ============================================================================
# Row primitives
# ============================================================================

def slide_row(row: Sequence[int]) -> list[int]:
    """Gravity only: drop zeros, keep order, pad right."""
    filtered = [value for value in row if value != 0]
    return filtered + [0] * (len(row) - len(filtered))


def combine_row(row: Sequence[int]) -> list[int]:
    """
    One left-to-right merge pass over an already slid row.

    Merged pairs leave a zero behind; call slide_row() again to close gaps.
    """
    combined = list(row)
    for i in range(len(combined) - 1):
        if combined[i] != 0 and combined[i] == combined[i + 1]:
            combined[i] *= 2
            combined[i + 1] = 0
    return combined


def slide_row_left(row: Sequence[int]) -> tuple[list[int], int]:
    """
    The canonical left slide-and-merge for one row.

    Each tile merges at most once: [2, 2, 2, 2] -> [4, 4, 0, 0].

    Returns:
        (new row, score gained from merges)
    """
    filtered = [value for value in row if value != 0]
    merged: list[int] = []
    gained = 0

    i = 0
    while i < len(filtered):
        if i + 1 < len(filtered) and filtered[i] == filtered[i + 1]:
            merged.append(filtered[i] * 2)
            gained += filtered[i] * 2
            i += 2  # Skip past both source tiles
        else:
            merged.append(filtered[i])
            i += 1

    merged.extend([0] * (len(row) - len(merged)))
    return merged, gained


def rotate_clockwise(cells: Cells, times: int = 1) -> Cells:
    """Rotate a square grid by quarter turns clockwise."""
    for _ in range(times % 4):
        cells = tuple(zip(*reversed(cells)))
    return cells


# ============================================================================
# Transitions
# ============================================================================

def apply_move(board: Board | Sequence[Sequence[int]], direction: Any) -> MoveResult:
    """
    Slide and merge the whole board in one direction.

    A terminal board is legal input: every direction simply returns
    moved=False.

    Raises:
        InvalidDirectionError: If direction is not one of the four
        InvalidBoardError: If board rows are not square
    """
    board = as_board(board)
    direction = Direction.parse(direction)

    rotations = ROTATIONS_TO_LEFT[direction]
    rotated = rotate_clockwise(board.cells, rotations)

    gained = 0
    slid_rows = []
    for row in rotated:
        slid, row_gain = slide_row_left(row)
        gained += row_gain
        slid_rows.append(tuple(slid))

    restored = rotate_clockwise(tuple(slid_rows), 4 - rotations)
    if restored == board.cells:
        return MoveResult.unchanged(board)

    return MoveResult(board=Board(cells=restored), score_gained=gained, moved=True)


def legal_moves(board: Board | Sequence[Sequence[int]]) -> list[Direction]:
    """Directions that change the board, in enumeration order."""
    board = as_board(board)
    return [d for d in DIRECTIONS if apply_move(board, d).moved]


def spawn_tile(
    board: Board | Sequence[Sequence[int]],
    rng: SeededRandom,
    prob4: float = 0.1,
) -> Board:
    """
    Place a 2 (or a 4 with probability prob4) on a random empty cell.

    Draw order is fixed for reproducibility: cell index first, then value.
    A full board is returned unchanged and consumes no draws.
    """
    board = as_board(board)
    empty = board.empty_cells()
    if not empty:
        return board

    row, col = empty[rng.next_index(len(empty))]
    value = 4 if rng.next() < prob4 else 2
    return board.with_cell(row, col, value)


# ============================================================================
# Terminal checks
# ============================================================================

def is_terminal(board: Board | Sequence[Sequence[int]]) -> bool:
    """True iff the board is full and no adjacent pair is equal."""
    board = as_board(board)
    cells = board.cells
    size = board.size

    for row in cells:
        if 0 in row:
            return False

    for r in range(size):
        for c in range(size):
            value = cells[r][c]
            if c + 1 < size and cells[r][c + 1] == value:
                return False
            if r + 1 < size and cells[r + 1][c] == value:
                return False

    return True


def has_reached_target(board: Board | Sequence[Sequence[int]], target_value: int = 2048) -> bool:
    """True iff any tile is at least target_value."""
    board = as_board(board)
    return board.max_tile() >= target_value
