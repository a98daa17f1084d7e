"""
Board - Immutable N x N tile grid.

Design principles:
- Immutable: all mutations return a new Board
- Square: size is fixed for the board's lifetime
- Serializable: to_rows() / from_rows() round-trip through plain lists
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from .validation import InvalidBoardError, check_shape


Cells = tuple[tuple[int, ...], ...]


@dataclass(frozen=True)
class Board:
    """
    An N x N grid of tile values (0 = empty).

    Usage:
        board = Board.empty(4)
        board = board.with_cell(0, 0, 2)
        board.empty_cells()   # [(0, 1), (0, 2), ...]
        board.to_rows()       # [[2, 0, 0, 0], ...]
    """
    cells: Cells

    @classmethod
    def empty(cls, size: int = 4) -> Board:
        """Create a board with every cell empty."""
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise InvalidBoardError([f"Board size must be a positive integer, got {size!r}"])
        return cls(cells=tuple((0,) * size for _ in range(size)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> Board:
        """
        Build a board from nested rows.

        Raises:
            InvalidBoardError: If rows are not a non-empty square grid of ints
        """
        if isinstance(rows, Board):
            return rows
        rows = [list(row) for row in rows]
        errors = check_shape(rows)
        if errors:
            raise InvalidBoardError(errors)
        return cls(cells=tuple(tuple(row) for row in rows))

    @property
    def size(self) -> int:
        return len(self.cells)

    def get(self, row: int, col: int) -> int:
        return self.cells[row][col]

    def with_cell(self, row: int, col: int, value: int) -> Board:
        """Return a new board with one cell replaced."""
        new_row = self.cells[row][:col] + (value,) + self.cells[row][col + 1:]
        return Board(cells=self.cells[:row] + (new_row,) + self.cells[row + 1:])

    def empty_cells(self) -> list[tuple[int, int]]:
        """Coordinates of empty cells, in row-major order."""
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, value in enumerate(row)
            if value == 0
        ]

    def count_empty(self) -> int:
        return sum(row.count(0) for row in self.cells)

    def max_tile(self) -> int:
        return max(max(row) for row in self.cells)

    def tile_sum(self) -> int:
        return sum(sum(row) for row in self.cells)

    def tiles(self) -> list[int]:
        """Non-zero tile values, in row-major order."""
        return [value for row in self.cells for value in row if value]

    def to_rows(self) -> list[list[int]]:
        """Plain nested lists (a fresh copy)."""
        return [list(row) for row in self.cells]

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        return iter(self.cells)

    def __str__(self) -> str:
        width = max(len(str(self.max_tile())), 1)
        lines = []
        for row in self.cells:
            lines.append(" ".join(
                (str(value) if value else ".").rjust(width) for value in row
            ))
        return "\n".join(lines)
