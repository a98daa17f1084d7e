"""
Heuristic Evaluator - Scores boards for search leaves.

The evaluator assigns a numeric score to a board based on:
- Position (big tiles along a snake path from one corner)
- Monotonicity (rows and columns ordered one way)
- Smoothness (neighbouring tiles close in value)
- Empty cells (room to keep playing)

Weights can be adjusted via HeuristicWeights.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence
import math

from ..config import HeuristicWeights
from ..engine_core.board import Board
from ..engine_core.validation import InvalidBoardError


# Fixed feature scales, applied before the caller's weights so that the
# default weights reproduce the usual magnitudes of each feature.
POSITION_SCALE = 1.0
MONOTONICITY_SCALE = 10_000.0
SMOOTHNESS_SCALE = 1_000.0
EMPTY_CELLS_SCALE = 10_000.0


def snake_weight_matrix(size: int) -> list[list[int]]:
    """
    Positional weights along a serpentine path.

    The top-left corner weighs 2 ** (size * size); each step along the
    snake (left-to-right, then right-to-left on the next row) halves it.
    For size 4:

        65536 32768 16384 8192
          512  1024  2048 4096
          256   128    64   32
            2     4     8   16
    """
    cells = size * size
    matrix = [[0] * size for _ in range(size)]
    for r in range(size):
        for step in range(size):
            c = step if r % 2 == 0 else size - 1 - step
            matrix[r][c] = 2 ** (cells - (r * size + step))
    return matrix


def _log2(value: int) -> float:
    return math.log2(value) if value else 0.0


# ============================================================================
# Sub-scores
# ============================================================================

def position_score(board: Board, matrix: Sequence[Sequence[float]]) -> float:
    """Tile values weighted element-wise by the position matrix."""
    return float(sum(
        value * matrix[r][c]
        for r, row in enumerate(board.cells)
        for c, value in enumerate(row)
    ))


def _line_monotonicity(line: Sequence[int]) -> tuple[float, float]:
    """
    Violation totals for one row or column.

    Walks consecutive non-empty tiles. Returns (decreasing, increasing)
    totals, each <= 0: a drop in value counts against the first, a rise
    against the second.
    """
    decreasing = 0.0
    increasing = 0.0
    size = len(line)

    current = 0
    nxt = 1
    while nxt < size:
        while nxt < size and line[nxt] == 0:
            nxt += 1
        if nxt >= size:
            break

        current_value = _log2(line[current])
        next_value = _log2(line[nxt])
        if current_value > next_value:
            decreasing += next_value - current_value
        elif next_value > current_value:
            increasing += current_value - next_value

        current = nxt
        nxt += 1

    return decreasing, increasing


def monotonicity(board: Board) -> float:
    """
    Reward rows and columns ordered in one consistent direction.

    Per axis, the less violated direction wins:
    max(left, right) over all rows + max(up, down) over all columns.
    """
    left = right = up = down = 0.0

    for row in board.cells:
        dec, inc = _line_monotonicity(row)
        left += dec
        right += inc

    for column in zip(*board.cells):
        dec, inc = _line_monotonicity(column)
        up += dec
        down += inc

    return max(left, right) + max(up, down)


def smoothness(board: Board) -> float:
    """
    Penalize log2 gaps to the nearest tile right of and below each tile.

    Always <= 0; a perfectly smooth board scores 0.
    """
    cells = board.cells
    size = board.size
    total = 0.0

    for r in range(size):
        for c in range(size):
            if cells[r][c] == 0:
                continue
            value = math.log2(cells[r][c])

            for c2 in range(c + 1, size):
                if cells[r][c2] != 0:
                    total -= abs(value - math.log2(cells[r][c2]))
                    break

            for r2 in range(r + 1, size):
                if cells[r2][c] != 0:
                    total -= abs(value - math.log2(cells[r2][c]))
                    break

    return total


def empty_cell_score(board: Board) -> float:
    return float(board.count_empty())


# ============================================================================
# Evaluator
# ============================================================================

@dataclass
class BoardEvaluation:
    """
    Result of evaluating a board.

    feature_breakdown holds the raw (unweighted, unscaled) sub-scores.
    """
    total_score: float
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class HeuristicEvaluator:
    """
    Evaluates boards using weighted heuristics.

    Pure and deterministic: no randomness, never mutates the board.

    Usage:
        evaluator = HeuristicEvaluator(HeuristicWeights(empty_cells=4.0))
        score = evaluator.evaluate(board)
    """

    def __init__(
        self,
        weights: HeuristicWeights | None = None,
        position_matrix: Sequence[Sequence[float]] | None = None,
    ):
        self.weights = weights or HeuristicWeights()
        self.position_matrix = position_matrix
        self._matrix_cache: dict[int, list[list[int]]] = {}

        if position_matrix is not None:
            size = len(position_matrix)
            if size == 0 or any(len(row) != size for row in position_matrix):
                raise InvalidBoardError(["Position matrix must be a non-empty square grid"])

    def matrix_for(self, board: Board) -> Sequence[Sequence[float]]:
        """
        Position matrix matching the board's size.

        Raises:
            InvalidBoardError: If a custom matrix has a different size
        """
        if self.position_matrix is not None:
            if len(self.position_matrix) != board.size:
                raise InvalidBoardError([
                    f"Position matrix is {len(self.position_matrix)}x{len(self.position_matrix)}"
                    f" but board is {board.size}x{board.size}"
                ])
            return self.position_matrix

        matrix = self._matrix_cache.get(board.size)
        if matrix is None:
            matrix = snake_weight_matrix(board.size)
            self._matrix_cache[board.size] = matrix
        return matrix

    def evaluate(self, board: Board) -> float:
        """Weighted sum of the four sub-scores."""
        return self.breakdown(board).total_score

    def breakdown(self, board: Board) -> BoardEvaluation:
        """Evaluate a board and keep each raw sub-score."""
        w = self.weights
        features = {
            "position": position_score(board, self.matrix_for(board)),
            "monotonicity": monotonicity(board),
            "smoothness": smoothness(board),
            "empty_cells": empty_cell_score(board),
        }

        total = (
            features["position"] * POSITION_SCALE * w.position
            + features["monotonicity"] * MONOTONICITY_SCALE * w.monotonicity
            + features["smoothness"] * SMOOTHNESS_SCALE * w.smoothness
            + features["empty_cells"] * EMPTY_CELLS_SCALE * w.empty_cells
        )

        return BoardEvaluation(total_score=total, feature_breakdown=features)


def evaluate(board: Board, weights: HeuristicWeights | None = None) -> float:
    """Score a board with the given weights (default weights if None)."""
    return HeuristicEvaluator(weights).evaluate(board)
