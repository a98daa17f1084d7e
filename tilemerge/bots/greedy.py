"""
Greedy Search - One-ply lookahead.

For each direction: apply it once and score the result as
score gained + heuristic value. No recursion, no randomness.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..config import PolicyKind
from ..engine_core.action import DIRECTIONS
from ..engine_core.reducer import apply_move
from .policy import (
    SearchPolicy,
    DecisionResult,
    DirectionScores,
    pick_best,
    ratio_confidence,
    register_policy,
)

if TYPE_CHECKING:
    from ..config import SearchConfig
    from ..engine_core.board import Board


@register_policy(PolicyKind.GREEDY)
class GreedySearchPolicy(SearchPolicy):
    """Pick the direction with the best immediate outcome."""

    def choose_best_move(self, board: Board, config: SearchConfig) -> DecisionResult:
        scores: DirectionScores = {}
        for direction in DIRECTIONS:
            result = apply_move(board, direction)
            if result.moved:
                scores[direction] = result.score_gained + self.evaluator.evaluate(result.board)
            else:
                scores[direction] = None

        best = pick_best(scores)
        if best is None:
            return DecisionResult.no_move(self.kind, depth=1)

        return DecisionResult(
            chosen_direction=best,
            per_direction_score=scores,
            confidence=ratio_confidence(scores),
            policy=self.kind,
            depth=1,
            nodes=sum(1 for s in scores.values() if s is not None),
        )
