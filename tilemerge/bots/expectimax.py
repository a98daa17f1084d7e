"""
Exhaustive Search - Expectimax over moves and tile spawns.

The tree alternates two kinds of levels:
- Max nodes: the player picks the best of its legal directions
- Chance nodes: the game spawns a tile; every empty cell gets a 2
  (weight 1 - prob4) and a 4 (weight prob4), averaged over cells

Leaves are scored by the heuristic evaluator. A max node with no legal
move is an imminent loss and scores LOSS_VALUE.

Chance nodes fan out over every empty cell, so the number of nodes per
decision is capped by SearchConfig.max_expansions. Once the cap is
reached every remaining node is scored as a leaf.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import logging

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


logger = logging.getLogger(__name__)

# Value of a position with no legal move
LOSS_VALUE = -1e12

# Adaptive depth thresholds
CRITICAL_EMPTY_CELLS = 2
TIGHT_EMPTY_CELLS = 4
TIGHT_MAX_TILE = 512


def adaptive_depth(board: Board, config: SearchConfig) -> int:
    """
    Search depth for a board.

    Deeper when the board is nearly full:
    - at most 2 empty cells: base + 2
    - at most 4 empty cells with a tile >= 512: base + 1
    - otherwise: base
    Never shallower than the base depth.
    """
    base = config.base_depth
    if not config.adaptive_depth:
        return base

    empty = board.count_empty()
    if empty <= CRITICAL_EMPTY_CELLS:
        return base + 2
    if empty <= TIGHT_EMPTY_CELLS and board.max_tile() >= TIGHT_MAX_TILE:
        return base + 1
    return base


@dataclass
class _SearchBudget:
    """Node counter for one decision."""
    limit: int
    nodes: int = 0
    truncated: bool = False

    def spend(self) -> bool:
        """Count a node; False once the ceiling is reached."""
        if self.nodes >= self.limit:
            self.truncated = True
            return False
        self.nodes += 1
        return True


@register_policy(PolicyKind.EXHAUSTIVE)
class ExpectimaxSearchPolicy(SearchPolicy):
    """
    Exhaustive chance-tree search.

    Usage:
        policy = ExpectimaxSearchPolicy(HeuristicEvaluator())
        decision = policy.choose_best_move(board, SearchConfig(base_depth=3))
    """

    def choose_best_move(self, board: Board, config: SearchConfig) -> DecisionResult:
        depth = adaptive_depth(board, config)
        budget = _SearchBudget(limit=config.max_expansions)

        scores: DirectionScores = {}
        for direction in DIRECTIONS:
            result = apply_move(board, direction)
            if not result.moved:
                scores[direction] = None
                continue
            budget.spend()
            scores[direction] = self._chance(result.board, depth - 1, budget)

        if budget.truncated:
            logger.warning(
                "Expectimax hit the expansion ceiling (%d nodes) at depth %d; "
                "remaining nodes were scored as leaves",
                config.max_expansions, depth,
            )

        best = pick_best(scores)
        if best is None:
            return DecisionResult.no_move(self.kind, depth=depth, nodes=budget.nodes)

        return DecisionResult(
            chosen_direction=best,
            per_direction_score=scores,
            confidence=ratio_confidence(scores),
            policy=self.kind,
            depth=depth,
            nodes=budget.nodes,
            truncated=budget.truncated,
        )

    def _maximize(self, board: Board, depth: int, budget: _SearchBudget) -> float:
        """Max node: best value over legal directions."""
        if depth <= 0 or not budget.spend():
            return self.evaluator.evaluate(board)

        best = None
        for direction in DIRECTIONS:
            result = apply_move(board, direction)
            if result.moved:
                value = self._chance(result.board, depth - 1, budget)
                if best is None or value > best:
                    best = value

        return LOSS_VALUE if best is None else best

    def _chance(self, board: Board, depth: int, budget: _SearchBudget) -> float:
        """Chance node: spawn-probability-weighted average."""
        if depth <= 0:
            return self.evaluator.evaluate(board)

        empty = board.empty_cells()
        if not empty or not budget.spend():
            return self.evaluator.evaluate(board)

        total = 0.0
        for r, c in empty:
            if self.prob4 < 1:
                with_two = board.with_cell(r, c, 2)
                total += self._maximize(with_two, depth - 1, budget) * (1 - self.prob4)
            if self.prob4 > 0:
                with_four = board.with_cell(r, c, 4)
                total += self._maximize(with_four, depth - 1, budget) * self.prob4

        return total / len(empty)
