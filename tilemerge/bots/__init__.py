"""
Bots module - Move selection AI.

Provides:
- SearchPolicy: Interface for move selection
- HeuristicEvaluator: Scores boards
- ExpectimaxSearchPolicy: Exhaustive chance-tree search
- RolloutSearchPolicy: Monte Carlo playouts
- GreedySearchPolicy: One-ply lookahead
"""

from .policy import (
    SearchPolicy,
    DecisionResult,
    POLICY_REGISTRY,
    create_policy,
    pick_best,
    ratio_confidence,
)
from .evaluator import HeuristicEvaluator, BoardEvaluation, evaluate, snake_weight_matrix
from .expectimax import ExpectimaxSearchPolicy, adaptive_depth, LOSS_VALUE
from .rollout import RolloutSearchPolicy
from .greedy import GreedySearchPolicy

__all__ = [
    "SearchPolicy",
    "DecisionResult",
    "POLICY_REGISTRY",
    "create_policy",
    "pick_best",
    "ratio_confidence",
    "HeuristicEvaluator",
    "BoardEvaluation",
    "evaluate",
    "snake_weight_matrix",
    "ExpectimaxSearchPolicy",
    "adaptive_depth",
    "LOSS_VALUE",
    "RolloutSearchPolicy",
    "GreedySearchPolicy",
]
