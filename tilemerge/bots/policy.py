"""
Search Policy - Interface for move selection.

A SearchPolicy takes a board and returns a decision.
Decisions include:
- Which direction to play (or None when nothing is legal)
- The score computed for every direction
- Confidence in the choice
- Search statistics (for the diagnostics snapshot)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..config import PolicyKind
from ..engine_core.action import Direction, DIRECTIONS
from ..engine_core.random_source import SeededRandom

if TYPE_CHECKING:
    from ..config import SearchConfig
    from ..engine_core.board import Board
    from .evaluator import HeuristicEvaluator


DirectionScores = dict[Direction, Optional[float]]


@dataclass(frozen=True)
class DecisionResult:
    """
    A decision made by a search policy.

    per_direction_score maps every direction to its computed value,
    or None when the direction does not change the board.
    Built fresh for each request and never mutated afterwards.
    """
    chosen_direction: Direction | None
    per_direction_score: DirectionScores
    confidence: float = 0.0
    elapsed_seconds: float = 0.0
    policy: PolicyKind | None = None

    # Search statistics (for debugging)
    depth: int | None = None
    nodes: int = 0
    samples: dict[Direction, int] = field(default_factory=dict)
    truncated: bool = False

    @property
    def has_move(self) -> bool:
        return self.chosen_direction is not None

    @classmethod
    def no_move(cls, policy: PolicyKind | None = None, **stats: Any) -> DecisionResult:
        """Decision for a board where no direction is legal."""
        return cls(
            chosen_direction=None,
            per_direction_score={d: None for d in DIRECTIONS},
            confidence=0.0,
            policy=policy,
            **stats,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view (direction names as keys)."""
        return {
            "chosen_direction": self.chosen_direction.label if self.chosen_direction else "none",
            "per_direction_score": {d.label: s for d, s in self.per_direction_score.items()},
            "confidence": self.confidence,
            "elapsed_seconds": self.elapsed_seconds,
            "policy": self.policy.value if self.policy else None,
            "depth": self.depth,
            "nodes": self.nodes,
            "samples": {d.label: n for d, n in self.samples.items()},
            "truncated": self.truncated,
        }


# ============================================================================
# Shared helpers
# ============================================================================

def pick_best(scores: DirectionScores) -> Direction | None:
    """
    Highest-scoring legal direction.

    Ties go to the direction seen first in enumeration order
    (up, right, down, left).
    """
    best: Direction | None = None
    best_score = float("-inf")
    for direction in DIRECTIONS:
        score = scores.get(direction)
        if score is not None and (best is None or score > best_score):
            best = direction
            best_score = score
    return best


def ratio_confidence(scores: DirectionScores) -> float:
    """
    How clearly the best direction beats the runner-up, in [0, 1].

    0.5 means a tie; a best score twice the runner-up saturates at 1.
    With a single legal direction the choice is certain (1.0).
    Non-positive runner-up scores fall back to a sign-safe relative margin.
    """
    legal = sorted((s for s in scores.values() if s is not None), reverse=True)
    if not legal:
        return 0.0
    if len(legal) == 1:
        return 1.0

    best, second = legal[0], legal[1]
    if second >= 1:
        confidence = (best / second - 1) * 0.5 + 0.5
    else:
        margin = (best - second) / max(abs(best), abs(second), 1.0)
        confidence = 0.5 + 0.5 * margin

    return min(1.0, max(0.0, confidence))


class SearchPolicy(ABC):
    """
    Abstract base class for search policies.

    A policy defines how a direction is chosen. Implementations share
    the board engine and the heuristic evaluator; only the way they
    explore the consequences of each direction differs.
    """

    kind: PolicyKind

    def __init__(
        self,
        evaluator: HeuristicEvaluator,
        rng: SeededRandom | None = None,
        prob4: float = 0.1,
    ):
        self.evaluator = evaluator
        self.rng = rng if rng is not None else SeededRandom()
        self.prob4 = prob4

    @abstractmethod
    def choose_best_move(self, board: Board, config: SearchConfig) -> DecisionResult:
        """
        Select a direction for the board.

        Args:
            board: Board to move on (never modified)
            config: Search tuning for this call

        Returns:
            DecisionResult; chosen_direction is None if nothing is legal
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


# ============================================================================
# Registry
# ============================================================================

POLICY_REGISTRY: dict[PolicyKind, type[SearchPolicy]] = {}


def register_policy(kind: PolicyKind) -> Callable[[type[SearchPolicy]], type[SearchPolicy]]:
    """Class decorator binding a policy implementation to its kind."""
    def decorator(cls: type[SearchPolicy]) -> type[SearchPolicy]:
        if kind in POLICY_REGISTRY:
            raise ValueError(f"Policy already registered for {kind.value}")
        cls.kind = kind
        POLICY_REGISTRY[kind] = cls
        return cls
    return decorator


def create_policy(
    kind: PolicyKind | str,
    evaluator: HeuristicEvaluator,
    rng: SeededRandom | None = None,
    prob4: float = 0.1,
) -> SearchPolicy:
    """
    Instantiate the policy registered for kind.

    Raises:
        ValueError: If kind is unknown or has no implementation
    """
    kind = PolicyKind(kind)
    policy_cls = POLICY_REGISTRY.get(kind)
    if policy_cls is None:
        raise ValueError(f"No search policy registered for {kind.value}")
    return policy_cls(evaluator, rng=rng, prob4=prob4)
