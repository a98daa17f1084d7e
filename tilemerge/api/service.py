"""
Decision Service - The facade between a host UI and the search engine.

The service:
1. Holds the active configuration (policy, search tuning, weights)
2. Dispatches decide() to the configured search policy
3. Times each decision
4. Keeps cumulative counters for a diagnostics dashboard

This layer is framework-agnostic: a web handler, a CLI or a test can
drive it directly. It is synchronous and single-threaded; configuration
setters should only be called between decide() calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Sequence
import logging
import time

from ..config import EngineConfig, GameSettings, HeuristicWeights, PolicyKind, SearchConfig
from ..engine_core.action import Direction
from ..engine_core.board import Board
from ..engine_core.random_source import SeededRandom
from ..engine_core.reducer import as_board
from ..bots import DecisionResult, HeuristicEvaluator, create_policy
from .schemas import DiagnosticsSnapshot, DirectionScoresInfo, HeuristicInfo


logger = logging.getLogger(__name__)


@dataclass
class DecisionStats:
    """Cumulative and last-decision counters."""
    total_decisions: int = 0
    no_move_decisions: int = 0
    total_seconds: float = 0.0
    total_nodes: int = 0
    calls_by_policy: dict[str, int] = field(default_factory=dict)

    # Last decision
    last_seconds: float = 0.0
    last_decision: Direction | None = None
    last_scores: dict[Direction, float | None] = field(default_factory=dict)
    last_depth: int | None = None
    last_confidence: float = 0.0
    last_heuristics: dict[str, float] | None = None

    def record(self, result: DecisionResult, heuristics: dict[str, float]):
        self.total_decisions += 1
        if not result.has_move:
            self.no_move_decisions += 1
        self.total_seconds += result.elapsed_seconds
        self.total_nodes += result.nodes
        if result.policy is not None:
            key = result.policy.value
            self.calls_by_policy[key] = self.calls_by_policy.get(key, 0) + 1

        self.last_seconds = result.elapsed_seconds
        self.last_decision = result.chosen_direction
        self.last_scores = dict(result.per_direction_score)
        self.last_depth = result.depth
        self.last_confidence = result.confidence
        self.last_heuristics = heuristics


@dataclass
class DecisionService:
    """
    Main decision facade.

    Usage:
        service = DecisionService()
        service.set_policy(PolicyKind.GREEDY)

        decision = service.decide(board)
        if decision.chosen_direction is None:
            ...  # no moves left

        service.snapshot().model_dump()  # dashboard data
    """
    config: EngineConfig = field(default_factory=EngineConfig)
    rng: SeededRandom | None = None

    _evaluator: HeuristicEvaluator = field(init=False, repr=False)
    _stats: DecisionStats = field(default_factory=DecisionStats, init=False, repr=False)

    def __post_init__(self):
        if self.rng is None:
            self.rng = SeededRandom(self.config.settings.seed)
        self._evaluator = HeuristicEvaluator(self.config.weights)

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def evaluator(self) -> HeuristicEvaluator:
        return self._evaluator

    def set_weights(self, weights: HeuristicWeights):
        """Replace the heuristic weights (effective from the next decide)."""
        self.config = self.config.model_copy(update={"weights": weights})
        self._evaluator = HeuristicEvaluator(weights)

    def set_search_config(self, search: SearchConfig):
        """Replace the search configuration (effective from the next decide)."""
        self.config = self.config.model_copy(update={"search": search})

    def set_settings(self, settings: GameSettings):
        """Replace game rules (spawn odds used by the search)."""
        self.config = self.config.model_copy(update={"settings": settings})

    def set_policy(self, kind: PolicyKind | str):
        """Switch the active search policy."""
        search = self.config.search.model_copy(update={"active_policy": PolicyKind(kind)})
        self.set_search_config(search)

    def set_seed(self, value: int):
        """Reseed the stream used by randomized search."""
        self.rng.seed(value)
        logger.debug("Search stream reseeded with %d", value)

    # =========================================================================
    # Decisions
    # =========================================================================

    def decide(self, board: Board | Sequence[Sequence[int]]) -> DecisionResult:
        """
        Choose a direction for the board with the active policy.

        Returns a DecisionResult with elapsed time filled in;
        chosen_direction is None when no direction is legal.
        """
        board = as_board(board)
        config = self.config  # Read once; setters replace, never mutate

        policy = create_policy(
            config.search.active_policy,
            self._evaluator,
            rng=self.rng,
            prob4=config.settings.prob4,
        )

        start = time.perf_counter()
        result = policy.choose_best_move(board, config.search)
        elapsed = time.perf_counter() - start

        result = replace(result, elapsed_seconds=elapsed)
        self._stats.record(result, self._heuristics(board))

        logger.debug(
            "%s chose %s in %.1fms (depth=%s, confidence=%.2f, scores=%s)",
            policy.get_name(),
            result.chosen_direction.label if result.chosen_direction else "none",
            elapsed * 1000.0,
            result.depth,
            result.confidence,
            {d.label: s for d, s in result.per_direction_score.items()},
        )
        return result

    def hint(self, board: Board | Sequence[Sequence[int]]) -> Direction | None:
        """Suggested direction only."""
        return self.decide(board).chosen_direction

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def snapshot(self) -> DiagnosticsSnapshot:
        """Read-only view of the counters."""
        stats = self._stats
        average = stats.total_seconds / stats.total_decisions if stats.total_decisions else 0.0

        return DiagnosticsSnapshot(
            active_policy=self.config.search.active_policy,
            total_decisions=stats.total_decisions,
            no_move_decisions=stats.no_move_decisions,
            total_time_ms=stats.total_seconds * 1000.0,
            average_time_ms=average * 1000.0,
            last_time_ms=stats.last_seconds * 1000.0,
            last_decision=(
                stats.last_decision.label if stats.last_decision
                else ("none" if stats.total_decisions else None)
            ),
            last_scores=DirectionScoresInfo.from_scores(stats.last_scores),
            last_depth=stats.last_depth,
            last_confidence=stats.last_confidence,
            last_heuristics=(
                HeuristicInfo(**stats.last_heuristics) if stats.last_heuristics else None
            ),
            calls_by_policy=dict(stats.calls_by_policy),
            total_nodes=stats.total_nodes,
        )

    def reset_stats(self):
        self._stats = DecisionStats()

    def _heuristics(self, board: Board) -> dict[str, Any]:
        evaluation = self._evaluator.breakdown(board)
        return {**evaluation.feature_breakdown, "total": evaluation.total_score}
