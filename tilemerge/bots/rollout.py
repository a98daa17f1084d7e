"""
Rollout Search - Monte Carlo playouts.

The sample budget is dealt round-robin over the four directions.
Each sample plays the direction, then random legal moves (spawning a
tile after each) until the game is stuck or the step bound is hit.

A sample is worth the score gained during the playout plus a small
share of the heuristic value of the final board. Directions are ranked
by their average sample value.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from ..config import PolicyKind
from ..engine_core.action import DIRECTIONS, MoveResult
from ..engine_core.reducer import apply_move, spawn_tile
from .policy import (
    SearchPolicy,
    DecisionResult,
    DirectionScores,
    pick_best,
    register_policy,
)

if TYPE_CHECKING:
    from ..config import SearchConfig
    from ..engine_core.board import Board


logger = logging.getLogger(__name__)


@register_policy(PolicyKind.ROLLOUT)
class RolloutSearchPolicy(SearchPolicy):
    """
    Monte Carlo rollout search.

    All randomness comes from self.rng, so a seeded policy replays the
    same playouts.
    """

    def choose_best_move(self, board: Board, config: SearchConfig) -> DecisionResult:
        # The first move of every sample is deterministic
        first_moves = {d: apply_move(board, d) for d in DIRECTIONS}

        totals = {d: 0.0 for d in DIRECTIONS}
        counts = {d: 0 for d in DIRECTIONS}
        steps = 0

        for i in range(config.rollout_count):
            direction = DIRECTIONS[i % len(DIRECTIONS)]
            first = first_moves[direction]
            if not first.moved:
                continue

            value, played = self._rollout(first, config)
            totals[direction] += value
            counts[direction] += 1
            steps += played

        scores: DirectionScores = {
            d: (totals[d] / counts[d] if counts[d] else None)
            for d in DIRECTIONS
        }
        samples = {d: counts[d] for d in DIRECTIONS}

        logger.debug(
            "Rollout budget %d: samples %s, %d random steps",
            config.rollout_count, {d.label: n for d, n in samples.items()}, steps,
        )

        best = pick_best(scores)
        if best is None:
            return DecisionResult.no_move(self.kind, samples=samples)

        even_share = config.rollout_count / len(DIRECTIONS)
        confidence = min(1.0, counts[best] / even_share)

        return DecisionResult(
            chosen_direction=best,
            per_direction_score=scores,
            confidence=confidence,
            policy=self.kind,
            depth=config.rollout_max_steps,
            nodes=steps + sum(counts.values()),
            samples=samples,
        )

    def _rollout(self, first: MoveResult, config: SearchConfig) -> tuple[float, int]:
        """
        Play one random game from a first move.

        Returns:
            (sample value, number of random moves played)
        """
        board = spawn_tile(first.board, self.rng, self.prob4)
        gained = first.score_gained
        played = 0

        for _ in range(config.rollout_max_steps):
            options = [r for r in (apply_move(board, d) for d in DIRECTIONS) if r.moved]
            if not options:
                break

            choice = options[self.rng.next_index(len(options))]
            gained += choice.score_gained
            board = spawn_tile(choice.board, self.rng, self.prob4)
            played += 1

        value = gained + self.evaluator.evaluate(board) * config.rollout_heuristic_weight
        return value, played
