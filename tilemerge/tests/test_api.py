"""
Tests for the decision service.

Tests:
- Policy dispatch and configuration changes
- Diagnostics counters
- Error handling
"""

import pytest

from ..api import DecisionService
from ..config import EngineConfig, HeuristicWeights, PolicyKind, SearchConfig
from ..engine_core.action import Direction
from ..engine_core.validation import InvalidBoardError


@pytest.fixture
def service() -> DecisionService:
    """Service running the greedy policy."""
    config = EngineConfig(search=SearchConfig(active_policy=PolicyKind.GREEDY))
    return DecisionService(config=config)


class TestDecide:
    """Tests for decision dispatch."""

    def test_decide_times_the_decision(self, service, mid_game_board):
        """A decision carries its policy and elapsed time."""
        result = service.decide(mid_game_board)

        assert result.has_move
        assert result.policy is PolicyKind.GREEDY
        assert result.elapsed_seconds >= 0

    def test_accepts_plain_rows(self, service):
        """Hosts can pass nested lists."""
        assert service.hint([[2, 4], [0, 0]]) is Direction.DOWN

    def test_non_square_board_raises(self, service):
        """Shape errors propagate to the caller."""
        with pytest.raises(InvalidBoardError):
            service.decide([[2, 0, 0], [0, 0]])

    def test_set_policy(self, service, mid_game_board):
        """Switching policy takes effect on the next call."""
        service.set_search_config(SearchConfig(base_depth=1, adaptive_depth=False))
        assert service.decide(mid_game_board).policy is PolicyKind.EXHAUSTIVE

        service.set_policy("mcts")
        service.set_search_config(service.config.search.model_copy(update={"rollout_count": 4}))
        result = service.decide(mid_game_board)

        assert result.policy is PolicyKind.ROLLOUT
        assert service.config.search.active_policy is PolicyKind.ROLLOUT

    def test_set_weights(self, service):
        """New weights replace the evaluator."""
        weights = HeuristicWeights(empty_cells=5.0)
        service.set_weights(weights)

        assert service.evaluator.weights == weights
        assert service.config.weights == weights

    def test_set_seed_replays_rollouts(self, mid_game_board):
        """Reseeding makes randomized search repeatable."""
        config = EngineConfig(search=SearchConfig(
            active_policy=PolicyKind.ROLLOUT, rollout_count=8, rollout_max_steps=10,
        ))
        service = DecisionService(config=config)

        service.set_seed(11)
        first = service.decide(mid_game_board)
        service.set_seed(11)
        second = service.decide(mid_game_board)

        assert first.per_direction_score == second.per_direction_score


class TestDiagnostics:
    """Tests for the diagnostics snapshot."""

    def test_empty_snapshot(self, service):
        """No decisions yet: zeroed counters."""
        snapshot = service.snapshot()

        assert snapshot.active_policy is PolicyKind.GREEDY
        assert snapshot.total_decisions == 0
        assert snapshot.average_time_ms == 0.0
        assert snapshot.last_decision is None

    def test_counters_accumulate(self, service, mid_game_board):
        """Each decision updates totals and the last-decision fields."""
        first = service.decide(mid_game_board)
        service.decide(mid_game_board)
        snapshot = service.snapshot()

        assert snapshot.total_decisions == 2
        assert snapshot.calls_by_policy == {"greedy": 2}
        assert snapshot.last_decision == first.chosen_direction.label
        assert snapshot.last_depth == 1
        assert snapshot.average_time_ms == pytest.approx(snapshot.total_time_ms / 2)

    def test_last_heuristics(self, service, mid_game_board):
        """The snapshot shows the features of the last board."""
        service.decide(mid_game_board)
        heuristics = service.snapshot().last_heuristics

        assert heuristics.empty_cells == mid_game_board.count_empty()
        assert heuristics.total == pytest.approx(service.evaluator.evaluate(mid_game_board))

    def test_no_move_is_counted(self, service, terminal_board):
        """A terminal board is recorded as a no-move decision."""
        result = service.decide(terminal_board)
        snapshot = service.snapshot()

        assert result.chosen_direction is None
        assert snapshot.no_move_decisions == 1
        assert snapshot.last_decision == "none"
        assert snapshot.last_scores.up is None

    def test_reset_stats(self, service, mid_game_board):
        """reset_stats() zeroes every counter."""
        service.decide(mid_game_board)
        service.reset_stats()
        assert service.snapshot().total_decisions == 0
