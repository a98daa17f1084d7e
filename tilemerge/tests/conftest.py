"""
Pytest fixtures for TileMerge tests.
"""

import pytest

from ..config import EngineConfig, GameSettings, HeuristicWeights, SearchConfig, PolicyKind
from ..engine_core.board import Board
from ..engine_core.random_source import SeededRandom
from ..bots.evaluator import HeuristicEvaluator
from ..session import SessionManager, GameLoop


@pytest.fixture
def empty_board() -> Board:
    """Empty 4x4 board."""
    return Board.empty(4)


@pytest.fixture
def mid_game_board() -> Board:
    """A typical board with a few merges available."""
    return Board.from_rows([
        [2, 2, 4, 8],
        [0, 4, 4, 0],
        [0, 0, 2, 0],
        [0, 0, 0, 2],
    ])


@pytest.fixture
def terminal_board() -> Board:
    """Full board with no equal neighbours (checkerboard)."""
    return Board.from_rows([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])


@pytest.fixture
def nearly_full_board() -> Board:
    """One empty cell left, no merges; only right and down move."""
    return Board.from_rows([
        [2, 4, 8, 16],
        [32, 64, 128, 256],
        [2, 4, 8, 16],
        [32, 64, 128, 0],
    ])


@pytest.fixture
def rng() -> SeededRandom:
    """Random stream seeded with 42."""
    return SeededRandom(42)


@pytest.fixture
def evaluator() -> HeuristicEvaluator:
    """Evaluator with default weights."""
    return HeuristicEvaluator(HeuristicWeights())


@pytest.fixture
def shallow_search() -> SearchConfig:
    """Cheap expectimax settings for fast tests."""
    return SearchConfig(base_depth=2, adaptive_depth=False)


@pytest.fixture
def fast_config() -> EngineConfig:
    """Seeded config using the greedy policy."""
    return EngineConfig(
        settings=GameSettings(seed=7),
        search=SearchConfig(active_policy=PolicyKind.GREEDY),
    )


@pytest.fixture
def game_loop(fast_config) -> GameLoop:
    """A started game on a seeded session."""
    manager = SessionManager(fast_config)
    loop = GameLoop(manager.create_session())
    loop.new_game()
    return loop
