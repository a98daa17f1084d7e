"""
TileMerge - Decision engine for the 2048 sliding-tile puzzle.

A deterministic board engine plus a move-selection AI. The engine provides:
- Immutable boards and slide-and-merge transitions
- Seeded, reproducible tile spawning
- A composite positional heuristic
- Three search policies (expectimax, Monte Carlo rollouts, greedy)
- A decision facade with diagnostics for a host UI
"""

__version__ = "0.1.0"

from .engine_core import (
    Board,
    Direction,
    MoveResult,
    SeededRandom,
    InvalidBoardError,
    InvalidDirectionError,
    new_board,
    apply_move,
    spawn_tile,
    is_terminal,
    has_reached_target,
    validate,
)
from .config import EngineConfig, GameSettings, HeuristicWeights, SearchConfig, PolicyKind, load_config
from .bots import DecisionResult, HeuristicEvaluator, evaluate
from .api import DecisionService, DiagnosticsSnapshot

__all__ = [
    "Board",
    "Direction",
    "MoveResult",
    "SeededRandom",
    "InvalidBoardError",
    "InvalidDirectionError",
    "new_board",
    "apply_move",
    "spawn_tile",
    "is_terminal",
    "has_reached_target",
    "validate",
    "EngineConfig",
    "GameSettings",
    "HeuristicWeights",
    "SearchConfig",
    "PolicyKind",
    "load_config",
    "DecisionResult",
    "HeuristicEvaluator",
    "evaluate",
    "DecisionService",
    "DiagnosticsSnapshot",
]
