"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created with an engine configuration (and optional seed)
- Holds the current board, score and random streams
- Advanced move by move by a GameLoop
- Dropped when the host ends it

Sessions are EPHEMERAL:
- No persistence
- Independent of each other (no shared random state)
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult, SimulationStep, run_seeded_simulation

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "SimulationStep",
    "run_seeded_simulation",
]
