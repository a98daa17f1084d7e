"""
API Module - Host-facing interface to the decision engine.

A host UI:
1. Configures the policy, search tuning and heuristic weights
2. Asks for a decision (hint or auto-play step)
3. Reads a diagnostics snapshot for its dashboard

All state lives in the service instance. No network surface.
"""

from .schemas import (
    DirectionScoresInfo,
    HeuristicInfo,
    BoardPayload,
    DecisionSummary,
    DiagnosticsSnapshot,
)
from .service import DecisionService, DecisionStats

__all__ = [
    # Schemas
    "DirectionScoresInfo",
    "HeuristicInfo",
    "BoardPayload",
    "DecisionSummary",
    "DiagnosticsSnapshot",
    # Service
    "DecisionService",
    "DecisionStats",
]
