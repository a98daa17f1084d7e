"""
Pydantic Schemas - Read-only views handed to the host UI.

These models define the contract between a front end (hint button,
auto-play, diagnostics dashboard) and the engine. All of them
serialize to plain JSON via model_dump() / model_dump_json().
"""

from typing import Optional, Any
from pydantic import BaseModel, Field, field_validator

from ..config import PolicyKind
from ..engine_core.validation import check_shape


# =============================================================================
# Shared Models
# =============================================================================

class DirectionScoresInfo(BaseModel):
    """Per-direction search value (None = direction does not move)."""
    up: Optional[float] = None
    right: Optional[float] = None
    down: Optional[float] = None
    left: Optional[float] = None

    model_config = {"frozen": True}

    @classmethod
    def from_scores(cls, scores: dict[Any, Optional[float]]) -> "DirectionScoresInfo":
        return cls(**{direction.label: value for direction, value in scores.items()})


class HeuristicInfo(BaseModel):
    """Raw heuristic features of a board, plus the weighted total."""
    position: float = 0.0
    monotonicity: float = 0.0
    smoothness: float = 0.0
    empty_cells: float = 0.0
    total: float = 0.0

    model_config = {"frozen": True}


class BoardPayload(BaseModel):
    """Board rows as sent by a host (JSON nested lists)."""
    rows: list[list[int]] = Field(description="Square grid, 0 = empty")

    @field_validator("rows")
    @classmethod
    def _rows_are_square(cls, rows: list[list[int]]) -> list[list[int]]:
        errors = check_shape(rows)
        if errors:
            raise ValueError("; ".join(errors))
        return rows


# =============================================================================
# Responses
# =============================================================================

class DecisionSummary(BaseModel):
    """One decision, as shown for a hint or an auto-play step."""
    chosen_direction: str = Field(description="up, right, down, left or none")
    per_direction_score: DirectionScoresInfo
    confidence: float = Field(ge=0, le=1)
    elapsed_ms: float = 0.0
    policy: Optional[PolicyKind] = None
    depth: Optional[int] = None
    nodes: int = 0
    truncated: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_result(cls, result: Any) -> "DecisionSummary":
        """Build from a bots.DecisionResult."""
        return cls(
            chosen_direction=result.chosen_direction.label if result.chosen_direction else "none",
            per_direction_score=DirectionScoresInfo.from_scores(result.per_direction_score),
            confidence=result.confidence,
            elapsed_ms=result.elapsed_seconds * 1000.0,
            policy=result.policy,
            depth=result.depth,
            nodes=result.nodes,
            truncated=result.truncated,
        )


class DiagnosticsSnapshot(BaseModel):
    """
    Read-only snapshot of the decision engine's counters.

    Consumed by a dashboard; the engine imposes no rendering format.
    """
    active_policy: PolicyKind
    total_decisions: int = 0
    no_move_decisions: int = 0
    total_time_ms: float = 0.0
    average_time_ms: float = 0.0
    last_time_ms: float = 0.0
    last_decision: Optional[str] = None
    last_scores: DirectionScoresInfo = Field(default_factory=DirectionScoresInfo)
    last_depth: Optional[int] = None
    last_confidence: float = Field(default=0.0, ge=0, le=1)
    last_heuristics: Optional[HeuristicInfo] = None
    calls_by_policy: dict[str, int] = Field(default_factory=dict)
    total_nodes: int = 0

    model_config = {"frozen": True}
