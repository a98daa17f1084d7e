"""
Engine Configuration - Validated settings for rules, search and heuristics.

Three independent records, grouped by EngineConfig:
- GameSettings: grid size, spawn odds, target tile, seed
- SearchConfig: which policy runs and how hard it searches
- HeuristicWeights: linear weights of the board evaluator

All models are frozen. Changing configuration means building a new
record and handing it to the engine, so a change never leaks into a
decision that is already running.
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import json

from pydantic import BaseModel, Field, field_validator


class PolicyKind(str, Enum):
    """The closed set of search policies."""
    EXHAUSTIVE = "expectimax"
    ROLLOUT = "mcts"
    GREEDY = "greedy"


class HeuristicWeights(BaseModel):
    """
    Weights for the heuristic evaluator.

    Higher values = more importance. Each weight multiplies one
    sub-score; the evaluator sums the products.
    """
    position: float = Field(default=1.0, ge=0, description="Snake-pattern positional weight")
    monotonicity: float = Field(default=1.5, ge=0, description="Ordered rows/columns")
    smoothness: float = Field(default=0.5, ge=0, description="Small neighbour differences")
    empty_cells: float = Field(default=2.7, ge=0, description="Open cells")

    model_config = {"frozen": True}


class SearchConfig(BaseModel):
    """Search policy selection and tuning."""
    active_policy: PolicyKind = PolicyKind.EXHAUSTIVE

    # Exhaustive search
    base_depth: int = Field(default=3, gt=0)
    adaptive_depth: bool = True
    max_expansions: int = Field(
        default=250_000, gt=0,
        description="Hard ceiling on search nodes per decision",
    )

    # Rollout search
    rollout_count: int = Field(default=100, gt=0)
    rollout_max_steps: int = Field(default=50, gt=0)
    rollout_heuristic_weight: float = Field(default=0.001, ge=0)

    model_config = {"frozen": True}


class GameSettings(BaseModel):
    """Rules of a single game."""
    grid_size: int = Field(default=4, ge=2)
    prob4: float = Field(default=0.1, ge=0, le=1, description="Chance a spawned tile is a 4")
    target_value: int = Field(default=2048, ge=4, description="Tile that wins the game")
    seed: Optional[int] = None

    model_config = {"frozen": True}

    @field_validator("target_value")
    @classmethod
    def _target_is_power_of_two(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError(f"target_value must be a power of two, got {value}")
        return value


class EngineConfig(BaseModel):
    """Complete engine configuration."""
    settings: GameSettings = Field(default_factory=GameSettings)
    search: SearchConfig = Field(default_factory=SearchConfig)
    weights: HeuristicWeights = Field(default_factory=HeuristicWeights)

    model_config = {"frozen": True}


def load_config(source: Union[Mapping[str, Any], str, Path, None] = None) -> EngineConfig:
    """
    Load and validate an EngineConfig.

    Args:
        source: A mapping, a path to a JSON file, or None for defaults

    Raises:
        pydantic.ValidationError: If any value is out of range
        FileNotFoundError: If the path does not exist
    """
    if source is None:
        return EngineConfig()

    if isinstance(source, (str, Path)):
        with open(source, "r", encoding="utf-8") as f:
            source = json.load(f)

    return EngineConfig.model_validate(source)
