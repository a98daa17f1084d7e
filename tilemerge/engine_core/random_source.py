"""
Random Source - Reproducible pseudo-random stream.

Every piece of randomness in the engine flows through a SeededRandom:
- Tile spawning after a move
- Random playouts in rollout search

Design principles:
- Deterministic: equal seeds + equal draw sequences = equal outputs
- Instance-scoped: no module-level or shared state
- Never raises: next() always succeeds
"""

from __future__ import annotations
import time


# Linear congruential generator constants (Numerical Recipes)
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32


class SeededRandom:
    """
    Linear congruential random stream.

    Usage:
        rng = SeededRandom(42)
        rng.next()        # 0.2523...
        rng.next_index(4) # uniform int in [0, 4)
        rng.reset()       # rewind to seed 42
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = time.time_ns() // 1_000_000
        self._seed = int(seed)
        self._state = self._seed

    @property
    def seed_value(self) -> int:
        """The seed the stream was last (re)seeded with."""
        return self._seed

    @property
    def state(self) -> int:
        """Current position of the stream."""
        return self._state

    def seed(self, value: int):
        """Reseed the stream and reset it to the start."""
        self._seed = int(value)
        self._state = self._seed

    def reset(self):
        """Rewind to the initial seed without changing it."""
        self._state = self._seed

    def next(self) -> float:
        """Advance the stream and return a float in [0, 1)."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def next_index(self, n: int) -> int:
        """Draw a uniform index in [0, n). Consumes exactly one draw."""
        return int(self.next() * n)

    def spawn(self, stream_id: int) -> SeededRandom:
        """
        Derive an independent sub-stream.

        The child seed depends only on this stream's seed and stream_id,
        so parallel branches stay reproducible no matter which one runs first.
        Drawing from the child never advances the parent.
        """
        mixed = (self._seed * LCG_MULTIPLIER + (stream_id + 1) * LCG_INCREMENT) % LCG_MODULUS
        return SeededRandom(mixed)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self._seed}, state={self._state})"
