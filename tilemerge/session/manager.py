"""
Session Manager - Creates and manages game sessions.

A session owns everything one game needs:
- Its board and score
- Its own seeded random stream (tile spawns)
- Its own decision service (hints and auto-play)

Nothing is shared between sessions, so a hint computed for one game
can never disturb the spawns of another. Sessions are in-memory only;
the manager keeps the best score seen but persists nothing.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import time
import uuid

from ..config import EngineConfig
from ..engine_core.board import Board
from ..engine_core.random_source import SeededRandom
from ..api.service import DecisionService


logger = logging.getLogger(__name__)

# Sub-stream of the session seed reserved for randomized search
SEARCH_STREAM_ID = 1


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # No tiles yet
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # No legal move left
    ENDED = "ended"  # Closed by the host


@dataclass
class Session:
    """
    A single game.

    Contains:
    - The engine configuration it was created with
    - Current board, score and move count
    - The spawn stream and the decision service
    """
    session_id: str
    config: EngineConfig
    created_at: float
    rng: SeededRandom
    service: DecisionService
    board: Board

    state: SessionState = SessionState.CREATED
    score: int = 0
    move_count: int = 0
    won: bool = False

    @classmethod
    def create(cls, config: EngineConfig | None = None, session_id: str | None = None) -> Session:
        """Build a session with its own streams from a configuration."""
        config = config or EngineConfig()
        rng = SeededRandom(config.settings.seed)
        service = DecisionService(config=config, rng=rng.spawn(SEARCH_STREAM_ID))

        return cls(
            session_id=session_id or str(uuid.uuid4()),
            config=config,
            created_at=time.time(),
            rng=rng,
            service=service,
            board=Board.empty(config.settings.grid_size),
        )

    @property
    def seed(self) -> int:
        return self.rng.seed_value

    def is_active(self) -> bool:
        """Check if the session still accepts moves."""
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def is_over(self) -> bool:
        return self.state in {SessionState.GAME_OVER, SessionState.ENDED}


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from configurations
    - Track active sessions
    - Clean up finished sessions
    - Remember the best score seen

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._sessions: dict[str, Session] = {}
        self._best_score = 0

    @property
    def best_score(self) -> int:
        return self._best_score

    def record_score(self, score: int) -> bool:
        """Update the best score; True if it improved."""
        if score > self._best_score:
            self._best_score = score
            return True
        return False

    def create_session(self, config: EngineConfig | None = None) -> Session:
        """
        Create a new game session.

        Args:
            config: Configuration for this session (manager default if None)

        Returns:
            New Session; start it with GameLoop(session).new_game()
        """
        session = Session.create(config or self.config)
        self._sessions[session.session_id] = session
        logger.info(
            "Session %s created (seed=%d, grid=%d)",
            session.session_id, session.seed, session.config.settings.grid_size,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> Session | None:
        """
        End a session and drop it.

        The final score is offered to the best score first.
        """
        session = self._sessions.pop(session_id, None)
        if session:
            self.record_score(session.score)
            session.state = SessionState.ENDED
            logger.info(
                "Session %s ended (score=%d, moves=%d)",
                session_id, session.score, session.move_count,
            )
        return session

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still accepting moves."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]

        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
