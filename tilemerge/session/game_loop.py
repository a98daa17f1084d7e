"""
Game Loop - Drives one session move by move.

The loop:
1. New game: two tiles spawn on an empty board
2. A direction comes in (player input, or the engine's own choice)
3. The board slides; if anything moved, a tile spawns
4. Score, win and game-over flags are updated
5. Repeat until no legal move is left

Play continues after the target tile is reached; the win is reported
once, on the move that first reaches it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, TYPE_CHECKING
import logging

from ..config import EngineConfig, GameSettings
from ..engine_core.action import Direction
from ..engine_core.board import Board
from ..engine_core.reducer import apply_move, spawn_tile, is_terminal, has_reached_target

if TYPE_CHECKING:
    from .manager import Session
    from ..bots import DecisionResult


logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    NOT_STARTED = "not_started"
    WAITING_MOVE = "waiting_move"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing one move.

    moved=False means the direction changed nothing: no tile spawned
    and the score is unchanged.
    """
    success: bool
    loop_state: LoopState

    direction: Direction | None = None
    moved: bool = False
    score_gained: int = 0
    score: int = 0
    board: Board | None = None

    # Flags
    won: bool = False  # Target reached on this move
    game_over: bool = False

    # The decision behind an auto-play move
    decision: DecisionResult | None = None

    # Errors
    errors: list[str] = field(default_factory=list)


@dataclass
class SimulationStep:
    """One entry of a seeded simulation trace."""
    board: list[list[int]]
    score: int
    moved: bool

    def to_dict(self) -> dict[str, Any]:
        return {"board": self.board, "score": self.score, "moved": self.moved}


class GameLoop:
    """
    The main game loop driver.

    Usage:
        session = SessionManager().create_session()
        loop = GameLoop(session)
        loop.new_game()

        result = loop.play("left")
        hint = loop.hint()           # DecisionResult
        result = loop.auto_step()    # engine picks and plays
    """

    def __init__(self, session: Session):
        self.session = session
        self.state = LoopState.NOT_STARTED

    @property
    def settings(self) -> GameSettings:
        return self.session.config.settings

    def new_game(self) -> TurnResult:
        """Reset the board and spawn the two starting tiles."""
        from .manager import SessionState

        session = self.session
        board = Board.empty(self.settings.grid_size)
        board = spawn_tile(board, session.rng, self.settings.prob4)
        board = spawn_tile(board, session.rng, self.settings.prob4)

        session.board = board
        session.score = 0
        session.move_count = 0
        session.won = False
        session.state = SessionState.ACTIVE
        self.state = LoopState.WAITING_MOVE

        return TurnResult(
            success=True,
            loop_state=self.state,
            board=board,
        )

    def play(self, direction: Any) -> TurnResult:
        """
        Apply a direction, spawn a tile if the board changed.

        Raises:
            InvalidDirectionError: If direction is not one of the four
        """
        from .manager import SessionState

        direction = Direction.parse(direction)
        session = self.session

        if session.state == SessionState.ENDED:
            return self._failure("Session has ended")
        if self.state == LoopState.NOT_STARTED:
            return self._failure("Game not started - call new_game() first")

        if self.state == LoopState.GAME_OVER:
            return self._game_over(direction)

        result = apply_move(session.board, direction)
        won_now = False

        if result.moved:
            session.board = spawn_tile(result.board, session.rng, self.settings.prob4)
            session.score += result.score_gained
            session.move_count += 1

            if not session.won and has_reached_target(session.board, self.settings.target_value):
                session.won = True
                won_now = True
                logger.info(
                    "Session %s reached %d after %d moves (score=%d)",
                    session.session_id, self.settings.target_value,
                    session.move_count, session.score,
                )

        game_over = is_terminal(session.board)
        if game_over:
            session.state = SessionState.GAME_OVER
            self.state = LoopState.GAME_OVER
            logger.info(
                "Session %s game over after %d moves (score=%d, max tile=%d)",
                session.session_id, session.move_count,
                session.score, session.board.max_tile(),
            )

        return TurnResult(
            success=True,
            loop_state=self.state,
            direction=direction,
            moved=result.moved,
            score_gained=result.score_gained,
            score=session.score,
            board=session.board,
            won=won_now,
            game_over=game_over,
        )

    def hint(self) -> DecisionResult:
        """Ask the decision service for the best direction."""
        return self.session.service.decide(self.session.board)

    def auto_step(self) -> TurnResult:
        """Let the engine choose a direction and play it."""
        from .manager import SessionState

        if self.session.state == SessionState.ENDED:
            return self._failure("Session has ended")
        if self.state == LoopState.NOT_STARTED:
            return self._failure("Game not started - call new_game() first")
        if self.state == LoopState.GAME_OVER:
            return self._game_over()

        decision = self.hint()
        if decision.chosen_direction is None:
            if is_terminal(self.session.board):
                self.session.state = SessionState.GAME_OVER
                self.state = LoopState.GAME_OVER
                result = self._game_over()
            else:
                # Rollouts can miss every legal direction on a tiny budget
                logger.warning(
                    "Session %s: %s produced no usable sample on a live board",
                    self.session.session_id, decision.policy.value if decision.policy else "search",
                )
                result = self._failure("Search produced no usable sample")
            result.decision = decision
            return result

        result = self.play(decision.chosen_direction)
        result.decision = decision
        return result

    def autoplay(self, max_moves: int = 1000) -> list[TurnResult]:
        """Auto-step until game over or max_moves moves."""
        results: list[TurnResult] = []
        for _ in range(max_moves):
            result = self.auto_step()
            results.append(result)
            if not result.success or result.game_over or not result.moved:
                break
        return results

    def _game_over(self, direction: Direction | None = None) -> TurnResult:
        return TurnResult(
            success=True,
            loop_state=self.state,
            direction=direction,
            score=self.session.score,
            board=self.session.board,
            game_over=True,
        )

    def _failure(self, error: str) -> TurnResult:
        return TurnResult(
            success=False,
            loop_state=self.state,
            score=self.session.score,
            board=self.session.board,
            errors=[error],
        )


def run_seeded_simulation(
    seed: int,
    moves: Iterable[Any],
    settings: GameSettings | None = None,
) -> list[SimulationStep]:
    """
    Replay a fixed move list from a seed.

    Starts from an empty board with two spawned tiles, applies each
    direction in turn (spawning after every successful move) and
    records board, cumulative score and moved flag after each one.
    """
    from .manager import Session

    settings = (settings or GameSettings()).model_copy(update={"seed": seed})
    loop = GameLoop(Session.create(EngineConfig(settings=settings)))
    loop.new_game()

    trace: list[SimulationStep] = []
    for direction in moves:
        result = loop.play(direction)
        trace.append(SimulationStep(
            board=result.board.to_rows(),
            score=result.score,
            moved=result.moved,
        ))
    return trace
