"""
TileMerge CLI - Command-line interface for the engine.

Usage:
    tilemerge play [--policy expectimax|mcts|greedy] [--seed N]   Auto-play a game
    tilemerge hint '<rows json>'                                 Best move for a board
    tilemerge simulate --seed 42 --moves LULU                    Seeded replay trace
    tilemerge validate '<rows json>'                             Audit a board's tiles
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="TileMerge - 2048 decision engine",
        prog="tilemerge",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--config", help="Path to an engine config JSON file")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Auto-play a seeded game")
    _add_search_arguments(play_parser)
    play_parser.add_argument("--seed", type=int, help="Seed for tile spawns")
    play_parser.add_argument("--size", type=int, help="Grid size")
    play_parser.add_argument("--max-moves", type=int, default=2000, help="Stop after this many moves")
    play_parser.add_argument("--show-every", type=int, default=0, help="Print the board every N moves")

    # Hint command
    hint_parser = subparsers.add_parser("hint", help="Best move for a board")
    hint_parser.add_argument("board", help="Board rows as JSON, e.g. '[[2,2,0,0],...]'")
    _add_search_arguments(hint_parser)
    hint_parser.add_argument("--seed", type=int, help="Seed for randomized search")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Replay moves from a seed")
    simulate_parser.add_argument("--seed", type=int, required=True, help="Seed for tile spawns")
    simulate_parser.add_argument(
        "--moves", required=True,
        help="Directions as letters (ULDR) or comma-separated names",
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Audit a board's tiles")
    validate_parser.add_argument("board", help="Board rows as JSON")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s:%(message)s",
    )

    try:
        if args.command == "play":
            return cmd_play(args)
        elif args.command == "hint":
            return cmd_hint(args)
        elif args.command == "simulate":
            return cmd_simulate(args)
        elif args.command == "validate":
            return cmd_validate(args)
        else:
            parser.print_help()
            return 1
    except (ValidationError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}")
        return 1


def _add_search_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--policy", choices=["expectimax", "mcts", "greedy"], help="Search policy")
    parser.add_argument("--depth", type=int, help="Base search depth (expectimax)")
    parser.add_argument("--no-adaptive", action="store_true", help="Disable adaptive depth")
    parser.add_argument("--rollouts", type=int, help="Rollout budget (mcts)")


def _load_config(args):
    """Engine config from --config, overridden by command-line flags."""
    from .config import load_config

    config = load_config(args.config)

    search_updates = {}
    if getattr(args, "policy", None):
        search_updates["active_policy"] = args.policy
    if getattr(args, "depth", None) is not None:
        search_updates["base_depth"] = args.depth
    if getattr(args, "no_adaptive", False):
        search_updates["adaptive_depth"] = False
    if getattr(args, "rollouts", None) is not None:
        search_updates["rollout_count"] = args.rollouts

    settings_updates = {}
    if getattr(args, "seed", None) is not None:
        settings_updates["seed"] = args.seed
    if getattr(args, "size", None) is not None:
        settings_updates["grid_size"] = args.size

    # Re-validate so flag values get the same range checks as the file
    data = config.model_dump()
    data["search"].update(search_updates)
    data["settings"].update(settings_updates)
    return type(config).model_validate(data)


def _parse_board(text: str):
    from .api.schemas import BoardPayload
    from .engine_core import Board

    payload = BoardPayload(rows=json.loads(text))
    return Board.from_rows(payload.rows)


def cmd_play(args) -> int:
    """Auto-play one game and print the outcome."""
    from .session import SessionManager, GameLoop

    config = _load_config(args)
    manager = SessionManager(config)
    session = manager.create_session()
    loop = GameLoop(session)
    loop.new_game()

    print(f"Policy: {config.search.active_policy.value}  Seed: {session.seed}")

    moves = 0
    for _ in range(args.max_moves):
        result = loop.auto_step()
        if result.moved:
            moves += 1
            if args.show_every and moves % args.show_every == 0:
                print(f"\nMove {moves}  Score {result.score}")
                print(result.board)
        if result.won:
            print(f"Reached {config.settings.target_value} after {moves} moves!")
        if not result.success or result.game_over or not result.moved:
            break

    print("\nFinal board:")
    print(session.board)
    print(f"Score: {session.score}")
    print(f"Moves: {session.move_count}")
    print(f"Max tile: {session.board.max_tile()}")
    print(f"Game over: {session.is_over()}")

    snapshot = session.service.snapshot()
    print(f"Decisions: {snapshot.total_decisions}  Avg time: {snapshot.average_time_ms:.1f}ms")

    manager.end_session(session.session_id)
    return 0


def cmd_hint(args) -> int:
    """Print the engine's decision for a board."""
    from .api import DecisionService, DecisionSummary

    board = _parse_board(args.board)
    config = _load_config(args)
    service = DecisionService(config=config)

    decision = service.decide(board)
    print(DecisionSummary.from_result(decision).model_dump_json(indent=2))
    return 0


def cmd_simulate(args) -> int:
    """Replay moves from a seed and print the trace."""
    from .config import load_config
    from .session import run_seeded_simulation

    if "," in args.moves:
        moves = [m for m in args.moves.split(",") if m.strip()]
    else:
        moves = list(args.moves)

    settings = load_config(args.config).settings
    trace = run_seeded_simulation(args.seed, moves, settings)
    print(json.dumps([step.to_dict() for step in trace], indent=2))
    return 0


def cmd_validate(args) -> int:
    """Audit a board and list invalid tiles."""
    from .engine_core import validate

    rows = json.loads(args.board)
    findings = validate(rows)
    if not findings:
        print("Board is valid")
        return 0

    print(f"Found {len(findings)} problem(s):")
    for finding in findings:
        print(f"  - {finding}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
