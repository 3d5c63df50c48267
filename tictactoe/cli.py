"""
TicTacToe CLI - Command-line interface for the engine.

Usage:
    tictactoe play [--mode human|ai]   Play a game in the terminal
    tictactoe serve [--port 8000]      Run the browser API
"""

import argparse
import sys
import time

from .config import Settings, configure_logging
from .engine_core.state import GameMode, Mark


def main(argv=None):
    """Main CLI entry point."""
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        description="TicTacToe - Human vs Human or Human vs AI",
        prog="tictactoe",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameMode.HUMAN_VS_AI.value,
        help="human: two players take turns, ai: play X against the AI",
    )
    play_parser.add_argument(
        "--delay-ms",
        type=int,
        default=settings.ai_delay_ms,
        help="Pause before the AI answers",
    )
    play_parser.add_argument("--seed", type=int, help="Seed for the AI's random choices")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the browser API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)
    configure_logging(args.log_level.upper())

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "serve":
        return cmd_serve(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def render_board(board) -> str:
    """Board as three text rows; empty cells show their index."""
    cells = [
        cell.value if cell != Mark.EMPTY else str(i)
        for i, cell in enumerate(board)
    ]
    rows = [" | ".join(cells[r:r + 3]) for r in (0, 3, 6)]
    return "\n---------\n".join(rows)


def cmd_play(args):
    """Play a game in the terminal."""
    import random
    from .bots import HeuristicBot
    from .session import GameLoop, status_message, turn_indicator

    loop = GameLoop(bot=HeuristicBot(rng=random.Random(args.seed)))
    loop.start_session(GameMode(args.mode))
    print(turn_indicator(loop.mode))

    while loop.game.active:
        print()
        print(render_board(loop.game.board))
        print(status_message(loop.game))

        if loop.is_ai_turn():
            time.sleep(args.delay_ms / 1000.0)
            result = loop.request_ai_move()
            print(f"AI plays {result.index}")
            continue

        try:
            raw = input("Cell (0-8, q to quit): ").strip()
        except EOFError:
            raw = "q"
        if raw.lower() == "q":
            print("Game abandoned.")
            return 1
        if not raw.isdecimal():
            print("Enter a cell number.")
            continue

        result = loop.submit_move(int(raw))
        if not result.applied:
            print(result.error)

    print()
    print(render_board(loop.game.board))
    print(status_message(loop.game))
    return 0


def cmd_serve(args, settings):
    """Run the browser API with uvicorn."""
    import uvicorn
    from .api import create_app

    app = create_app(settings=settings)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
