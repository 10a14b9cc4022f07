"""
Command line entry point.

  eatbite play    -> play against the bot in the terminal
  eatbite serve   -> run the HTTP API (uvicorn) until /api/shutdown is called
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from .config import get_settings
from .engine import format_code, format_score, parse_code
from .errors import CodeValidationError, NoConsistentCandidate
from .store import GameSession
from .types import Code

logger = logging.getLogger(__name__)


def _ask_code(prompt: str, input_fn: Callable[[str], str], print_fn: Callable[..., None]) -> Code:
    """Keep asking until we get 3 different digits."""
    while True:
        text = input_fn(prompt)
        try:
            return parse_code(text)
        except CodeValidationError as ve:
            print_fn(f"Error: {ve}")


def play(
    session: Optional[GameSession] = None,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[..., None] = print,
) -> str:
    """
    Interactive loop: player sets a secret, then player and bot take turns.
    Returns the final status ("opponent_won", "bot_won" or "forfeit").
    """
    session = session or GameSession()

    secret = _ask_code("Your secret code (3 different digits, e.g. 527) > ", input_fn, print_fn)
    session.submit_opponent_secret(secret)
    print_fn("Game on: you vs the bot")

    while True:
        print_fn(f"\n===== Turn {session.turn} =====")
        guess = _ask_code("Your guess > ", input_fn, print_fn)

        try:
            result = session.play_round(guess)
        except NoConsistentCandidate as nc:
            print_fn(f"The bot gives up: {nc}")
            return "forfeit"

        print_fn(f"You: {format_code(result.player_guess)} -> {format_score(result.player_score)}")
        if result.status == "opponent_won":
            print_fn("You win!")
            return result.status

        print_fn(f"Bot: {format_code(result.bot_guess)} -> {format_score(result.bot_score)}")
        if result.status == "bot_won":
            print_fn(f"The bot wins! Its code was {format_code(session.bot_secret)}.")
            return result.status


def serve(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import uvicorn

    from .main import app
    from .shutdown import ShutdownSignal

    settings = get_settings()
    config = uvicorn.Config(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)

    signal = ShutdownSignal()

    def _stop() -> None:
        # uvicorn drains in-flight requests once should_exit is set
        server.should_exit = True

    signal.add_callback(_stop)
    app.state.shutdown = signal

    logger.info("serving on http://%s:%s", config.host, config.port)
    server.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eatbite", description="Eat/Bite code breaking against a bot")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("play", help="Play in the terminal")

    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level)

    if args.command == "play":
        try:
            play()
        except (KeyboardInterrupt, EOFError):
            print("\nBye.")
        return 0

    serve(args.host, args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
