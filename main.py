#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--seed N]
    python main.py demo [--games N] [--delay S] [--seed N]
"""
import argparse
import asyncio
import logging
import random
import sys
from typing import Optional

from src.sweeper import (
    Difficulty,
    GameController,
    GameEvent,
    GameSnapshot,
    InvalidConfiguration,
    OutOfBoundsCoordinate,
)

logger = logging.getLogger(__name__)

HELP = """Commands:
  o ROW COL   open a cell
  f ROW COL   flag / unflag a cell
  r           restart
  d LEVEL     new game at easy, medium or hard
  h           show this help
  q           quit"""


def setup_logging(level: str = "WARNING") -> None:
    """Configure application logging once, to stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def announce(event: GameEvent, snapshot: GameSnapshot) -> None:
    """Print the end-of-game alert."""
    print(
        f"\n*** {event.title} {event.message} "
        f"({snapshot.elapsed_seconds}s) ***"
    )


def handle_command(controller: GameController, line: str) -> bool:
    """
    Apply one line of player input.

    Args:
        controller: Game being played.
        line: Raw input line.

    Returns:
        False when the player asked to quit.
    """
    parts = line.split()
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]
    try:
        if command == "q":
            return False
        if command == "h":
            print(HELP)
        elif command == "r":
            controller.restart()
        elif command == "d" and len(args) == 1:
            controller.select_difficulty(args[0])
        elif command in ("o", "f") and len(args) == 2:
            row, col = int(args[0]), int(args[1])
            if command == "o":
                controller.tap(row, col)
            else:
                controller.long_press(row, col)
        else:
            print(f"Unknown command: {line.strip()!r} (h for help)")
    except ValueError as e:
        # InvalidConfiguration is a ValueError too
        print(f"Invalid input: {e}")
    except OutOfBoundsCoordinate as e:
        print(e)
    return True


async def play_async(difficulty: Difficulty, seed: Optional[int]) -> None:
    """Run an interactive game on the asyncio loop."""
    loop = asyncio.get_running_loop()
    rng = random.Random(seed) if seed is not None else None
    controller = GameController(difficulty, rng=rng)
    controller.subscribe(announce)

    print(HELP)
    try:
        while True:
            print()
            print(controller.snapshot().render_ansi())
            try:
                line = await loop.run_in_executor(None, input, "> ")
            except EOFError:
                break
            if not handle_command(controller, line):
                break
    finally:
        controller.close()


def play(args: argparse.Namespace) -> None:
    """Play in the terminal."""
    try:
        difficulty = Difficulty.from_name(args.difficulty)
    except InvalidConfiguration as e:
        print(e)
        return

    logger.info("Starting %s game", difficulty.value)
    asyncio.run(play_async(difficulty, args.seed))


def demo(args: argparse.Namespace) -> None:
    """Watch a random player."""
    from demo import demo as run_demo

    try:
        difficulty = Difficulty.from_name(args.difficulty)
    except InvalidConfiguration as e:
        print(e)
        return

    run_demo(
        delay=args.delay,
        games=args.games,
        difficulty=difficulty,
        seed=args.seed,
    )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal or watch a demo"
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty", default="easy", help="easy, medium or hard"
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch a random player")
    demo_parser.add_argument(
        "--difficulty", default="easy", help="easy, medium or hard"
    )
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )
    demo_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for the first game"
    )

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
