"""Command-line entry point: ``maze-escape MAZE_FILE``.

Loads a maze file (or a named maze from ``Config.MAZE_DIR``), then plays it
interactively on the terminal, or unattended with ``--autoplay``.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from .config import Config
from .controllers import ConsolePromptSelector, RandomSelector
from .environment import MazeError
from .game import GameSession
from .loader import MazeLoader
from .logging_utils import Color, colored

WELCOME_MESSAGE = "Welcome to Escape from CS 162!"
FAREWELL_MESSAGE = "Thanks for playing Escape from CS 162!"
PAUSE_PROMPT = "Hit enter to continue the game..."


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="maze-escape",
        description="Escape from CS 162: collect skills, dodge TAs, satisfy the instructor.",
    )
    parser.add_argument("maze_file", help="Path to a maze file, or the name of one in MAZE_DIR")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for TA/skill placement and TA movement (overrides MAZE_SEED)",
    )
    parser.add_argument(
        "--autoplay",
        action="store_true",
        help="Let a random player choose the student's moves",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help="Stop after this many turns (overrides MAZE_MAX_TURNS)",
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Do not wait for Enter after being sent back",
    )
    return parser.parse_args(argv)


def _wait_for_enter() -> None:
    input(PAUSE_PROMPT)


async def run_game(args: argparse.Namespace) -> dict:
    """Load the maze named on the command line and play it to completion."""
    rng = Config.make_rng(args.seed)
    if args.autoplay:
        selector = RandomSelector(rng)
    else:
        selector = ConsolePromptSelector()

    maze = MazeLoader().load(args.maze_file, selector=selector, rng=rng)

    max_turns = args.max_turns if args.max_turns is not None else Config.MAX_TURNS
    pause_fn = None if (args.no_pause or args.autoplay) else _wait_for_enter

    session = GameSession(maze, selector, max_turns=max_turns, pause_fn=pause_fn)
    return await session.run()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the game; returns the process exit status."""
    args = parse_args(argv)

    try:
        Config.validate()
        if args.max_turns is not None and args.max_turns < 1:
            raise ValueError("--max-turns must be a positive integer")
    except ValueError as e:
        print(colored(f"Configuration error: {e}", Color.RED), file=sys.stderr)
        return 1

    print(WELCOME_MESSAGE)
    print()

    try:
        asyncio.run(run_game(args))
    except (MazeError, OSError) as e:
        print(colored(str(e), Color.RED), file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print()
        print(colored("Game interrupted.", Color.YELLOW), file=sys.stderr)
        return 1

    print()
    print(FAREWELL_MESSAGE)
    return 0
