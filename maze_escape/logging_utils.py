"""Console output for Maze Escape games.

Each message kind gets its own ANSI color and a short text tag, so the
game reads the same with or without a color terminal.
"""

import os
from enum import Enum


class Color(Enum):
    """Terminal escape sequences used by the game."""

    BLUE = "\033[94m"      # turn lines
    YELLOW = "\033[93m"    # skills picked up, catches, failures
    RED = "\033[91m"
    GREEN = "\033[92m"     # passing the course
    CYAN = "\033[96m"      # status and TA listings

    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Return ``text`` wrapped in ``color`` (and bold if asked).

    Setting ``MAZE_NO_COLOR`` to any value turns this into a no-op, which
    keeps piped output and test captures free of escape codes.
    """
    if os.getenv("MAZE_NO_COLOR"):
        return text

    codes = Color.BOLD.value + color.value if bold else color.value
    return f"{codes}{text}{Color.RESET.value}"


# Tags carry the message kind when colors are off
LOG_TAG_TURN = "[•]"      # climbs, demonstrations, moves
LOG_TAG_EVENT = "[!]"     # skill pickups and send-backs
LOG_TAG_ERROR = "[x]"
LOG_TAG_SUCCESS = "[✓]"   # instructor satisfied
LOG_TAG_INFO = "[i]"


def log_turn(message: str) -> None:
    """What the student did this turn."""
    print(colored(f"{LOG_TAG_TURN} {message}", Color.BLUE))


def log_event(message: str) -> None:
    """Something happened to the student (skill gained or sent back)."""
    print(colored(f"{LOG_TAG_EVENT} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """A turn or listener that could not complete."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """The game was won; printed bold."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN, bold=True))


def log_info(message: str) -> None:
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))
