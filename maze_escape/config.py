"""
Maze Escape Configuration

Loads configuration from environment variables with sensible defaults.
Game-rule constants live at module level; they are part of the rules, not
deployment settings, so they are not read from the environment.
"""

import os
from pathlib import Path
from random import Random
from typing import Optional

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


# Game rules --------------------------------------------------------------
TAS_PER_LEVEL = 2
SKILLS_PER_LEVEL = 3
APPEASE_TURNS = 10
SKILLS_TO_PASS = 3
# A TA is appeased only while its counter is strictly above this value.
APPEASED_THRESHOLD = 1


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Application configuration loaded from environment variables."""

    # Randomness (placement of TAs and skills, TA movement)
    SEED: Optional[int] = _optional_int("MAZE_SEED")

    # Output
    VERBOSE: bool = _flag("MAZE_VERBOSE")

    # Unattended runs stop after this many turns
    MAX_TURNS: Optional[int] = _optional_int("MAZE_MAX_TURNS")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    MAZE_DIR: Path = Path(os.getenv("MAZE_DIR", str(PROJECT_ROOT / "examples" / "mazes")))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.MAX_TURNS is not None and cls.MAX_TURNS < 1:
            raise ValueError(
                "MAZE_MAX_TURNS must be a positive integer. "
                "Unset it to play until the instructor is satisfied."
            )

    @classmethod
    def make_rng(cls, seed: Optional[int] = None) -> Random:
        """Return the random source threaded through the simulation.

        An explicit ``seed`` wins over ``MAZE_SEED``; with neither, the
        generator is seeded from OS entropy.
        """
        if seed is None:
            seed = cls.SEED
        return Random(seed)

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Maze Escape Configuration:",
            f"  Seed: {cls.SEED if cls.SEED is not None else 'random'}",
            f"  Maze Directory: {cls.MAZE_DIR}",
            f"  Max Turns: {cls.MAX_TURNS if cls.MAX_TURNS is not None else 'unlimited'}",
            f"  Verbose: {cls.VERBOSE}",
        ]
        return "\n".join(lines)
