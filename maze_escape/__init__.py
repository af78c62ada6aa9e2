"""
Maze Escape - Escape from CS 162.

A multi-level, turn-based maze game: collect programming skills, dodge
the TAs (or appease them), climb the ladders, and satisfy the instructor.

The simulation core does no I/O. Randomness and the student's move
selection are injected, so games can be played on a terminal, replayed
from a script, or run unattended.
"""

__version__ = "0.1.0"

# Main game components
from .maze import (
    Maze,
    MazeCapacityError,
    MazeInvariantError,
    NoActionSelectedError,
    IllegalActionError,
)
from .game import GameSession

# Grid environment
from .environment import (
    Direction,
    Position,
    OpenSpace,
    Tile,
    Wall,
    Level,
    MazeError,
    MazeParseError,
    render_levels,
)

# People and actions
from .actions import PlayerAction, action_for_key
from .entities import Student, TA, Instructor, Entity

# Action selection
from .controllers import (
    ActionSelector,
    ConsolePromptSelector,
    RandomSelector,
    ScriptedSelector,
)

# Core schemas
from .schemas import MazeHeader, TurnOutcome, TurnReport, StatusView, TAStatus

# Maze file loading
from .loader import load_maze, parse_maze_text, MazeLoader

__all__ = [
    # Main classes
    "Maze",
    "GameSession",
    # Errors
    "MazeError",
    "MazeParseError",
    "MazeCapacityError",
    "MazeInvariantError",
    "NoActionSelectedError",
    "IllegalActionError",
    # Environment
    "Direction",
    "Position",
    "OpenSpace",
    "Tile",
    "Wall",
    "Level",
    "render_levels",
    # People and actions
    "PlayerAction",
    "action_for_key",
    "Student",
    "TA",
    "Instructor",
    "Entity",
    # Selectors
    "ActionSelector",
    "ConsolePromptSelector",
    "RandomSelector",
    "ScriptedSelector",
    # Schemas
    "MazeHeader",
    "TurnOutcome",
    "TurnReport",
    "StatusView",
    "TAStatus",
    # Loading
    "load_maze",
    "parse_maze_text",
    "MazeLoader",
]
