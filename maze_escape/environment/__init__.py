"""Grid environment for Maze Escape: positions, tiles and levels."""

from .position import Direction, Position
from .tiles import OpenSpace, Tile, Wall
from .level import Level, MazeError, MazeParseError
from .helpers import (
    adjacent_positions,
    empty_tiles,
    open_neighbors,
    render_level,
    render_levels,
)

__all__ = [
    "Direction",
    "Position",
    "OpenSpace",
    "Tile",
    "Wall",
    "Level",
    "MazeError",
    "MazeParseError",
    "adjacent_positions",
    "empty_tiles",
    "open_neighbors",
    "render_level",
    "render_levels",
]
