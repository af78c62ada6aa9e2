"""Utilities for maze level grids."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Tuple

from .position import Direction, Position
from .tiles import OpenSpace

if TYPE_CHECKING:
    from .level import Level


def adjacent_positions(pos: Position) -> List[Tuple[Direction, Position]]:
    """Return the four positions one step from ``pos`` in scan order.

    No bounds checking happens here; callers resolve each position against a
    level and drop the ones that do not exist.
    """

    return [(direction, pos.translate(direction)) for direction in Direction]


def open_neighbors(level: "Level", pos: Position) -> List[Tuple[Direction, OpenSpace]]:
    """Return occupiable tiles directly adjacent to ``pos`` on ``level``.

    Order is always Up, Down, Left, Right. Walls and off-grid positions are skipped.
    """

    neighbors: List[Tuple[Direction, OpenSpace]] = []
    for direction, candidate in adjacent_positions(pos):
        space = level.space_at(candidate)
        if space is not None:
            neighbors.append((direction, space))
    return neighbors


def empty_tiles(level: "Level") -> List[OpenSpace]:
    """Return every empty occupiable tile on ``level`` in row-major order."""

    return [space for space in level.open_spaces() if space.is_empty]


def render_level(level: "Level") -> str:
    """Render one level as rows of glyphs separated by newlines."""

    return "\n".join("".join(tile.glyph for tile in row) for row in level.grid)


def render_levels(levels: Iterable["Level"]) -> str:
    """Render several levels, separating them with a blank line."""

    return "\n\n".join(render_level(level) for level in levels)
