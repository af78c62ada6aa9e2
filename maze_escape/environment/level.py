"""A single maze level: a fixed rectangular grid of tiles parsed from text.

Levels are created once at load time and live for the whole run. Tiles are
mutated in place as people move around; they are never reallocated.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import Iterator, List, Optional, Sequence

from .helpers import empty_tiles, render_level
from .position import Position
from .tiles import (
    GLYPH_INSTRUCTOR,
    GLYPH_LADDER,
    GLYPH_OPEN,
    GLYPH_START,
    GLYPH_WALL,
    OpenSpace,
    Tile,
    Wall,
)


# =============================
# Module-level Exceptions
# =============================

class MazeError(Exception):
    """Base class for every error raised while loading or running a maze."""


class MazeParseError(MazeError):
    """Raised when maze text cannot be turned into levels.

    ``level`` is zero-indexed (``None`` for header problems); ``row`` and
    ``col`` are one-indexed so they match what a person sees in an editor.
    """

    def __init__(
        self,
        reason: str,
        *,
        level: Optional[int] = None,
        row: Optional[int] = None,
        col: Optional[int] = None,
    ) -> None:
        self.reason = reason
        self.level = level
        self.row = row
        self.col = col
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.level is None:
            return f"Error parsing maze header: {self.reason}."

        parts = ["Error parsing "]
        if self.row is not None:
            parts.append(f"row {self.row}")
            if self.col is not None:
                parts.append(f", column {self.col}")
            parts.append(" of ")
        parts.append(f"maze level {self.level + 1}: {self.reason}.")
        return "".join(parts)


@dataclass
class Level:
    """Rectangular grid of tiles for one maze level.

    Exactly one start tile exists, and exactly one of ladder or instructor.
    The start/ladder/instructor references point into ``grid``.
    """

    index: int
    height: int
    width: int
    grid: List[List[Tile]]
    start_tile: OpenSpace
    ladder_tile: Optional[OpenSpace] = None
    instructor_tile: Optional[OpenSpace] = None

    @classmethod
    def parse(
        cls,
        rows: Sequence[str],
        index: int,
        *,
        height: Optional[int] = None,
        width: Optional[int] = None,
    ) -> Level:
        """Build a level from its text rows.

        ``height`` and ``width`` default to the shape of ``rows``. The grid is
        assembled locally, so a failure leaves nothing half-built behind.

        Raises:
            MazeParseError: On a short/missing row, an unknown glyph, a
                duplicate or missing start, a duplicate ladder/instructor, or
                a level with neither or both of ladder and instructor.
        """
        if height is None:
            height = len(rows)
        if width is None:
            width = len(rows[0]) if rows else 0

        grid: List[List[Tile]] = []
        start: Optional[OpenSpace] = None
        ladder: Optional[OpenSpace] = None
        instructor: Optional[OpenSpace] = None

        for r in range(height):
            if r >= len(rows):
                raise MazeParseError("failed to read row", level=index, row=r + 1)
            text = rows[r]
            if len(text) != width:
                raise MazeParseError(
                    "width of row not equal to width of maze", level=index, row=r + 1
                )

            row: List[Tile] = []
            for c, glyph in enumerate(text):
                pos = Position(index, r, c)
                if glyph == GLYPH_OPEN:
                    row.append(OpenSpace(pos))
                elif glyph == GLYPH_WALL:
                    row.append(Wall(pos))
                elif glyph == GLYPH_START:
                    if start is not None:
                        raise MazeParseError(
                            "second beginning location found", level=index, row=r + 1, col=c + 1
                        )
                    start = OpenSpace(pos, is_start=True)
                    row.append(start)
                elif glyph == GLYPH_LADDER:
                    if ladder is not None:
                        raise MazeParseError(
                            "second ladder found", level=index, row=r + 1, col=c + 1
                        )
                    ladder = OpenSpace(pos, has_ladder=True)
                    row.append(ladder)
                elif glyph == GLYPH_INSTRUCTOR:
                    if instructor is not None:
                        raise MazeParseError(
                            "second instructor found", level=index, row=r + 1, col=c + 1
                        )
                    instructor = OpenSpace(pos, has_instructor=True)
                    row.append(instructor)
                else:
                    raise MazeParseError(
                        f"unknown character: {glyph!r}", level=index, row=r + 1, col=c + 1
                    )
            grid.append(row)

        if start is None:
            raise MazeParseError("no beginning location found", level=index)
        if ladder is None and instructor is None:
            raise MazeParseError("no ladder or instructor found", level=index)
        if ladder is not None and instructor is not None:
            raise MazeParseError("found both an instructor and a ladder", level=index)

        return cls(
            index=index,
            height=height,
            width=width,
            grid=grid,
            start_tile=start,
            ladder_tile=ladder,
            instructor_tile=instructor,
        )

    def tiles(self) -> Iterator[Tile]:
        """Iterate over every tile in row-major order."""
        for row in self.grid:
            yield from row

    def open_spaces(self) -> Iterator[OpenSpace]:
        for tile in self.tiles():
            if isinstance(tile, OpenSpace):
                yield tile

    def reset(self) -> None:
        """Clear students, TAs and skills; permanent markers are untouched."""
        for space in self.open_spaces():
            space.clear_occupants()

    def location_at(self, pos: Position) -> Optional[Tile]:
        """Return the tile at ``pos`` or ``None`` when it lies outside this level."""
        if pos.level != self.index:
            return None
        if not (0 <= pos.row < self.height and 0 <= pos.col < self.width):
            return None
        return self.grid[pos.row][pos.col]

    def space_at(self, pos: Position) -> Optional[OpenSpace]:
        """Like ``location_at`` but only returns occupiable tiles."""
        tile = self.location_at(pos)
        if isinstance(tile, OpenSpace):
            return tile
        return None

    def random_empty_tiles(self, count: int, rng: Random) -> Optional[List[OpenSpace]]:
        """Sample up to ``count`` distinct empty tiles uniformly at random.

        Returns ``None`` when the level has no empty tile at all. Otherwise
        returns between 1 and ``count`` tiles; callers that need an exact
        number must check the length.
        """
        candidates = empty_tiles(self)
        if not candidates:
            return None
        rng.shuffle(candidates)
        return candidates[:count]

    def render(self) -> str:
        return render_level(self)
