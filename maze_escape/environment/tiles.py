"""Grid cells that make up a maze level.

A tile is either a ``Wall`` or an ``OpenSpace``. Walls are inert. Open
spaces carry three permanent markers set once at parse time (start, ladder,
instructor) and three transient occupancy flags that change during play
(student, TA, skill).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .position import Position

# Glyphs read from maze files
GLYPH_OPEN = " "
GLYPH_WALL = "#"
GLYPH_START = "@"
GLYPH_LADDER = "^"
GLYPH_INSTRUCTOR = "%"

# Glyphs only produced when rendering
GLYPH_STUDENT = "*"
GLYPH_TA = "T"
GLYPH_SKILL = "$"


@dataclass
class Wall:
    """Non-occupiable tile."""

    position: Position

    @property
    def occupiable(self) -> bool:
        return False

    @property
    def glyph(self) -> str:
        return GLYPH_WALL


@dataclass
class OpenSpace:
    """Occupiable tile with permanent markers and transient occupancy flags."""

    position: Position
    is_start: bool = False
    has_ladder: bool = False
    has_instructor: bool = False
    has_skill: bool = False
    has_student: bool = False
    has_ta: bool = False

    @property
    def occupiable(self) -> bool:
        return True

    @property
    def is_empty(self) -> bool:
        """True when no marker and no occupant is present (placement target)."""
        return not (
            self.is_start
            or self.has_ladder
            or self.has_instructor
            or self.has_skill
            or self.has_student
            or self.has_ta
        )

    @property
    def glyph(self) -> str:
        # Occupants hide the permanent markers underneath them.
        if self.has_student:
            return GLYPH_STUDENT
        if self.has_ta:
            return GLYPH_TA
        if self.has_skill:
            return GLYPH_SKILL
        if self.is_start:
            return GLYPH_START
        if self.has_ladder:
            return GLYPH_LADDER
        if self.has_instructor:
            return GLYPH_INSTRUCTOR
        return GLYPH_OPEN

    def clear_occupants(self) -> None:
        self.has_skill = False
        self.has_student = False
        self.has_ta = False


Tile = Union[Wall, OpenSpace]
