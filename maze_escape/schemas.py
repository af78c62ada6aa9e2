"""
Pydantic schemas for Maze Escape.

The simulation core keeps its mutable state in plain dataclasses (tiles,
people). Everything that crosses the boundary to callers - the parsed maze
header, per-turn reports, and the status view printed each turn - is a
pydantic model so it can be validated, compared, and serialized.
"""

from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, Field

from maze_escape.actions import PlayerAction


# ============================================================================
# Maze File Schemas
# ============================================================================


class MazeHeader(BaseModel):
    """First line of a maze file: ``levels height width``.

    Every level in the file shares the same height and width. All three
    values must be at least 1.
    """

    levels: int = Field(..., ge=1, description="Number of levels in the maze")
    height: int = Field(..., ge=1, description="Rows per level")
    width: int = Field(..., ge=1, description="Columns per level")


# ============================================================================
# Turn Schemas
# ============================================================================


class TurnOutcome(str, Enum):
    """What happened to the student at the end of a turn.

    Outcomes are ordinary results, not errors: ``CAUGHT_BY_TA`` and
    ``FAILED_BY_INSTRUCTOR`` trigger a reset and play continues;
    ``SATISFIED_INSTRUCTOR`` ends the game.
    """

    ACQUIRED_SKILL = "acquired_skill"
    CAUGHT_BY_TA = "caught_by_ta"
    FAILED_BY_INSTRUCTOR = "failed_by_instructor"
    NO_EVENT = "no_event"
    SATISFIED_INSTRUCTOR = "satisfied_instructor"

    @property
    def is_terminal(self) -> bool:
        return self is TurnOutcome.SATISFIED_INSTRUCTOR

    @property
    def requires_reset(self) -> bool:
        return self in (TurnOutcome.CAUGHT_BY_TA, TurnOutcome.FAILED_BY_INSTRUCTOR)


class TurnReport(BaseModel):
    """Summary of one resolved turn, taken before any recovery reset."""

    turn: int = Field(..., ge=1, description="1-indexed turn number")
    action: PlayerAction = Field(..., description="Action the student took")
    outcome: TurnOutcome = Field(..., description="Event detected after everyone moved")
    skills: int = Field(..., ge=0, description="Student's skill count after the turn")
    position: Tuple[int, int, int] = Field(
        ..., description="Student's (level, row, col) after the turn"
    )
    climbed: bool = Field(False, description="Student climbed a ladder this turn")
    appeased: bool = Field(False, description="Student demonstrated a skill this turn")


# ============================================================================
# Status Schemas
# ============================================================================


class TAStatus(BaseModel):
    """Appeasement state of one TA on the student's level."""

    position: Tuple[int, int, int]
    appeased_turns: int = Field(..., ge=0, description="Turns of appeasement remaining")
    appeased: bool = Field(..., description="Whether the TA currently ignores the student")


class StatusView(BaseModel):
    """Snapshot shown to the player before each turn."""

    skills: int = Field(..., ge=0)
    position: Tuple[int, int, int]
    remaining_levels: int = Field(..., ge=0, description="Levels above the current one")
    tas: List[TAStatus] = Field(default_factory=list, description="TAs on the current level")

    def describe(self) -> str:
        """Render the status block as printed by the console game."""
        level, row, col = self.position
        lines = [
            f"# of Programming Skills: {self.skills}",
            f"Current Position: ({level}, {row}, {col})",
            f"Remaining Levels: {self.remaining_levels}",
        ]

        # All TAs on a level are appeased together, so the first one speaks for the level.
        if self.tas and self.tas[0].appeased:
            lines.append(f"TAs Appeased: Yes; {self.tas[0].appeased_turns} turns remaining")
        else:
            lines.append("TAs Appeased: No")
        return "\n".join(lines)
