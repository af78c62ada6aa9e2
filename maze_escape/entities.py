"""People in the maze: the student, the TAs and the instructor.

Each person knows how to mark and unmark a tile it stands on and how to
pick a move from the legal actions the maze offers it. The maze owns every
person and replaces the student and a level's TAs wholesale on reset.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import TYPE_CHECKING, Optional, Sequence, Union

from .actions import PlayerAction
from .config import APPEASE_TURNS, APPEASED_THRESHOLD
from .environment import OpenSpace, Position

if TYPE_CHECKING:
    from .controllers import ActionSelector


@dataclass
class Student:
    """The player character; collects skills and is driven by an ActionSelector."""

    position: Position
    skills: int = 0

    def occupy(self, space: OpenSpace) -> None:
        space.has_student = True

    def unoccupy(self, space: OpenSpace) -> None:
        space.has_student = False

    @property
    def has_skills(self) -> bool:
        return self.skills > 0

    def increment_skills(self) -> None:
        self.skills += 1

    def decrement_skills(self) -> None:
        if self.skills > 0:
            self.skills -= 1

    async def choose_move(
        self, legal_actions: Sequence[PlayerAction], selector: "ActionSelector"
    ) -> Optional[PlayerAction]:
        """Suspend until the selector picks one of ``legal_actions``.

        Returns ``None`` when nothing is offered or the selector cancels.
        """
        if not legal_actions:
            return None
        return await selector.choose_action(list(legal_actions))


@dataclass
class TA:
    """Adversary that wanders at random and catches the student unless appeased."""

    position: Position
    appeased_turns: int = 0

    def occupy(self, space: OpenSpace) -> None:
        space.has_ta = True

    def unoccupy(self, space: OpenSpace) -> None:
        space.has_ta = False

    @property
    def is_appeased(self) -> bool:
        return self.appeased_turns > APPEASED_THRESHOLD

    def appease(self, turns: int = APPEASE_TURNS) -> None:
        self.appeased_turns += turns

    def decrement_appeasement(self) -> None:
        if self.appeased_turns > 0:
            self.appeased_turns -= 1

    def choose_move(
        self, legal_actions: Sequence[PlayerAction], rng: Random
    ) -> Optional[PlayerAction]:
        """Pick a directional move uniformly at random.

        Being asked to move counts as a turn, so the appeasement counter
        ticks down even when no move is available.
        """
        self.decrement_appeasement()

        moves = [action for action in legal_actions if action.is_movement]
        if not moves:
            return None
        return rng.choice(moves)


@dataclass
class Instructor:
    """Stationary goal on the final level. Never moves and never marks tiles."""

    position: Position

    def occupy(self, space: OpenSpace) -> None:
        pass

    def unoccupy(self, space: OpenSpace) -> None:
        pass

    def choose_move(self, legal_actions: Sequence[PlayerAction]) -> Optional[PlayerAction]:
        return None


Entity = Union[Student, TA, Instructor]
