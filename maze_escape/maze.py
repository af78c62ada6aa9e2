"""
The maze simulation: levels, people, and turn resolution.

A turn always runs in the same order:
1. Ask the student's selector for one of the legal actions and apply it
2. Move every TA on the student's (possibly new) level at random
3. Detect what happened at the student's position and report it

The aggregate mutable data (tile flags, people, TA counters) is the whole
state machine; there is no separate state enum. Outcomes that send the
student back (``CAUGHT_BY_TA``, ``FAILED_BY_INSTRUCTOR``) are applied by
``recover`` so callers can report them before the board changes.

The maze does no I/O. Randomness comes from the injected ``random.Random``
so seeded runs are reproducible.
"""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence

from .actions import PlayerAction, action_to_direction, direction_to_action
from .config import SKILLS_PER_LEVEL, SKILLS_TO_PASS, TAS_PER_LEVEL
from .controllers import ActionSelector
from .entities import TA, Entity, Instructor, Student
from .environment import (
    Direction,
    Level,
    MazeError,
    MazeParseError,
    OpenSpace,
    Position,
    Tile,
    empty_tiles,
    open_neighbors,
    render_levels,
)
from .schemas import StatusView, TAStatus, TurnOutcome, TurnReport


# =============================
# Module-level Exceptions
# =============================

class MazeCapacityError(MazeError):
    """Raised when a level has too few empty tiles for its TAs or skills."""

    def __init__(self, *, level: int, placing: str, required: int, available: int) -> None:
        self.level = level
        self.placing = placing
        self.required = required
        self.available = available
        super().__init__(
            f"Maze level {level + 1} is not large enough to place {required} {placing}: "
            f"only {available} empty tile(s) available."
        )


class MazeInvariantError(MazeError):
    """Raised when internal bookkeeping disagrees with itself.

    Valid input and legal-move enforcement never produce this; seeing it
    means there is a bug in the engine, not in the maze file.
    """


class NoActionSelectedError(MazeError):
    """Raised when the student's selector returns no action during play."""

    def __init__(self, *, turn: int, legal_actions: Sequence[PlayerAction]) -> None:
        self.turn = turn
        self.legal_actions = list(legal_actions)
        offered = ", ".join(action.value for action in self.legal_actions) or "none"
        message = (
            f"No action selected for the student on turn {turn} (offered: {offered}).\n\n"
            "Remediation tips:\n"
            "  - Interactive selectors must not enable cancel during normal play\n"
            "  - Scripted selectors must supply one action per turn\n"
            "  - Every open tile needs at least one open neighbor"
        )
        super().__init__(message)


class IllegalActionError(MazeError):
    """Raised when a selector returns an action outside the legal set."""

    def __init__(self, *, action: PlayerAction, legal_actions: Sequence[PlayerAction]) -> None:
        self.action = action
        self.legal_actions = list(legal_actions)
        offered = ", ".join(a.value for a in self.legal_actions)
        super().__init__(f"Action {action.value!r} is not legal here (legal: {offered})")


def _as_tuple(pos: Position) -> tuple:
    return (pos.level, pos.row, pos.col)


class Maze:
    """Multi-level maze holding the student, the TAs and the instructor.

    Construction places the student on level 0's start tile, the instructor
    on the final level's instructor tile, then ``tas_per_level`` TAs and
    ``skills_per_level`` skills on distinct empty tiles of every level.
    """

    def __init__(
        self,
        levels: Sequence[Level],
        *,
        selector: Optional[ActionSelector] = None,
        rng: Optional[Random] = None,
        tas_per_level: int = TAS_PER_LEVEL,
        skills_per_level: int = SKILLS_PER_LEVEL,
    ):
        """Build the maze and place everyone.

        Args:
            levels: Parsed levels, index ``i`` at position ``i``
            selector: Chooses the student's action each turn
            rng: Random source for placement and TA moves
            tas_per_level: TAs placed on every level (and on every reset)
            skills_per_level: Skills placed on every level (and on every reset)

        Raises:
            MazeParseError: No levels, levels out of order, or the instructor
                is missing from the final level / present on an earlier one
            MazeCapacityError: A level lacks enough empty tiles; every level's
                occupancy flags are cleared before the error propagates
        """
        if not levels:
            raise MazeParseError("levels, height, and width must all be >= 1")
        for i, level in enumerate(levels):
            if level.index != i:
                raise MazeParseError(f"level is numbered {level.index + 1}, expected {i + 1}", level=i)

        self.levels: List[Level] = list(levels)
        self.selector = selector
        self.rng = rng or Random()
        self.tas_per_level = tas_per_level
        self.skills_per_level = skills_per_level
        self.turn = 0

        self._validate_instructor_placement()

        start = self.levels[0].start_tile
        self.student = Student(start.position)
        self.student.occupy(start)

        instructor_tile = self.levels[-1].instructor_tile
        self.instructor = Instructor(instructor_tile.position)
        self.instructor.occupy(instructor_tile)

        self.tas: List[List[TA]] = []
        try:
            for level in self.levels:
                self.tas.append(self._place_tas(level))
            for level in self.levels:
                self._place_skills(level)
        except MazeCapacityError:
            # Leave the caller's levels clean; the people are simply dropped.
            for level in self.levels:
                level.reset()
            self.tas = []
            raise

    def _validate_instructor_placement(self) -> None:
        last = len(self.levels) - 1
        if self.levels[last].instructor_tile is None:
            raise MazeParseError("no instructor found on final level", level=last)
        for level in self.levels[:last]:
            if level.instructor_tile is not None:
                raise MazeParseError(
                    "instructor found on a level other than the final one", level=level.index
                )

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def _sample_empty(self, level: Level, count: int, placing: str) -> List[OpenSpace]:
        spaces = level.random_empty_tiles(count, self.rng) or []
        if len(spaces) < count:
            raise MazeCapacityError(
                level=level.index, placing=placing, required=count, available=len(spaces)
            )
        return spaces

    def _place_tas(self, level: Level) -> List[TA]:
        tas: List[TA] = []
        for space in self._sample_empty(level, self.tas_per_level, "TAs"):
            ta = TA(space.position)
            ta.occupy(space)
            tas.append(ta)
        return tas

    def _place_skills(self, level: Level) -> None:
        for space in self._sample_empty(level, self.skills_per_level, "skills"):
            space.has_skill = True

    # ------------------------------------------------------------------
    # Lookups (no mutation)
    # ------------------------------------------------------------------

    @property
    def current_level(self) -> Level:
        return self.levels[self.student.position.level]

    def location_at(self, pos: Position) -> Optional[Tile]:
        if not 0 <= pos.level < len(self.levels):
            return None
        return self.levels[pos.level].location_at(pos)

    def space_at(self, pos: Position) -> Optional[OpenSpace]:
        tile = self.location_at(pos)
        if isinstance(tile, OpenSpace):
            return tile
        return None

    def require_space(self, pos: Position) -> OpenSpace:
        space = self.space_at(pos)
        if space is None:
            raise MazeInvariantError(f"No open space at {pos}")
        return space

    def tas_at(self, pos: Position) -> List[TA]:
        """Every TA standing on ``pos`` (several may share a tile)."""
        if not 0 <= pos.level < len(self.tas):
            return []
        return [ta for ta in self.tas[pos.level] if ta.position == pos]

    def ta_at(self, pos: Position) -> Optional[TA]:
        """The first TA on the tile at ``pos``, if its TA flag is set."""
        space = self.space_at(pos)
        if space is None or not space.has_ta:
            return None
        tas = self.tas_at(pos)
        return tas[0] if tas else None

    def require_tas_at(self, pos: Position) -> List[TA]:
        tas = self.tas_at(pos)
        if not tas:
            raise MazeInvariantError(f"Tile {pos} is flagged with a TA but no TA stands there")
        return tas

    def spaces_adjacent_to(self, pos: Position) -> Optional[List[OpenSpace]]:
        """Open tiles next to ``pos`` in Up, Down, Left, Right order.

        Returns ``None`` when ``pos`` itself is not an open space.
        """
        if self.space_at(pos) is None:
            return None
        return [space for _, space in open_neighbors(self.levels[pos.level], pos)]

    def positions_adjacent_to(self, pos: Position) -> List[Position]:
        return [space.position for space in self.spaces_adjacent_to(pos) or []]

    def empty_tiles(self, level_index: int) -> List[OpenSpace]:
        return empty_tiles(self.levels[level_index])

    def can_move(self, pos: Position, direction: Direction) -> bool:
        if self.space_at(pos) is None:
            return False
        return self.space_at(pos.translate(direction)) is not None

    def legal_movements_at(self, pos: Position) -> List[PlayerAction]:
        """Directional moves into an open neighbor; all a TA is ever offered."""
        return [direction_to_action(d) for d in Direction if self.can_move(pos, d)]

    def legal_actions_at(self, pos: Position) -> List[PlayerAction]:
        """Student actions at ``pos``: moves, plus climbing and demonstrating when allowed."""
        actions = self.legal_movements_at(pos)

        space = self.space_at(pos)
        if space is not None and space.has_ladder and pos.level + 1 < len(self.levels):
            actions.append(PlayerAction.CLIMB_UP)
        if self.student.has_skills:
            actions.append(PlayerAction.DEMONSTRATE_SKILL)
        return actions

    # ------------------------------------------------------------------
    # Turn resolution
    # ------------------------------------------------------------------

    def move_entity(self, entity: Entity, action: PlayerAction) -> bool:
        """Step ``entity`` one tile; returns False for non-movement actions.

        The instructor never moves.
        """
        direction = action_to_direction(action)
        if direction is None or isinstance(entity, Instructor):
            return False

        current = self.require_space(entity.position)
        target_pos = entity.position.translate(direction)
        target = self.require_space(target_pos)

        entity.unoccupy(current)
        entity.occupy(target)
        entity.position = target_pos

        if isinstance(entity, TA):
            # Another TA may still be standing on the tile just left.
            current.has_ta = bool(self.tas_at(current.position))
        return True

    def climb(self) -> None:
        """Move the student from a ladder to the next level's start tile."""
        pos = self.student.position
        current = self.require_space(pos)
        if not current.has_ladder or pos.level + 1 >= len(self.levels):
            raise MazeInvariantError(f"Cannot climb from {pos}")

        start = self.levels[pos.level + 1].start_tile
        self.student.unoccupy(current)
        self.student.occupy(start)
        self.student.position = start.position

    def apply_student_action(self, action: PlayerAction) -> bool:
        """Apply the student's action; returns True when the TAs get appeased."""
        if action is PlayerAction.CLIMB_UP:
            self.climb()
            return False
        if action is PlayerAction.DEMONSTRATE_SKILL:
            self.student.decrement_skills()
            return True
        self.move_entity(self.student, action)
        return False

    def move_tas(self, appease: bool = False) -> None:
        """Move every TA on the student's level once, in roster order."""
        for ta in self.tas[self.student.position.level]:
            move = ta.choose_move(self.legal_movements_at(ta.position), self.rng)
            if move is not None:
                self.move_entity(ta, move)
            if appease:
                ta.appease()

    def _has_unappeased_ta(self, space: OpenSpace) -> bool:
        if not space.has_ta:
            return False
        return any(not ta.is_appeased for ta in self.require_tas_at(space.position))

    def detect_event(self) -> TurnOutcome:
        """Evaluate the student's position; the first matching rule wins.

        1. An unappeased TA on the student's own tile catches them
        2. A skill on the student's tile is picked up
        3. Neighbors, in Up/Down/Left/Right order: an unappeased TA catches
           the student; the instructor passes or fails them on skill count
        """
        pos = self.student.position
        space = self.require_space(pos)

        if self._has_unappeased_ta(space):
            return TurnOutcome.CAUGHT_BY_TA

        if space.has_skill:
            self.student.increment_skills()
            space.has_skill = False
            return TurnOutcome.ACQUIRED_SKILL

        for _, neighbor in open_neighbors(self.levels[pos.level], pos):
            if self._has_unappeased_ta(neighbor):
                return TurnOutcome.CAUGHT_BY_TA
            if neighbor.has_instructor:
                if self.student.skills >= SKILLS_TO_PASS:
                    return TurnOutcome.SATISFIED_INSTRUCTOR
                return TurnOutcome.FAILED_BY_INSTRUCTOR

        return TurnOutcome.NO_EVENT

    async def resolve_turn(self, selector: Optional[ActionSelector] = None) -> TurnReport:
        """Resolve one full turn and report it.

        Args:
            selector: Overrides the maze's selector for this turn

        Raises:
            NoActionSelectedError: The selector offered no action
            IllegalActionError: The selector returned an action outside the legal set
        """
        selector = selector or self.selector
        if selector is None:
            raise MazeError("Maze has no action selector; pass one to Maze() or resolve_turn()")

        legal = self.legal_actions_at(self.student.position)
        action = await self.student.choose_move(legal, selector)
        if action is None:
            raise NoActionSelectedError(turn=self.turn + 1, legal_actions=legal)
        if action not in legal:
            raise IllegalActionError(action=action, legal_actions=legal)

        appease = self.apply_student_action(action)
        self.move_tas(appease)
        outcome = self.detect_event()
        self.turn += 1

        return TurnReport(
            turn=self.turn,
            action=action,
            outcome=outcome,
            skills=self.student.skills,
            position=_as_tuple(self.student.position),
            climbed=action is PlayerAction.CLIMB_UP,
            appeased=appease,
        )

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def reset_level(self, index: int) -> None:
        """Clear a level and start it over with a fresh student, TAs and skills.

        The new student has no skills; old TAs (and their appeasement) are dropped.
        """
        level = self.levels[index]

        old_space = self.space_at(self.student.position)
        if old_space is not None:
            self.student.unoccupy(old_space)
        level.reset()

        start = level.start_tile
        self.student = Student(start.position)
        self.student.occupy(start)
        self.tas[index] = self._place_tas(level)
        self._place_skills(level)

    def reset_current_level(self) -> None:
        self.reset_level(self.student.position.level)

    def reset_all_levels(self) -> None:
        """Reset every level and put the student back on level 0's start tile."""
        for level in self.levels:
            self.reset_level(level.index)
            self.student.unoccupy(level.start_tile)

        start = self.levels[0].start_tile
        self.student.position = start.position
        self.student.occupy(start)

    def recover(self, outcome: TurnOutcome) -> bool:
        """Apply the reset an outcome calls for; returns True if anything was reset."""
        if outcome is TurnOutcome.CAUGHT_BY_TA:
            self.reset_current_level()
            return True
        if outcome is TurnOutcome.FAILED_BY_INSTRUCTOR:
            self.reset_all_levels()
            return True
        return False

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Every level as glyph rows, levels separated by a blank line."""
        return render_levels(self.levels)

    def render_level(self, index: Optional[int] = None) -> str:
        if index is None:
            return self.current_level.render()
        return self.levels[index].render()

    def status(self) -> StatusView:
        pos = self.student.position
        return StatusView(
            skills=self.student.skills,
            position=_as_tuple(pos),
            remaining_levels=len(self.levels) - (pos.level + 1),
            tas=[
                TAStatus(
                    position=_as_tuple(ta.position),
                    appeased_turns=ta.appeased_turns,
                    appeased=ta.is_appeased,
                )
                for ta in self.tas[pos.level]
            ],
        )
