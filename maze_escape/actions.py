"""Player actions, their keyboard bindings, and direction conversions."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from .environment import Direction


class PlayerAction(Enum):
    """Everything a person in the maze can do on a turn.

    Declaration order is the order actions are presented in menus.
    """

    CLIMB_UP = "climb_up"
    DEMONSTRATE_SKILL = "demonstrate_skill"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"

    @property
    def key(self) -> str:
        return ACTION_INPUTS[self][0]

    @property
    def description(self) -> str:
        return ACTION_INPUTS[self][1]

    @property
    def is_movement(self) -> bool:
        return self in _ACTION_TO_DIRECTION


# action -> (input key, menu text)
ACTION_INPUTS: Dict[PlayerAction, Tuple[str, str]] = {
    PlayerAction.CLIMB_UP: ("U", "Climb up the ladder to the next level."),
    PlayerAction.DEMONSTRATE_SKILL: ("P", "Demonstrate a programming skill."),
    PlayerAction.MOVE_UP: ("W", "Move up."),
    PlayerAction.MOVE_DOWN: ("S", "Move down."),
    PlayerAction.MOVE_LEFT: ("A", "Move left."),
    PlayerAction.MOVE_RIGHT: ("D", "Move right."),
}

_ACTION_TO_DIRECTION: Dict[PlayerAction, Direction] = {
    PlayerAction.MOVE_UP: Direction.UP,
    PlayerAction.MOVE_DOWN: Direction.DOWN,
    PlayerAction.MOVE_LEFT: Direction.LEFT,
    PlayerAction.MOVE_RIGHT: Direction.RIGHT,
}

_DIRECTION_TO_ACTION: Dict[Direction, PlayerAction] = {
    direction: action for action, direction in _ACTION_TO_DIRECTION.items()
}


def action_to_direction(action: PlayerAction) -> Optional[Direction]:
    """Return the direction of a movement action, ``None`` for anything else."""
    return _ACTION_TO_DIRECTION.get(action)


def direction_to_action(direction: Direction) -> PlayerAction:
    return _DIRECTION_TO_ACTION[direction]


def all_player_actions() -> List[PlayerAction]:
    return list(PlayerAction)


def all_directions() -> List[Direction]:
    return list(Direction)


def action_for_key(key: str) -> Optional[PlayerAction]:
    """Map a typed key to its action, ignoring case."""
    needle = key.strip().upper()
    for action, (bound_key, _) in ACTION_INPUTS.items():
        if bound_key == needle:
            return action
    return None
