"""Action selection strategies for the student.

The maze never reads input itself. Each turn it hands the student's legal
actions to an ``ActionSelector`` and awaits the choice. Selectors return
``None`` to signal "no selection" (cancelled or exhausted); during normal
play the maze treats that as fatal.
"""

from __future__ import annotations

import asyncio
from random import Random
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from .actions import PlayerAction, action_for_key

CANCEL_KEY = "0"


class ActionSelector(Protocol):
    """Protocol for student action selection."""

    async def choose_action(self, legal_actions: Sequence[PlayerAction]) -> Optional[PlayerAction]:
        """Return one of ``legal_actions`` or ``None`` to cancel.

        Implementations may block on a human; the maze awaits the result
        before anything else happens on the turn.
        """

        ...


class ScriptedSelector:
    """Replays a fixed sequence of actions, then returns ``None``.

    Used for tests and reproducible demos. The script is not checked
    against the legal set here; the maze rejects illegal choices.
    """

    def __init__(self, actions: Iterable[PlayerAction]):
        self._pending: List[PlayerAction] = list(actions)
        self.offered: List[List[PlayerAction]] = []

    @property
    def remaining(self) -> int:
        return len(self._pending)

    def push(self, *actions: PlayerAction) -> None:
        self._pending.extend(actions)

    async def choose_action(self, legal_actions: Sequence[PlayerAction]) -> Optional[PlayerAction]:
        self.offered.append(list(legal_actions))
        if not self._pending:
            return None
        return self._pending.pop(0)


class RandomSelector:
    """Picks uniformly among the legal actions (autoplay)."""

    def __init__(self, rng: Optional[Random] = None):
        self.rng = rng or Random()

    async def choose_action(self, legal_actions: Sequence[PlayerAction]) -> Optional[PlayerAction]:
        if not legal_actions:
            return None
        return self.rng.choice(list(legal_actions))


class ConsolePromptSelector:
    """Menu prompt on the terminal.

    Prints one ``KEY) description`` line per legal action and re-prompts
    until the typed key (case-insensitive) matches an offered action.
    Blocking ``input`` runs in a worker thread so the event loop stays free.
    """

    def __init__(
        self,
        *,
        enable_cancel: bool = False,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        initial_message: str = "Choose an option from below:",
        prompt_message: str = "Enter option: ",
        fail_message: str = "Invalid option, try again.",
    ):
        self.enable_cancel = enable_cancel
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.initial_message = initial_message
        self.prompt_message = prompt_message
        self.fail_message = fail_message

    def format_options(self, legal_actions: Sequence[PlayerAction]) -> str:
        """Render the menu body; options are de-duplicated and sorted by declaration order."""
        order = list(PlayerAction)
        options = sorted(set(legal_actions), key=order.index)

        lines: List[str] = []
        if self.enable_cancel:
            lines.append(f"{CANCEL_KEY}) Cancel")
        for action in options:
            lines.append(f"{action.key}) {action.description}")
        return "\n".join(lines)

    async def choose_action(self, legal_actions: Sequence[PlayerAction]) -> Optional[PlayerAction]:
        if not legal_actions:
            return None

        self.output_fn(f"\n{self.initial_message}\n")
        self.output_fn(self.format_options(legal_actions) + "\n")

        while True:
            raw = await asyncio.to_thread(self.input_fn, self.prompt_message)
            choice = raw.strip()
            if self.enable_cancel and choice == CANCEL_KEY:
                return None
            action = action_for_key(choice) if choice else None
            if action is not None and action in legal_actions:
                return action
            self.output_fn(self.fail_message)
