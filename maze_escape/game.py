"""
Game session: the outer run loop around a Maze.

Coordinates one game:
1. Print the status block and the student's current level
2. Resolve a turn (the selector picks the student's action)
3. Log what happened
4. Apply the reset the outcome calls for
5. Stop when the instructor is satisfied (or the turn cap is reached)

The maze itself does no I/O; everything a player sees is printed here.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional

from .config import Config
from .controllers import ActionSelector
from .environment import MazeError
from .logging_utils import log_error, log_event, log_info, log_success, log_turn
from .maze import Maze
from .schemas import TurnOutcome, TurnReport

TURN_SEPARATOR = "\n\n==============================\n\n"

OUTCOME_MESSAGES: Dict[TurnOutcome, str] = {
    TurnOutcome.CAUGHT_BY_TA: (
        "You have been caught by an unappeased TA! "
        "They sent you back to the start of your current level."
    ),
    TurnOutcome.FAILED_BY_INSTRUCTOR: (
        "You have been failed by the instructor! "
        "They sent you all the way back to the beginning."
    ),
    TurnOutcome.SATISFIED_INSTRUCTOR: (
        "CONGRATULATIONS! You have satisfied the instructor and passed CS 162!"
    ),
}


class GameSession:
    """Drive a Maze until the student passes.

    All collaborators are injected: the selector that plays the student,
    an optional pause hook called after every reset (the CLI waits for
    Enter), and optional turn listeners for analysis.
    """

    def __init__(
        self,
        maze: Maze,
        selector: Optional[ActionSelector] = None,
        *,
        max_turns: Optional[int] = None,
        turn_listeners: Optional[List[Callable[[TurnReport, Maze], None]]] = None,
        pause_fn: Optional[Callable[[], Any]] = None,
        verbose: Optional[bool] = None,
    ):
        """Initialize a session.

        Args:
            maze: Maze to play
            selector: Chooses the student's action; defaults to the maze's own selector
            max_turns: Optional cap; the session stops (not won) after this many turns
            turn_listeners: Callables invoked with (report, maze) after each turn,
                before any reset is applied
            pause_fn: Blocking callable run after each reset (e.g. wait for Enter)
            verbose: Also print TA positions each turn; defaults to Config.VERBOSE
        """
        self.maze = maze
        self.selector = selector or maze.selector
        self.max_turns = max_turns
        self.turn_listeners = turn_listeners or []
        self.pause_fn = pause_fn
        self.verbose = Config.VERBOSE if verbose is None else verbose
        self.history: List[TurnReport] = []

    async def run(self) -> Dict:
        """Play until the instructor is satisfied or ``max_turns`` is reached.

        Returns:
            Dict with turns played, whether the game was won, and the turn history

        Raises:
            MazeError: If a turn cannot be resolved (e.g. the selector gave no action)
        """
        if self.selector is None:
            raise MazeError("GameSession needs an action selector")

        won = False
        while self.max_turns is None or len(self.history) < self.max_turns:
            self._print_status()

            try:
                report = await self.maze.resolve_turn(self.selector)
            except MazeError as e:
                log_error(f"Turn {self.maze.turn + 1} failed: {e}")
                raise

            self.history.append(report)
            self._print_turn_summary(report)

            # Listener failures are reported but never stop the game.
            for listener in self.turn_listeners:
                try:
                    listener(report, self.maze)
                except Exception as exc:  # pragma: no cover - diagnostic hook
                    log_error(f"[Analysis] Listener failed: {exc}")

            if report.outcome.is_terminal:
                won = True
                break

            if self.maze.recover(report.outcome) and self.pause_fn is not None:
                await asyncio.to_thread(self.pause_fn)

            print(TURN_SEPARATOR)

        if not won:
            log_info(f"Stopped after {len(self.history)} turns without passing.")

        return {"turns": len(self.history), "won": won, "history": self.history}

    def _print_status(self) -> None:
        print(self.maze.status().describe())
        print()
        print(self.maze.render_level())
        print()

    def _print_turn_summary(self, report: TurnReport) -> None:
        if report.climbed:
            log_turn(f"You have climbed up to level {report.position[0] + 1}.")
        elif report.appeased:
            log_turn(
                "You demonstrated a skill to the TAs; "
                f"you now have {report.skills} skills remaining."
            )
        elif self.verbose:
            log_turn(f"Turn {report.turn}: {report.action.description}")

        if self.verbose:
            for ta in self.maze.status().tas:
                state = f"appeased for {ta.appeased_turns}" if ta.appeased else "unappeased"
                log_info(f"TA at {ta.position} ({state})")

        if report.outcome is TurnOutcome.ACQUIRED_SKILL:
            log_event(f"You have acquired a skill! You now have {report.skills} programming skills!")
        elif report.outcome is TurnOutcome.SATISFIED_INSTRUCTOR:
            log_success(OUTCOME_MESSAGES[report.outcome])
        elif report.outcome in OUTCOME_MESSAGES:
            log_event(OUTCOME_MESSAGES[report.outcome])
