"""Console game loop."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from klondike.engine.session import GameSession, SessionStatus
from klondike.engine.validator import Rejected
from klondike.playtest.display import HintPresenter, LayoutRenderer
from klondike.playtest.input import HELP, Action, HumanPlayer

logger = logging.getLogger(__name__)


class ConsoleGame:
    """Plays a session in the terminal until it ends or the player quits."""

    def __init__(
        self,
        session: GameSession,
        player: Optional[HumanPlayer] = None,
        debug: bool = False,
    ):
        self.session = session
        self.player = player or HumanPlayer()
        self.debug = debug
        self.renderer = LayoutRenderer()
        self.hints = HintPresenter()

    def run(self, output_fn: Callable[[str], None] = print) -> dict[str, Any]:
        """Run the game loop.

        Args:
            output_fn: Function to output text (default: print)

        Returns:
            Session summary when the loop ends
        """
        session = self.session
        output_fn(HELP)

        while session.active:
            output_fn("")
            output_fn(self.renderer.render_session(session, self.debug))

            command = self.player.get_command(session.current)
            if command.quit:
                output_fn("Leaving game.")
                break
            if command.error:
                output_fn(command.error)
                continue

            if command.action == Action.HINT:
                output_fn(self.hints.present(session.legal_moves()))
                continue

            if command.action == Action.FOLD:
                confirm = self.player.get_yes_no("Fold this game? [y/n]: ")
                if not confirm:
                    continue

            result = self._dispatch(command.action, command.move)
            if isinstance(result, Rejected):
                output_fn(f"Invalid: {result.reason}")
                continue

            if result.won:
                output_fn("")
                output_fn(self.renderer.render_session(session, self.debug))
                output_fn("\n=== You Win! ===")
            elif result.advisory:
                output_fn(f"Note: {result.advisory}. Undo, recycle or fold.")

        if session.status == SessionStatus.FOLDED:
            output_fn("Game folded.")
        return session.summary()

    def _dispatch(self, action: Action, move):
        """Run a parsed command against the session.

        Raises:
            ValueError: for an action that does not change the session
        """
        session = self.session
        handlers = {
            Action.MOVE: lambda: session.apply_move(move),
            Action.RECYCLE: session.recycle,
            Action.UNDO: session.undo,
            Action.REDO: session.redo,
            Action.FOLD: session.fold,
        }
        if action not in handlers:
            raise ValueError(f"No session operation for action {action}")
        logger.debug(f"Dispatching {action.value}")
        return handlers[action]()
