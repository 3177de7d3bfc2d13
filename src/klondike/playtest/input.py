"""Human input handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from klondike.engine.cards import parse_card
from klondike.engine.layout import DISCARD_PILE, DRAW_PILE, PILE_NAMES, Layout
from klondike.engine.validator import Move, find_card


class Action(Enum):
    """Console commands."""

    MOVE = "move"
    RECYCLE = "recycle"
    UNDO = "undo"
    REDO = "redo"
    HINT = "hint"
    FOLD = "fold"


SIMPLE_COMMANDS = {
    "c": Action.RECYCLE,
    "recycle": Action.RECYCLE,
    "u": Action.UNDO,
    "undo": Action.UNDO,
    "r": Action.REDO,
    "redo": Action.REDO,
    "h": Action.HINT,
    "hint": Action.HINT,
    "f": Action.FOLD,
    "fold": Action.FOLD,
}

HELP = (
    "Commands: d (draw), m SRC DST [CARD] (move), c (recycle), "
    "u (undo), r (redo), h (hint), f (fold), q (quit)\n"
    "Piles: 1-7 or pile1-pile7, s1-s4 or stack1-stack4, w or discard"
)


@dataclass
class InputResult:
    """Result of human input."""

    action: Optional[Action] = None
    move: Optional[Move] = None
    quit: bool = False
    error: Optional[str] = None


def resolve_pile(token: str) -> Optional[str]:
    """Map a pile alias ("3", "p3", "s1", "w") to its pile name."""
    token = token.strip().lower()
    if token in PILE_NAMES:
        return token
    if token.isdigit() and 1 <= int(token) <= 7:
        return f"pile{token}"
    if token[:1] == "p" and token[1:].isdigit() and 1 <= int(token[1:]) <= 7:
        return f"pile{token[1:]}"
    if token[:1] == "s" and token[1:].isdigit() and 1 <= int(token[1:]) <= 4:
        return f"stack{token[1:]}"
    if token in ("w", "waste"):
        return DISCARD_PILE
    return None


class CommandParser:
    """Turns console commands into moves or session actions."""

    def parse(self, raw: str, layout: Layout) -> InputResult:
        """Parse one command line against the current layout."""
        parts = raw.strip().lower().split()
        if not parts:
            return InputResult(error=HELP)

        cmd, args = parts[0], parts[1:]

        if cmd in ("q", "quit", "exit"):
            return InputResult(quit=True)
        if cmd in SIMPLE_COMMANDS:
            return InputResult(action=SIMPLE_COMMANDS[cmd])
        if cmd in ("d", "draw"):
            return self._parse_draw(layout)
        if cmd in ("m", "mv", "move"):
            return self._parse_move(args, layout)

        return InputResult(error=f"Unknown command '{cmd}'.\n{HELP}")

    def _parse_draw(self, layout: Layout) -> InputResult:
        if not layout.draw:
            return InputResult(error="Draw pile is empty. Use 'c' to recycle the discard pile.")
        move = Move([layout.draw[0]], DRAW_PILE, DISCARD_PILE)
        return InputResult(action=Action.MOVE, move=move)

    def _parse_move(self, args: list[str], layout: Layout) -> InputResult:
        if len(args) not in (2, 3):
            return InputResult(error="Usage: m SRC DST [CARD]")

        src = resolve_pile(args[0])
        dst = resolve_pile(args[1])
        if src is None or dst is None:
            bad = args[0] if src is None else args[1]
            return InputResult(error=f"Unknown pile '{bad}'.")

        src_cards = layout[src]
        if len(args) == 3:
            try:
                card = parse_card(args[2])
            except ValueError as e:
                return InputResult(error=str(e))
            index = find_card(src_cards, card)
            cards = src_cards[index:] if index >= 0 else (card,)
        else:
            if not src_cards:
                return InputResult(error=f"{src} is empty.")
            cards = src_cards[-1:]

        return InputResult(action=Action.MOVE, move=Move(cards, src, dst))


class HumanPlayer:
    """Reads commands from the terminal."""

    def __init__(self, parser: Optional[CommandParser] = None):
        self.parser = parser or CommandParser()

    def get_command(self, layout: Layout, prompt: str = "> ") -> InputResult:
        """Read and parse one command; EOF or Ctrl-C quits."""
        try:
            raw = input(prompt)
        except (EOFError, KeyboardInterrupt):
            return InputResult(quit=True)
        return self.parser.parse(raw, layout)

    def get_yes_no(self, prompt: str) -> Optional[bool]:
        """Get yes/no response.

        Returns:
            True for yes, False for no, None for quit/cancel
        """
        try:
            raw = input(prompt).strip().lower()
        except (EOFError, KeyboardInterrupt):
            return None

        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no"):
            return False
        return None
