"""Terminal play for Klondike sessions."""

from klondike.playtest.display import LayoutRenderer, HintPresenter, format_card, format_move
from klondike.playtest.input import Action, CommandParser, HumanPlayer, InputResult, resolve_pile
from klondike.playtest.console import ConsoleGame

__all__ = [
    "LayoutRenderer",
    "HintPresenter",
    "format_card",
    "format_move",
    "Action",
    "CommandParser",
    "HumanPlayer",
    "InputResult",
    "resolve_pile",
    "ConsoleGame",
]
