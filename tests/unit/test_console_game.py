"""Tests for the console game loop."""

from unittest.mock import patch

import pytest
from klondike.engine.cards import Card, Rank, Suit, fresh_deck
from klondike.engine.dealer import deal
from klondike.engine.layout import Layout
from klondike.engine.session import GameSession, SessionConfig, SessionStatus
from klondike.playtest.console import ConsoleGame
from klondike.playtest.input import Action


def make_card(rank: str, suit: str, up: bool = True) -> Card:
    return Card(suit=Suit(suit), rank=Rank(rank), face_up=up)


def play(session: GameSession, *lines: str) -> tuple[dict, str]:
    """Run the loop against scripted input lines, returning summary and output."""
    output: list[str] = []
    with patch("builtins.input", side_effect=[*lines, EOFError]):
        summary = ConsoleGame(session).run(output_fn=output.append)
    return summary, "\n".join(output)


def make_session(layout: Layout = None) -> GameSession:
    return GameSession(layout or deal(fresh_deck()), SessionConfig(seed=1, player="erin"))


class TestConsoleGame:
    def test_move_then_quit(self):
        session = make_session()
        summary, output = play(session, "m 1 s1", "q")

        assert session.current["stack1"] == (make_card("ace", "spades"),)
        assert summary["moves"] == 1
        assert "Commands:" in output
        assert "Leaving game." in output

    def test_rejected_move_reports_reason(self):
        session = make_session()
        _, output = play(session, "m 2 s1", "q")

        assert "Invalid: first card on stack must be an ace" in output
        assert session.move_log == []

    def test_parse_error_shown(self):
        _, output = play(make_session(), "jump", "q")
        assert "Unknown command 'jump'" in output

    def test_hint_lists_moves(self):
        _, output = play(make_session(), "h", "q")
        assert "Possible moves:" in output
        assert "A♠ pile1 -> stack1" in output

    def test_undo_and_redo(self):
        session = make_session()
        play(session, "d", "u", "r", "q")
        assert len(session.current.discard) == 1
        assert session.redo_stack == []

    def test_fold_confirmed(self):
        session = make_session()
        summary, output = play(session, "f", "y")

        assert session.status == SessionStatus.FOLDED
        assert summary["status"] == "folded"
        assert "Game folded." in output

    def test_fold_declined(self):
        session = make_session()
        play(session, "f", "n", "q")
        assert session.active

    def test_win_ends_loop(self):
        deck = [c.flipped(True) for c in fresh_deck()]
        layout = Layout.from_piles({
            "stack1": tuple(deck[0:13]),
            "stack2": tuple(deck[13:26]),
            "stack3": tuple(deck[26:39]),
            "stack4": tuple(deck[39:51]),
            "pile1": (deck[51],),
        })
        session = make_session(layout)

        summary, output = play(session, "m 1 s4")

        assert "=== You Win! ===" in output
        assert summary["winner"] == "erin"
        assert summary["cards_remaining"] == 0

    def test_stuck_note(self):
        layout = Layout.from_piles({
            "pile1": (make_card("7", "spades"),),
            "pile2": (make_card("6", "diamonds"),),
        })
        _, output = play(make_session(layout), "m 2 1", "q")
        assert "Note: no valid moves" in output

    def test_dispatch_rejects_non_session_action(self):
        game = ConsoleGame(make_session())
        with pytest.raises(ValueError):
            game._dispatch(Action.HINT, None)

    def test_dispatch_runs_session_operation(self):
        session = make_session()
        result = ConsoleGame(session)._dispatch(Action.UNDO, None)
        assert result.reason == "no moves to undo"

    def test_eof_quits(self):
        session = make_session()
        summary, _ = play(session)
        assert summary["active"] is True
