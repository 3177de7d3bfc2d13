"""Integration tests playing whole games through the session API."""

import random

import pytest
from klondike.engine.cards import fresh_deck
from klondike.engine.layout import Layout, is_full_deck
from klondike.engine.serialization import session_from_json, session_to_json
from klondike.engine.session import (
    GameSession, SessionConfig, SessionStatus, deal_new_game,
)
from klondike.engine.validator import MoveKind, classify


def greedy_move(session: GameSession, rng: random.Random):
    """Prefer foundation moves, then anything else."""
    moves = session.legal_moves()
    if not moves:
        return None
    to_foundation = [m for m in moves if classify(m) == MoveKind.TO_FOUNDATION]
    return rng.choice(to_foundation or moves)


def play_out(session: GameSession, seed: int, max_steps: int = 600) -> GameSession:
    rng = random.Random(seed)
    for _ in range(max_steps):
        if not session.active:
            break
        move = greedy_move(session, rng)
        if move is not None:
            session.apply_move(move)
        elif not session.recycle().ok:
            session.fold()
    return session


@pytest.mark.parametrize("seed", [1, 7, 23, 99])
@pytest.mark.parametrize("draw_count", [1, 3])
def test_played_game_conserves_cards(seed, draw_count):
    session = play_out(deal_new_game(draw_count=draw_count, seed=seed), seed)

    assert is_full_deck(session.current)
    assert session.cards_remaining() == 52 - session.current.foundation_count()
    if session.status == SessionStatus.WON:
        assert session.cards_remaining() == 0


def test_undo_all_returns_to_deal():
    session = deal_new_game(seed=5)
    opening = session.current
    play_out(session, 5, max_steps=80)
    if not session.active:
        pytest.skip("game ended before undo")

    while session.undo_stack:
        assert session.undo().ok

    assert session.current == opening
    assert session.move_log == []


def test_replay_from_saved_json():
    session = deal_new_game(draw_count=3, seed=17)
    play_out(session, 17, max_steps=40)

    restored = session_from_json(session_to_json(session))

    assert restored.current == session.current
    assert restored.move_log == session.move_log
    assert restored.score() == session.score()
    assert restored.status == session.status


def test_solved_board_plays_to_win():
    """A tableau of descending single-suit piles plays out to a win."""
    deck = [c.flipped(True) for c in fresh_deck()]
    spades, hearts, diamonds, clubs = (deck[i:i + 13] for i in range(0, 52, 13))
    # pileN holds king..ace of one suit, so tops are aces
    layout = Layout.from_piles({
        "pile1": tuple(reversed(spades)),
        "pile2": tuple(reversed(hearts)),
        "pile3": tuple(reversed(diamonds)),
        "pile4": tuple(reversed(clubs)),
    })
    session = GameSession(layout, SessionConfig(seed=0, player="gwen"))

    play_out(session, 0)

    assert session.status == SessionStatus.WON
    assert session.winner == "gwen"
    assert len(session.move_log) == 52
    assert session.score() == 52
