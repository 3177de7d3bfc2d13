"""Tests for the card and deck model."""

import pytest
from klondike.engine.cards import (
    Card, Color, Rank, Suit, color, fresh_deck, parse_card,
    rank_predecessor, rank_successor,
)


def test_card_immutability() -> None:
    """Test Card is immutable."""
    card = Card(Suit.HEARTS, Rank.ACE)
    assert card.rank == Rank.ACE

    with pytest.raises(AttributeError):
        card.rank = Rank.KING  # type: ignore


def test_card_defaults_face_down() -> None:
    assert Card(Suit.SPADES, Rank.TEN).face_up is False


@pytest.mark.parametrize("suit,expected", [
    (Suit.HEARTS, Color.RED),
    (Suit.DIAMONDS, Color.RED),
    (Suit.SPADES, Color.BLACK),
    (Suit.CLUBS, Color.BLACK),
])
def test_color(suit: Suit, expected: Color) -> None:
    card = Card(suit, Rank.SEVEN)
    assert color(card) == expected
    assert card.color == expected


class TestRankOrder:
    """Ace low, king high, no wraparound."""

    def test_successor(self):
        assert rank_successor(Rank.ACE) == Rank.TWO
        assert rank_successor(Rank.TEN) == Rank.JACK
        assert rank_successor(Rank.QUEEN) == Rank.KING

    def test_king_has_no_successor(self):
        assert rank_successor(Rank.KING) is None

    def test_predecessor(self):
        assert rank_predecessor(Rank.TWO) == Rank.ACE
        assert rank_predecessor(Rank.JACK) == Rank.TEN
        assert rank_predecessor(Rank.KING) == Rank.QUEEN

    def test_ace_has_no_predecessor(self):
        assert rank_predecessor(Rank.ACE) is None

    def test_successor_and_predecessor_are_inverse(self):
        for rank in Rank:
            nxt = rank_successor(rank)
            if nxt is not None:
                assert rank_predecessor(nxt) == rank


class TestFreshDeck:
    def test_has_52_unique_cards(self):
        deck = fresh_deck()
        assert len(deck) == 52
        assert len({(c.suit, c.rank) for c in deck}) == 52

    def test_all_face_down(self):
        assert not any(c.face_up for c in fresh_deck())

    def test_canonical_order(self):
        """Suit-major, rank-minor."""
        deck = fresh_deck()
        assert deck[0] == Card(Suit.SPADES, Rank.ACE)
        assert deck[12] == Card(Suit.SPADES, Rank.KING)
        assert deck[13] == Card(Suit.HEARTS, Rank.ACE)
        assert deck[-1] == Card(Suit.CLUBS, Rank.KING)


def test_flipped_returns_new_card() -> None:
    card = Card(Suit.CLUBS, Rank.FIVE)
    up = card.flipped(True)
    assert up.face_up is True
    assert card.face_up is False
    assert up.same_card(card)
    assert up != card


def test_str_uses_suit_symbol() -> None:
    assert str(Card(Suit.HEARTS, Rank.TEN, True)) == "10♥"
    assert str(Card(Suit.SPADES, Rank.QUEEN)) == "Q♠"


class TestParseCard:
    @pytest.mark.parametrize("text,expected", [
        ("10H", Card(Suit.HEARTS, Rank.TEN)),
        ("qs", Card(Suit.SPADES, Rank.QUEEN)),
        ("A♦", Card(Suit.DIAMONDS, Rank.ACE)),
        ("7c", Card(Suit.CLUBS, Rank.SEVEN)),
    ])
    def test_parses_labels(self, text, expected):
        assert parse_card(text) == expected

    @pytest.mark.parametrize("text", ["", "H", "11H", "AX", "ZZ"])
    def test_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            parse_card(text)
