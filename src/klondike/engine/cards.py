"""Card and deck model."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Rank(Enum):
    """Playing card ranks, ace low."""

    ACE = "ace"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "jack"
    QUEEN = "queen"
    KING = "king"


class Suit(Enum):
    """Playing card suits."""

    SPADES = "spades"
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"


class Color(Enum):
    """Suit colors."""

    RED = "red"
    BLACK = "black"


# Canonical orderings (enum definition order)
RANK_ORDER: tuple[Rank, ...] = tuple(Rank)
SUIT_ORDER: tuple[Suit, ...] = tuple(Suit)

RED_SUITS = frozenset({Suit.HEARTS, Suit.DIAMONDS})

# Short labels for terminal output and console input
RANK_LABELS = {
    Rank.ACE: "A",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}
SUIT_LABELS = {Suit.SPADES: "S", Suit.HEARTS: "H", Suit.DIAMONDS: "D", Suit.CLUBS: "C"}
SUIT_SYMBOLS = {Suit.SPADES: "♠", Suit.HEARTS: "♥", Suit.DIAMONDS: "♦", Suit.CLUBS: "♣"}


def rank_label(rank: Rank) -> str:
    """Short label for rank ("A", "2", ..., "10", "J", "Q", "K")."""
    return RANK_LABELS.get(rank, rank.value)


@dataclass(frozen=True)
class Card:
    """Immutable playing card."""

    suit: Suit
    rank: Rank
    face_up: bool = False

    @property
    def color(self) -> Color:
        return color(self)

    def flipped(self, face_up: bool = True) -> "Card":
        """Return this card with the given face_up flag."""
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    def same_card(self, other: "Card") -> bool:
        """True if both cards are the same (suit, rank), ignoring face_up."""
        return self.suit == other.suit and self.rank == other.rank

    def __str__(self) -> str:
        return f"{rank_label(self.rank)}{SUIT_SYMBOLS[self.suit]}"


def color(card: Card) -> Color:
    """Color of a card's suit."""
    return Color.RED if card.suit in RED_SUITS else Color.BLACK


def rank_successor(rank: Rank) -> Optional[Rank]:
    """Next rank up, or None for king."""
    idx = RANK_ORDER.index(rank)
    if idx == len(RANK_ORDER) - 1:
        return None
    return RANK_ORDER[idx + 1]


def rank_predecessor(rank: Rank) -> Optional[Rank]:
    """Next rank down, or None for ace."""
    idx = RANK_ORDER.index(rank)
    if idx == 0:
        return None
    return RANK_ORDER[idx - 1]


def fresh_deck() -> tuple[Card, ...]:
    """Standard 52-card deck, face down, suit-major and rank-minor."""
    return tuple(Card(suit=suit, rank=rank) for suit in SUIT_ORDER for rank in RANK_ORDER)


def parse_card(text: str) -> Card:
    """Parse a short card label such as "10H", "qs" or "A♦".

    Raises:
        ValueError: if the label does not name a card
    """
    raw = text.strip().upper()
    if len(raw) < 2:
        raise ValueError(f"Invalid card '{text}'")

    rank_part, suit_part = raw[:-1], raw[-1]

    suit = None
    for s in SUIT_ORDER:
        if suit_part in (SUIT_LABELS[s], SUIT_SYMBOLS[s]):
            suit = s
            break
    if suit is None:
        raise ValueError(f"Invalid suit in card '{text}'")

    for r in RANK_ORDER:
        if rank_part == rank_label(r) or rank_part == r.value.upper():
            return Card(suit=suit, rank=r)
    raise ValueError(f"Invalid rank in card '{text}'")
