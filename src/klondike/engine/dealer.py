"""Shuffling and dealing the opening layout."""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Iterable, Optional

from klondike.engine.cards import Card, fresh_deck
from klondike.engine.layout import DECK_SIZE, TABLEAU_PILES, Layout

logger = logging.getLogger(__name__)


class DealError(ValueError):
    """Deck handed to the dealer is not the 52-card deck."""


def shuffle(deck: Iterable[Card], rng: Optional[random.Random] = None) -> tuple[Card, ...]:
    """Return a uniformly random permutation of deck.

    Uses ``random.Random.shuffle`` (Fisher-Yates) on a copy; the input is
    left untouched.
    """
    rng = rng or random.Random()
    cards = list(deck)
    rng.shuffle(cards)
    return tuple(cards)


def deal(deck: Iterable[Card]) -> Layout:
    """Deal the opening layout from an already shuffled deck.

    Pile i receives the next i cards with only the last face up; the
    remaining 24 cards form the draw pile face down, in deck order.

    Raises:
        DealError: if deck is not exactly the 52-card deck
    """
    cards = [c.flipped(False) for c in deck]
    expected = Counter((c.suit, c.rank) for c in fresh_deck())
    if len(cards) != DECK_SIZE or Counter((c.suit, c.rank) for c in cards) != expected:
        raise DealError(f"Expected the 52-card deck, got {len(cards)} cards")

    piles: dict[str, tuple[Card, ...]] = {}
    pos = 0
    for i, name in enumerate(TABLEAU_PILES, start=1):
        dealt = cards[pos:pos + i]
        pos += i
        piles[name] = tuple(dealt[:-1]) + (dealt[-1].flipped(True),)

    piles["draw"] = tuple(cards[pos:])

    logger.debug(f"Dealt {pos} tableau cards, {len(piles['draw'])} to draw")
    return Layout.from_piles(piles)


def deal_shuffled(seed: Optional[int] = None) -> Layout:
    """Shuffle a fresh deck (optionally seeded) and deal it."""
    rng = random.Random(seed)
    return deal(shuffle(fresh_deck(), rng))
