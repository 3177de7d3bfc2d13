"""Immutable table layout: the 13 named piles at one point in time."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional

from klondike.engine.cards import Card, fresh_deck

Pile = tuple[Card, ...]

TABLEAU_PILES: tuple[str, ...] = tuple(f"pile{i}" for i in range(1, 8))
FOUNDATION_PILES: tuple[str, ...] = tuple(f"stack{i}" for i in range(1, 5))
DRAW_PILE = "draw"
DISCARD_PILE = "discard"
PILE_NAMES: tuple[str, ...] = TABLEAU_PILES + FOUNDATION_PILES + (DRAW_PILE, DISCARD_PILE)

DECK_SIZE = 52
SUIT_SIZE = 13


class LayoutError(ValueError):
    """Layout does not hold exactly the 52-card deck."""


def is_tableau(name: str) -> bool:
    return name in TABLEAU_PILES


def is_foundation(name: str) -> bool:
    return name in FOUNDATION_PILES


@dataclass(frozen=True)
class Layout:
    """Immutable table state.

    Piles are tuples with the top card last. The draw pile is dealt
    from its head, so ``draw[0]`` is the next card drawn.
    """

    tableau: tuple[Pile, ...]
    foundations: tuple[Pile, ...]
    draw: Pile
    discard: Pile

    @classmethod
    def empty(cls) -> "Layout":
        return cls(
            tableau=((),) * len(TABLEAU_PILES),
            foundations=((),) * len(FOUNDATION_PILES),
            draw=(),
            discard=(),
        )

    @classmethod
    def from_piles(cls, piles: Mapping[str, Pile]) -> "Layout":
        """Build a layout from a pile-name mapping; missing piles are empty.

        Raises:
            KeyError: for an unrecognized pile name
        """
        unknown = set(piles) - set(PILE_NAMES)
        if unknown:
            raise KeyError(f"Unknown pile(s): {', '.join(sorted(unknown))}")
        return cls.empty().copy_with(piles)

    def pile(self, name: str) -> Pile:
        """Cards of the named pile.

        Raises:
            KeyError: for an unrecognized pile name
        """
        if name in TABLEAU_PILES:
            return self.tableau[TABLEAU_PILES.index(name)]
        if name in FOUNDATION_PILES:
            return self.foundations[FOUNDATION_PILES.index(name)]
        if name == DRAW_PILE:
            return self.draw
        if name == DISCARD_PILE:
            return self.discard
        raise KeyError(name)

    def __getitem__(self, name: str) -> Pile:
        return self.pile(name)

    def top(self, name: str) -> Optional[Card]:
        """Top card of the named pile, or None if empty."""
        cards = self.pile(name)
        return cards[-1] if cards else None

    def copy_with(self, changes: Mapping[str, Pile]) -> "Layout":
        """Create a new layout with the named piles replaced."""
        tableau = list(self.tableau)
        foundations = list(self.foundations)
        draw = self.draw
        discard = self.discard

        for name, cards in changes.items():
            cards = tuple(cards)
            if name in TABLEAU_PILES:
                tableau[TABLEAU_PILES.index(name)] = cards
            elif name in FOUNDATION_PILES:
                foundations[FOUNDATION_PILES.index(name)] = cards
            elif name == DRAW_PILE:
                draw = cards
            elif name == DISCARD_PILE:
                discard = cards
            else:
                raise KeyError(name)

        return Layout(
            tableau=tuple(tableau),
            foundations=tuple(foundations),
            draw=draw,
            discard=discard,
        )

    def piles(self) -> dict[str, Pile]:
        """All piles keyed by name, in canonical order."""
        return {name: self.pile(name) for name in PILE_NAMES}

    def all_cards(self) -> Iterator[Card]:
        for name in PILE_NAMES:
            yield from self.pile(name)

    def foundation_count(self) -> int:
        return sum(len(f) for f in self.foundations)

    def cards_remaining(self) -> int:
        """Cards not yet on a foundation."""
        return DECK_SIZE - self.foundation_count()

    def is_complete(self) -> bool:
        """All four foundations hold a full suit."""
        return all(len(f) == SUIT_SIZE for f in self.foundations)


def is_full_deck(layout: Layout) -> bool:
    """Check the layout holds each of the 52 cards exactly once."""
    seen = Counter((c.suit, c.rank) for c in layout.all_cards())
    expected = Counter((c.suit, c.rank) for c in fresh_deck())
    return seen == expected


def check_full_deck(layout: Layout) -> Layout:
    """Return the layout unchanged, or raise if it breaks conservation.

    Raises:
        LayoutError: if any card is missing or duplicated
    """
    if not is_full_deck(layout):
        seen = Counter((c.suit, c.rank) for c in layout.all_cards())
        duplicated = sum(1 for n in seen.values() if n > 1)
        missing = DECK_SIZE - len(seen)
        raise LayoutError(
            f"Layout must hold the 52-card deck exactly once "
            f"({missing} missing, {duplicated} duplicated)"
        )
    return layout
