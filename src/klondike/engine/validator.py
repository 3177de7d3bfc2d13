"""Move validation and application for Klondike layouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from klondike.engine.cards import Card, Rank, color, rank_predecessor, rank_successor
from klondike.engine.layout import (
    DISCARD_PILE,
    DRAW_PILE,
    FOUNDATION_PILES,
    PILE_NAMES,
    TABLEAU_PILES,
    Layout,
    is_foundation,
    is_tableau,
)

logger = logging.getLogger(__name__)


class MoveKind(Enum):
    """Classification of a move by destination."""

    DRAW_TO_DISCARD = "draw_to_discard"
    TO_FOUNDATION = "to_foundation"
    TO_TABLEAU = "to_tableau"


class ErrorKind(Enum):
    """Why an operation was rejected."""

    STRUCTURAL = "structural"          # Unknown pile, empty move, card not in source
    RULE_VIOLATION = "rule_violation"  # Well-formed move that breaks a rule
    STATE = "state"                    # Empty history, terminal session


# Rejection reasons
UNKNOWN_PILE = "unknown pile"
NO_CARDS = "move has no cards"
SAME_PILE = "source and destination must differ"
CARD_NOT_FOUND = "card not found in source pile"
TO_DRAW = "cannot move to draw pile"
ONLY_FROM_DRAW = "can only move from draw to discard"
ONE_TO_STACK = "can only move one card to stack at a time"
ACE_FIRST = "first card on stack must be an ace"
SAME_SUIT = "stack cards must be same suit"
OUT_OF_SEQUENCE = "card value does not match sequence"
KINGS_ONLY = "only kings can be moved to empty piles"
SAME_COLOR = "cannot place card on top of same color"
FACE_DOWN = "cannot move a face-down card"
TOP_ONLY = "can only move the top card from this pile"


@dataclass(frozen=True)
class Move:
    """A requested move.

    ``cards[0]`` is the card being moved; for tableau runs the remaining
    entries list the cards stacked on it. Only ``cards[0]`` is used to
    locate the run, the run itself is read from the layout.
    """

    cards: tuple[Card, ...]
    src: str
    dst: str

    def __init__(self, cards, src: str, dst: str) -> None:
        object.__setattr__(self, "cards", tuple(cards))
        object.__setattr__(self, "src", src)
        object.__setattr__(self, "dst", dst)

    @property
    def card(self) -> Optional[Card]:
        return self.cards[0] if self.cards else None

    def __str__(self) -> str:
        card = str(self.card) if self.card else "?"
        return f"{card} {self.src} -> {self.dst}"


@dataclass(frozen=True)
class Accepted:
    """Successful validation: the layout after the move."""

    layout: Layout
    kind: MoveKind

    ok = True


@dataclass(frozen=True)
class Rejected:
    """Failed validation or session operation."""

    reason: str
    kind: ErrorKind = ErrorKind.RULE_VIOLATION

    ok = False


ValidationResult = Union[Accepted, Rejected]


@dataclass(frozen=True)
class _Located:
    """A classified move with its card located in the source pile."""

    kind: MoveKind
    move: Move
    index: int
    card: Card  # As it lies in the layout (with its face_up flag)


def classify(move: Move) -> MoveKind:
    """Classify a move by its destination pile.

    Raises:
        ValueError: if the destination is not a move destination
    """
    if move.dst == DISCARD_PILE:
        return MoveKind.DRAW_TO_DISCARD
    if is_foundation(move.dst):
        return MoveKind.TO_FOUNDATION
    if is_tableau(move.dst):
        return MoveKind.TO_TABLEAU
    raise ValueError(f"'{move.dst}' is not a move destination")


def find_card(cards: tuple[Card, ...], card: Card) -> int:
    """Index of card in pile by (suit, rank), or -1."""
    for i, c in enumerate(cards):
        if c.same_card(card):
            return i
    return -1


def _locate(layout: Layout, move: Move) -> Union[_Located, Rejected]:
    """Shared preconditions: pile names, card lookup and destination class."""
    if move.src not in PILE_NAMES or move.dst not in PILE_NAMES:
        return Rejected(UNKNOWN_PILE, ErrorKind.STRUCTURAL)
    if not move.cards:
        return Rejected(NO_CARDS, ErrorKind.STRUCTURAL)

    src_cards = layout[move.src]
    index = find_card(src_cards, move.cards[0])
    if index < 0:
        return Rejected(CARD_NOT_FOUND, ErrorKind.STRUCTURAL)

    if move.dst == DRAW_PILE:
        return Rejected(TO_DRAW)
    if move.src == move.dst:
        return Rejected(SAME_PILE, ErrorKind.STRUCTURAL)

    return _Located(
        kind=classify(move),
        move=move,
        index=index,
        card=src_cards[index],
    )


def _reveal_top(cards: tuple[Card, ...]) -> tuple[Card, ...]:
    """Flip the top card face-up if the pile is non-empty."""
    if not cards or cards[-1].face_up:
        return cards
    return cards[:-1] + (cards[-1].flipped(True),)


def _relocate(layout: Layout, src: str, dst: str, start: int, stop: Optional[int] = None,
              face_up: bool = False) -> Layout:
    """Move ``src[start:stop]`` onto the tail of ``dst``."""
    src_cards = layout[src]
    if stop is None:
        stop = len(src_cards)
    moved = src_cards[start:stop]
    remaining = src_cards[:start] + src_cards[stop:]

    if face_up:
        moved = tuple(c.flipped(True) for c in moved)
    else:
        remaining = _reveal_top(remaining)

    return layout.copy_with({
        src: remaining,
        dst: layout[dst] + moved,
    })


def _draw_to_discard(layout: Layout, loc: _Located, draw_count: int) -> ValidationResult:
    if loc.move.src != DRAW_PILE:
        return Rejected(ONLY_FROM_DRAW)

    new_layout = _relocate(
        layout, DRAW_PILE, DISCARD_PILE,
        start=loc.index, stop=loc.index + draw_count, face_up=True,
    )
    return Accepted(new_layout, loc.kind)


def _to_foundation(layout: Layout, loc: _Located) -> ValidationResult:
    move = loc.move
    src_cards = layout[move.src]

    if len(move.cards) != 1 or loc.index != len(src_cards) - 1:
        return Rejected(ONE_TO_STACK)
    if not loc.card.face_up:
        return Rejected(FACE_DOWN)

    top = layout.top(move.dst)
    if top is None:
        if loc.card.rank != Rank.ACE:
            return Rejected(ACE_FIRST)
    else:
        if top.suit != loc.card.suit:
            return Rejected(SAME_SUIT)
        if rank_successor(top.rank) != loc.card.rank:
            return Rejected(OUT_OF_SEQUENCE)

    return Accepted(_relocate(layout, move.src, move.dst, start=loc.index), loc.kind)


def _to_tableau(layout: Layout, loc: _Located) -> ValidationResult:
    move = loc.move
    src_cards = layout[move.src]

    if not loc.card.face_up:
        return Rejected(FACE_DOWN)
    if not is_tableau(move.src) and loc.index != len(src_cards) - 1:
        return Rejected(TOP_ONLY)

    top = layout.top(move.dst)
    if top is None:
        if loc.card.rank != Rank.KING:
            return Rejected(KINGS_ONLY)
    else:
        if color(top) == color(loc.card):
            return Rejected(SAME_COLOR)
        if loc.card.rank == Rank.KING or rank_predecessor(top.rank) != loc.card.rank:
            return Rejected(OUT_OF_SEQUENCE)

    return Accepted(_relocate(layout, move.src, move.dst, start=loc.index), loc.kind)


def validate(layout: Layout, move: Move, draw_count: int = 1) -> ValidationResult:
    """Check a move against a layout.

    Never raises for a Move and never changes ``layout``; a rejected
    move returns the reason instead of a layout.

    Args:
        layout: Current table state
        move: Requested move
        draw_count: Cards turned per draw (1 or 3)

    Returns:
        Accepted with the resulting layout, or Rejected with a reason
    """
    located = _locate(layout, move)
    if isinstance(located, Rejected):
        logger.debug(f"Rejected {move}: {located.reason}")
        return located

    if located.kind == MoveKind.DRAW_TO_DISCARD:
        result = _draw_to_discard(layout, located, draw_count)
    elif located.kind == MoveKind.TO_FOUNDATION:
        result = _to_foundation(layout, located)
    else:
        result = _to_tableau(layout, located)

    if isinstance(result, Rejected):
        logger.debug(f"Rejected {move}: {result.reason}")
    else:
        logger.debug(f"Accepted {move} ({result.kind.value})")
    return result


def can_move_to_foundation(layout: Layout, card: Card) -> bool:
    """True if card could legally go onto some foundation."""
    for name in FOUNDATION_PILES:
        top = layout.top(name)
        if top is None:
            if card.rank == Rank.ACE:
                return True
        elif top.suit == card.suit and rank_successor(top.rank) == card.rank:
            return True
    return False


def generate_legal_moves(layout: Layout, draw_count: int = 1) -> List[Move]:
    """Generate every legal move for a layout.

    Covers drawing, tops of tableau/discard to foundations, and face-up
    tableau runs or the discard top to other tableau piles. Moves off
    foundations are left out.
    """
    candidates: List[Move] = []

    if layout.draw:
        candidates.append(Move([layout.draw[0]], DRAW_PILE, DISCARD_PILE))

    sources = TABLEAU_PILES + (DISCARD_PILE,)
    for src in sources:
        top = layout.top(src)
        if top is None:
            continue
        for dst in FOUNDATION_PILES:
            candidates.append(Move([top], src, dst))

    for src in sources:
        cards = layout[src]
        if not cards:
            continue
        if src == DISCARD_PILE:
            starts = [len(cards) - 1]
        else:
            starts = [i for i, c in enumerate(cards) if c.face_up]
        for start in starts:
            for dst in TABLEAU_PILES:
                if dst != src:
                    candidates.append(Move(cards[start:], src, dst))

    return [m for m in candidates if validate(layout, m, draw_count).ok]
