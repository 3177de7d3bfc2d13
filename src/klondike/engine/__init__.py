"""Klondike rules engine: cards, layouts, move validation and game sessions."""

from klondike.engine.cards import Card, Color, Rank, Suit, color, fresh_deck, rank_predecessor, rank_successor
from klondike.engine.layout import Layout, LayoutError, PILE_NAMES
from klondike.engine.dealer import DealError, deal, shuffle
from klondike.engine.validator import (
    Accepted,
    ErrorKind,
    Move,
    MoveKind,
    Rejected,
    generate_legal_moves,
    validate,
)
from klondike.engine.session import (
    Committed,
    GameSession,
    SessionConfig,
    SessionStatus,
    cards_remaining,
    deal_new_game,
    fold,
    has_valid_moves,
    is_won,
    recycle,
    redo,
    submit_move,
    undo,
)

__all__ = [
    "Card",
    "Color",
    "Rank",
    "Suit",
    "color",
    "fresh_deck",
    "rank_predecessor",
    "rank_successor",
    "Layout",
    "LayoutError",
    "PILE_NAMES",
    "DealError",
    "deal",
    "shuffle",
    "Accepted",
    "ErrorKind",
    "Move",
    "MoveKind",
    "Rejected",
    "generate_legal_moves",
    "validate",
    "Committed",
    "GameSession",
    "SessionConfig",
    "SessionStatus",
    "cards_remaining",
    "deal_new_game",
    "fold",
    "has_valid_moves",
    "is_won",
    "recycle",
    "redo",
    "submit_move",
    "undo",
]
