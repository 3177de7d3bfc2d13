"""JSON serialization for cards, layouts, moves and sessions."""

import json
from datetime import datetime
from typing import Any, Dict, List

from klondike.engine.cards import Card, Rank, Suit
from klondike.engine.layout import PILE_NAMES, Layout, check_full_deck
from klondike.engine.session import GameSession, SessionConfig, SessionStatus
from klondike.engine.validator import Move


def card_to_dict(card: Card) -> Dict[str, Any]:
    """Convert Card to JSON-serializable dict."""
    return {
        "suit": card.suit.value,
        "rank": card.rank.value,
        "face_up": card.face_up,
    }


def card_from_dict(data: Dict[str, Any]) -> Card:
    """Create Card from dict."""
    return Card(
        suit=Suit(data["suit"]),
        rank=Rank(str(data["rank"])),
        face_up=bool(data.get("face_up", False)),
    )


def _cards_to_list(cards) -> List[Dict[str, Any]]:
    return [card_to_dict(c) for c in cards]


def _cards_from_list(data: List[Dict[str, Any]]) -> tuple[Card, ...]:
    return tuple(card_from_dict(c) for c in data)


def layout_to_dict(layout: Layout) -> Dict[str, Any]:
    """Convert Layout to a pile name -> card list dict."""
    return {name: _cards_to_list(cards) for name, cards in layout.piles().items()}


def layout_from_dict(data: Dict[str, Any], check: bool = True) -> Layout:
    """Create Layout from dict.

    Args:
        data: Pile name -> list of card dicts; all 13 piles required
        check: Verify the layout holds the 52-card deck exactly once

    Raises:
        KeyError: if a pile is missing
        LayoutError: if check is set and cards are missing or duplicated
    """
    layout = Layout.from_piles({name: _cards_from_list(data[name]) for name in PILE_NAMES})
    if check:
        check_full_deck(layout)
    return layout


def move_to_dict(move: Move) -> Dict[str, Any]:
    """Convert Move to dict."""
    return {
        "cards": _cards_to_list(move.cards),
        "src": move.src,
        "dst": move.dst,
    }


def move_from_dict(data: Dict[str, Any]) -> Move:
    """Create Move from dict."""
    return Move(
        cards=_cards_from_list(data.get("cards", [])),
        src=data["src"],
        dst=data["dst"],
    )


def _config_to_dict(config: SessionConfig) -> Dict[str, Any]:
    return {
        "draw_count": config.draw_count,
        "max_recycles": config.max_recycles,
        "seed": config.seed,
        "player": config.player,
    }


def _config_from_dict(data: Dict[str, Any]) -> SessionConfig:
    return SessionConfig(
        draw_count=data.get("draw_count", 1),
        max_recycles=data.get("max_recycles"),
        seed=data.get("seed"),
        player=data.get("player", "player"),
    )


def session_to_dict(session: GameSession) -> Dict[str, Any]:
    """Convert GameSession (layout plus full history) to dict."""
    return {
        "config": _config_to_dict(session.config),
        "draw_count": session.draw_count,
        "seed": session.seed,
        "status": session.status.value,
        "active": session.active,
        "winner": session.winner,
        "started_at": session.started_at.isoformat(),
        "ended_at": session.ended_at.isoformat() if session.ended_at else None,
        "current": layout_to_dict(session.current),
        "undo_stack": [layout_to_dict(layout) for layout in session.undo_stack],
        "redo_stack": [layout_to_dict(layout) for layout in session.redo_stack],
        "move_log": [move_to_dict(m) for m in session.move_log],
        "redo_moves": [move_to_dict(m) for m in session.redo_moves],
    }


def session_from_dict(data: Dict[str, Any]) -> GameSession:
    """Create GameSession from dict, checking every stored layout."""
    config_data = dict(data.get("config", {}))
    config_data.setdefault("draw_count", data.get("draw_count", 1))
    config_data.setdefault("seed", data.get("seed"))
    config = _config_from_dict(config_data)

    session = GameSession(
        layout_from_dict(data["current"]),
        config,
        started_at=datetime.fromisoformat(data["started_at"]),
    )
    session.undo_stack = [layout_from_dict(layout) for layout in data.get("undo_stack", [])]
    session.redo_stack = [layout_from_dict(layout) for layout in data.get("redo_stack", [])]
    session.move_log = [move_from_dict(m) for m in data.get("move_log", [])]
    session.redo_moves = [move_from_dict(m) for m in data.get("redo_moves", [])]
    session.status = SessionStatus(data.get("status", SessionStatus.ACTIVE.value))
    session.winner = data.get("winner")
    if data.get("ended_at"):
        session.ended_at = datetime.fromisoformat(data["ended_at"])
    return session


def session_to_json(session: GameSession, indent: int = 2) -> str:
    """Serialize GameSession to JSON string."""
    return json.dumps(session_to_dict(session), indent=indent)


def session_from_json(json_str: str) -> GameSession:
    """Deserialize GameSession from JSON string."""
    return session_from_dict(json.loads(json_str))
