"""Terminal display for layouts and moves."""

from __future__ import annotations

from typing import Optional

from klondike.engine.cards import Card
from klondike.engine.layout import FOUNDATION_PILES, TABLEAU_PILES, Layout
from klondike.engine.session import GameSession
from klondike.engine.validator import Move

FACE_DOWN = "##"
EMPTY = "--"


def format_card(card: Optional[Card]) -> str:
    """Format card with unicode suit symbol; face-down cards are hidden."""
    if card is None:
        return EMPTY
    if not card.face_up:
        return FACE_DOWN
    return str(card)


def format_move(move: Move) -> str:
    """Human-readable move, e.g. "6♦ pile2 -> pile1"."""
    if not move.cards:
        return f"{move.src} -> {move.dst}"
    label = str(move.cards[0])
    if len(move.cards) > 1:
        label += f" (+{len(move.cards) - 1})"
    return f"{label} {move.src} -> {move.dst}"


class LayoutRenderer:
    """Renders a layout to terminal text."""

    def render(self, layout: Layout, draw_count: int = 1, debug: bool = False) -> str:
        """Render layout as seen by the player.

        With debug set, face-down cards are shown as well.
        """
        fmt = str if debug else format_card
        lines: list[str] = []

        stacks = "  ".join(
            f"{name}: {fmt(layout.top(name)) if layout.top(name) else EMPTY}"
            for name in FOUNDATION_PILES
        )
        lines.append(stacks)

        # Draw-3 shows the last three discards fanned
        visible = layout.discard[-draw_count:] if layout.discard else ()
        discard = " ".join(fmt(c) for c in visible) if visible else EMPTY
        lines.append(f"draw: [{len(layout.draw):2d}]  discard: {discard} ({len(layout.discard)})")
        lines.append("")

        for name in TABLEAU_PILES:
            cards = layout[name]
            row = " ".join(fmt(c) for c in cards) if cards else EMPTY
            lines.append(f"{name}: {row}")

        return "\n".join(lines)

    def render_session(self, session: GameSession, debug: bool = False) -> str:
        """Render layout with a status header."""
        header = (
            f"=== Draw {session.draw_count} | Moves: {len(session.move_log)} | "
            f"Score: {session.score()} | Cards remaining: {session.cards_remaining()} ==="
        )
        body = self.render(session.current, session.draw_count, debug)
        return f"{header}\n\n{body}"


class HintPresenter:
    """Presents legal moves as hints."""

    def present(self, moves: list[Move]) -> str:
        if not moves:
            return "No legal moves. Undo, recycle or fold."
        lines = ["Possible moves:"]
        for i, move in enumerate(moves):
            lines.append(f"  [{i + 1}] {format_move(move)}")
        return "\n".join(lines)
