"""Game session: current layout plus undo/redo history."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Union

from klondike.engine.dealer import deal_shuffled
from klondike.engine.layout import DISCARD_PILE, DRAW_PILE, TABLEAU_PILES, Layout
from klondike.engine.validator import (
    ErrorKind,
    Move,
    Rejected,
    can_move_to_foundation,
    generate_legal_moves,
    validate,
)

logger = logging.getLogger(__name__)

DRAW_COUNTS = (1, 3)

# Session rejection reasons and advisories
NO_UNDO = "no moves to undo"
NO_REDO = "no moves to redo"
GAME_OVER = "game is over"
DRAW_NOT_EMPTY = "draw pile is not empty"
NOTHING_TO_RECYCLE = "no cards to recycle"
NO_RECYCLES_LEFT = "no recycles remaining"
NO_VALID_MOVES = "no valid moves"


class SessionStatus(Enum):
    """Session lifecycle state."""

    ACTIVE = "active"
    WON = "won"
    FOLDED = "folded"


@dataclass
class SessionConfig:
    """Configuration for a game session."""

    draw_count: int = 1  # 1 or 3
    max_recycles: Optional[int] = None  # None means unlimited
    seed: Optional[int] = None
    player: str = "player"

    def __post_init__(self):
        """Check options and generate seed if not provided."""
        if self.draw_count not in DRAW_COUNTS:
            raise ValueError(f"draw_count must be 1 or 3, got {self.draw_count}")
        if self.max_recycles is not None and self.max_recycles < 0:
            raise ValueError(f"max_recycles must be >= 0, got {self.max_recycles}")
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)


@dataclass(frozen=True)
class Committed:
    """Successful session operation."""

    layout: Layout
    won: bool = False
    advisory: Optional[str] = None  # e.g. "no valid moves"

    ok = True


SessionResult = Union[Committed, Rejected]


def _is_recycle(move: Move) -> bool:
    return move.src == DISCARD_PILE and move.dst == DRAW_PILE


class GameSession:
    """Single-player Klondike session.

    Holds the current layout, two LIFO stacks of earlier/later layouts and
    the log of committed moves. Not thread-safe: callers serialize access.
    """

    def __init__(
        self,
        layout: Layout,
        config: Optional[SessionConfig] = None,
        started_at: Optional[datetime] = None,
    ):
        """Initialize session with an opening layout."""
        self.config = config or SessionConfig()
        self.current = layout
        self.undo_stack: List[Layout] = []
        self.redo_stack: List[Layout] = []
        self.move_log: List[Move] = []
        # Moves taken back by undo, replayed by redo
        self.redo_moves: List[Move] = []
        self.status = SessionStatus.ACTIVE
        self.winner: Optional[str] = None
        self.started_at = started_at or datetime.now(timezone.utc)
        self.ended_at: Optional[datetime] = None

    @property
    def draw_count(self) -> int:
        return self.config.draw_count

    @property
    def seed(self) -> Optional[int]:
        return self.config.seed

    @property
    def active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    # Mutations

    def apply_move(self, move: Move) -> SessionResult:
        """Validate and commit a move.

        A rejected move leaves the session unchanged. A committed move
        clears the redo history, then win and stuck are evaluated.
        """
        if not self.active:
            return Rejected(GAME_OVER, ErrorKind.STATE)

        result = validate(self.current, move, self.draw_count)
        if isinstance(result, Rejected):
            return result

        self._commit(result.layout, move)

        if self.is_won():
            self._finish(SessionStatus.WON)
            self.winner = self.config.player
            logger.info(f"Game won by {self.winner} after {len(self.move_log)} moves")
            return Committed(self.current, won=True)

        advisory = None if self.has_valid_moves() else NO_VALID_MOVES
        return Committed(self.current, advisory=advisory)

    def recycle(self) -> SessionResult:
        """Turn the discard pile back into the draw pile.

        Only allowed once the draw pile is empty. Cards go back face down
        in the order they were discarded, so the earliest is drawn first.
        """
        if not self.active:
            return Rejected(GAME_OVER, ErrorKind.STATE)
        if self.current.draw:
            return Rejected(DRAW_NOT_EMPTY)
        if not self.current.discard:
            return Rejected(NOTHING_TO_RECYCLE)
        limit = self.config.max_recycles
        if limit is not None and self.recycles_used() >= limit:
            return Rejected(NO_RECYCLES_LEFT)

        discard = self.current.discard
        layout = self.current.copy_with({
            DRAW_PILE: tuple(c.flipped(False) for c in discard),
            DISCARD_PILE: (),
        })
        self._commit(layout, Move(discard, DISCARD_PILE, DRAW_PILE))
        logger.debug(f"Recycled {len(discard)} cards ({self.recycles_used()} recycles used)")
        return Committed(self.current)

    def undo(self) -> SessionResult:
        """Step back to the previous layout."""
        if not self.active:
            return Rejected(GAME_OVER, ErrorKind.STATE)
        if not self.undo_stack:
            return Rejected(NO_UNDO, ErrorKind.STATE)

        self.redo_stack.append(self.current)
        self.current = self.undo_stack.pop()
        if self.move_log:
            self.redo_moves.append(self.move_log.pop())
        return Committed(self.current)

    def redo(self) -> SessionResult:
        """Step forward to the most recently undone layout."""
        if not self.active:
            return Rejected(GAME_OVER, ErrorKind.STATE)
        if not self.redo_stack:
            return Rejected(NO_REDO, ErrorKind.STATE)

        self.undo_stack.append(self.current)
        self.current = self.redo_stack.pop()
        if self.redo_moves:
            self.move_log.append(self.redo_moves.pop())
        return Committed(self.current)

    def fold(self) -> SessionResult:
        """Give up the game."""
        if not self.active:
            return Rejected(GAME_OVER, ErrorKind.STATE)
        self._finish(SessionStatus.FOLDED)
        logger.info(f"Game folded by {self.config.player} after {len(self.move_log)} moves")
        return Committed(self.current)

    def _commit(self, layout: Layout, move: Move) -> None:
        self.undo_stack.append(self.current)
        self.current = layout
        self.move_log.append(move)
        self.redo_stack.clear()
        self.redo_moves.clear()

    def _finish(self, status: SessionStatus) -> None:
        self.status = status
        self.ended_at = datetime.now(timezone.utc)

    # Read-only queries

    def is_won(self) -> bool:
        return self.current.is_complete()

    def has_valid_moves(self) -> bool:
        """False when the draw pile is empty and no tableau top fits a foundation."""
        if self.current.draw:
            return True
        for name in TABLEAU_PILES:
            top = self.current.top(name)
            if top is not None and can_move_to_foundation(self.current, top):
                return True
        return False

    def cards_remaining(self) -> int:
        return self.current.cards_remaining()

    def score(self) -> int:
        """Two points per card on a foundation, minus one per move."""
        return (52 - self.cards_remaining()) * 2 - len(self.move_log)

    def recycles_used(self) -> int:
        return sum(1 for m in self.move_log if _is_recycle(m))

    def legal_moves(self) -> List[Move]:
        return generate_legal_moves(self.current, self.draw_count)

    def duration_seconds(self) -> float:
        end = self.ended_at or datetime.now(timezone.utc)
        return (end - self.started_at).total_seconds()

    def summary(self) -> dict[str, Any]:
        """Game summary for hosts and result screens."""
        return {
            "player": self.config.player,
            "status": self.status.value,
            "active": self.active,
            "winner": self.winner,
            "draw_count": self.draw_count,
            "seed": self.seed,
            "moves": len(self.move_log),
            "score": self.score(),
            "cards_remaining": self.cards_remaining(),
            "start": self.started_at.isoformat(),
            "duration": round(self.duration_seconds(), 3),
        }


# Host-facing functions


def deal_new_game(
    draw_count: int = 1,
    seed: Optional[int] = None,
    config: Optional[SessionConfig] = None,
) -> GameSession:
    """Shuffle, deal and wrap the opening layout in a new session."""
    if config is None:
        config = SessionConfig(draw_count=draw_count, seed=seed)
    layout = deal_shuffled(config.seed)
    logger.info(f"New game: draw {config.draw_count}, seed {config.seed}")
    return GameSession(layout, config)


def submit_move(session: GameSession, move: Move) -> SessionResult:
    return session.apply_move(move)


def undo(session: GameSession) -> SessionResult:
    return session.undo()


def redo(session: GameSession) -> SessionResult:
    return session.redo()


def fold(session: GameSession) -> SessionResult:
    return session.fold()


def recycle(session: GameSession) -> SessionResult:
    return session.recycle()


def is_won(session: GameSession) -> bool:
    return session.is_won()


def has_valid_moves(session: GameSession) -> bool:
    return session.has_valid_moves()


def cards_remaining(session: GameSession) -> int:
    return session.cards_remaining()
