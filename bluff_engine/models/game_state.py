"""Mutable table state of one deal."""

from datetime import datetime

from pydantic import BaseModel, Field

from .card import Card, CardFace
from .move import Move, MoveKind
from .view import Phase


class TableState(BaseModel):
    """Cards, move log and resolver phase for one room."""

    room_id: str
    phase: Phase = Phase.AWAITING_PLAY
    cards: dict[str, Card] = Field(default_factory=dict)
    moves: list[Move] = Field(default_factory=list)
    pending_play: Move | None = None
    winner: str | None = None
    seed: int | None = None
    undealt: list[CardFace] = Field(default_factory=list)

    def hand_of(self, seat_id: str) -> list[Card]:
        """Cards currently owned by a seat."""
        return [c for c in self.cards.values() if c.owner_seat_id == seat_id]

    def card_count(self, seat_id: str) -> int:
        """Number of cards a seat holds."""
        return sum(1 for c in self.cards.values() if c.owner_seat_id == seat_id)

    def play_zone(self) -> list[Card]:
        """Cards currently in the shared play zone."""
        return [c for c in self.cards.values() if c.in_play_zone]

    def append_move(self, kind: MoveKind, timestamp: datetime, **fields) -> Move:
        """Append a new entry to the move log.

        Timestamps never run backwards: an entry stamped earlier than the
        previous one takes the previous timestamp, and the id breaks the tie.
        """
        if self.moves and timestamp < self.moves[-1].timestamp:
            timestamp = self.moves[-1].timestamp
        move = Move(
            id=len(self.moves) + 1,
            room_id=self.room_id,
            kind=kind,
            timestamp=timestamp,
            **fields,
        )
        self.moves.append(move)
        return move

    def reset_for_new_deal(self) -> None:
        """Clear everything but the room id."""
        self.phase = Phase.AWAITING_PLAY
        self.cards = {}
        self.moves = []
        self.pending_play = None
        self.winner = None
        self.seed = None
        self.undealt = []

    def __str__(self) -> str:
        return (
            f"Table {self.room_id}: {self.phase.value}, "
            f"{len(self.play_zone())} in play zone, {len(self.moves)} moves"
        )
