"""Redacted game views handed to clients."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import Rank, Suit
from .move import Move
from .room import RoomStatus


class Phase(str, Enum):
    """Resolver state within a deal."""

    AWAITING_PLAY = "awaiting_play"
    AWAITING_CHALLENGE = "awaiting_challenge"


class CardView(BaseModel):
    """A card as seen by one viewer.

    ``rank`` and ``suit`` are only filled in when the viewer may see them.
    """

    id: str
    face_up: bool = False
    rank: Rank | None = None
    suit: Suit | None = None


class SeatView(BaseModel):
    """Public seat information (card count, never card identities)."""

    id: str
    display_name: str
    seat_index: int
    card_count: int
    has_turn: bool
    eliminated: bool


class GameView(BaseModel):
    """State of one room as seen by one seat (or a spectator)."""

    room_id: str
    code: str
    status: RoomStatus
    version: int
    phase: Phase
    viewer_seat_id: str | None = None
    current_actor: str | None = None
    pending_play_id: int | None = None
    winner: str | None = None
    seats: list[SeatView] = Field(default_factory=list)
    hand: list[CardView] | None = None
    play_zone: list[CardView] = Field(default_factory=list)
    moves: list[Move] = Field(default_factory=list)

    def seat(self, seat_id: str) -> SeatView:
        """Look up a seat view by id."""
        for seat in self.seats:
            if seat.id == seat_id:
                return seat
        raise KeyError(seat_id)
