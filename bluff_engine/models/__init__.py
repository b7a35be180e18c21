"""Game models."""

from .card import Card, CardFace, Rank, Suit
from .game_state import TableState
from .move import (
    ChallengeRequest,
    Move,
    MoveKind,
    MoveResult,
    PlayRequest,
    parse_move_request,
)
from .room import Room, RoomStatus, Seat
from .view import CardView, GameView, Phase, SeatView

__all__ = [
    "Card",
    "CardFace",
    "Rank",
    "Suit",
    "Move",
    "MoveKind",
    "MoveResult",
    "PlayRequest",
    "ChallengeRequest",
    "parse_move_request",
    "Room",
    "RoomStatus",
    "Seat",
    "CardView",
    "GameView",
    "Phase",
    "SeatView",
    "TableState",
]
