"""Move log entries and move requests."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from .card import Rank


class MoveKind(str, Enum):
    """Kind of move log entry."""

    PLAY = "play"
    CHALLENGE = "challenge"
    PASS = "pass"  # Reserved, never accepted by the engine
    GAME_START = "game_start"
    GAME_END = "game_end"


class MoveResult(str, Enum):
    """Outcome recorded on a move.

    PASS: the claim was true, so the challenge failed.
    FAIL: the claim was a bluff, so the challenge succeeded.
    WIN: a seat emptied its hand.
    """

    PASS = "pass"
    FAIL = "fail"
    WIN = "win"


class Move(BaseModel, frozen=True):
    """One entry of the append-only move log.

    ``id`` is a room-local sequence number and breaks ties between
    entries that share a timestamp.
    """

    id: int
    room_id: str
    kind: MoveKind
    timestamp: datetime
    actor_seat_id: str | None = None
    card_ids: tuple[str, ...] = ()
    claimed_rank: Rank | None = None
    result: MoveResult | None = None
    request_id: str | None = None
    # Labels of cards revealed by a challenge (public once revealed)
    revealed: tuple[str, ...] = ()

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.timestamp, self.id)


class PlayRequest(BaseModel):
    """Request to play cards face-down with a claimed rank."""

    kind: Literal["play"] = "play"
    actor: str
    card_ids: list[str]
    claimed_rank: Rank
    request_id: str | None = None


class ChallengeRequest(BaseModel):
    """Request to challenge the pending claim."""

    kind: Literal["challenge"] = "challenge"
    challenger: str
    request_id: str | None = None


MoveRequest = Annotated[
    PlayRequest | ChallengeRequest,
    Field(discriminator="kind"),
]

_request_adapter: TypeAdapter[PlayRequest | ChallengeRequest] = TypeAdapter(MoveRequest)


def parse_move_request(data: dict[str, Any]) -> PlayRequest | ChallengeRequest:
    """Parse a move request from a plain dict.

    Args:
        data: Raw request data, discriminated on ``kind``.

    Returns:
        PlayRequest or ChallengeRequest.

    Raises:
        pydantic.ValidationError: If the data is not a valid request.
    """
    return _request_adapter.validate_python(data)
