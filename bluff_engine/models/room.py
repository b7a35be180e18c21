"""Room and seat models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator

# Display names are cut to this length
MAX_DISPLAY_NAME = 20


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class RoomStatus(str, Enum):
    """Room lifecycle status."""

    LOBBY = "lobby"
    ACTIVE = "active"
    COMPLETE = "complete"


class Room(BaseModel):
    """One game session."""

    id: str
    code: str
    status: RoomStatus = RoomStatus.LOBBY
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self, now: datetime | None = None) -> None:
        """Bump the update timestamp."""
        self.updated_at = now or utc_now()

    def __str__(self) -> str:
        return f"Room[{self.code}] ({self.status.value})"


class Seat(BaseModel):
    """A player's slot within a room."""

    id: str
    user_id: str
    room_id: str
    display_name: str
    seat_index: int = 0
    has_turn: bool = False
    eliminated: bool = False

    @field_validator("display_name")
    @classmethod
    def clean_display_name(cls, v: str) -> str:
        name = v.strip()[:MAX_DISPLAY_NAME]
        if not name:
            raise ValueError("display name must not be empty")
        return name

    def __str__(self) -> str:
        status = ""
        if self.eliminated:
            status = " (out)"
        elif self.has_turn:
            status = " (turn)"
        return f"Seat{self.seat_index}[{self.display_name}]{status}"
