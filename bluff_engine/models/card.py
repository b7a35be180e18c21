"""Card models."""

from enum import Enum

from pydantic import BaseModel


class Suit(str, Enum):
    """Card suit."""

    SPADE = "S"
    HEART = "H"
    DIAMOND = "D"
    CLUB = "C"


class Rank(str, Enum):
    """Card rank.

    Values double as the rank labels used in claims and logs.
    Claims compare ranks by equality only, so no ordering is defined.
    """

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}


class CardFace(BaseModel, frozen=True):
    """Rank and suit of a physical card."""

    rank: Rank
    suit: Suit

    @property
    def label(self) -> str:
        """Short label, e.g. "KS" or "10H"."""
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{SUIT_SYMBOLS[self.suit]}{self.rank.value}"

    def __repr__(self) -> str:
        return str(self)


class Card(BaseModel):
    """A dealt card and its current location within a room.

    The id is opaque: it is assigned after shuffling and says nothing
    about the face. A card is either owned by a seat or sits in the
    play zone, never both.
    """

    id: str
    room_id: str
    face: CardFace
    owner_seat_id: str | None = None
    face_up: bool = False
    in_play_zone: bool = False

    @property
    def rank(self) -> Rank:
        return self.face.rank

    @property
    def suit(self) -> Suit:
        return self.face.suit

    def move_to_play_zone(self) -> None:
        """Take the card out of its owner's hand, face-down."""
        self.owner_seat_id = None
        self.in_play_zone = True
        self.face_up = False

    def give_to(self, seat_id: str) -> None:
        """Hand the card to a seat, face-down and out of the play zone."""
        self.owner_seat_id = seat_id
        self.in_play_zone = False
        self.face_up = False

    def __str__(self) -> str:
        state = "up" if self.face_up else "down"
        return f"Card[{self.id}:{self.face.label}:{state}]"
