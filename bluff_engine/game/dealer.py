"""Dealing the shuffled deck to seats."""

import logging
from dataclasses import dataclass, field

from bluff_engine.config import DealRemainder
from bluff_engine.errors import InsufficientPlayers
from bluff_engine.models.card import Card, CardFace
from bluff_engine.models.room import Seat

logger = logging.getLogger(__name__)

MIN_SEATS = 2


@dataclass
class DealResult:
    """Cards handed out by one deal."""

    cards: list[Card] = field(default_factory=list)
    undealt: list[CardFace] = field(default_factory=list)

    def hand_of(self, seat_id: str) -> list[Card]:
        return [c for c in self.cards if c.owner_seat_id == seat_id]


class Dealer:
    """Distributes a shuffled deck across seats in seat order.

    Block dealing: seat 0 takes the first ``len(deck) // n`` cards, seat 1
    the next block, and so on. The remainder is discarded unless the
    ``distribute`` policy is selected.
    """

    def __init__(self, remainder: DealRemainder = DealRemainder.DISCARD):
        self.remainder = remainder

    def deal(self, deck: list[CardFace], seats: list[Seat], room_id: str = "") -> DealResult:
        """Deal the deck.

        Args:
            deck: Shuffled card faces.
            seats: Seats to deal to; dealt in ``seat_index`` order.
            room_id: Room the cards belong to.

        Returns:
            DealResult with the dealt cards and any undealt faces.

        Raises:
            InsufficientPlayers: If fewer than two seats are given.
        """
        if len(seats) < MIN_SEATS:
            raise InsufficientPlayers(
                f"Need at least {MIN_SEATS} players to deal, got {len(seats)}"
            )

        ordered = sorted(seats, key=lambda s: s.seat_index)
        per_seat = len(deck) // len(ordered)
        result = DealResult()

        # Ids follow shuffled position, so they carry no face information
        position = 0
        for seat in ordered:
            for face in deck[position:position + per_seat]:
                result.cards.append(self._make_card(room_id, position, face, seat))
                position += 1

        leftover = deck[position:]
        if self.remainder == DealRemainder.DISTRIBUTE:
            for seat, face in zip(ordered, leftover):
                result.cards.append(self._make_card(room_id, position, face, seat))
                position += 1
        else:
            result.undealt = list(leftover)

        logger.debug(
            f"Dealt {len(result.cards)} cards to {len(ordered)} seats "
            f"({per_seat} each, {len(result.undealt)} undealt)"
        )
        return result

    @staticmethod
    def _make_card(room_id: str, position: int, face: CardFace, seat: Seat) -> Card:
        return Card(
            id=f"c{position:02d}",
            room_id=room_id,
            face=face,
            owner_seat_id=seat.id,
        )
