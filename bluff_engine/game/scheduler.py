"""Turn order tracking."""

import logging

from bluff_engine.models.room import Seat

logger = logging.getLogger(__name__)


class TurnScheduler:
    """Tracks the current actor among non-eliminated seats.

    The scheduler owns the ``has_turn`` flags of its seats: every change of
    actor clears the outgoing flag and sets the incoming one in the same
    call, so exactly one seat is current once ``first()`` has run.
    """

    def __init__(self, seats: list[Seat]):
        self._seats = sorted(seats, key=lambda s: s.seat_index)
        self._current: Seat | None = None

    @property
    def current(self) -> Seat | None:
        """Seat whose turn it is (None before ``first()``)."""
        return self._current

    @property
    def active_seats(self) -> list[Seat]:
        """Non-eliminated seats in seat order."""
        return [s for s in self._seats if not s.eliminated]

    def first(self) -> Seat:
        """Give the turn to the lowest non-eliminated seat index."""
        active = self.active_seats
        if not active:
            raise RuntimeError("No seats left to schedule")
        self._switch_to(active[0])
        return active[0]

    def advance(self) -> Seat:
        """Move the turn to the next non-eliminated seat, cyclically.

        With a single seat left this is a no-op.

        Returns:
            The new current seat.
        """
        if self._current is None:
            return self.first()

        nxt = self.peek_next()
        if nxt is None or nxt is self._current:
            return self._current
        self._switch_to(nxt)
        return nxt

    def peek_next(self) -> Seat | None:
        """Seat that ``advance()`` would select, without moving."""
        active = self.active_seats
        if self._current is None:
            return active[0] if active else None
        if len(active) <= 1:
            return self._current

        # Walk forward from the current seat index, skipping eliminated seats
        following = [s for s in active if s.seat_index > self._current.seat_index]
        return following[0] if following else active[0]

    def _switch_to(self, seat: Seat) -> None:
        if self._current is not None:
            self._current.has_turn = False
        seat.has_turn = True
        self._current = seat
        logger.debug(f"Turn -> {seat}")
