"""Base strategy class for simulated players.

Defines the interface that all simulated players must implement. A
strategy only ever sees the redacted view of its own seat.
"""

from abc import ABC, abstractmethod

from bluff_engine.models.move import Move, MoveKind, PlayRequest
from bluff_engine.models.view import GameView


class Strategy(ABC):
    """Abstract base class for player strategies."""

    @abstractmethod
    def select_play(self, view: GameView) -> PlayRequest:
        """Choose cards and a claim when it is this seat's turn.

        Args:
            view: Current view for this seat (own hand included)

        Returns:
            PlayRequest for this seat
        """
        pass

    @abstractmethod
    def should_challenge(self, view: GameView) -> bool:
        """Decide whether to challenge the pending claim.

        Args:
            view: Current view for this seat

        Returns:
            True to challenge
        """
        pass

    def pending_play(self, view: GameView) -> Move | None:
        """The play currently open to challenge, if any."""
        if view.pending_play_id is None:
            return None
        for move in reversed(view.moves):
            if move.id == view.pending_play_id and move.kind == MoveKind.PLAY:
                return move
        return None

    def can_challenge(self, view: GameView) -> bool:
        """Check that a pending play exists and is not this seat's own."""
        pending = self.pending_play(view)
        return pending is not None and pending.actor_seat_id != view.viewer_seat_id
