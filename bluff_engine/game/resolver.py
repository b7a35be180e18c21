"""Play and challenge resolution."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable

from bluff_engine.config import RulesConfig
from bluff_engine.models.card import Card, Rank
from bluff_engine.models.move import Move, MoveKind, MoveResult
from bluff_engine.models.room import RoomStatus, utc_now
from bluff_engine.models.view import Phase

from .validator import MoveValidator

if TYPE_CHECKING:
    from bluff_engine.logging import GameLogger
    from bluff_engine.models.game_state import TableState
    from bluff_engine.models.room import Room, Seat

    from .scheduler import TurnScheduler

logger = logging.getLogger(__name__)


class MoveResolver:
    """State machine applying plays and challenges to one deal.

    ``awaiting_play`` -> (play) -> ``awaiting_challenge`` -> (challenge) ->
    ``awaiting_play``. While a play awaits challenge the next actor may also
    simply play, which settles the pending claim unchallenged.

    Every request is fully validated before the first mutation, so a
    rejected request leaves cards, turn flags and the log untouched.
    """

    def __init__(
        self,
        room: Room,
        seats: list[Seat],
        state: TableState,
        scheduler: TurnScheduler,
        rules: RulesConfig | None = None,
        validator: MoveValidator | None = None,
        clock: Callable[[], datetime] | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize resolver.

        Args:
            room: Room being played
            seats: Seated players
            state: Table state to mutate
            scheduler: Turn scheduler owning the turn flags
            rules: Rules configuration (uses defaults if not provided)
            validator: MoveValidator instance (creates one if not provided)
            clock: Timestamp source for move log entries
            game_logger: GameLogger instance for replay logging
        """
        self.room = room
        self.seats = {s.id: s for s in seats}
        self.state = state
        self.scheduler = scheduler
        self.rules = rules or RulesConfig()
        self.validator = validator or MoveValidator(self.rules)
        self.clock = clock or utc_now
        self.game_logger = game_logger

    def submit_play(
        self,
        actor_seat_id: str,
        card_ids: list[str],
        claimed_rank: Rank,
        request_id: str | None = None,
    ) -> Move:
        """Put cards face-down in the play zone under a claimed rank.

        The claim is not checked here; bluffing is legal.

        Args:
            actor_seat_id: Seat making the play
            card_ids: Cards to play
            claimed_rank: Rank the actor claims all cards hold
            request_id: Caller idempotency key

        Returns:
            The appended play move.

        Raises:
            GameError: If the play is not legal.
        """
        # Repeated ids in one selection refer to the same card
        card_ids = list(dict.fromkeys(card_ids))
        actor = self.seats.get(actor_seat_id)
        self.validator.validate_play(
            self.room, self.state, actor, self.scheduler.current, card_ids
        ).raise_if_invalid()

        for card_id in card_ids:
            self.state.cards[card_id].move_to_play_zone()

        move = self._append(
            MoveKind.PLAY,
            actor_seat_id=actor.id,
            card_ids=tuple(card_ids),
            claimed_rank=Rank(claimed_rank),
            request_id=request_id,
        )
        self.state.pending_play = move
        self.state.phase = Phase.AWAITING_CHALLENGE
        self.scheduler.advance()

        logger.info(
            f"{actor.display_name} played {len(card_ids)} card(s) "
            f"claiming {move.claimed_rank.value}"
        )

        self.check_winner()
        return move

    def submit_challenge(self, challenger_seat_id: str, request_id: str | None = None) -> Move:
        """Challenge the pending claim.

        Reveals the disputed cards. If every card matches the claimed rank
        the challenger absorbs them (result ``pass``); otherwise the player
        who bluffed takes them back (result ``fail``). The turn stays where
        the play left it.

        Args:
            challenger_seat_id: Seat making the challenge
            request_id: Caller idempotency key

        Returns:
            The appended challenge move.

        Raises:
            GameError: If there is nothing this seat may challenge.
        """
        challenger = self.seats.get(challenger_seat_id)
        self.validator.validate_challenge(
            self.room, self.state, challenger, self.scheduler.current
        ).raise_if_invalid()

        pending = self.state.pending_play
        disputed = [self.state.cards[cid] for cid in pending.card_ids]
        for card in disputed:
            card.face_up = True
        revealed = tuple(card.face.label for card in disputed)

        claim_holds = claim_is_true(disputed, pending.claimed_rank)
        loser_id = challenger.id if claim_holds else pending.actor_seat_id

        absorbed = self.state.play_zone() if self.rules.loser_takes_pile else disputed
        for card in absorbed:
            card.give_to(loser_id)

        move = self._append(
            MoveKind.CHALLENGE,
            actor_seat_id=challenger.id,
            card_ids=pending.card_ids,
            claimed_rank=pending.claimed_rank,
            result=MoveResult.PASS if claim_holds else MoveResult.FAIL,
            request_id=request_id,
            revealed=revealed,
        )
        self.state.pending_play = None
        self.state.phase = Phase.AWAITING_PLAY

        loser = self.seats[loser_id]
        logger.info(
            f"{challenger.display_name} challenged: claim "
            f"{'held' if claim_holds else 'was a bluff'} ({', '.join(revealed)}), "
            f"{loser.display_name} takes {len(absorbed)} card(s)"
        )

        self.check_winner()
        return move

    def check_winner(self) -> str | None:
        """End the game if a seat has emptied its hand.

        The actor of a play that can still be challenged does not count:
        their last cards may yet come back to them.

        Returns:
            Winning seat id, or None if the game goes on.
        """
        if self.room.status != RoomStatus.ACTIVE:
            return self.state.winner

        pending_actor = self.state.pending_play.actor_seat_id if self.state.pending_play else None
        for seat in sorted(self.seats.values(), key=lambda s: s.seat_index):
            if seat.eliminated or seat.id == pending_actor:
                continue
            if self.state.card_count(seat.id) == 0:
                self._declare_winner(seat)
                return seat.id
        return None

    def _declare_winner(self, seat: Seat) -> None:
        self.state.winner = seat.id
        self._append(MoveKind.GAME_END, actor_seat_id=seat.id, result=MoveResult.WIN)
        self.room.status = RoomStatus.COMPLETE
        self.room.touch(self.clock())
        logger.info(f"{seat.display_name} wins room {self.room.code}")

    def _append(self, kind: MoveKind, **fields) -> Move:
        move = self.state.append_move(kind, self.clock(), **fields)
        if self.game_logger:
            self.game_logger.log_move(move, self.seats, self.state)
        return move


def claim_is_true(cards: list[Card], claimed_rank: Rank) -> bool:
    """Check whether every card matches the claimed rank (suit ignored)."""
    return all(card.rank == claimed_rank for card in cards)
