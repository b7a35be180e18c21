"""Simple strategy implementation.

Play:
- Usually play every card of the rank held most often, claiming it honestly
- With probability ``bluff_rate`` play one random card under a false claim

Challenge:
- Always when the claim is impossible given the seat's own hand
- Always when the claimant has just emptied their hand
- Otherwise with probability ``challenge_rate``
"""

import random
from collections import Counter

from bluff_engine.models.card import Rank
from bluff_engine.models.move import PlayRequest
from bluff_engine.models.view import GameView

from .base import Strategy

SUITS_PER_RANK = 4


class SimpleStrategy(Strategy):
    """Mostly honest player that calls out impossible claims."""

    def __init__(
        self,
        rng: random.Random | None = None,
        bluff_rate: float = 0.2,
        challenge_rate: float = 0.15,
    ):
        """Initialize strategy.

        Args:
            rng: Random source (seed it for reproducible games)
            bluff_rate: Chance of bluffing on a turn
            challenge_rate: Chance of challenging a plausible claim
        """
        self.rng = rng or random.Random()
        self.bluff_rate = bluff_rate
        self.challenge_rate = challenge_rate

    def select_play(self, view: GameView) -> PlayRequest:
        hand = view.hand or []
        if not hand:
            raise ValueError("Cannot play from an empty hand")

        counts = Counter(card.rank for card in hand)

        if self.rng.random() < self.bluff_rate:
            card = self.rng.choice(hand)
            false_ranks = [r for r in Rank if r != card.rank]
            return PlayRequest(
                actor=view.viewer_seat_id,
                card_ids=[card.id],
                claimed_rank=self.rng.choice(false_ranks),
            )

        # Most common rank; ties go to the first rank seen in the hand
        rank, _ = counts.most_common(1)[0]
        return PlayRequest(
            actor=view.viewer_seat_id,
            card_ids=[card.id for card in hand if card.rank == rank],
            claimed_rank=rank,
        )

    def should_challenge(self, view: GameView) -> bool:
        if not self.can_challenge(view):
            return False

        pending = self.pending_play(view)
        held = sum(1 for card in view.hand or [] if card.rank == pending.claimed_rank)
        if held + len(pending.card_ids) > SUITS_PER_RANK:
            return True

        claimant = view.seat(pending.actor_seat_id)
        if claimant.card_count == 0:
            return True

        return self.rng.random() < self.challenge_rate
