"""Standard 52-card deck."""

import random

from bluff_engine.models.card import CardFace, Rank, Suit

DECK_SIZE = 52


class Deck:
    """Builds and shuffles the standard deck."""

    @staticmethod
    def build() -> list[CardFace]:
        """Create all 52 rank x suit combinations in a fixed order."""
        return [CardFace(rank=rank, suit=suit) for suit in Suit for rank in Rank]

    @staticmethod
    def shuffle(deck: list[CardFace], rng: random.Random) -> list[CardFace]:
        """Shuffle a copy of the deck with Fisher-Yates.

        Args:
            deck: Cards to shuffle (left untouched).
            rng: Random source; a seeded instance gives a reproducible order.

        Returns:
            Shuffled copy of the deck.
        """
        shuffled = list(deck)
        for i in range(len(shuffled) - 1, 0, -1):
            j = rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled
