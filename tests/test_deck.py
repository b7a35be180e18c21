"""Tests for deck building, shuffling and dealing."""

import random

import pytest

from bluff_engine.config import DealRemainder
from bluff_engine.errors import InsufficientPlayers
from bluff_engine.game.dealer import Dealer
from bluff_engine.game.deck import DECK_SIZE, Deck
from bluff_engine.models.card import CardFace, Rank, Suit

from conftest import make_seats


class TestDeck:
    """Tests for Deck."""

    def test_build_has_52_unique_cards(self):
        """Test that the deck holds every rank and suit once."""
        deck = Deck.build()
        assert len(deck) == DECK_SIZE
        assert len(set(deck)) == DECK_SIZE

    def test_build_has_four_of_each_rank(self):
        """Test rank distribution."""
        deck = Deck.build()
        for rank in Rank:
            assert sum(1 for c in deck if c.rank == rank) == 4

    def test_shuffle_is_deterministic(self):
        """Test that the same seed gives the same order."""
        deck = Deck.build()
        first = Deck.shuffle(deck, random.Random(7))
        second = Deck.shuffle(deck, random.Random(7))
        assert first == second

    def test_shuffle_depends_on_seed(self):
        """Test that different seeds give different orders."""
        deck = Deck.build()
        assert Deck.shuffle(deck, random.Random(1)) != Deck.shuffle(deck, random.Random(2))

    def test_shuffle_keeps_input(self):
        """Test that shuffling returns a permutation and leaves the input alone."""
        deck = Deck.build()
        original = list(deck)
        shuffled = Deck.shuffle(deck, random.Random(3))
        assert deck == original
        assert sorted(shuffled, key=lambda c: c.label) == sorted(original, key=lambda c: c.label)

    def test_card_face_label(self):
        """Test short labels."""
        assert CardFace(rank=Rank.KING, suit=Suit.SPADE).label == "KS"
        assert CardFace(rank=Rank.TEN, suit=Suit.HEART).label == "10H"


class TestDealer:
    """Tests for Dealer."""

    @pytest.mark.parametrize("n", range(2, 9))
    def test_block_deal_discards_remainder(self, n):
        """Test that every seat gets floor(52 / n) cards and the rest is undealt."""
        seats = make_seats(n)
        result = Dealer().deal(Deck.build(), seats, "room-1")

        per_seat = DECK_SIZE // n
        assert len(result.cards) == per_seat * n
        assert len(result.undealt) == DECK_SIZE % n
        for seat in seats:
            assert len(result.hand_of(seat.id)) == per_seat

    def test_block_deal_order(self):
        """Test that seat 0 receives the first block of the deck."""
        deck = Deck.build()
        seats = make_seats(2)
        result = Dealer().deal(deck, seats)
        assert [c.face for c in result.hand_of("seat-0")] == deck[:26]
        assert [c.face for c in result.hand_of("seat-1")] == deck[26:]

    def test_distribute_remainder(self):
        """Test that the distribute policy deals every card."""
        seats = make_seats(3)
        result = Dealer(DealRemainder.DISTRIBUTE).deal(Deck.build(), seats)

        assert len(result.cards) == DECK_SIZE
        assert result.undealt == []
        assert len(result.hand_of("seat-0")) == 18
        assert len(result.hand_of("seat-1")) == 17
        assert len(result.hand_of("seat-2")) == 17

    def test_card_ids_unique_and_opaque(self):
        """Test that card ids are unique and do not encode the face."""
        result = Dealer().deal(Deck.build(), make_seats(4))
        ids = [c.id for c in result.cards]
        assert len(set(ids)) == len(ids)
        for card in result.cards:
            assert card.face.label not in card.id

    def test_dealt_cards_start_face_down_in_hand(self):
        """Test initial card flags."""
        result = Dealer().deal(Deck.build(), make_seats(2))
        for card in result.cards:
            assert card.owner_seat_id is not None
            assert not card.face_up
            assert not card.in_play_zone

    def test_deal_requires_two_seats(self):
        """Test that dealing to one seat fails."""
        with pytest.raises(InsufficientPlayers):
            Dealer().deal(Deck.build(), make_seats(1))
