"""Tests for simulated players and self-play games."""

import random
from collections import Counter

import pytest

from bluff_engine.config import ChallengePolicy, Config, RulesConfig, SimulationConfig
from bluff_engine.models.card import Rank
from bluff_engine.models.move import MoveKind, PlayRequest
from bluff_engine.models.room import RoomStatus
from bluff_engine.simulation import PLAYER_NAMES, SelfPlayRunner
from bluff_engine.strategy import SimpleStrategy


def held_counts(engine, seat_id):
    return Counter(c.rank for c in engine.state.hand_of(seat_id))


class TestSimpleStrategy:
    """Tests for SimpleStrategy."""

    def test_honest_play(self, started):
        """Test that an honest turn plays the most common rank truthfully."""
        strategy = SimpleStrategy(random.Random(0), bluff_rate=0.0)
        request = strategy.select_play(started.current_state("seat-0"))

        rank, count = held_counts(started, "seat-0").most_common(1)[0]
        assert request.actor == "seat-0"
        assert request.claimed_rank == rank
        assert len(request.card_ids) == count
        assert all(started.state.cards[cid].rank == rank for cid in request.card_ids)

    def test_bluff_play(self, started):
        """Test that a bluff plays one card under a false rank."""
        strategy = SimpleStrategy(random.Random(0), bluff_rate=1.0)
        request = strategy.select_play(started.current_state("seat-0"))

        assert len(request.card_ids) == 1
        assert started.state.cards[request.card_ids[0]].rank != request.claimed_rank

    def test_empty_hand(self, started):
        """Test that a seat with no cards cannot pick a play."""
        view = started.current_state("seat-0").model_copy(update={"hand": []})
        with pytest.raises(ValueError):
            SimpleStrategy().select_play(view)

    def test_no_pending_play(self, started):
        """Test that there is nothing to challenge before a play."""
        strategy = SimpleStrategy(random.Random(0), challenge_rate=1.0)
        assert not strategy.should_challenge(started.current_state("seat-1"))

    def test_never_challenges_own_play(self, started):
        """Test that a seat does not challenge itself."""
        card = started.state.hand_of("seat-0")[0]
        started.submit_move(PlayRequest(actor="seat-0", card_ids=[card.id], claimed_rank=card.rank))
        strategy = SimpleStrategy(random.Random(0), challenge_rate=1.0)
        assert not strategy.should_challenge(started.current_state("seat-0"))

    def test_challenges_impossible_claim(self, started):
        """Test that a claim contradicted by the seat's own hand is challenged."""
        rank, held = held_counts(started, "seat-1").most_common(1)[0]
        assert held >= 2
        played = [c.id for c in started.state.hand_of("seat-0")[:3]]
        started.submit_move(PlayRequest(actor="seat-0", card_ids=played, claimed_rank=rank))

        strategy = SimpleStrategy(random.Random(0), challenge_rate=0.0)
        assert strategy.should_challenge(started.current_state("seat-1"))

    def test_challenges_emptied_hand(self, started):
        """Test that a claimant with no cards left is always challenged."""
        hand = [c.id for c in started.state.hand_of("seat-0")]
        started.submit_move(PlayRequest(actor="seat-0", card_ids=hand, claimed_rank=Rank.ACE))

        strategy = SimpleStrategy(random.Random(0), challenge_rate=0.0)
        assert strategy.should_challenge(started.current_state("seat-1"))

    def test_plausible_claim_uses_rate(self, started):
        """Test that a plausible claim is challenged only at the configured rate."""
        counts = held_counts(started, "seat-1")
        rank = min(Rank, key=lambda r: counts[r])
        card = started.state.hand_of("seat-0")[0]
        started.submit_move(PlayRequest(actor="seat-0", card_ids=[card.id], claimed_rank=rank))
        view = started.current_state("seat-1")

        assert not SimpleStrategy(random.Random(0), challenge_rate=0.0).should_challenge(view)
        assert SimpleStrategy(random.Random(0), challenge_rate=1.0).should_challenge(view)


class TestSelfPlayRunner:
    """Tests for SelfPlayRunner."""

    @pytest.mark.parametrize("num_players", [2, 3, 5])
    def test_game_invariants(self, num_players):
        """Test that a seeded game keeps the table consistent."""
        runner = SelfPlayRunner(Config(), seed=num_players)
        view = runner.run_game(num_players)

        assert len(view.seats) == num_players
        assert sum(s.card_count for s in view.seats) + len(view.play_zone) == (52 // num_players) * num_players
        assert [m.id for m in view.moves] == list(range(1, len(view.moves) + 1))
        assert view.moves[0].kind == MoveKind.GAME_START

        ends = [m for m in view.moves if m.kind == MoveKind.GAME_END]
        if view.status == RoomStatus.COMPLETE:
            assert len(ends) == 1
            assert view.winner == ends[0].actor_seat_id
            assert view.seat(view.winner).card_count == 0
        else:
            assert ends == []
            assert view.winner is None

    def test_same_seed_same_game(self):
        """Test that a master seed reproduces a game."""
        first = SelfPlayRunner(Config(), seed=17).run_game(3)
        second = SelfPlayRunner(Config(), seed=17).run_game(3)

        def summary(view):
            return [(m.kind, len(m.card_ids), m.claimed_rank, m.result) for m in view.moves]

        assert summary(first) == summary(second)

    def test_callbacks(self):
        """Test that every move is reported once."""
        moves, starts, ends = [], [], []
        runner = SelfPlayRunner(Config(), seed=4)
        runner.set_callbacks(
            on_move=lambda move, seats: moves.append(move.id),
            on_game_start=lambda n, view: starts.append(n),
            on_game_end=lambda n, view: ends.append(n),
        )
        view = runner.run_game(2, game_number=3)

        assert moves == [m.id for m in view.moves]
        assert starts == [3]
        assert ends == [3]

    def test_on_turn_sees_own_hand(self):
        """Test that the turn callback gets the acting seat's view."""
        seen = []
        config = Config(simulation=SimulationConfig(max_turns=5))
        runner = SelfPlayRunner(config, seed=2)
        runner.set_callbacks(on_turn=lambda name, view: seen.append((name, view)))
        runner.run_game(2)

        assert seen
        for name, view in seen:
            assert view.hand is not None
            assert view.seat(view.viewer_seat_id).display_name == name

    def test_next_actor_policy(self):
        """Test that self-play respects the next-actor challenge rule."""
        config = Config(rules=RulesConfig(challenge_policy=ChallengePolicy.NEXT_ACTOR))
        view = SelfPlayRunner(config, seed=9).run_game(4)
        assert view.moves[0].kind == MoveKind.GAME_START

    def test_turn_limit(self):
        """Test that a game stops at max_turns."""
        config = Config(simulation=SimulationConfig(max_turns=3))
        view = SelfPlayRunner(config, seed=1).run_game(4)
        # Start entry plus at most one entry per turn and a possible game end
        assert len(view.moves) <= 5

    def test_run_games(self):
        """Test win tallies across games."""
        wins = SelfPlayRunner(Config(), seed=8).run_games(num_games=2, num_players=3)
        assert list(wins) == PLAYER_NAMES[:3]
        assert sum(wins.values()) <= 2

    def test_player_count_bounds(self):
        """Test that unsupported player counts are rejected."""
        with pytest.raises(ValueError):
            SelfPlayRunner(Config(), seed=1).run_game(1)

    def test_finished_rooms_removed(self):
        """Test that the registry holds no rooms after games finish."""
        runner = SelfPlayRunner(Config(), seed=6)
        runner.run_games(num_games=3, num_players=2)
        assert runner.registry.rooms == []
