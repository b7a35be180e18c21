"""Tests for the JSONL game logger and move formatting."""

import json

from bluff_engine.config import Config
from bluff_engine.game.engine import GameEngine
from bluff_engine.logging import GameLogConfig, GameLogger, describe_move, format_cards
from bluff_engine.models.move import ChallengeRequest, PlayRequest

from conftest import StepClock, make_room, make_seats


def read_events(path):
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f]


class TestGameLogger:
    """Tests for GameLogger."""

    def test_disabled_writes_nothing(self, tmp_path):
        """Test that a disabled logger creates no file."""
        path = tmp_path / "game.jsonl"
        with GameLogger(GameLogConfig(enabled=False, output_path=str(path))) as game_logger:
            engine = GameEngine(make_room(), Config(), game_logger, clock=StepClock())
            engine.start_game(make_seats(2), seed=1)
        assert not path.exists()

    def test_game_events(self, tmp_path):
        """Test start, move and end events of a short game."""
        path = tmp_path / "logs" / "game.jsonl"
        with GameLogger(GameLogConfig(enabled=True, output_path=str(path))) as game_logger:
            engine = GameEngine(make_room(), Config(), game_logger, clock=StepClock())
            engine.start_game(make_seats(2), seed=1)
            hand = [c.id for c in engine.state.hand_of("seat-0")]
            engine.submit_move(PlayRequest(actor="seat-0", card_ids=hand, claimed_rank="A"))
            other = engine.state.hand_of("seat-1")[0].id
            engine.submit_move(PlayRequest(actor="seat-1", card_ids=[other], claimed_rank="2"))

        events = read_events(path)
        assert [e["type"] for e in events] == ["game_start", "move", "move", "move", "game_end"]

        start = events[0]
        assert start["seed"] == 1
        assert [p["name"] for p in start["players"]] == ["Alice", "Bob"]
        assert len(start["hands"]["0"].split(",")) == 26
        assert start["first_player"] == 0

        first_play = events[1]
        assert first_play["kind"] == "play"
        assert first_play["player"] == 0
        assert first_play["claim"] == "A"
        assert first_play["hand_counts"] == {"0": 0, "1": 26}
        assert first_play["play_zone"] == 26

        assert events[3]["kind"] == "game_end"
        assert events[3]["result"] == "win"
        assert events[4]["winner"] == 0
        assert events[4]["winner_name"] == "Alice"
        assert events[4]["total_moves"] == 4

    def test_challenge_event(self, tmp_path):
        """Test that a challenge logs the revealed cards."""
        path = tmp_path / "game.jsonl"
        with GameLogger(GameLogConfig(enabled=True, output_path=str(path))) as game_logger:
            engine = GameEngine(make_room(), Config(), game_logger, clock=StepClock())
            engine.start_game(make_seats(2), seed=1)
            card = engine.state.hand_of("seat-0")[0]
            engine.submit_move(PlayRequest(actor="seat-0", card_ids=[card.id], claimed_rank=card.rank))
            engine.submit_move(ChallengeRequest(challenger="seat-1"))

        event = read_events(path)[-1]
        assert event["kind"] == "challenge"
        assert event["result"] == "pass"
        assert event["cards"] == card.face.label
        assert "challenged and lost" in event["text"]


class TestFormatters:
    """Tests for move descriptions."""

    def test_describe_moves(self, started):
        """Test the text of plays and challenges."""
        seats = {s.id: s for s in started.seats}
        card = started.state.hand_of("seat-0")[0]
        wrong = "K" if card.rank.value != "K" else "Q"
        started.submit_move(PlayRequest(actor="seat-0", card_ids=[card.id], claimed_rank=wrong))
        started.submit_move(ChallengeRequest(challenger="seat-1"))

        start, played, challenged = started.state.moves
        assert describe_move(start, seats) == "Game started"
        assert describe_move(played, seats) == f"Alice played 1 card claiming {wrong}"
        assert describe_move(challenged, seats) == (
            f"Bob challenged and won: it was a bluff ({card.face.label})"
        )

    def test_format_cards(self, started):
        """Test comma-separated card labels."""
        cards = started.state.hand_of("seat-0")[:2]
        assert format_cards(cards) == ",".join(
            c.face.label for c in sorted(cards, key=lambda c: c.id)
        )
        assert format_cards([]) == ""
