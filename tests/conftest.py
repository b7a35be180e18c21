"""Shared fixtures."""

from collections import Counter
from datetime import datetime, timedelta, timezone

import pytest

from bluff_engine.config import Config
from bluff_engine.game.engine import GameEngine
from bluff_engine.models.room import Room, Seat


class StepClock:
    """Clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def make_room(room_id: str = "room-1") -> Room:
    return Room(id=room_id, code="ABC123", created_by="user-0")


def make_seats(n: int, room_id: str = "room-1") -> list[Seat]:
    names = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Grace", "Heidi"]
    return [
        Seat(
            id=f"seat-{i}",
            user_id=f"user-{i}",
            room_id=room_id,
            display_name=names[i],
            seat_index=i,
        )
        for i in range(n)
    ]


def pair_in_hand(engine: GameEngine, seat_id: str) -> list[str]:
    """Ids of two cards of the same rank held by a seat."""
    hand = engine.state.hand_of(seat_id)
    rank, count = Counter(c.rank for c in hand).most_common(1)[0]
    assert count >= 2
    return [c.id for c in hand if c.rank == rank][:2]


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def seats():
    return make_seats(2)


@pytest.fixture
def engine(config, clock):
    return GameEngine(make_room(), config, clock=clock)


@pytest.fixture
def started(engine, seats):
    """Two-player engine dealt with a fixed seed."""
    engine.start_game(seats, seed=42)
    return engine
