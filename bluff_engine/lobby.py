"""Room and seat lifecycle around the game engines."""

from __future__ import annotations

import logging
import random
import string
import threading
import uuid
from collections import defaultdict
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

from bluff_engine.config import Config
from bluff_engine.errors import (
    AlreadyInRoom,
    GameAlreadyStarted,
    NotRoomHost,
    RoomFull,
    RoomNotFound,
    SeatNotFound,
)
from bluff_engine.game.engine import GameEngine
from bluff_engine.models.room import Room, RoomStatus, Seat

if TYPE_CHECKING:
    from bluff_engine.logging import GameLogger
    from bluff_engine.models.move import ChallengeRequest, PlayRequest
    from bluff_engine.models.view import GameView

logger = logging.getLogger(__name__)

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits


class RoomRegistry:
    """In-memory rooms, seats and engines.

    All requests for one room run under that room's lock, which gives
    the engine the single-writer access it expects. A room is only ever
    removed while its lock is held, and every request re-checks that its
    room still exists once it holds the lock.

    Lock order: a room lock may be held while taking the registry lock,
    never the other way round.
    """

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize registry.

        Args:
            config: Configuration shared by every room
            game_logger: GameLogger handed to every engine
            rng: Random source for join codes
        """
        self.config = config or Config()
        self.game_logger = game_logger
        self._rng = rng or random.Random()

        self._rooms: dict[str, Room] = {}
        self._seats: dict[str, list[Seat]] = {}
        self._engines: dict[str, GameEngine] = {}
        self._lock = threading.Lock()
        self._room_locks: defaultdict[str, threading.Lock] = defaultdict(threading.Lock)

    @property
    def rooms(self) -> list[Room]:
        """Snapshot of every open room."""
        with self._lock:
            return list(self._rooms.values())

    def get_room(self, room_id: str) -> Room:
        """Look up a room by id.

        Raises:
            RoomNotFound: If the room does not exist (or was deleted).
        """
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(f"No room with id {room_id}")
        return room

    def find_by_code(self, code: str) -> Room:
        """Look up a room by join code (case-insensitive)."""
        wanted = code.strip().upper()
        for room in self.rooms:
            if room.code == wanted:
                return room
        raise RoomNotFound(f"No room with code {wanted}")

    def seats_of(self, room_id: str) -> list[Seat]:
        """Seats of a room in seat order."""
        self.get_room(room_id)
        return sorted(self._seats[room_id], key=lambda s: s.seat_index)

    def engine(self, room_id: str) -> GameEngine:
        """Game engine driving a room."""
        self.get_room(room_id)
        return self._engines[room_id]

    def create_room(self, user_id: str, display_name: str) -> tuple[Room, Seat]:
        """Create a room in the lobby and seat its host at seat 0.

        If seating the host fails the room is removed again.

        Args:
            user_id: Creator identity
            display_name: Host display name

        Returns:
            The new room and the host's seat.
        """
        with self._lock:
            room = Room(id=str(uuid.uuid4()), code=self._new_code(), created_by=user_id)
            self._rooms[room.id] = room
            self._seats[room.id] = []
            self._engines[room.id] = GameEngine(room, self.config, self.game_logger)

        try:
            seat = self._add_seat(room, user_id, display_name)
        except Exception:
            logger.warning(f"Seating host failed, removing orphaned room {room.code}")
            self.delete_room(room.id)
            raise

        logger.info(f"Room {room.code} created by {seat.display_name}")
        return room, seat

    def join_room(self, code: str, user_id: str, display_name: str) -> Seat:
        """Take the next free seat in a lobby room.

        Args:
            code: Room join code
            user_id: Joining user identity
            display_name: Name shown to other players

        Returns:
            The new seat.

        Raises:
            RoomNotFound: If no room has this code.
            GameAlreadyStarted: If the room has left the lobby.
            AlreadyInRoom: If the user already holds a seat.
            RoomFull: If every seat is taken.
        """
        room = self.find_by_code(code)
        seat = self._add_seat(room, user_id, display_name)
        logger.info(f"{seat.display_name} joined room {room.code} at seat {seat.seat_index}")
        return seat

    def leave_room(self, room_id: str, seat_id: str) -> None:
        """Give up a seat while the room is still in the lobby.

        Remaining seats keep their join order and are renumbered from 0.
        The room is deleted, under the same lock, when its last seat leaves.

        Raises:
            GameAlreadyStarted: If the game has begun.
            SeatNotFound: If the seat is not in this room.
        """
        with self._locked(room_id) as room:
            if room.status != RoomStatus.LOBBY:
                raise GameAlreadyStarted("Cannot leave a game in progress")
            seats = self._seats[room_id]
            seat = next((s for s in seats if s.id == seat_id), None)
            if seat is None:
                raise SeatNotFound(f"Seat {seat_id} is not in room {room.code}")

            seats.remove(seat)
            for index, remaining in enumerate(sorted(seats, key=lambda s: s.seat_index)):
                remaining.seat_index = index
            room.touch()
            if not seats:
                self._remove_room(room_id)

        logger.info(f"{seat.display_name} left room {room.code}")

    def start_game(self, room_id: str, user_id: str, seed: int | None = None) -> GameView:
        """Start the game; only the room's creator may do this.

        Raises:
            NotRoomHost: If ``user_id`` did not create the room.
        """
        with self._locked(room_id) as room:
            if room.created_by != user_id:
                raise NotRoomHost("Only the room creator can start the game")
            return self._engines[room_id].start_game(self.seats_of(room_id), seed)

    def submit_move(
        self,
        room_id: str,
        request: PlayRequest | ChallengeRequest | dict[str, Any],
        expected_version: int | None = None,
    ) -> GameView:
        """Apply a move to a room under its lock."""
        with self._locked(room_id):
            return self._engines[room_id].submit_move(request, expected_version)

    def get_view(self, room_id: str, viewer_seat_id: str | None = None) -> GameView:
        """Redacted view of a room for one seat."""
        with self._locked(room_id):
            return self._engines[room_id].current_state(viewer_seat_id)

    def delete_room(self, room_id: str) -> None:
        """Remove a room, its seats and its engine.

        Raises:
            RoomNotFound: If the room is already gone.
        """
        with self._locked(room_id):
            self._remove_room(room_id)

    def cleanup_empty_rooms(self) -> int:
        """Delete lobby rooms nobody is seated in.

        Returns:
            Number of rooms deleted.
        """
        deleted = 0
        for room in self.rooms:
            try:
                with self._locked(room.id):
                    if room.status == RoomStatus.LOBBY and not self._seats[room.id]:
                        self._remove_room(room.id)
                        deleted += 1
            except RoomNotFound:
                # Removed by another request since the snapshot
                continue
        return deleted

    @contextmanager
    def _locked(self, room_id: str) -> Iterator[Room]:
        """Hold a room's lock and yield the room, which is known to exist."""
        with self._lock:
            if room_id not in self._rooms:
                raise RoomNotFound(f"No room with id {room_id}")
            lock = self._room_locks[room_id]
        with lock:
            # The room may have been deleted while this request waited
            yield self.get_room(room_id)

    def _remove_room(self, room_id: str) -> None:
        """Drop a room's records. The caller holds the room lock."""
        with self._lock:
            room = self._rooms.pop(room_id)
            self._seats.pop(room_id, None)
            self._engines.pop(room_id, None)
            # Requests still queued on this lock find the room gone once
            # they acquire it; new requests fail before touching it
            self._room_locks.pop(room_id, None)
        logger.info(f"Room {room.code} deleted")

    def _add_seat(self, room: Room, user_id: str, display_name: str) -> Seat:
        with self._locked(room.id):
            if room.status != RoomStatus.LOBBY:
                raise GameAlreadyStarted(f"Room {room.code} has already started")
            seats = self._seats[room.id]
            if any(s.user_id == user_id for s in seats):
                raise AlreadyInRoom(f"User {user_id} already has a seat in {room.code}")
            if len(seats) >= self.config.rules.max_seats:
                raise RoomFull(f"Room {room.code} is full (max {self.config.rules.max_seats} players)")

            seat = Seat(
                id=str(uuid.uuid4()),
                user_id=user_id,
                room_id=room.id,
                display_name=display_name,
                seat_index=len(seats),
            )
            seats.append(seat)
            room.touch()
            return seat

    def _new_code(self) -> str:
        taken = {room.code for room in self._rooms.values()}
        while True:
            code = "".join(self._rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
            if code not in taken:
                return code
