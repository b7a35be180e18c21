"""Game engine for one room."""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from bluff_engine.config import Config
from bluff_engine.errors import (
    DuplicateMove,
    GameAlreadyStarted,
    InsufficientPlayers,
    RoomFull,
    StaleVersion,
)
from bluff_engine.models.game_state import TableState
from bluff_engine.models.move import (
    ChallengeRequest,
    MoveKind,
    PlayRequest,
    parse_move_request,
)
from bluff_engine.models.room import Room, RoomStatus, Seat, utc_now

from .dealer import Dealer
from .deck import Deck
from .projection import project_view
from .resolver import MoveResolver
from .scheduler import TurnScheduler
from .validator import MoveValidator

if TYPE_CHECKING:
    from bluff_engine.logging import GameLogger
    from bluff_engine.models.view import GameView

logger = logging.getLogger(__name__)

MAX_SEED = 2**63


class GameEngine:
    """Authoritative state of one room.

    Holds the roster, card ownership, turn state and the move log, and
    applies requests one at a time. The engine takes no locks: callers
    must not run two requests for the same room concurrently (see
    ``RoomRegistry``).
    """

    def __init__(
        self,
        room: Room,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize game engine.

        Args:
            room: Room this engine drives
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for replay logging
            clock: Timestamp source (defaults to UTC now)
        """
        self.room = room
        self.config = config or Config()
        self.rules = self.config.rules
        self.game_logger = game_logger
        self.clock = clock or utc_now

        self.validator = MoveValidator(self.rules)
        self.state = TableState(room_id=room.id)
        self.seats: list[Seat] = []
        self.scheduler: TurnScheduler | None = None
        self.resolver: MoveResolver | None = None
        self._request_ids: set[str] = set()

    @property
    def version(self) -> int:
        """Monotonic version; equals the move log length."""
        return len(self.state.moves)

    @property
    def current_actor(self) -> Seat | None:
        """Seat whose turn it is, if a deal is in progress."""
        return self.scheduler.current if self.scheduler else None

    @property
    def is_active(self) -> bool:
        """Whether a deal is in progress."""
        return self.room.status == RoomStatus.ACTIVE

    def start_game(self, seats: list[Seat], seed: int | None = None) -> GameView:
        """Shuffle, deal and hand the first turn to seat 0.

        Args:
            seats: Seated players, dealt in seat index order
            seed: Shuffle seed; a random one is drawn (and logged) if omitted

        Returns:
            Spectator view of the new game.

        Raises:
            GameAlreadyStarted: If the room has left the lobby.
            InsufficientPlayers: If fewer than ``rules.min_seats`` are seated.
            RoomFull: If more than ``rules.max_seats`` are seated.
        """
        if self.room.status != RoomStatus.LOBBY:
            raise GameAlreadyStarted(f"Room {self.room.code} is {self.room.status.value}")
        if len(seats) < self.rules.min_seats:
            raise InsufficientPlayers(
                f"Need at least {self.rules.min_seats} players to start, got {len(seats)}"
            )
        if len(seats) > self.rules.max_seats:
            raise RoomFull(f"At most {self.rules.max_seats} players can play")

        if seed is None:
            seed = random.SystemRandom().randrange(MAX_SEED)
        rng = random.Random(seed)

        self.seats = sorted(seats, key=lambda s: s.seat_index)
        for seat in self.seats:
            seat.has_turn = False

        self.state.reset_for_new_deal()
        self.state.seed = seed
        self._request_ids.clear()

        deck = Deck.shuffle(Deck.build(), rng)
        dealt = Dealer(self.rules.deal_remainder).deal(deck, self.seats, self.room.id)
        self.state.cards = {card.id: card for card in dealt.cards}
        self.state.undealt = dealt.undealt

        self.scheduler = TurnScheduler(self.seats)
        first = self.scheduler.first()
        self.resolver = MoveResolver(
            self.room,
            self.seats,
            self.state,
            self.scheduler,
            rules=self.rules,
            validator=self.validator,
            clock=self.clock,
            game_logger=self.game_logger,
        )

        now = self.clock()
        self.state.append_move(MoveKind.GAME_START, now)
        self.room.status = RoomStatus.ACTIVE
        self.room.touch(now)

        if self.game_logger:
            self.game_logger.log_game_start(self.room, self.seats, self.state, first)

        logger.info(
            f"Room {self.room.code} started: {len(self.seats)} players, seed {seed}, "
            f"{len(self.state.cards)} dealt, {len(dealt.undealt)} undealt, "
            f"first player {first.display_name}"
        )
        return self.current_state()

    def submit_move(
        self,
        request: PlayRequest | ChallengeRequest | dict[str, Any],
        expected_version: int | None = None,
    ) -> GameView:
        """Validate and apply one move request.

        Args:
            request: Play or challenge request (or its dict form)
            expected_version: Apply only if the engine is still at this version

        Returns:
            The updated view, as seen by the requesting seat.

        Raises:
            DuplicateMove: If the request id was already applied.
            StaleVersion: If ``expected_version`` no longer matches.
            GameError: If the move itself is rejected.
        """
        if isinstance(request, dict):
            request = parse_move_request(request)

        if request.request_id is not None and request.request_id in self._request_ids:
            raise DuplicateMove(f"Request {request.request_id} was already applied")
        if expected_version is not None and expected_version != self.version:
            raise StaleVersion(
                f"Expected version {expected_version}, room is at {self.version}"
            )

        resolver = self._resolver()
        if isinstance(request, PlayRequest):
            viewer = request.actor
            resolver.submit_play(
                request.actor, request.card_ids, request.claimed_rank, request.request_id
            )
        else:
            viewer = request.challenger
            resolver.submit_challenge(request.challenger, request.request_id)

        if request.request_id is not None:
            self._request_ids.add(request.request_id)

        if not self.is_active and self.game_logger:
            self.game_logger.log_game_end(self.room, self.seats, self.state)

        return self.current_state(viewer)

    def current_state(self, viewer_seat_id: str | None = None) -> GameView:
        """Redacted view of the room for one seat (or a spectator)."""
        return project_view(self, viewer_seat_id)

    def _resolver(self) -> MoveResolver:
        if self.resolver is None:
            # No deal yet: let the validator report the inactive room
            return MoveResolver(
                self.room,
                self.seats,
                self.state,
                TurnScheduler(self.seats),
                rules=self.rules,
                validator=self.validator,
                clock=self.clock,
            )
        return self.resolver
