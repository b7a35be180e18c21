"""Self-play games driven through the room registry."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable

from bluff_engine.config import ChallengePolicy, Config
from bluff_engine.lobby import RoomRegistry
from bluff_engine.models.move import ChallengeRequest, Move
from bluff_engine.models.room import RoomStatus, Seat
from bluff_engine.strategy import SimpleStrategy, Strategy

if TYPE_CHECKING:
    from bluff_engine.logging import GameLogger
    from bluff_engine.models.view import GameView

logger = logging.getLogger(__name__)

PLAYER_NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Grace", "Heidi"]


class SelfPlayRunner:
    """Runs complete games between simulated players."""

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
        seed: int | None = None,
    ):
        """Initialize runner.

        Args:
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for replay logging
            seed: Master seed; fixes join codes, shuffles and strategy choices
        """
        self.config = config or Config()
        self.rng = random.Random(seed)
        self.registry = RoomRegistry(self.config, game_logger, rng=self.rng)

        self._on_move: Callable[[Move, dict[str, Seat]], None] | None = None
        self._on_game_start: Callable[[int, GameView], None] | None = None
        self._on_game_end: Callable[[int, GameView], None] | None = None
        self._on_turn: Callable[[str, GameView], None] | None = None

    def set_callbacks(
        self,
        on_move: Callable[[Move, dict[str, Seat]], None] | None = None,
        on_game_start: Callable[[int, GameView], None] | None = None,
        on_game_end: Callable[[int, GameView], None] | None = None,
        on_turn: Callable[[str, GameView], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_move: Called for each new move log entry
            on_game_start: Called after dealing (game_number, spectator view)
            on_game_end: Called when a game stops (game_number, spectator view)
            on_turn: Called before a seat plays (display name, that seat's view)
        """
        self._on_move = on_move
        self._on_game_start = on_game_start
        self._on_game_end = on_game_end
        self._on_turn = on_turn

    def run_games(self, num_games: int | None = None, num_players: int | None = None) -> dict[str, int]:
        """Run several games.

        Returns:
            Dict of player name -> games won
        """
        num_games = num_games or self.config.simulation.num_games
        num_players = num_players or self.config.simulation.num_players
        wins = {name: 0 for name in PLAYER_NAMES[:num_players]}

        for game_number in range(1, num_games + 1):
            logger.info(f"Starting game {game_number}/{num_games}")
            view = self.run_game(num_players, game_number)
            if view.winner is not None:
                wins[view.seat(view.winner).display_name] += 1

        return wins

    def run_game(self, num_players: int, game_number: int = 1) -> GameView:
        """Play one game until someone wins or the turn limit is hit.

        Returns:
            Final spectator view.
        """
        if not 2 <= num_players <= len(PLAYER_NAMES):
            raise ValueError(f"num_players must be between 2 and {len(PLAYER_NAMES)}")

        names = PLAYER_NAMES[:num_players]
        room, host = self.registry.create_room("user-0", names[0])
        for i, name in enumerate(names[1:], start=1):
            self.registry.join_room(room.code, f"user-{i}", name)

        seats = self.registry.seats_of(room.id)
        seats_by_id = {s.id: s for s in seats}
        strategies: dict[str, Strategy] = {
            s.id: SimpleStrategy(
                random.Random(self.rng.getrandbits(64)),
                challenge_rate=self.config.simulation.challenge_rate,
            )
            for s in seats
        }

        view = self.registry.start_game(room.id, host.user_id, self.rng.getrandbits(63))
        if self._on_game_start:
            self._on_game_start(game_number, view)
        reported = self._report(view, 0, seats_by_id)

        for _ in range(self.config.simulation.max_turns):
            if view.status != RoomStatus.ACTIVE:
                break
            view = self._take_turn(room.id, seats, strategies)
            reported = self._report(view, reported, seats_by_id)

        if view.status == RoomStatus.ACTIVE:
            logger.warning(f"Room {room.code} hit the turn limit without a winner")

        view = self.registry.get_view(room.id)
        if self._on_game_end:
            self._on_game_end(game_number, view)
        self.registry.delete_room(room.id)
        return view

    def _take_turn(
        self,
        room_id: str,
        seats: list[Seat],
        strategies: dict[str, Strategy],
    ) -> GameView:
        """Offer the pending claim to challengers, then let the actor play."""
        spectator = self.registry.get_view(room_id)
        if spectator.pending_play_id is not None:
            # Ask opponents in turn order, starting with the current actor
            start = next(s.seat_index for s in seats if s.id == spectator.current_actor)
            ordered = seats[start:] + seats[:start]
            if self.config.rules.challenge_policy == ChallengePolicy.NEXT_ACTOR:
                ordered = ordered[:1]
            for seat in ordered:
                own_view = self.registry.get_view(room_id, seat.id)
                if strategies[seat.id].should_challenge(own_view):
                    return self.registry.submit_move(
                        room_id,
                        ChallengeRequest(challenger=seat.id),
                        expected_version=own_view.version,
                    )

        actor_view = self.registry.get_view(room_id, spectator.current_actor)
        if self._on_turn:
            self._on_turn(actor_view.seat(spectator.current_actor).display_name, actor_view)
        request = strategies[spectator.current_actor].select_play(actor_view)
        return self.registry.submit_move(room_id, request, expected_version=actor_view.version)

    def _report(self, view: GameView, reported: int, seats: dict[str, Seat]) -> int:
        """Send moves not yet reported to the move callback."""
        if self._on_move:
            for move in view.moves[reported:]:
                self._on_move(move, seats)
        return len(view.moves)
