"""Game logger for detailed game replay."""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from bluff_engine.models.game_state import TableState
from bluff_engine.models.move import Move
from bluff_engine.models.room import Room, Seat

from .formatters import describe_move, format_cards, format_hands


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    The ``game_start`` event carries the shuffle seed and the initial hands,
    so a game can be replayed step by step from its moves.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_game_start(
        self,
        room: Room,
        seats: list[Seat],
        state: TableState,
        first: Seat,
    ) -> None:
        """Log game start with initial hands.

        Args:
            room: Room being started.
            seats: Seated players.
            state: Table state right after the deal.
            first: Seat that plays first.
        """
        self._write({
            "type": "game_start",
            "room": room.code,
            "timestamp": room.updated_at.isoformat(),
            "seed": state.seed,
            "players": [
                {"seat": s.seat_index, "id": s.id, "name": s.display_name}
                for s in seats
            ],
            "hands": format_hands(state.cards.values(), seats),
            "undealt": ",".join(face.label for face in state.undealt),
            "first_player": first.seat_index,
        })

    def log_move(
        self,
        move: Move,
        seats: Mapping[str, Seat],
        state: TableState,
    ) -> None:
        """Log one accepted move.

        Args:
            move: Move just appended to the log.
            seats: Seats by id.
            state: Table state after the move.
        """
        seat = seats.get(move.actor_seat_id) if move.actor_seat_id else None
        self._write({
            "type": "move",
            "room": move.room_id,
            "id": move.id,
            "timestamp": move.timestamp.isoformat(),
            "kind": move.kind.value,
            "player": seat.seat_index if seat else None,
            "cards": format_cards(state.cards[cid] for cid in move.card_ids),
            "claim": move.claimed_rank.value if move.claimed_rank else None,
            "result": move.result.value if move.result else None,
            "text": describe_move(move, seats),
            "hand_counts": {
                str(s.seat_index): state.card_count(s.id) for s in seats.values()
            },
            "play_zone": len(state.play_zone()),
        })

    def log_game_end(
        self,
        room: Room,
        seats: Iterable[Seat],
        state: TableState,
    ) -> None:
        """Log game end with results.

        Args:
            room: Completed room.
            seats: Seated players.
            state: Final table state.
        """
        winner = next((s for s in seats if s.id == state.winner), None)
        self._write({
            "type": "game_end",
            "room": room.code,
            "winner": winner.seat_index if winner else None,
            "winner_name": winner.display_name if winner else None,
            "total_moves": len(state.moves),
        })
