"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

from bluff_engine.logging.formatters import describe_move

if TYPE_CHECKING:
    from bluff_engine.models.move import Move
    from bluff_engine.models.room import Seat
    from bluff_engine.models.view import GameView


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display game progress to stdout."""

    def __init__(self, show_hands: bool = False):
        """Initialize display.

        Args:
            show_hands: Whether to show player hands
        """
        self.show_hands = show_hands

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_game_start(self, game_number: int, num_games: int, view: "GameView") -> None:
        """Print game start message."""
        self.print_separator()
        print(f"GAME {game_number}/{num_games}  (room {view.code})")
        self.print_separator()
        self.print_hand_counts(view)

    def print_move(self, move: "Move", seats: dict[str, "Seat"]) -> None:
        """Print one move log entry."""
        print(f"  [{move.id:>3}] {describe_move(move, seats)}")

    def print_hand_counts(self, view: "GameView") -> None:
        """Print hand counts for all seats."""
        counts = [f"{s.display_name}:{s.card_count}" for s in view.seats]
        print(f"Hand counts: {' | '.join(counts)}  (play zone: {len(view.play_zone)})")

    def print_hand(self, name: str, view: "GameView") -> None:
        """Print one seat's own hand (if show_hands is enabled)."""
        if not self.show_hands or view.hand is None:
            return
        cards = ", ".join(f"{c.rank.value}{c.suit.value}" for c in view.hand)
        print(f"    {name}: [{cards}]")

    def print_game_end(self, view: "GameView") -> None:
        """Print game end results."""
        if view.winner is None:
            print("\nGame stopped without a winner.")
        else:
            print(f"\nWinner: {view.seat(view.winner).display_name}")
        self.print_hand_counts(view)

    def print_final_results(self, wins: dict[str, int]) -> None:
        """Print wins per player across all games."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        # Sort by wins descending
        for rank, (name, count) in enumerate(
            sorted(wins.items(), key=lambda x: x[1], reverse=True), 1
        ):
            print(f"  #{rank}: {name} - {count} win(s)")
