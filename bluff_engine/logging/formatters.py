"""Formatters for game log output."""

from collections.abc import Iterable, Mapping

from bluff_engine.models.card import Card
from bluff_engine.models.move import Move, MoveKind, MoveResult
from bluff_engine.models.room import Seat


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "KS" for King of Spades, "10H" for Ten of Hearts).
    """
    return card.face.label


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards to a comma-separated string.

    Args:
        cards: Cards to format.

    Returns:
        Comma-separated card strings (e.g., "KS,KH,7D").
        Empty string if no cards.
    """
    return ",".join(format_card(c) for c in sorted(cards, key=lambda c: c.id))


def format_hands(cards: Iterable[Card], seats: Iterable[Seat]) -> dict[str, str]:
    """Format every seat's hand.

    Args:
        cards: All cards of the room.
        seats: Seats to report.

    Returns:
        Dict mapping seat index (as string) to formatted hand string.
    """
    cards = list(cards)
    return {
        str(seat.seat_index): format_cards(c for c in cards if c.owner_seat_id == seat.id)
        for seat in seats
    }


def describe_move(move: Move, seats: Mapping[str, Seat]) -> str:
    """Describe one move log entry as a line of text.

    Args:
        move: Move to describe.
        seats: Seats by id, for display names.

    Returns:
        Human-readable description.
    """
    seat = seats.get(move.actor_seat_id) if move.actor_seat_id else None
    name = seat.display_name if seat else "?"

    if move.kind == MoveKind.GAME_START:
        return "Game started"
    if move.kind == MoveKind.GAME_END:
        return f"{name} wins the game!"
    if move.kind == MoveKind.PLAY:
        count = len(move.card_ids)
        plural = "card" if count == 1 else "cards"
        return f"{name} played {count} {plural} claiming {move.claimed_rank.value}"
    if move.kind == MoveKind.CHALLENGE:
        shown = ", ".join(move.revealed)
        if move.result == MoveResult.PASS:
            return f"{name} challenged and lost: the claim was true ({shown})"
        return f"{name} challenged and won: it was a bluff ({shown})"
    return f"{name}: {move.kind.value}"
