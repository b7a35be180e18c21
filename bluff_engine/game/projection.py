"""Per-viewer projection of the authoritative state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bluff_engine.models.card import Card
from bluff_engine.models.move import Move
from bluff_engine.models.view import CardView, GameView, SeatView

if TYPE_CHECKING:
    from .engine import GameEngine


def card_view(card: Card, reveal: bool) -> CardView:
    """Describe a card, showing its face only if ``reveal`` is set."""
    if reveal:
        return CardView(id=card.id, face_up=card.face_up, rank=card.rank, suit=card.suit)
    return CardView(id=card.id, face_up=card.face_up)


def public_move(move: Move, viewer_seat_id: str | None) -> Move:
    """Strip the request id from moves the viewer did not make."""
    if move.request_id is None or move.actor_seat_id == viewer_seat_id:
        return move
    return move.model_copy(update={"request_id": None})


def project_view(engine: GameEngine, viewer_seat_id: str | None = None) -> GameView:
    """Build the view of a room that one seat is allowed to see.

    Other seats appear as card counts only. The viewer's own hand is
    listed with faces. Play-zone cards show their faces only while face-up.
    Request ids appear only on the viewer's own moves.

    Args:
        engine: Engine holding the room.
        viewer_seat_id: Requesting seat; None gives a spectator view.

    Returns:
        Redacted GameView.
    """
    state = engine.state
    seat_ids = {s.id for s in engine.seats}
    viewer = viewer_seat_id if viewer_seat_id in seat_ids else None

    seats = [
        SeatView(
            id=seat.id,
            display_name=seat.display_name,
            seat_index=seat.seat_index,
            card_count=state.card_count(seat.id),
            has_turn=seat.has_turn,
            eliminated=seat.eliminated,
        )
        for seat in sorted(engine.seats, key=lambda s: s.seat_index)
    ]

    hand = None
    if viewer is not None:
        hand = [card_view(c, reveal=True) for c in state.hand_of(viewer)]

    current = engine.current_actor
    return GameView(
        room_id=engine.room.id,
        code=engine.room.code,
        status=engine.room.status,
        version=engine.version,
        phase=state.phase,
        viewer_seat_id=viewer,
        current_actor=current.id if current else None,
        pending_play_id=state.pending_play.id if state.pending_play else None,
        winner=state.winner,
        seats=seats,
        hand=hand,
        play_zone=[card_view(c, reveal=c.face_up) for c in state.play_zone()],
        moves=[public_move(m, viewer) for m in sorted(state.moves, key=lambda m: m.sort_key)],
    )
