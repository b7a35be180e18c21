"""Move validation for play and challenge requests."""

from dataclasses import dataclass

from bluff_engine.config import ChallengePolicy, RulesConfig
from bluff_engine.errors import ErrorCode, error_for_code
from bluff_engine.models.game_state import TableState
from bluff_engine.models.room import Room, RoomStatus, Seat
from bluff_engine.models.view import Phase


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error: ErrorCode | None = None
    error_message: str = ""

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def reject(cls, error: ErrorCode, message: str) -> "ValidationResult":
        return cls(is_valid=False, error=error, error_message=message)

    def raise_if_invalid(self) -> None:
        """Raise the typed error matching this result, if any."""
        if not self.is_valid and self.error is not None:
            raise error_for_code(self.error, self.error_message)


class MoveValidator:
    """Checks requests against the current state without mutating it."""

    def __init__(self, rules: RulesConfig | None = None):
        """Initialize validator.

        Args:
            rules: Rules configuration (uses defaults if not provided)
        """
        self.rules = rules or RulesConfig()

    def validate_play(
        self,
        room: Room,
        state: TableState,
        actor: Seat | None,
        current: Seat | None,
        card_ids: list[str],
    ) -> ValidationResult:
        """Validate a play request.

        Args:
            room: Room the play is made in
            state: Current table state
            actor: Seat making the play (None if unknown)
            current: Seat whose turn it is
            card_ids: Cards to put in the play zone

        Returns:
            ValidationResult
        """
        common = self._check_actor(room, actor)
        if not common.is_valid:
            return common

        if current is None or actor.id != current.id:
            return ValidationResult.reject(
                ErrorCode.NOT_YOUR_TURN,
                f"It is not {actor.display_name}'s turn",
            )

        if not card_ids:
            return ValidationResult.reject(
                ErrorCode.EMPTY_SELECTION,
                "Select at least one card to play",
            )

        for card_id in card_ids:
            card = state.cards.get(card_id)
            if card is None or card.in_play_zone or card.owner_seat_id != actor.id:
                return ValidationResult.reject(
                    ErrorCode.CARD_NOT_OWNED,
                    f"Card {card_id} is not in {actor.display_name}'s hand",
                )

        return ValidationResult.ok()

    def validate_challenge(
        self,
        room: Room,
        state: TableState,
        challenger: Seat | None,
        current: Seat | None,
    ) -> ValidationResult:
        """Validate a challenge request.

        Args:
            room: Room the challenge is made in
            state: Current table state
            challenger: Seat making the challenge (None if unknown)
            current: Seat whose turn it is

        Returns:
            ValidationResult
        """
        common = self._check_actor(room, challenger)
        if not common.is_valid:
            return common

        pending = state.pending_play
        if state.phase != Phase.AWAITING_CHALLENGE or pending is None:
            return ValidationResult.reject(
                ErrorCode.NOTHING_TO_CHALLENGE,
                "There is no pending play to challenge",
            )

        if pending.actor_seat_id == challenger.id:
            return ValidationResult.reject(
                ErrorCode.CANNOT_CHALLENGE_OWN_PLAY,
                "You cannot challenge your own play",
            )

        if self.rules.challenge_policy == ChallengePolicy.NEXT_ACTOR and (
            current is None or current.id != challenger.id
        ):
            return ValidationResult.reject(
                ErrorCode.NOT_YOUR_TURN,
                "Only the next player may challenge",
            )

        return ValidationResult.ok()

    def _check_actor(self, room: Room, seat: Seat | None) -> ValidationResult:
        """Checks shared by every move kind."""
        if room.status != RoomStatus.ACTIVE:
            return ValidationResult.reject(
                ErrorCode.GAME_NOT_ACTIVE,
                f"Game is {room.status.value}",
            )
        if seat is None:
            return ValidationResult.reject(
                ErrorCode.SEAT_NOT_FOUND,
                "Seat is not part of this game",
            )
        if seat.eliminated:
            return ValidationResult.reject(
                ErrorCode.SEAT_ELIMINATED,
                f"{seat.display_name} has been eliminated",
            )
        return ValidationResult.ok()
