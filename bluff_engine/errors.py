"""Typed game errors.

Every error rejects exactly one request and leaves state untouched.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes reported to callers."""

    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
    INSUFFICIENT_PLAYERS = "INSUFFICIENT_PLAYERS"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    CARD_NOT_OWNED = "CARD_NOT_OWNED"
    NOTHING_TO_CHALLENGE = "NOTHING_TO_CHALLENGE"
    CANNOT_CHALLENGE_OWN_PLAY = "CANNOT_CHALLENGE_OWN_PLAY"
    ROOM_FULL = "ROOM_FULL"
    ALREADY_IN_ROOM = "ALREADY_IN_ROOM"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    NOT_ROOM_HOST = "NOT_ROOM_HOST"
    GAME_ALREADY_STARTED = "GAME_ALREADY_STARTED"
    SEAT_ELIMINATED = "SEAT_ELIMINATED"
    DUPLICATE_MOVE = "DUPLICATE_MOVE"
    STALE_VERSION = "STALE_VERSION"


class GameError(Exception):
    """Base exception for rejected requests."""

    code: ErrorCode

    def __init__(self, message: str = ""):
        self.message = message or self.code.value.replace("_", " ").capitalize()
        super().__init__(f"[{self.code.value}] {self.message}")


class NotYourTurn(GameError):
    code = ErrorCode.NOT_YOUR_TURN


class GameNotActive(GameError):
    code = ErrorCode.GAME_NOT_ACTIVE


class InsufficientPlayers(GameError):
    code = ErrorCode.INSUFFICIENT_PLAYERS


class EmptySelection(GameError):
    code = ErrorCode.EMPTY_SELECTION


class CardNotOwned(GameError):
    code = ErrorCode.CARD_NOT_OWNED


class NothingToChallenge(GameError):
    code = ErrorCode.NOTHING_TO_CHALLENGE


class CannotChallengeOwnPlay(GameError):
    code = ErrorCode.CANNOT_CHALLENGE_OWN_PLAY


class RoomFull(GameError):
    code = ErrorCode.ROOM_FULL


class AlreadyInRoom(GameError):
    code = ErrorCode.ALREADY_IN_ROOM


class RoomNotFound(GameError):
    code = ErrorCode.ROOM_NOT_FOUND


class SeatNotFound(GameError):
    code = ErrorCode.SEAT_NOT_FOUND


class NotRoomHost(GameError):
    code = ErrorCode.NOT_ROOM_HOST


class GameAlreadyStarted(GameError):
    code = ErrorCode.GAME_ALREADY_STARTED


class SeatEliminated(GameError):
    code = ErrorCode.SEAT_ELIMINATED


class DuplicateMove(GameError):
    code = ErrorCode.DUPLICATE_MOVE


class StaleVersion(GameError):
    code = ErrorCode.STALE_VERSION


_ERRORS_BY_CODE: dict[ErrorCode, type[GameError]] = {
    cls.code: cls for cls in GameError.__subclasses__()
}


def error_for_code(code: ErrorCode | str, message: str = "") -> GameError:
    """Build the error instance matching a code.

    Args:
        code: Error code (enum member or its string value).
        message: Optional message.

    Returns:
        GameError subclass instance.
    """
    return _ERRORS_BY_CODE[ErrorCode(code)](message)
