"""Game logic."""

from .dealer import DealResult, Dealer
from .deck import DECK_SIZE, Deck
from .engine import GameEngine
from .projection import project_view
from .resolver import MoveResolver, claim_is_true
from .scheduler import TurnScheduler
from .validator import MoveValidator, ValidationResult

__all__ = [
    "DECK_SIZE",
    "Deck",
    "Dealer",
    "DealResult",
    "GameEngine",
    "MoveResolver",
    "MoveValidator",
    "TurnScheduler",
    "ValidationResult",
    "claim_is_true",
    "project_view",
]
