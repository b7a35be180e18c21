"""Game logging module."""

from .formatters import describe_move, format_card, format_cards, format_hands
from .game_logger import GameLogConfig, GameLogger

__all__ = [
    "GameLogConfig",
    "GameLogger",
    "describe_move",
    "format_card",
    "format_cards",
    "format_hands",
]
