"""Authoritative game-state engine for a multiplayer bluffing card game."""

from bluff_engine.config import Config, load_config
from bluff_engine.errors import ErrorCode, GameError
from bluff_engine.game import GameEngine
from bluff_engine.lobby import RoomRegistry
from bluff_engine.models import ChallengeRequest, GameView, PlayRequest

__version__ = "0.1.0"

__all__ = [
    "ChallengeRequest",
    "Config",
    "ErrorCode",
    "GameEngine",
    "GameError",
    "GameView",
    "PlayRequest",
    "RoomRegistry",
    "load_config",
]
