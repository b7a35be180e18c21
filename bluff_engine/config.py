"""Configuration management."""

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, model_validator


class DealRemainder(str, Enum):
    """What happens to the 52 mod n cards left after block dealing."""

    DISCARD = "discard"  # Removed from play for the round
    DISTRIBUTE = "distribute"  # One extra each to the lowest seats


class ChallengePolicy(str, Enum):
    """Who may challenge a pending claim."""

    ANY_OPPONENT = "any_opponent"
    NEXT_ACTOR = "next_actor"


class RulesConfig(BaseModel):
    """Rules configuration."""

    min_seats: int = 2
    max_seats: int = 8
    deal_remainder: DealRemainder = DealRemainder.DISCARD
    challenge_policy: ChallengePolicy = ChallengePolicy.ANY_OPPONENT
    loser_takes_pile: bool = False

    @model_validator(mode="after")
    def check_seat_bounds(self) -> "RulesConfig":
        if self.min_seats < 2:
            raise ValueError("min_seats must be at least 2")
        if self.max_seats < self.min_seats:
            raise ValueError("max_seats must be >= min_seats")
        if self.max_seats > 52:
            raise ValueError("max_seats cannot exceed the deck size")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class GameLogSettings(BaseModel):
    """Where the CLI writes JSONL game logs."""

    enabled: bool = False
    log_dir: str = "logs"


class SimulationConfig(BaseModel):
    """Self-play simulation settings for the CLI."""

    num_players: int = 4
    num_games: int = 1
    seed: int | None = None
    max_turns: int = 2000
    challenge_rate: float = 0.15


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogSettings = GameLogSettings()
    simulation: SimulationConfig = SimulationConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
