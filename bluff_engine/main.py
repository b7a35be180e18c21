"""Main entry point for self-play bluff games."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from bluff_engine.config import load_config
from bluff_engine.logging import GameLogConfig, GameLogger
from bluff_engine.simulation import SelfPlayRunner
from bluff_engine.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, num_players: int, seed: int | None) -> str:
    """Generate log filename with timestamp, player count and seed.

    Format: {ISO timestamp}_{n}p[_s{seed}].jsonl

    Args:
        log_dir: Directory for log files.
        num_players: Players per game.
        seed: Master seed, if fixed.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    suffix = f"_s{seed}" if seed is not None else ""
    filename = f"{timestamp}_{num_players}p{suffix}.jsonl"
    return str(Path(log_dir) / filename)


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description="Run self-play games of the bluffing card game engine"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--num-players",
        type=int,
        help="Players per game (overrides config)",
    )
    parser.add_argument(
        "-g",
        "--num-games",
        type=int,
        help="Number of games to play (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Master seed for reproducible games (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hands",
        action="store_true",
        help="Show the acting player's hand before each move",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args()

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.num_players:
        config.simulation.num_players = args.num_players
    if args.num_games:
        config.simulation.num_games = args.num_games
    if args.seed is not None:
        config.simulation.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True

    # CLI argument overrides config file
    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.log_dir

    setup_logging(config.logging.level)
    display = GameDisplay(show_hands=config.logging.show_hands)

    sim = config.simulation
    print("Bluff self-play starting...")
    print(f"Players: {sim.num_players}")
    print(f"Games: {sim.num_games}")
    print(f"Seed: {sim.seed if sim.seed is not None else 'random'}")
    print()

    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir, sim.num_players, sim.seed)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            runner = SelfPlayRunner(config, game_logger, seed=sim.seed)
            runner.set_callbacks(
                on_move=display.print_move,
                on_game_start=lambda n, view: display.print_game_start(n, sim.num_games, view),
                on_game_end=lambda n, view: display.print_game_end(view),
                on_turn=display.print_hand,
            )
            wins = runner.run_games(sim.num_games, sim.num_players)
            display.print_final_results(wins)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Simulation error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
