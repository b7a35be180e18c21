"""Strategies for simulated players."""

from bluff_engine.strategy.base import Strategy
from bluff_engine.strategy.simple import SimpleStrategy

__all__ = ["Strategy", "SimpleStrategy"]
