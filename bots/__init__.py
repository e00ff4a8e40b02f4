"""Bot strategies for the four-seat trick game."""

from .baseline_greedy import GreedyBot
from .baseline_trump_manager import TrumpManagerBot
from .baseline_counter import CounterBot

__all__ = ["GreedyBot", "TrumpManagerBot", "CounterBot"]
