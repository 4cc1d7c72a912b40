"""Bot strategies for UNO."""

from .base import BotDecision, BotStrategy
from .heuristic import HeuristicBot
from .random_bot import RandomBot

__all__ = ["BotDecision", "BotStrategy", "HeuristicBot", "RandomBot"]
