from bot.parser import DecisionParser
from bot.player import Player
from bot.schema import Decision, DecisionError

__all__ = [
    "Decision",
    "DecisionError",
    "DecisionParser",
    "Player",
]
