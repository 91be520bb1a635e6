from game.commands import AttackCommand, CommandInvoker, GameCommand, HealCommand
from game.controller import GameController, Phase
from game.errors import CommandError, GameError
from game.factory import CharacterFactory
from game.model import Character, CharacterType, Stats
from game.state import GameState

__all__ = [
    "AttackCommand",
    "Character",
    "CharacterFactory",
    "CharacterType",
    "CommandError",
    "CommandInvoker",
    "GameCommand",
    "GameController",
    "GameError",
    "GameState",
    "HealCommand",
    "Phase",
    "Stats",
]
