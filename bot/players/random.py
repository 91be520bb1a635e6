"""RandomPlayer: attacks a random living enemy each turn."""

from __future__ import annotations

import random
import uuid

from bot.player import Player
from game.commands import AttackCommand, GameCommand
from game.model import Character
from game.state import GameState


class RandomPlayer(Player):
    """Chooses uniformly at random between living enemies. Seedable for tests."""

    def __init__(self, seed: int | None = None) -> None:
        self._name = f"random-{uuid.uuid4().hex[:6]}"
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return self._name

    def decide_action(
        self,
        self_character: Character,
        allies: list[Character],
        enemies: list[Character],
        game_state: GameState,
    ) -> GameCommand:
        living = [e for e in enemies if e.is_alive] or enemies
        return AttackCommand(self_character, self._rng.choice(living))
