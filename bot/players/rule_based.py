"""RuleBasedPlayer: fixed if-then policy over the visible stats."""

from __future__ import annotations

from bot.player import Player
from game.commands import HEAL_AMOUNT, AttackCommand, GameCommand, HealCommand
from game.model import Character, CharacterType
from game.state import GameState


class RuleBasedPlayer(Player):
    """Healers patch up the most wounded ally under the threshold, everyone
    else focuses the weakest enemy.

    Only characters with a mana pool (mages by default) heal. Ties go to
    list order.
    """

    def __init__(
        self,
        heal_threshold: float = 0.3,
        healer_types: tuple[CharacterType, ...] = (CharacterType.MAGE,),
    ) -> None:
        self._heal_threshold = heal_threshold
        self._healer_types = healer_types

    def decide_action(
        self,
        self_character: Character,
        allies: list[Character],
        enemies: list[Character],
        game_state: GameState,
    ) -> GameCommand:
        if self_character.type in self._healer_types and self_character.stats.mana > 0:
            wounded = [
                a for a in allies if a.is_alive and a.stats.health_fraction < self._heal_threshold
            ]
            if wounded:
                target = min(wounded, key=lambda a: a.stats.health_fraction)
                return HealCommand(target, HEAL_AMOUNT)

        living = [e for e in enemies if e.is_alive] or enemies
        target = min(living, key=lambda e: e.stats.health)
        return AttackCommand(self_character, target)
