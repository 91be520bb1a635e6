"""Builders shared by the test modules."""

from __future__ import annotations

from bot.player import Player
from game.commands import AttackCommand, GameCommand
from game.model import Character, CharacterType, Stats
from game.state import GameState
from game.strategies import MeleeAttack, NoDefense


def make_character(
    name: str,
    health: int = 100,
    attack_power: int = 10,
    defense: int = 0,
    character_type: CharacterType = CharacterType.WARRIOR,
    mana: int = 0,
) -> Character:
    """Plain character: melee attack (x1.2) and no damage reduction."""
    return Character(
        name=name,
        type=character_type,
        stats=Stats(
            health=health,
            max_health=health,
            mana=mana,
            max_mana=mana,
            attack_power=attack_power,
            defense=defense,
        ),
        attack_strategy=MeleeAttack(),
        defense_strategy=NoDefense(),
    )


class FirstEnemyPlayer(Player):
    """Always attacks the first enemy and remembers who it acted for."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    def decide_action(
        self,
        self_character: Character,
        allies: list[Character],
        enemies: list[Character],
        game_state: GameState,
    ) -> GameCommand:
        self.calls.append((self_character.name, game_state.round_number))
        return AttackCommand(self_character, enemies[0])


class NoCommandPlayer(Player):
    def decide_action(self, self_character, allies, enemies, game_state):
        return None
