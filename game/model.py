"""
Combat entities: character types, stats and the Character itself.

A Character owns two swappable strategies. The attack strategy turns the
attacker's stats into raw damage, the defense strategy turns raw damage
into the damage actually taken. Commands are the only thing that mutates
health during a match.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from game.strategies import AttackStrategy, DefenseStrategy


class CharacterType(Enum):
    WARRIOR = "warrior"
    MAGE = "mage"
    ARCHER = "archer"
    ROGUE = "rogue"

    def __str__(self) -> str:
        return self.name


@dataclass
class Stats:
    health: int
    max_health: int
    mana: int
    max_mana: int
    attack_power: int
    defense: int

    @property
    def health_fraction(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return max(0, self.health) / self.max_health


@dataclass(eq=False)
class Character:
    """Mutable combat entity. Hashes by identity so it can key a player map."""

    name: str
    type: CharacterType
    stats: Stats
    attack_strategy: AttackStrategy
    defense_strategy: DefenseStrategy

    @property
    def is_alive(self) -> bool:
        return self.stats.health > 0

    @property
    def display_health(self) -> int:
        return max(0, self.stats.health)

    def attack(self, target: Character) -> int:
        """Raw damage this character would deal to target, before defense."""
        return self.attack_strategy.calculate_damage(self, target)

    def take_damage(self, amount: int) -> int:
        """Apply damage, bounded at 0. Returns the health lost."""
        before = self.stats.health
        self.stats.health = max(0, before - max(0, amount))
        return before - self.stats.health

    def heal(self, amount: int) -> int:
        """Restore health, bounded at max_health. Returns the health gained."""
        before = self.stats.health
        self.stats.health = min(self.stats.max_health, before + max(0, amount))
        return self.stats.health - before

    def set_health(self, value: int) -> None:
        self.stats.health = value

    def __repr__(self) -> str:
        return (
            f"Character({self.name!r}, {self.type}, "
            f"{self.stats.health}/{self.stats.max_health} HP)"
        )
