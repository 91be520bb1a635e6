"""
Attack and defense strategies.

Both are stateless and deterministic: the same stats always produce the
same numbers, so the LLM prompt can quote a damage estimate that matches
what the command will actually do.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from game.model import Character


class AttackStrategy(ABC):
    @abstractmethod
    def calculate_damage(self, attacker: Character, target: Character) -> int:
        """Raw damage dealt by attacker to target."""
        ...

    @property
    def name(self) -> str:
        return self.__class__.__name__


class MeleeAttack(AttackStrategy):
    def calculate_damage(self, attacker: Character, target: Character) -> int:
        return attacker.stats.attack_power * 120 // 100


class MagicAttack(AttackStrategy):
    """Spell power scales with the mana pool. Mana is read, never spent."""

    def calculate_damage(self, attacker: Character, target: Character) -> int:
        return attacker.stats.attack_power + attacker.stats.mana // 5


class RangedAttack(AttackStrategy):
    def calculate_damage(self, attacker: Character, target: Character) -> int:
        return attacker.stats.attack_power * 110 // 100


class BackstabAttack(AttackStrategy):
    """+25% against targets below half health."""

    def calculate_damage(self, attacker: Character, target: Character) -> int:
        base = attacker.stats.attack_power
        if target.stats.health * 2 < target.stats.max_health:
            return base * 125 // 100
        return base


class DefenseStrategy(ABC):
    @abstractmethod
    def calculate_damage_reduction(self, defender: Character, raw_damage: int) -> int:
        """Damage actually taken. Never negative, never above raw_damage."""
        ...

    @property
    def name(self) -> str:
        return self.__class__.__name__


class NoDefense(DefenseStrategy):
    def calculate_damage_reduction(self, defender: Character, raw_damage: int) -> int:
        return max(0, raw_damage)


class StandardDefense(DefenseStrategy):
    def calculate_damage_reduction(self, defender: Character, raw_damage: int) -> int:
        return max(0, raw_damage - defender.stats.defense // 2)


class HeavyArmorDefense(DefenseStrategy):
    def calculate_damage_reduction(self, defender: Character, raw_damage: int) -> int:
        return max(0, raw_damage - defender.stats.defense)


class EvasionDefense(DefenseStrategy):
    def calculate_damage_reduction(self, defender: Character, raw_damage: int) -> int:
        return max(0, raw_damage * 3 // 4 - defender.stats.defense // 4)
