"""CharacterFactory: builds fully-equipped characters from a type and a name."""

from __future__ import annotations

from dataclasses import dataclass

from game.model import Character, CharacterType, Stats
from game.strategies import (
    AttackStrategy,
    BackstabAttack,
    DefenseStrategy,
    EvasionDefense,
    HeavyArmorDefense,
    MagicAttack,
    MeleeAttack,
    RangedAttack,
    StandardDefense,
)


@dataclass(frozen=True)
class _Template:
    health: int
    mana: int
    attack_power: int
    defense: int
    attack: type[AttackStrategy]
    defense_strategy: type[DefenseStrategy]


_TEMPLATES: dict[CharacterType, _Template] = {
    CharacterType.WARRIOR: _Template(150, 0, 40, 20, MeleeAttack, HeavyArmorDefense),
    CharacterType.MAGE: _Template(80, 100, 60, 5, MagicAttack, StandardDefense),
    CharacterType.ARCHER: _Template(100, 30, 50, 10, RangedAttack, EvasionDefense),
    CharacterType.ROGUE: _Template(90, 40, 45, 12, BackstabAttack, EvasionDefense),
}


class CharacterFactory:
    @staticmethod
    def create(character_type: CharacterType | str, name: str) -> Character:
        if isinstance(character_type, str):
            try:
                character_type = CharacterType(character_type.strip().lower())
            except ValueError:
                valid = ", ".join(t.value for t in CharacterType)
                raise ValueError(
                    f"Unknown character type '{character_type}'. Available: {valid}"
                ) from None

        t = _TEMPLATES[character_type]
        return Character(
            name=name,
            type=character_type,
            stats=Stats(
                health=t.health,
                max_health=t.health,
                mana=t.mana,
                max_mana=t.mana,
                attack_power=t.attack_power,
                defense=t.defense,
            ),
            attack_strategy=t.attack(),
            defense_strategy=t.defense_strategy(),
        )

    @classmethod
    def create_warrior(cls, name: str) -> Character:
        return cls.create(CharacterType.WARRIOR, name)

    @classmethod
    def create_mage(cls, name: str) -> Character:
        return cls.create(CharacterType.MAGE, name)

    @classmethod
    def create_archer(cls, name: str) -> Character:
        return cls.create(CharacterType.ARCHER, name)

    @classmethod
    def create_rogue(cls, name: str) -> Character:
        return cls.create(CharacterType.ROGUE, name)
