"""
Command pattern for game actions.

Every action a player decides on is wrapped in a GameCommand, run through
the CommandInvoker and kept in its history so it can be undone later.
Commands remember the target's exact previous health; undo restores it
verbatim rather than re-deriving it from the damage dealt.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from game.errors import CommandError
from game.model import Character

logger = logging.getLogger(__name__)

HEAL_AMOUNT = 30


class GameCommand(ABC):
    def __init__(self, target: Character) -> None:
        self._target = target
        self._previous_health: int | None = None

    @property
    def target(self) -> Character:
        return self._target

    @property
    def executed(self) -> bool:
        return self._previous_health is not None

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary. Always names the target."""
        ...

    @property
    def kind(self) -> str:
        return self.__class__.__name__.removesuffix("Command").lower()

    def execute(self) -> None:
        if self.executed:
            raise CommandError(f"Command already executed: {self.description}")
        self._previous_health = self._target.stats.health
        self._apply()

    def undo(self) -> None:
        if self._previous_health is None:
            raise CommandError(f"Cannot undo a command that never ran: {self.description}")
        self._target.set_health(self._previous_health)
        self._previous_health = None

    @abstractmethod
    def _apply(self) -> None: ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.description}>"


class AttackCommand(GameCommand):
    def __init__(self, attacker: Character, target: Character) -> None:
        super().__init__(target)
        self._attacker = attacker
        self.damage_dealt = 0

    @property
    def attacker(self) -> Character:
        return self._attacker

    @property
    def description(self) -> str:
        if self.executed:
            return f"{self._attacker.name} attacks {self._target.name} for {self.damage_dealt} damage"
        return f"{self._attacker.name} attacks {self._target.name}"

    def _apply(self) -> None:
        raw = self._attacker.attack(self._target)
        damage = self._target.defense_strategy.calculate_damage_reduction(self._target, raw)
        self.damage_dealt = self._target.take_damage(damage)
        logger.debug(
            "%s -> %s: raw=%d after_defense=%d dealt=%d",
            self._attacker.name,
            self._target.name,
            raw,
            damage,
            self.damage_dealt,
        )


class HealCommand(GameCommand):
    def __init__(self, target: Character, amount: int = HEAL_AMOUNT) -> None:
        super().__init__(target)
        self._amount = amount
        self.amount_healed = 0

    @property
    def amount(self) -> int:
        return self._amount

    @property
    def description(self) -> str:
        if self.executed:
            return f"Heal {self._target.name} for {self.amount_healed} HP"
        return f"Heal {self._target.name} for up to {self._amount} HP"

    def _apply(self) -> None:
        self.amount_healed = self._target.heal(self._amount)


class CommandInvoker:
    """Runs commands and keeps an ordered history for undo."""

    def __init__(self) -> None:
        self._history: list[GameCommand] = []

    @property
    def history(self) -> tuple[GameCommand, ...]:
        return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def execute(self, command: GameCommand) -> None:
        command.execute()
        self._history.append(command)
        logger.debug("Executed: %s (history=%d)", command.description, len(self._history))

    def undo_last(self, n: int = 1) -> list[GameCommand]:
        """Undo up to n most recent commands, newest first."""
        undone: list[GameCommand] = []
        for _ in range(min(max(0, n), len(self._history))):
            command = self._history.pop()
            command.undo()
            undone.append(command)
            logger.debug("Undid: %s", command.description)
        return undone

    def clear(self) -> None:
        self._history.clear()
