"""
Extension point: implement Player to plug in any decision source.

Adding a new kind of player requires only a new subclass. The
GameController never needs to change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from game.commands import GameCommand
from game.model import Character
from game.state import GameState


class Player(ABC):
    """Decision strategy bound to one Character for a match.

    Must return an executable command, or raise before touching any state.
    """

    @abstractmethod
    def decide_action(
        self,
        self_character: Character,
        allies: list[Character],
        enemies: list[Character],
        game_state: GameState,
    ) -> GameCommand | None:
        """Choose the next command for self_character."""
        ...

    @property
    def name(self) -> str:
        """Human-readable identifier used in logs and reports."""
        return self.__class__.__name__

    def close(self) -> None:
        """Release whatever the player holds open (HTTP sessions). No-op by default."""
