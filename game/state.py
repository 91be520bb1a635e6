"""GameState: immutable snapshot of turn and round counters."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GameState:
    turn_number: int = 1
    round_number: int = 1
    can_undo: bool = False
    command_history_size: int = 0
    match_id: str = ""

    @classmethod
    def initial(cls, match_id: str = "") -> GameState:
        return cls(match_id=match_id)

    @property
    def turns_played(self) -> int:
        return self.turn_number - 1

    def next_turn(self) -> GameState:
        return replace(self, turn_number=self.turn_number + 1)

    def next_round(self) -> GameState:
        return replace(self, round_number=self.round_number + 1)

    def with_undo(self, can_undo: bool, history_size: int) -> GameState:
        return replace(self, can_undo=can_undo, command_history_size=history_size)
