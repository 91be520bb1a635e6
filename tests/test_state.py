from __future__ import annotations

import dataclasses

import pytest

from game.state import GameState


def test_initial_state() -> None:
    s = GameState.initial("m1")
    assert (s.turn_number, s.round_number, s.can_undo, s.command_history_size) == (1, 1, False, 0)
    assert s.match_id == "m1"
    assert s.turns_played == 0


def test_transitions_return_new_snapshots() -> None:
    s = GameState.initial()
    t = s.next_turn().next_turn().next_round().with_undo(True, 2)

    assert s == GameState()
    assert t.turn_number == 3
    assert t.round_number == 2
    assert t.can_undo is True
    assert t.command_history_size == 2


def test_state_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        GameState().turn_number = 5  # type: ignore[misc]
