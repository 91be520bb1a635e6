from __future__ import annotations

import pytest

from game.commands import AttackCommand, CommandInvoker, HealCommand
from game.errors import CommandError
from game.factory import CharacterFactory
from tests.helpers import make_character


def test_attack_applies_defense_and_mentions_target() -> None:
    warrior = CharacterFactory.create_warrior("Conan")
    mage = CharacterFactory.create_mage("Gandalf")

    cmd = AttackCommand(warrior, mage)
    assert "Gandalf" in cmd.description
    cmd.execute()

    # 40 * 1.2 = 48 raw, minus half of 5 defense
    assert cmd.damage_dealt == 46
    assert mage.stats.health == 80 - 46
    assert "Gandalf" in cmd.description
    assert "46" in cmd.description


def test_heal_is_capped_at_max_health() -> None:
    c = make_character("Self", health=100)
    c.take_damage(10)

    cmd = HealCommand(c, 30)
    assert "Self" in cmd.description
    cmd.execute()

    assert c.stats.health == 100
    assert cmd.amount_healed == 10


def test_undo_restores_exact_previous_health() -> None:
    attacker = make_character("A", attack_power=100)
    target = make_character("T", health=50)
    invoker = CommandInvoker()

    invoker.execute(AttackCommand(attacker, target))
    assert target.stats.health == 0

    undone = invoker.undo_last(1)
    assert len(undone) == 1
    assert target.stats.health == 50
    assert invoker.history == ()
    assert not invoker.can_undo


def test_undo_several_steps_in_reverse_order() -> None:
    attacker = make_character("A", attack_power=10)
    target = make_character("T", health=100)
    invoker = CommandInvoker()

    first = AttackCommand(attacker, target)
    heal = HealCommand(target, 5)
    second = AttackCommand(attacker, target)
    for cmd in (first, heal, second):
        invoker.execute(cmd)
    assert target.stats.health == 100 - 12 + 5 - 12

    undone = invoker.undo_last(2)
    assert undone == [second, heal]
    assert target.stats.health == 88
    assert invoker.history == (first,)


def test_undo_more_than_history_undoes_everything() -> None:
    invoker = CommandInvoker()
    target = make_character("T")
    invoker.execute(AttackCommand(make_character("A"), target))
    assert len(invoker.undo_last(5)) == 1
    assert invoker.undo_last() == []
    assert target.stats.health == 100


def test_command_lifecycle_misuse_raises() -> None:
    cmd = AttackCommand(make_character("A"), make_character("T"))
    with pytest.raises(CommandError):
        cmd.undo()
    cmd.execute()
    with pytest.raises(CommandError):
        cmd.execute()


def test_invoker_keeps_history_in_order() -> None:
    invoker = CommandInvoker()
    a, t = make_character("A"), make_character("T")
    cmds = [AttackCommand(a, t), HealCommand(t), AttackCommand(a, t)]
    for c in cmds:
        invoker.execute(c)
    assert invoker.history == tuple(cmds)
    invoker.clear()
    assert invoker.history == ()


def test_command_kind() -> None:
    t = make_character("T")
    assert AttackCommand(make_character("A"), t).kind == "attack"
    assert HealCommand(t).kind == "heal"
