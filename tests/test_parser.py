from __future__ import annotations

import pytest

from bot.parser import DecisionParser, fallback_command, find_character
from bot.schema import Decision, DecisionError
from game.commands import AttackCommand, HealCommand
from tests.helpers import make_character


@pytest.fixture
def parser() -> DecisionParser:
    return DecisionParser()


def test_parse_strict_json(parser: DecisionParser) -> None:
    d = parser.parse_text('{"action": "Attack", "target": "Enemy", "reasoning": "focus"}')
    assert d == Decision(action="attack", target="Enemy", reasoning="focus")


def test_parse_json_wrapped_in_markdown(parser: DecisionParser) -> None:
    raw = 'Sure!\n```json\n{"action": "heal", "target": "Self"}\n```'
    d = parser.parse_text(raw)
    assert d.action == "heal"
    assert d.target == "Self"
    assert d.reasoning == ""


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "attack the orc",
        "{not json}",
        "[1, 2]",
        '{"target": "Enemy"}',
        '{"action": "attack"}',
        '{"action": null, "target": "Enemy"}',
        '{"action": "attack", "target": 7}',
        '{"action": "  ", "target": "Enemy"}',
    ],
)
def test_malformed_responses_raise(parser: DecisionParser, raw: str) -> None:
    with pytest.raises(DecisionError):
        parser.parse_text(raw)


def test_find_character_is_case_insensitive() -> None:
    enemy = make_character("Enemy")
    other = make_character("Other")
    assert find_character("enemy", [other, enemy]) is enemy
    assert find_character("  OTHER ", [other, enemy]) is other


def test_find_character_falls_back_to_first_candidate() -> None:
    a, b = make_character("A"), make_character("B")
    assert find_character("Nobody", [a, b]) is a


def test_to_command_attack_targets_enemies(parser: DecisionParser) -> None:
    me = make_character("Self")
    enemy = make_character("Enemy")
    cmd = parser.to_command(Decision("attack", "enemy"), me, [me], [enemy])
    assert isinstance(cmd, AttackCommand)
    assert cmd.attacker is me
    assert cmd.target is enemy


def test_to_command_heal_targets_allies(parser: DecisionParser) -> None:
    me = make_character("Self")
    ally = make_character("Ally")
    cmd = parser.to_command(Decision("heal", "ALLY"), me, [me, ally], [make_character("Enemy")])
    assert isinstance(cmd, HealCommand)
    assert cmd.target is ally
    assert cmd.amount == 30


def test_heal_never_resolves_to_an_enemy(parser: DecisionParser) -> None:
    me = make_character("Self")
    cmd = parser.to_command(Decision("heal", "Enemy"), me, [me], [make_character("Enemy")])
    assert cmd.target is me


def test_to_command_rejects_unknown_action(parser: DecisionParser) -> None:
    me = make_character("Self")
    with pytest.raises(DecisionError, match="Unknown action"):
        parser.to_command(Decision("flee", "Enemy"), me, [me], [make_character("Enemy")])


def test_fallback_attacks_first_enemy() -> None:
    me = make_character("Self")
    first, second = make_character("First"), make_character("Second")
    cmd = fallback_command(me, [first, second])
    assert isinstance(cmd, AttackCommand)
    assert cmd.target is first
