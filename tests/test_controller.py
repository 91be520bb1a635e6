from __future__ import annotations

import logging

from bot.players.random import RandomPlayer
from bot.players.rule_based import RuleBasedPlayer
from game.controller import GameController, Phase
from game.factory import CharacterFactory
from game.model import CharacterType
from tests.helpers import FirstEnemyPlayer, NoCommandPlayer, make_character


def _duel():
    """Warrior (100 HP, 36 dmg/hit) vs Archer (50 HP, 12 dmg/hit)."""
    warrior = make_character("Warrior", health=100, attack_power=30)
    archer = make_character(
        "Archer", health=50, attack_power=10, character_type=CharacterType.ARCHER
    )
    return warrior, archer


def test_warrior_beats_archer_and_loop_halts_mid_round() -> None:
    warrior, archer = _duel()
    p1, p2 = FirstEnemyPlayer(), FirstEnemyPlayer()
    controller = GameController([warrior], [archer], {warrior: p1, archer: p2}, verbose=False)

    result = controller.play_game()

    assert result.winner == 1
    assert controller.winner() == 1
    assert controller.phase is Phase.TEAM_OVER
    assert archer.stats.health == 0
    assert warrior.stats.health == 100 - 12
    # Round 2: Warrior acts first and finishes the Archer, who never gets a turn.
    assert p1.calls == [("Warrior", 1), ("Warrior", 2)]
    assert p2.calls == [("Archer", 1)]
    assert result.n_rounds == 2
    assert result.n_turns == 3
    assert result.n_commands == 3
    assert len(controller.invoker.history) == 3


def test_turn_order_is_team1_then_team2_in_list_order() -> None:
    a1, a2 = make_character("A1", health=500), make_character("A2", health=500)
    b1, b2 = make_character("B1", health=500), make_character("B2", health=500)
    player = FirstEnemyPlayer()
    controller = GameController(
        [a1, a2], [b1, b2], {c: player for c in (a1, a2, b1, b2)}, max_rounds=2, verbose=False
    )

    controller.play_game()

    assert [name for name, _ in player.calls] == ["A1", "A2", "B1", "B2"] * 2


def test_defeated_characters_are_skipped_without_consuming_a_turn() -> None:
    a = make_character("A", health=500)
    b_dead = make_character("BDead", health=10)
    b_dead.take_damage(10)
    b_alive = make_character("BAlive", health=500)
    player = FirstEnemyPlayer()
    controller = GameController(
        [a], [b_dead, b_alive], {a: player, b_dead: player, b_alive: player},
        max_rounds=1, verbose=False,
    )

    controller.play_game()

    assert [name for name, _ in player.calls] == ["A", "BAlive"]
    assert controller.game_state.turns_played == 2


def test_players_only_see_living_characters() -> None:
    a = make_character("A", health=500)
    b_dead = make_character("BDead", health=10)
    b_dead.take_damage(10)
    b_alive = make_character("BAlive", health=100)
    player = FirstEnemyPlayer()
    controller = GameController(
        [a], [b_dead, b_alive], {a: player, b_alive: player}, max_rounds=1, verbose=False
    )

    command = controller.process_turn(a, [a], [b_dead, b_alive])

    assert command is not None
    assert command.target is b_alive


def test_missing_player_skips_turn(caplog) -> None:
    a = make_character("A", health=500)
    b = make_character("B", health=500)
    controller = GameController([a], [b], {b: FirstEnemyPlayer()}, max_rounds=1, verbose=False)

    with caplog.at_level(logging.ERROR, logger="game.controller"):
        controller.play_game()

    assert "No player found for A" in caplog.text
    assert len(controller.invoker.history) == 1
    assert b.stats.health == 500


def test_null_command_skips_turn(caplog) -> None:
    a = make_character("A", health=500)
    b = make_character("B", health=500)
    controller = GameController(
        [a], [b], {a: NoCommandPlayer(), b: FirstEnemyPlayer()}, max_rounds=1, verbose=False
    )

    with caplog.at_level(logging.ERROR, logger="game.controller"):
        controller.play_game()

    assert "returned no command" in caplog.text
    assert len(controller.invoker.history) == 1


def test_round_cap_ends_in_a_draw() -> None:
    a = make_character("A", health=10_000)
    b = make_character("B", health=10_000)
    player = FirstEnemyPlayer()
    controller = GameController([a], [b], {a: player, b: player}, max_rounds=3, verbose=False)

    result = controller.play_game()

    assert result.winner is None
    assert result.n_rounds == 3
    assert controller.phase is Phase.ROUND_LIMIT
    assert len(player.calls) == 6


def test_team_with_positive_damage_always_finishes() -> None:
    team1 = [CharacterFactory.create_warrior("Conan"), CharacterFactory.create_mage("Gandalf")]
    team2 = [CharacterFactory.create_archer("Legolas"), CharacterFactory.create_rogue("Shadow")]
    players = {c: RuleBasedPlayer() for c in team1}
    players.update({c: RandomPlayer(seed=3) for c in team2})
    controller = GameController(team1, team2, players, verbose=False)

    result = controller.play_game()

    assert result.winner in (1, 2)
    assert controller.is_game_over()
    losers = team2 if result.winner == 1 else team1
    assert all(not c.is_alive for c in losers)


def test_both_teams_wiped_reports_team1() -> None:
    a, b = make_character("A"), make_character("B")
    controller = GameController([a], [b], {}, verbose=False)
    a.take_damage(1000)
    b.take_damage(1000)
    assert controller.is_game_over()
    assert controller.winner() == 1


def test_game_state_tracks_turns_and_undo() -> None:
    a = make_character("A", health=500)
    b = make_character("B", health=500)
    player = FirstEnemyPlayer()
    controller = GameController([a], [b], {a: player, b: player}, max_rounds=1, verbose=False)

    controller.play_game()
    state = controller.game_state
    assert state.can_undo is True
    assert state.command_history_size == 2
    assert state.turn_number == 3

    undone = controller.undo_last(1)
    assert [c.target for c in undone] == [a]
    assert a.stats.health == 500
    assert controller.game_state.command_history_size == 1

    controller.undo_last(5)
    assert b.stats.health == 500
    assert controller.game_state.can_undo is False


def test_actions_are_recorded() -> None:
    warrior, archer = _duel()
    player = FirstEnemyPlayer()
    controller = GameController([warrior], [archer], {warrior: player, archer: player}, verbose=False)

    result = controller.play_game()

    assert [(a.actor, a.team, a.target) for a in result.actions] == [
        ("Warrior", 1, "Archer"),
        ("Archer", 2, "Warrior"),
        ("Warrior", 1, "Archer"),
    ]
    assert [a.target_hp_after for a in result.actions] == [14, 88, 0]
    assert {c.name: c.alive for c in result.characters} == {"Warrior": True, "Archer": False}


def test_console_output(capsys) -> None:
    warrior, archer = _duel()
    player = FirstEnemyPlayer()
    controller = GameController([warrior], [archer], {warrior: player, archer: player})

    controller.play_game()
    controller.display_result()
    out = capsys.readouterr().out

    assert "=== Team Setup ===" in out
    assert "Warrior (WARRIOR) - FirstEnemyPlayer" in out
    assert "End of Round 1" in out
    assert "Team 1 wins!" in out
    assert "Archer (ARCHER): 0 HP - Defeated" in out
    assert "Total turns played: 3" in out
    assert "Total commands executed: 3" in out


def test_undo_drops_the_matching_action_records() -> None:
    a = make_character("A", health=500)
    b = make_character("B", health=500)
    player = FirstEnemyPlayer()
    controller = GameController([a], [b], {a: player, b: player}, max_rounds=2, verbose=False)
    controller.play_game()
    assert len(controller.actions) == 4

    controller.undo_last(1)
    result = controller.result()
    assert len(result.actions) == result.n_commands == 3
    assert result.actions[-1].target_hp_after == b.stats.health

    controller.undo_last(10)
    result = controller.result()
    assert result.actions == []
    assert result.n_commands == 0
    assert (a.stats.health, b.stats.health) == (500, 500)


def test_action_records_carry_the_target_team_for_shared_names() -> None:
    hero = make_character("Conan", health=500)
    villain = make_character("Conan", health=500)
    player = FirstEnemyPlayer()
    controller = GameController(
        [hero], [villain], {hero: player, villain: player}, max_rounds=1, verbose=False
    )

    result = controller.play_game()

    assert [(a.team, a.target_team) for a in result.actions] == [(1, 2), (2, 1)]
