"""
GameController: runs a two-team match to completion.

Each round team 1's living members act in list order, then team 2's. A
character that is already down is skipped without consuming a turn. The
game-over check runs after every single action, so a match can end in the
middle of a round.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING

from benchmark.types import ActionRecord, CharacterSummary, MatchResult
from game.commands import CommandInvoker, GameCommand
from game.model import Character
from game.state import GameState

if TYPE_CHECKING:
    from bot.player import Player

logger = logging.getLogger(__name__)

_RULE = "=" * 60


class Phase(Enum):
    NOT_STARTED = "not_started"
    IN_ROUND = "in_round"
    TEAM_OVER = "team_over"
    ROUND_LIMIT = "round_limit"


def _player_label(player: Player | None) -> str:
    if player is None:
        return "(no player)"
    return f"{player.__class__.__name__} [{player.name}]"


class GameController:
    def __init__(
        self,
        team1: list[Character],
        team2: list[Character],
        player_map: Mapping[Character, Player],
        invoker: CommandInvoker | None = None,
        max_rounds: int | None = None,
        match_id: str | None = None,
        verbose: bool = True,
    ) -> None:
        self._team1 = list(team1)
        self._team2 = list(team2)
        self._player_map = dict(player_map)
        self._invoker = invoker or CommandInvoker()
        self._max_rounds = max_rounds
        self._match_id = match_id or uuid.uuid4().hex[:8]
        self._verbose = verbose
        self._game_state = GameState.initial(self._match_id)
        self._phase = Phase.NOT_STARTED
        self._actions: list[ActionRecord] = []

    @property
    def game_state(self) -> GameState:
        return self._game_state

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def invoker(self) -> CommandInvoker:
        return self._invoker

    @property
    def actions(self) -> list[ActionRecord]:
        return list(self._actions)

    @property
    def match_id(self) -> str:
        return self._match_id

    # ── Turn loop ────────────────────────────────────────────────────────────

    def play_game(self) -> MatchResult:
        """Run rounds until one team is defeated (or the round cap is hit)."""
        self._say(_RULE)
        self._say("AI-POWERED RPG GAME")
        self._say(_RULE)
        self.display_team_setup()

        logger.info(
            "Match %s: %s vs %s",
            self._match_id,
            [c.name for c in self._team1],
            [c.name for c in self._team2],
        )

        self._phase = Phase.IN_ROUND
        while not self.is_game_over():
            if self._max_rounds is not None and self._game_state.round_number > self._max_rounds:
                logger.warning(
                    "Match %s hit the %d-round cap, ending as a draw.",
                    self._match_id,
                    self._max_rounds,
                )
                self._phase = Phase.ROUND_LIMIT
                break

            self._say(f"\n{_RULE}")
            self._say(
                f"TURN {self._game_state.turn_number} - ROUND {self._game_state.round_number}"
            )
            self._say(_RULE)

            if self._play_team(1, self._team1, self._team2):
                break
            if self._play_team(2, self._team2, self._team1):
                break

            self.display_round_summary()
            self._game_state = self._game_state.next_round()

        if self._phase is Phase.IN_ROUND:
            self._phase = Phase.TEAM_OVER
        result = self.result()
        logger.info(
            "Match %s over: winner=%s rounds=%d turns=%d",
            self._match_id,
            result.winner,
            result.n_rounds,
            result.n_turns,
        )
        return result

    def _play_team(self, team_no: int, team: list[Character], opponents: list[Character]) -> bool:
        """Give every living member one turn. True once the game is over."""
        for character in team:
            if not character.is_alive:
                continue
            self.process_turn(character, team, opponents, team_no=team_no)
            if self.is_game_over():
                return True
        return False

    def process_turn(
        self,
        character: Character,
        allies: list[Character],
        enemies: list[Character],
        team_no: int | None = None,
    ) -> GameCommand | None:
        if not character.is_alive:
            return None

        self._say(f"\n{character.name}'s turn...")

        player = self._player_map.get(character)
        if player is None:
            logger.error("No player found for %s, skipping turn.", character.name)
            return None

        living_allies = [c for c in allies if c.is_alive]
        living_enemies = [c for c in enemies if c.is_alive]

        command = player.decide_action(character, living_allies, living_enemies, self._game_state)
        if command is None:
            logger.error("%s returned no command for %s, skipping turn.", player.name, character.name)
            return None

        self._invoker.execute(command)
        self._say(f"  {command.description}")

        self._actions.append(
            ActionRecord(
                match_id=self._match_id,
                round=self._game_state.round_number,
                turn=self._game_state.turn_number,
                actor=character.name,
                team=team_no if team_no is not None else self._team_of(character),
                kind=command.kind,
                target=command.target.name,
                target_team=self._team_of(command.target),
                description=command.description,
                target_hp_after=command.target.display_health,
            )
        )

        self._game_state = self._game_state.next_turn().with_undo(
            True, len(self._invoker.history)
        )
        return command

    def undo_last(self, n: int = 1) -> list[GameCommand]:
        undone = self._invoker.undo_last(n)
        if undone:
            del self._actions[-len(undone):]
        history = len(self._invoker.history)
        self._game_state = self._game_state.with_undo(history > 0, history)
        for command in undone:
            logger.info("Undone: %s", command.description)
        return undone

    # ── Outcome ──────────────────────────────────────────────────────────────

    @staticmethod
    def _any_alive(team: list[Character]) -> bool:
        return any(c.is_alive for c in team)

    def is_game_over(self) -> bool:
        return not self._any_alive(self._team1) or not self._any_alive(self._team2)

    def winner(self) -> int | None:
        """1 or 2 once a team is wiped out, None while both still stand."""
        if not self._any_alive(self._team2):
            return 1
        if not self._any_alive(self._team1):
            return 2
        return None

    def _team_of(self, character: Character) -> int:
        return 1 if any(c is character for c in self._team1) else 2

    def result(self) -> MatchResult:
        characters = [
            CharacterSummary(
                name=c.name,
                type=c.type.value,
                team=team_no,
                player=self._player_map[c].name if c in self._player_map else "",
                health=c.display_health,
                max_health=c.stats.max_health,
                alive=c.is_alive,
            )
            for team_no, team in ((1, self._team1), (2, self._team2))
            for c in team
        ]
        n_rounds = self._game_state.round_number
        if self._max_rounds is not None:
            n_rounds = min(n_rounds, self._max_rounds)
        return MatchResult(
            match_id=self._match_id,
            winner=self.winner(),
            n_rounds=n_rounds,
            n_turns=self._game_state.turns_played,
            n_commands=self._game_state.command_history_size,
            timestamp=time.time(),
            characters=characters,
            actions=list(self._actions),
        )

    # ── Console output ───────────────────────────────────────────────────────

    def _say(self, text: str) -> None:
        if self._verbose:
            print(text)

    def display_team_setup(self) -> None:
        self._say("\n=== Team Setup ===")
        for label, team in (("Team 1", self._team1), ("Team 2", self._team2)):
            self._say(f"{label}:")
            for c in team:
                self._say(f"  - {c.name} ({c.type}) - {_player_label(self._player_map.get(c))}")
            self._say("")

    def display_round_summary(self) -> None:
        self._say(f"\n--- End of Round {self._game_state.round_number} ---")
        for label, team in (("Team 1", self._team1), ("Team 2", self._team2)):
            self._say(f"\n{label} Status:")
            for c in team:
                status = (
                    f"{c.stats.health}/{c.stats.max_health} HP" if c.is_alive else "DEFEATED"
                )
                self._say(f"  {c.name}: {status}")

    def display_result(self) -> None:
        self._say(f"\n{_RULE}")
        self._say("GAME OVER")
        self._say(_RULE)

        winner = self.winner()
        if winner is None:
            self._say("Draw - round limit reached.")
        else:
            self._say(f"Team {winner} wins!")

        self._say("\nFinal Status:")
        for label, team in (("Team 1", self._team1), ("Team 2", self._team2)):
            self._say(f"\n{label}:")
            for c in team:
                status = "Alive" if c.is_alive else "Defeated"
                self._say(f"  {c.name} ({c.type}): {c.display_health} HP - {status}")

        self._say(f"\nTotal turns played: {self._game_state.turns_played}")
        self._say(f"Total commands executed: {self._game_state.command_history_size}")
