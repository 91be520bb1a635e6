"""HumanPlayer: asks the operator for each decision on the console."""

from __future__ import annotations

import logging
from collections.abc import Callable

from bot.parser import DecisionParser, fallback_command
from bot.player import Player
from bot.schema import ACTIONS, Decision, DecisionError
from game.commands import GameCommand
from game.model import Character
from game.state import GameState

logger = logging.getLogger(__name__)

_HELP = "Enter 'attack <name>', 'heal <name>', or a number from the list."


class HumanPlayer(Player):
    """Reads `attack <name>` / `heal <name>` or a menu number.

    Unknown input re-prompts. End of input falls back to attacking the
    first enemy so an unattended run still finishes.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output_fn
        self._parser = DecisionParser()

    def decide_action(
        self,
        self_character: Character,
        allies: list[Character],
        enemies: list[Character],
        game_state: GameState,
    ) -> GameCommand:
        options: list[Decision] = [Decision("attack", e.name) for e in enemies] + [
            Decision("heal", a.name) for a in allies
        ]

        self._output(f"\n{self_character.name}, choose your action:")
        for i, opt in enumerate(options, start=1):
            self._output(f"  {i}. {opt.action} {opt.target}")

        while True:
            try:
                line = self._input("> ")
            except EOFError:
                logger.warning("No input for %s, attacking first enemy.", self_character.name)
                return fallback_command(self_character, enemies)

            try:
                decision = self._read(line, options)
                return self._parser.to_command(decision, self_character, allies, enemies)
            except DecisionError as e:
                self._output(f"{e}. {_HELP}")

    def _read(self, line: str, options: list[Decision]) -> Decision:
        text = line.strip()
        if text.isdigit():
            idx = int(text) - 1
            if 0 <= idx < len(options):
                return options[idx]
            raise DecisionError(f"No option {text}")

        action, _, target = text.partition(" ")
        if action.lower() not in ACTIONS or not target.strip():
            raise DecisionError(f"Unrecognized command '{text}'")
        return Decision(action.lower(), target.strip())
