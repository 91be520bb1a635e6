"""
DecisionParser: converts raw model text into a GameCommand.

Target names that match nobody are not errors: they resolve to the first
candidate. Everything else that goes wrong (no JSON, missing fields,
unknown action) raises DecisionError so the caller can fall back.
"""

from __future__ import annotations

import json
import logging
import re

from bot.schema import Decision, DecisionError
from game.commands import HEAL_AMOUNT, AttackCommand, GameCommand, HealCommand
from game.model import Character

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def find_character(name: str, candidates: list[Character]) -> Character:
    """Case-insensitive exact match, else the first candidate."""
    wanted = name.strip().casefold()
    for c in candidates:
        if c.name.casefold() == wanted:
            return c
    logger.debug(
        "No character named '%s' in %s, using %s.",
        name,
        [c.name for c in candidates],
        candidates[0].name,
    )
    return candidates[0]


def fallback_command(self_character: Character, enemies: list[Character]) -> GameCommand:
    """The safe default: attack the first enemy."""
    return AttackCommand(self_character, enemies[0])


class DecisionParser:
    def __init__(self, heal_amount: int = HEAL_AMOUNT) -> None:
        self._heal_amount = heal_amount

    def parse_text(self, raw: str | None) -> Decision:
        """Parse a model response into a Decision.

        Tries strict JSON first, then the outermost {...} block for replies
        wrapped in markdown fences or surrounded by prose.
        """
        if not raw or not raw.strip():
            raise DecisionError("Empty response")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            m = _JSON_OBJECT.search(raw)
            if not m:
                raise DecisionError("No JSON object found in response") from None
            try:
                data = json.loads(m.group())
            except json.JSONDecodeError as e:
                raise DecisionError(f"Could not parse extracted JSON: {e}") from None
        return Decision.from_payload(data)

    def to_command(
        self,
        decision: Decision,
        self_character: Character,
        allies: list[Character],
        enemies: list[Character],
    ) -> GameCommand:
        if decision.action == "attack":
            return AttackCommand(self_character, find_character(decision.target, enemies))
        if decision.action == "heal":
            pool = allies or [self_character]
            return HealCommand(find_character(decision.target, pool), self._heal_amount)
        raise DecisionError(f"Unknown action '{decision.action}'")
