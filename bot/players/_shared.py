"""
Shared prompt-building, response-parsing, and base class for LLM players.

MistralPlayer, HFPlayer and OpenAIPlayer inherit LLMPlayer from here and
only implement _call_api(messages) -> str.
"""

from __future__ import annotations

import logging
import time
import uuid
from abc import abstractmethod

from benchmark.types import TurnStat
from bot.parser import DecisionParser, fallback_command
from bot.player import Player
from bot.schema import DecisionError
from game.commands import HEAL_AMOUNT, GameCommand, HealCommand
from game.model import Character, CharacterType
from game.state import GameState

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0

_SYSTEM_PROMPT = """\
You control one character in a turn-based tactical RPG battle. Choose the best action each turn.
Respond ONLY with a single valid JSON object, no markdown and no text outside it.
"""

_ROLE_ADVICE: dict[CharacterType, str] = {
    CharacterType.WARRIOR: (
        "As a Warrior, you have high HP and attack power. "
        "Focus on protecting allies and eliminating threats."
    ),
    CharacterType.MAGE: (
        "As a Mage, you have powerful attacks but low HP. Stay alive and deal maximum damage."
    ),
    CharacterType.ARCHER: "As an Archer, focus on picking off weakened enemies from a distance.",
    CharacterType.ROGUE: "As a Rogue, use your agility to strike at the most vulnerable targets.",
}


def _pct(c: Character) -> float:
    return c.stats.health_fraction * 100


def _fmt_character(c: Character) -> str:
    return (
        f"  - {c.name} ({c.type}): {c.display_health}/{c.stats.max_health} HP "
        f"({_pct(c):.0f}%), {c.stats.attack_power} ATK, {c.stats.defense} DEF"
    )


def _fmt_team(characters: list[Character]) -> str:
    if not characters:
        return "  (none)"
    return "\n".join(_fmt_character(c) for c in characters)


def estimate_damage(attacker: Character, target: Character) -> int:
    raw = attacker.attack(target)
    return target.defense_strategy.calculate_damage_reduction(target, raw)


def build_prompt(
    self_character: Character,
    allies: list[Character],
    enemies: list[Character],
    game_state: GameState,
    heal_amount: int = HEAL_AMOUNT,
) -> str:
    me = self_character
    s = me.stats
    estimated = estimate_damage(me, enemies[0]) if enemies else 0
    advice = _ROLE_ADVICE.get(me.type, "Make strategic decisions based on the battle state.")

    lines: list[str] = []
    lines.append(
        f"Round {game_state.round_number}, turn {game_state.turn_number}. "
        f"You are {me.name}, a {me.type} in a tactical RPG combat."
    )
    lines.append("")
    lines.append("YOUR STATUS:")
    lines.append(f"- HP: {me.display_health}/{s.max_health} ({_pct(me):.0f}%)")
    lines.append(f"- Mana: {s.mana}/{s.max_mana}")
    lines.append(f"- Attack Power: {s.attack_power}, Defense: {s.defense}")
    lines.append(
        f"- Strategies: {me.attack_strategy.name} (attack), {me.defense_strategy.name} (defense)"
    )
    lines.append("")
    lines.append("YOUR TEAM (allies):")
    lines.append(_fmt_team(allies))
    lines.append("")
    lines.append("ENEMIES:")
    lines.append(_fmt_team(enemies))
    lines.append("")
    lines.append("AVAILABLE ACTIONS:")
    lines.append(f"1. attack <enemy_name> - Estimated damage against the first enemy: ~{estimated}")
    lines.append(f"2. heal <ally_name> - Restores {heal_amount} HP")
    lines.append("")
    lines.append("TACTICAL GUIDANCE:")
    lines.append("- Focus fire: attack wounded enemies to eliminate threats")
    lines.append("- Protect allies: heal teammates below 30% HP before they fall")
    lines.append(f"- Consider your role: {advice}")
    lines.append("")
    lines.append(
        "Respond ONLY with a JSON object of this shape:\n"
        '  {"action": "attack" | "heal", "target": "<character_name>", '
        '"reasoning": "<brief tactical explanation>"}'
    )
    return "\n".join(lines)


class LLMPlayer(Player):
    """Base class for players that ask a chat-completion model for decisions.

    Any failure (transport error, timeout, unparsable reply, missing field,
    unknown action) degrades to attacking the first enemy. Nothing raised
    by the model call ever reaches the controller.
    """

    def __init__(
        self,
        model_id: str,
        throttle_s: float = 0.0,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._model_id = model_id
        self._name = f"{model_id}-{uuid.uuid4().hex[:6]}"
        self._parser = DecisionParser()
        self._turn_stats: list[TurnStat] = []
        self._throttle_s = throttle_s
        self._timeout_s = timeout_s
        self._last_call_end: float = 0.0

    @property
    def name(self) -> str:
        return self._name

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def turn_stats(self) -> list[TurnStat]:
        return self._turn_stats

    @abstractmethod
    def _call_api(self, messages: list[dict]) -> str:
        """Call the model and return the raw text response."""
        ...

    def _build_messages(self, prompt: str) -> list[dict]:
        return [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]

    def _throttle(self) -> None:
        if self._throttle_s > 0:
            wait = self._throttle_s - (time.perf_counter() - self._last_call_end)
            if wait > 0:
                time.sleep(wait)

    def decide_action(
        self,
        self_character: Character,
        allies: list[Character],
        enemies: list[Character],
        game_state: GameState,
    ) -> GameCommand:
        prompt = build_prompt(self_character, allies, enemies, game_state)
        messages = self._build_messages(prompt)
        logger.debug("[%s] Prompt for %s:\n%s", self._model_id, self_character.name, prompt)

        self._throttle()
        used_fallback = False
        reasoning = ""
        decision_ms = 0.0
        t0 = time.perf_counter()
        try:
            raw = self._call_api(messages)
            decision_ms = (time.perf_counter() - t0) * 1000
            logger.debug("[%s] Response: %s", self._model_id, raw)
            decision = self._parser.parse_text(raw)
            command = self._parser.to_command(decision, self_character, allies, enemies)
            reasoning = decision.reasoning
            if reasoning:
                logger.info("[%s] %s reasoning: %s", self._model_id, self_character.name, reasoning)
        except DecisionError as e:
            logger.warning("[%s] Invalid decision (%s), attacking first enemy.", self._model_id, e)
            command = fallback_command(self_character, enemies)
            used_fallback = True
        except Exception as e:
            logger.warning(
                "[%s] Model call failed (%s: %s), attacking first enemy.",
                self._model_id,
                type(e).__name__,
                e,
            )
            command = fallback_command(self_character, enemies)
            used_fallback = True
        finally:
            self._last_call_end = time.perf_counter()

        self._turn_stats.append(
            TurnStat(
                match_id=game_state.match_id,
                turn=game_state.turn_number,
                player=self._name,
                character=self_character.name,
                decision_ms=decision_ms,
                used_fallback=used_fallback,
                action="heal" if isinstance(command, HealCommand) else "attack",
                target=command.target.name,
                reasoning=reasoning,
            )
        )

        logger.debug("[%s] Chose: %s", self._model_id, command)
        return command


