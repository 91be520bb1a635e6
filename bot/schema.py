"""
Decision contract between a player's decision source and the combat core.

An LLM (or any other text source) must answer with a JSON object carrying
string fields `action` and `target`, plus optional `reasoning`. Anything
else is an invalid decision.
"""

from __future__ import annotations

from dataclasses import dataclass

ACTIONS = ("attack", "heal")


class DecisionError(ValueError):
    """The decision source returned something that is not a usable Decision."""


@dataclass(frozen=True)
class Decision:
    action: str  # "attack" | "heal"
    target: str  # character name, matched case-insensitively
    reasoning: str = ""

    @classmethod
    def from_payload(cls, data: object) -> Decision:
        if not isinstance(data, dict):
            raise DecisionError(f"Expected a JSON object, got {type(data).__name__}")

        action = data.get("action")
        target = data.get("target")
        if not isinstance(action, str) or not action.strip():
            raise DecisionError(f"Missing or invalid 'action': {action!r}")
        if not isinstance(target, str) or not target.strip():
            raise DecisionError(f"Missing or invalid 'target': {target!r}")

        reasoning = data.get("reasoning")
        return cls(
            action=action.strip().lower(),
            target=target.strip(),
            reasoning=str(reasoning) if reasoning is not None else "",
        )
