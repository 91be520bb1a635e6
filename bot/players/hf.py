"""
HFPlayer: calls the Hugging Face Inference API each turn to choose an action.

Uses the chat-completion endpoint so any instruction-tuned model served by
the Inference API (or a dedicated endpoint) can drive a character.
Reads HF_TOKEN from the environment when set.
"""

from __future__ import annotations

import logging
import os

from huggingface_hub import InferenceClient

from bot.players._shared import DEFAULT_TIMEOUT_S, LLMPlayer

logger = logging.getLogger(__name__)


class HFPlayer(LLMPlayer):
    def __init__(self, model_id: str, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        super().__init__(model_id, timeout_s=timeout_s)
        self._client = InferenceClient(
            model=model_id,
            token=os.environ.get("HF_TOKEN"),
            timeout=timeout_s,
        )

    def _call_api(self, messages: list[dict]) -> str:
        out = self._client.chat_completion(messages=messages, max_tokens=200)
        raw = (out.choices[0].message.content or "").strip()
        logger.debug("[%s] raw='%s'", self._model_id, raw[:300])
        return raw
