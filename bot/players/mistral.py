"""
MistralPlayer: calls the Mistral API each turn to choose an action.

Reads MISTRAL_API_KEY from the environment (loaded via load_dotenv() in main.py).
Falls back to attacking the first enemy on any API or parsing failure.
"""

from __future__ import annotations

import logging
import os
import time

from mistralai import Mistral
from mistralai.models import SDKError

from bot.players._shared import DEFAULT_TIMEOUT_S, LLMPlayer

logger = logging.getLogger(__name__)

_RETRY_DELAYS = [5, 15, 30]  # seconds between retries on 429


class MistralPlayer(LLMPlayer):
    def __init__(
        self,
        model_id: str,
        throttle_s: float = 1.0,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        retry_delays: list[int] | None = None,
    ) -> None:
        super().__init__(model_id, throttle_s=throttle_s, timeout_s=timeout_s)
        self._retry_delays = _RETRY_DELAYS if retry_delays is None else retry_delays
        self._client = self._new_client()

    def _new_client(self) -> Mistral:
        return Mistral(
            api_key=os.environ["MISTRAL_API_KEY"],
            timeout_ms=int(self._timeout_s * 1000),
        )

    def _call_api(self, messages: list[dict]) -> str:
        for attempt, delay in enumerate([0] + self._retry_delays):
            if delay:
                logger.warning(
                    "[%s] Rate limited, retrying in %ds (attempt %d/%d).",
                    self._model_id,
                    delay,
                    attempt,
                    len(self._retry_delays),
                )
                time.sleep(delay)
            try:
                r = self._client.chat.complete(
                    model=self._model_id,
                    messages=messages,
                    response_format={"type": "json_object"},
                    max_tokens=200,
                )
                return r.choices[0].message.content or ""
            except (OSError, AttributeError):
                # Stale connection pool; rebuild the client and let the caller fall back.
                self._client = self._new_client()
                raise
            except SDKError as e:
                if e.status_code != 429:
                    raise
        raise RuntimeError(f"Rate limit exceeded after {len(self._retry_delays)} retries")
