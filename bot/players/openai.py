"""
OpenAIPlayer: any OpenAI-compatible /chat/completions endpoint over plain HTTP.

Works against api.openai.com or a local server exposing the same API
(vLLM, llama.cpp, Ollama). Reads OPENAI_API_KEY and, optionally,
OPENAI_BASE_URL from the environment.
"""

from __future__ import annotations

import logging
import os

import requests

from bot.players._shared import DEFAULT_TIMEOUT_S, LLMPlayer

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIPlayer(LLMPlayer):
    def __init__(
        self,
        model_id: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        base_url: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(model_id, timeout_s=timeout_s)
        self._api_key = os.environ["OPENAI_API_KEY"]
        self._base_url = (base_url or os.environ.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self._owns_session = session is None
        self._session = session or requests.Session()

    def _call_api(self, messages: list[dict]) -> str:
        resp = self._session.post(
            f"{self._base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self._api_key}"},
            json={
                "model": self._model_id,
                "messages": messages,
                "response_format": {"type": "json_object"},
                "max_tokens": 200,
            },
            timeout=self._timeout_s,
        )
        resp.raise_for_status()
        data = resp.json()
        return data["choices"][0]["message"]["content"] or ""

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
