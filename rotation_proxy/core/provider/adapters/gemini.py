"""Google Gemini adapter (Generative Language REST API)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from rotation_proxy.core.exceptions import ProviderCallError
from rotation_proxy.core.provider.adapters.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    HttpProviderAdapter,
)
from rotation_proxy.core.settings import ChatMessage, LlmSettings

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

THINKING_BUDGET_MODELS = frozenset(
    {
        "gemini-2.5-pro",
        "gemini-2.5-pro-preview-05-06",
        "gemini-2.5-flash-preview-04-17",
    }
)
THINKING_BUDGET = 24576


def to_gemini_contents(messages: Sequence[ChatMessage]) -> list[dict[str, Any]]:
    """Map chat messages onto Gemini's two-role content list.

    Gemini only knows ``user`` and ``model``; system prompts are sent as
    user turns.
    """
    return [
        {
            "role": "model" if m.role == "assistant" else "user",
            "parts": [{"text": m.content}],
        }
        for m in messages
    ]


class GeminiAdapter(HttpProviderAdapter):
    name = "gemini"

    def __init__(self, client: httpx.AsyncClient, base_url: str = GEMINI_BASE_URL) -> None:
        super().__init__(client)
        self.base_url = base_url.rstrip("/")

    def build_payload(
        self, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> dict[str, Any]:
        generation_config: dict[str, Any] = {
            "temperature": settings.temperature
            if settings.temperature is not None
            else DEFAULT_TEMPERATURE,
            "topP": settings.top_p if settings.top_p is not None else DEFAULT_TOP_P,
            "maxOutputTokens": settings.max_tokens or DEFAULT_MAX_TOKENS,
        }
        if settings.model in THINKING_BUDGET_MODELS:
            generation_config["thinkingConfig"] = {"thinkingBudget": THINKING_BUDGET}
        return {
            "contents": to_gemini_contents(messages),
            "generationConfig": generation_config,
        }

    async def __call__(
        self, api_key: str, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> str:
        data = await self._post_json(
            f"{self.base_url}/models/{settings.model}:generateContent",
            headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
            payload=self.build_payload(settings, messages),
        )
        if not isinstance(data, dict):
            raise self._unexpected(data)

        candidates = data.get("candidates")
        candidate = candidates[0] if isinstance(candidates, list) and candidates else {}
        if not isinstance(candidate, dict):
            raise self._unexpected(data)
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(p.get("text") or "" for p in parts if isinstance(p, dict))
        if text:
            return text

        finish_reason = candidate.get("finishReason")
        if finish_reason == "STOP":
            return ""
        # Truncated (MAX_TOKENS) or blocked output counts as a failed attempt
        reason = finish_reason or (data.get("promptFeedback") or {}).get("blockReason") or "none"
        raise ProviderCallError(f"Gemini returned no text (finish reason: {reason})")
