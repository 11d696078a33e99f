"""Cohere v2 chat adapter."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from rotation_proxy.core.provider.adapters.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    HttpProviderAdapter,
)
from rotation_proxy.core.settings import ChatMessage, LlmSettings

COHERE_BASE_URL = "https://api.cohere.com/v2"


class CohereAdapter(HttpProviderAdapter):
    name = "cohere"

    def __init__(self, client: httpx.AsyncClient, base_url: str = COHERE_BASE_URL) -> None:
        super().__init__(client)
        self.base_url = base_url.rstrip("/")

    def build_payload(
        self, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> dict[str, Any]:
        return {
            "model": settings.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": settings.temperature
            if settings.temperature is not None
            else DEFAULT_TEMPERATURE,
            "max_tokens": settings.max_tokens or DEFAULT_MAX_TOKENS,
        }

    async def __call__(
        self, api_key: str, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> str:
        data = await self._post_json(
            f"{self.base_url}/chat",
            headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
            payload=self.build_payload(settings, messages),
        )
        content = (data.get("message") or {}).get("content") or []
        return "\n".join(part.get("text", "") for part in content if isinstance(part, dict))
