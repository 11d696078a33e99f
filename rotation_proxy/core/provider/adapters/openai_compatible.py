"""Adapters for providers exposing an OpenAI-style /chat/completions endpoint."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from rotation_proxy.core.provider.adapters.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_SITE_NAME,
    DEFAULT_SITE_URL,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    HttpProviderAdapter,
)
from rotation_proxy.core.settings import ChatMessage, LlmSettings

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
REQUESTY_BASE_URL = "https://router.requesty.ai/v1"
CHUTES_BASE_URL = "https://llm.chutes.ai/v1"
NVIDIA_BASE_URL = "https://integrate.api.nvidia.com/v1"
MISTRAL_BASE_URL = "https://api.mistral.ai/v1"

NEMOTRON_THINKING_MODELS = frozenset(
    {
        "nvidia/llama-3.1-nemotron-ultra-253b-v1",
        "nvidia/llama-3.3-nemotron-super-49b-v1",
    }
)
NVIDIA_QWEN_THINKING_MODEL = "qwen/qwen3-235b-a22b"


class OpenAICompatibleAdapter(HttpProviderAdapter):
    """Bearer-token chat completions against an OpenAI-compatible base URL."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        name: str,
        base_url: str,
        send_site_headers: bool = False,
        default_max_tokens: int = DEFAULT_MAX_TOKENS,
        send_top_p: bool = True,
    ) -> None:
        super().__init__(client)
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.send_site_headers = send_site_headers
        self.default_max_tokens = default_max_tokens
        self.send_top_p = send_top_p

    def build_headers(self, api_key: str, settings: LlmSettings) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if self.send_site_headers:
            # OpenRouter-style attribution headers
            headers["HTTP-Referer"] = settings.site_url or DEFAULT_SITE_URL
            headers["X-Title"] = settings.site_name or DEFAULT_SITE_NAME
        return headers

    def prepare_messages(
        self, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> list[dict[str, str]]:
        return [m.to_dict() for m in messages]

    def build_payload(
        self, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": settings.model,
            "messages": self.prepare_messages(settings, messages),
            "temperature": settings.temperature
            if settings.temperature is not None
            else DEFAULT_TEMPERATURE,
            "max_tokens": settings.max_tokens or self.default_max_tokens,
            "stream": False,
        }
        if self.send_top_p:
            payload["top_p"] = settings.top_p if settings.top_p is not None else DEFAULT_TOP_P
        return payload

    async def __call__(
        self, api_key: str, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> str:
        data = await self._post_json(
            f"{self.base_url}/chat/completions",
            headers=self.build_headers(api_key, settings),
            payload=self.build_payload(settings, messages),
        )
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise self._unexpected(data) from None
        return content or ""


class NvidiaAdapter(OpenAICompatibleAdapter):
    """NVIDIA NIM with per-model reasoning switches.

    Nemotron reasoning models need a ``detailed thinking on`` system prompt;
    Qwen3 235B enables thinking through ``chat_template_kwargs``.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        super().__init__(client, name="nvidia", base_url=NVIDIA_BASE_URL)

    def prepare_messages(
        self, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> list[dict[str, str]]:
        prepared = super().prepare_messages(settings, messages)
        if settings.model in NEMOTRON_THINKING_MODELS:
            prepared.insert(0, {"role": "system", "content": "detailed thinking on"})
        return prepared

    def build_payload(
        self, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> dict[str, Any]:
        payload = super().build_payload(settings, messages)
        if settings.model.lower() == NVIDIA_QWEN_THINKING_MODEL:
            payload["chat_template_kwargs"] = {"thinking": True}
        return payload


def openrouter_adapter(client: httpx.AsyncClient) -> OpenAICompatibleAdapter:
    return OpenAICompatibleAdapter(
        client, name="openrouter", base_url=OPENROUTER_BASE_URL, send_site_headers=True
    )


def requesty_adapter(client: httpx.AsyncClient) -> OpenAICompatibleAdapter:
    return OpenAICompatibleAdapter(
        client, name="requesty", base_url=REQUESTY_BASE_URL, send_site_headers=True
    )


def chutes_adapter(client: httpx.AsyncClient) -> OpenAICompatibleAdapter:
    # Chutes ignores top_p and historically defaults to a shorter completion
    return OpenAICompatibleAdapter(
        client, name="chutes", base_url=CHUTES_BASE_URL, default_max_tokens=1024, send_top_p=False
    )


def mistral_adapter(client: httpx.AsyncClient) -> OpenAICompatibleAdapter:
    return OpenAICompatibleAdapter(client, name="mistral", base_url=MISTRAL_BASE_URL)
