"""Hugging Face Inference Providers adapter.

Hugging Face routes each request to an inference backend (nebius, novita,
sambanova, ...). The backend is chosen from ``settings.provider_override``,
then the catalog's per-model backend, then a default.
"""

from __future__ import annotations

from collections.abc import Sequence

import httpx

from rotation_proxy.core.model_catalog import DEFAULT_HF_BACKEND, HF_MODEL_BACKENDS
from rotation_proxy.core.provider.adapters.openai_compatible import OpenAICompatibleAdapter
from rotation_proxy.core.settings import ChatMessage, LlmSettings

HUGGINGFACE_ROUTER_URL = "https://router.huggingface.co/v1"


def resolve_backend(settings: LlmSettings) -> str:
    return settings.provider_override or HF_MODEL_BACKENDS.get(settings.model, DEFAULT_HF_BACKEND)


class HuggingFaceAdapter(OpenAICompatibleAdapter):
    def __init__(self, client: httpx.AsyncClient) -> None:
        super().__init__(client, name="huggingface", base_url=HUGGINGFACE_ROUTER_URL)

    def build_payload(self, settings: LlmSettings, messages: Sequence[ChatMessage]) -> dict:
        payload = super().build_payload(settings, messages)
        # The router selects the backend from a "model:backend" suffix
        payload["model"] = f"{settings.model}:{resolve_backend(settings)}"
        return payload
