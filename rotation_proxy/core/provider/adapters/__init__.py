"""Provider call adapters.

Each adapter performs one upstream chat call with one API key:

- GeminiAdapter: Google Generative Language API
- OpenAICompatibleAdapter: OpenRouter, Requesty, Chutes, Mistral
- NvidiaAdapter: NVIDIA NIM with reasoning-model switches
- HuggingFaceAdapter: Hugging Face Inference Providers router
- CohereAdapter: Cohere v2 chat
"""

import httpx

from rotation_proxy.core.provider.adapters.base import HttpProviderAdapter, ProviderAdapter
from rotation_proxy.core.provider.adapters.cohere import CohereAdapter
from rotation_proxy.core.provider.adapters.gemini import GeminiAdapter
from rotation_proxy.core.provider.adapters.huggingface import HuggingFaceAdapter
from rotation_proxy.core.provider.adapters.openai_compatible import (
    NvidiaAdapter,
    OpenAICompatibleAdapter,
    chutes_adapter,
    mistral_adapter,
    openrouter_adapter,
    requesty_adapter,
)
from rotation_proxy.core.providers import Provider


def build_default_adapters(client: httpx.AsyncClient) -> dict[Provider, ProviderAdapter]:
    """Create one adapter per provider, all sharing the given HTTP client."""
    return {
        Provider.GEMINI: GeminiAdapter(client),
        Provider.OPENROUTER: openrouter_adapter(client),
        Provider.HUGGINGFACE: HuggingFaceAdapter(client),
        Provider.MISTRAL: mistral_adapter(client),
        Provider.COHERE: CohereAdapter(client),
        Provider.NVIDIA: NvidiaAdapter(client),
        Provider.CHUTES: chutes_adapter(client),
        Provider.REQUESTY: requesty_adapter(client),
    }


__all__ = [
    "CohereAdapter",
    "GeminiAdapter",
    "HttpProviderAdapter",
    "HuggingFaceAdapter",
    "NvidiaAdapter",
    "OpenAICompatibleAdapter",
    "ProviderAdapter",
    "build_default_adapters",
]
