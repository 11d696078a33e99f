"""Provider API key configuration.

Each provider reads its keys from ``<PROVIDER>_API_KEY``; Gemini also
accepts ``GOOGLE_API_KEY`` and Hugging Face ``HF_TOKEN``. A variable may
hold several keys separated by commas and/or whitespace, tried in order.
"""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from rotation_proxy.core.provider.key_pool import normalize_api_keys
from rotation_proxy.core.providers import SUPPORTED_PROVIDERS, Provider

_KEY_SEPARATOR = re.compile(r"[\s,]+")

_FALLBACK_ENV_VARS: dict[Provider, tuple[str, ...]] = {
    Provider.GEMINI: ("GOOGLE_API_KEY",),
    Provider.HUGGINGFACE: ("HF_TOKEN",),
}


def provider_key_env_vars() -> dict[Provider, tuple[str, ...]]:
    """Environment variables consulted for each provider, in precedence order."""
    return {
        provider: (f"{provider.value.upper()}_API_KEY", *_FALLBACK_ENV_VARS.get(provider, ()))
        for provider in SUPPORTED_PROVIDERS
    }


def parse_api_keys(raw: str | None) -> list[str]:
    """Split a raw env value on commas and whitespace into a key pool."""
    if not raw:
        return []
    return normalize_api_keys(_KEY_SEPARATOR.split(raw))


@dataclass(frozen=True)
class ProviderKeysConfig:
    """API key pools per provider.

    Key values are held here and handed to the rotation engine per request;
    anything meant for display goes through ``summary()``.
    """

    api_keys: Mapping[str, tuple[str, ...]]

    def keys_for(self, provider: Provider) -> tuple[str, ...]:
        return self.api_keys.get(provider.value, ())

    def key_count(self, provider: Provider) -> int:
        return len(self.keys_for(provider))

    def configured_providers(self) -> list[Provider]:
        return [p for p in SUPPORTED_PROVIDERS if self.keys_for(p)]

    def summary(self) -> dict[str, int]:
        """Return the number of keys per provider, never the keys themselves."""
        return {p.value: self.key_count(p) for p in SUPPORTED_PROVIDERS}

    def __repr__(self) -> str:
        return f"ProviderKeysConfig(key_counts={self.summary()!r})"


class ProviderSettings:
    """Loads provider API keys from environment variables."""

    @staticmethod
    def load() -> ProviderKeysConfig:
        keys: dict[str, tuple[str, ...]] = {}
        for provider, env_vars in provider_key_env_vars().items():
            for env_var in env_vars:
                pool = parse_api_keys(os.environ.get(env_var))
                if pool:
                    keys[provider.value] = tuple(pool)
                    break
        return ProviderKeysConfig(api_keys=MappingProxyType(keys))
