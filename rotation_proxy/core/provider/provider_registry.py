"""Provider registry mapping each provider to its call adapter."""

from __future__ import annotations

from collections.abc import Mapping

from rotation_proxy.core.exceptions import UnsupportedProviderError
from rotation_proxy.core.provider.adapters.base import ProviderAdapter
from rotation_proxy.core.providers import SUPPORTED_PROVIDERS, Provider


class ProviderRegistry:
    """Central registry of provider call adapters.

    Responsibilities:
    - Store and resolve the adapter for a provider
    - Report providers that have no adapter

    This is the only boundary between the rotation engine and provider wire
    formats. It performs no retries, rotation or health tracking itself.
    """

    def __init__(self, adapters: Mapping[Provider, ProviderAdapter] | None = None) -> None:
        """Initialize the registry, optionally pre-populated."""
        self._adapters: dict[Provider, ProviderAdapter] = {}
        for provider, adapter in (adapters or {}).items():
            self.register(provider, adapter)

    def register(self, provider: Provider | str, adapter: ProviderAdapter) -> None:
        """Register an adapter for a provider.

        Args:
            provider: The provider (enum member or name).
            adapter: Async callable ``(api_key, settings, messages) -> text``.
        """
        self._adapters[Provider.parse(provider)] = adapter

    def resolve(self, provider: Provider | str) -> ProviderAdapter:
        """Get the adapter for a provider.

        Raises:
            UnsupportedProviderError: If the name is unknown or has no adapter.
        """
        try:
            key = Provider.parse(provider)
        except ValueError:
            raise UnsupportedProviderError(provider) from None
        adapter = self._adapters.get(key)
        if adapter is None:
            raise UnsupportedProviderError(key.value)
        return adapter

    def exists(self, provider: Provider | str) -> bool:
        try:
            return Provider.parse(provider) in self._adapters
        except ValueError:
            return False

    def missing(self) -> list[Provider]:
        """Return every known provider that has no adapter registered."""
        return [p for p in SUPPORTED_PROVIDERS if p not in self._adapters]

    def verify_complete(self) -> None:
        """Fail fast if any provider lacks an adapter.

        Raises:
            ValueError: Listing the providers without an adapter.
        """
        missing = self.missing()
        if missing:
            names = ", ".join(p.value for p in missing)
            raise ValueError(f"No adapter registered for provider(s): {names}")

    def list_all(self) -> dict[Provider, ProviderAdapter]:
        """Return a copy of all registered adapters."""
        return self._adapters.copy()

    def clear(self) -> None:
        """Clear all registered adapters.

        This is primarily useful for testing.
        """
        self._adapters.clear()
