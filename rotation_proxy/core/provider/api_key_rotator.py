"""API key rotation with round-robin failover."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rotation_proxy.core.exceptions import (
    KeysExhaustedError,
    NoKeysConfiguredError,
    UnsupportedProviderError,
)
from rotation_proxy.core.provider.adapters.base import ProviderAdapter
from rotation_proxy.core.provider.key_health import KeyHealthTracker, KeyStatus
from rotation_proxy.core.provider.key_pool import normalize_api_keys
from rotation_proxy.core.provider.provider_registry import ProviderRegistry
from rotation_proxy.core.provider.rotation_cursor import RotationCursor
from rotation_proxy.core.providers import Provider
from rotation_proxy.core.settings import ChatMessage, LlmSettings

logger = logging.getLogger(__name__)


def _provider_name(provider: Provider | str) -> str:
    try:
        return Provider.parse(provider).value
    except ValueError:
        raise UnsupportedProviderError(provider) from None


class ApiKeyRotator:
    """Round-robin API key rotation with per-key failover.

    Responsibilities:
    - Normalize the provider's configured keys into a pool
    - Try each key at most once per request, starting at the cursor
    - Record per-position health and advance the cursor on success

    One instance is shared by every request in the process. Health and
    cursor updates happen between awaits, never across one, so no lock is
    taken; at worst two concurrent requests start from the same key.
    """

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        health: KeyHealthTracker | None = None,
        cursor: RotationCursor | None = None,
    ) -> None:
        """Initialize a new API key rotator."""
        self.registry = registry or ProviderRegistry()
        self.health = health or KeyHealthTracker()
        self.cursor = cursor or RotationCursor()

    async def generate(self, messages: Sequence[ChatMessage], settings: LlmSettings) -> str:
        """Generate a completion using the adapter registered for ``settings.provider``.

        Raises:
            UnsupportedProviderError: If no adapter is registered.
            NoKeysConfiguredError: If the provider has no usable keys.
            KeysExhaustedError: If every key in the pool failed.
        """
        adapter = self.registry.resolve(settings.provider)
        return await self.execute(settings.provider, settings, messages, adapter)

    async def execute(
        self,
        provider: Provider | str,
        settings: LlmSettings,
        messages: Sequence[ChatMessage],
        dispatch: ProviderAdapter,
    ) -> str:
        """Run ``dispatch`` against the provider's key pool until one key succeeds.

        Keys are tried in pool order starting at the cursor and wrapping
        around, each at most once. Attempts are sequential with no delay.

        Args:
            provider: Provider whose pool, health and cursor are used.
            settings: Request settings; ``api_keys[provider]`` holds the pool.
            messages: Conversation passed through to ``dispatch``.
            dispatch: Async callable ``(api_key, settings, messages) -> text``.

        Returns:
            The text returned by the first successful call.

        Raises:
            UnsupportedProviderError: If ``provider`` is not a known provider.
            NoKeysConfiguredError: If the pool is empty. ``dispatch`` is not called.
            KeysExhaustedError: If every key failed. Carries the last error only.
        """
        name = _provider_name(provider)
        pool = normalize_api_keys(settings.keys_for(name))
        if not pool:
            raise NoKeysConfiguredError(name)

        pool_length = len(pool)
        self.health.sync_length(name, pool_length)
        start = self.cursor.next(name, pool_length)

        last_error: str | None = None
        for attempt in range(pool_length):
            index = (start + attempt) % pool_length
            try:
                text = await dispatch(pool[index], settings, messages)
            except Exception as e:
                last_error = str(e) or type(e).__name__
                status = self.health.mark_failure(name, index, last_error)
                logger.warning(
                    f"{name} key #{index + 1}/{pool_length} failed "
                    f"({status.value}): {last_error}"
                )
                continue

            self.health.mark_success(name, index)
            next_index = self.cursor.advance(name, index, pool_length)
            logger.debug(
                f"{name} key #{index + 1}/{pool_length} succeeded; next start index {next_index}"
            )
            return text

        logger.error(f"All {pool_length} {name} API key(s) failed. Last error: {last_error}")
        raise KeysExhaustedError(name, last_error, pool_length)

    def key_statuses(self, provider: Provider | str) -> list[KeyStatus]:
        return self.health.get(_provider_name(provider))

    def key_status_snapshot(self) -> dict[str, dict[str, object]]:
        """Return health and cursor position for every provider seen so far.

        Key values are never included.
        """
        return {
            name: {"statuses": statuses, "next_index": self.cursor.peek(name)}
            for name, statuses in self.health.snapshot().items()
        }

    def reset(self, provider: Provider | str) -> None:
        """Forget health and cursor state for a provider.

        This is primarily useful for testing.
        """
        name = _provider_name(provider)
        self.health.reset(name)
        self.cursor.reset_rotation(name)
