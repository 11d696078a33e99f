"""
Exception hierarchy for the key rotation engine.

Only three conditions ever leave the engine: a provider with no keys, a
provider with no adapter, and a pool whose keys all failed. Individual key
failures are recovered inside the rotation loop and never raised to callers.

All exceptions inherit from RotationError, so callers can catch every
engine failure with a single except clause.

Example:
    >>> try:
    ...     text = await rotator.generate(messages, settings)
    ... except KeysExhaustedError as e:
    ...     print(f"{e.provider}: {e.last_error}")
"""

from __future__ import annotations


class RotationError(Exception):
    """Base exception for all key rotation errors.

    Attributes:
        provider: Name of the provider involved, when known
    """

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.message = message
        self.provider = provider
        super().__init__(message)


class NoKeysConfiguredError(RotationError):
    """Raised before any attempt when a provider's key pool is empty.

    Fatal for the request. The dispatcher is never invoked.
    """

    def __init__(self, provider: str) -> None:
        super().__init__(f"No API key(s) found for {provider}.", provider=provider)


class UnsupportedProviderError(RotationError):
    """Raised when no adapter is registered for the requested provider."""

    def __init__(self, provider: object) -> None:
        super().__init__(f"Unsupported LLM provider specified: {provider}", provider=str(provider))


class KeysExhaustedError(RotationError):
    """Raised after every key in a provider's pool was tried and failed.

    Only the last failure is retained; earlier failures from the same
    request are logged but not carried here.

    Attributes:
        last_error: Message of the final failed attempt
        attempts: Number of keys tried
    """

    def __init__(self, provider: str, last_error: str | None, attempts: int) -> None:
        self.last_error = last_error or "Unknown error"
        self.attempts = attempts
        super().__init__(
            f"All {provider.capitalize()} API keys failed. Last error: {self.last_error}",
            provider=provider,
        )

    def __repr__(self) -> str:
        return (
            f"KeysExhaustedError(provider={self.provider!r}, attempts={self.attempts}, "
            f"last_error={self.last_error!r})"
        )


class ProviderCallError(Exception):
    """Raised by provider adapters when an upstream call fails.

    The message embeds the HTTP status and upstream error body so the
    health tracker can classify rate limiting from the text alone.

    Attributes:
        status_code: Upstream HTTP status, if the failure was an HTTP response
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
