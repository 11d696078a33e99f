"""Positional health tracking for provider API keys."""

from enum import Enum

RATE_LIMIT_MARKERS = ("rate", "quota", "429")


class KeyStatus(str, Enum):
    """Last known outcome for one pool position."""

    UNTESTED = "untested"
    WORKING = "working"
    FAILED = "failed"
    RATE_LIMITED = "rate-limited"


def is_rate_limit_message(message: str | None) -> bool:
    """Check if an error message looks like rate limiting or quota exhaustion."""
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


def classify_failure(error: BaseException | str) -> KeyStatus:
    message = error if isinstance(error, str) else str(error)
    return KeyStatus.RATE_LIMITED if is_rate_limit_message(message) else KeyStatus.FAILED


class KeyHealthTracker:
    """Per-provider status list, one entry per key pool position.

    Health is keyed by position, not by key value. When a request arrives
    with a pool of a different length than the one recorded, the provider's
    history is discarded and every position starts over as untested.

    Writes are plain list assignments with no awaits in between, so
    concurrent requests on the event loop can interleave but never observe
    a half-written record.
    """

    def __init__(self) -> None:
        """Initialize an empty health tracker."""
        self._statuses: dict[str, list[KeyStatus]] = {}

    def sync_length(self, provider_name: str, pool_length: int) -> None:
        """Reset the provider's record if it does not match the pool length.

        Args:
            provider_name: The name of the provider.
            pool_length: Number of keys in the current pool.
        """
        current = self._statuses.get(provider_name)
        if current is None or len(current) != pool_length:
            self._statuses[provider_name] = [KeyStatus.UNTESTED] * pool_length

    def mark_success(self, provider_name: str, index: int) -> None:
        self._set(provider_name, index, KeyStatus.WORKING)

    def mark_failure(self, provider_name: str, index: int, error: BaseException | str) -> KeyStatus:
        """Record a failed attempt and return the status it was classified as.

        Messages mentioning ``rate``, ``quota`` or ``429`` (case-insensitive)
        mark the key rate-limited; anything else marks it failed.
        """
        status = classify_failure(error)
        self._set(provider_name, index, status)
        return status

    def _set(self, provider_name: str, index: int, status: KeyStatus) -> None:
        statuses = self._statuses.get(provider_name)
        if statuses is not None and 0 <= index < len(statuses):
            statuses[index] = status

    def get(self, provider_name: str) -> list[KeyStatus]:
        """Return a copy of the provider's status list (empty if never seen)."""
        return list(self._statuses.get(provider_name, []))

    def snapshot(self) -> dict[str, list[str]]:
        """Return every provider's statuses as plain strings.

        Only positional statuses are exposed, never key values.
        """
        return {name: [s.value for s in statuses] for name, statuses in self._statuses.items()}

    def reset(self, provider_name: str) -> None:
        """Forget a provider's health history.

        This is primarily useful for testing.
        """
        self._statuses.pop(provider_name, None)
