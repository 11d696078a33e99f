"""Round-robin rotation cursor per provider."""


class RotationCursor:
    """Remembers which pool position to try first for each provider.

    Responsibilities:
    - Hand out the starting index for a request, clamped to the pool
    - Move past the key that just succeeded

    The cursor only moves on success, so a provider whose first keys fail
    ends up pointing just past the working key and later requests spread
    across the pool instead of always starting at index 0.

    Every read is taken modulo the current pool length, so two requests
    advancing the same provider back to back may skip or repeat a key but
    can never produce an out-of-range index.
    """

    def __init__(self) -> None:
        """Initialize a new rotation cursor."""
        self._indices: dict[str, int] = {}

    def next(self, provider_name: str, pool_length: int) -> int:
        """Get the index to start from for this provider.

        Args:
            provider_name: The name of the provider.
            pool_length: Number of keys in the current pool.

        Returns:
            An index in ``[0, pool_length)``.

        Raises:
            ValueError: If pool_length is not positive.
        """
        if pool_length <= 0:
            raise ValueError(f"No API keys available for provider '{provider_name}'")

        idx = self._indices.get(provider_name, 0)
        if not 0 <= idx < pool_length:
            # Stale value from a larger pool
            idx = 0
            self._indices[provider_name] = idx
        return idx

    def advance(self, provider_name: str, used_index: int, pool_length: int) -> int:
        """Point the cursor just past the key that succeeded.

        Returns:
            The new cursor value.
        """
        idx = (used_index + 1) % pool_length
        self._indices[provider_name] = idx
        return idx

    def peek(self, provider_name: str) -> int:
        return self._indices.get(provider_name, 0)

    def reset_rotation(self, provider_name: str) -> None:
        """Reset rotation state for a provider.

        This is primarily useful for testing.

        Args:
            provider_name: The name of the provider to reset.
        """
        self._indices.pop(provider_name, None)
