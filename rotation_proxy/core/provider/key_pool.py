"""Normalization of configured credentials into an ordered key pool."""

from collections.abc import Sequence


def normalize_api_keys(raw: str | Sequence[str] | None) -> list[str]:
    """Turn a configured credential into an ordered, de-duplicated key list.

    A single non-empty string becomes a one-element list. A sequence is
    stripped and filtered of empty or whitespace-only entries; repeats keep
    their first position. Absent configuration yields an empty list rather
    than raising, leaving the "no keys" decision to the caller.

    Args:
        raw: A single key, a sequence of keys, or None.

    Returns:
        The key pool, possibly empty.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]

    pool: list[str] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, str):
            continue
        key = entry.strip()
        if key and key not in seen:
            seen.add(key)
            pool.append(key)
    return pool
