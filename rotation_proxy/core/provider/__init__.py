"""Key rotation package.

Small single-responsibility components wired together by ApiKeyRotator:

- normalize_api_keys: Turns configured credentials into an ordered key pool
- KeyHealthTracker: Records the last outcome per pool position
- RotationCursor: Remembers which key each provider starts from
- ProviderRegistry: Maps providers to their call adapters
- ApiKeyRotator: Tries keys in turn until one succeeds
"""

import httpx

from rotation_proxy.core.provider.adapters import build_default_adapters
from rotation_proxy.core.provider.api_key_rotator import ApiKeyRotator
from rotation_proxy.core.provider.key_health import KeyHealthTracker, KeyStatus
from rotation_proxy.core.provider.key_pool import normalize_api_keys
from rotation_proxy.core.provider.provider_registry import ProviderRegistry
from rotation_proxy.core.provider.rotation_cursor import RotationCursor


def build_default_registry(client: httpx.AsyncClient) -> ProviderRegistry:
    """Build a registry covering every provider.

    Raises:
        ValueError: If any provider is left without an adapter.
    """
    registry = ProviderRegistry(build_default_adapters(client))
    registry.verify_complete()
    return registry


__all__ = [
    "ApiKeyRotator",
    "KeyHealthTracker",
    "KeyStatus",
    "ProviderRegistry",
    "RotationCursor",
    "build_default_registry",
    "normalize_api_keys",
]
