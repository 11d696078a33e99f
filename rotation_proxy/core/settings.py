"""Request-scoped settings passed into the rotation engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from rotation_proxy.core.providers import Provider

Role = Literal["system", "user", "assistant"]
VALID_ROLES: tuple[str, ...] = ("system", "user", "assistant")

RawKeys = str | Sequence[str] | None


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in VALID_ROLES:
            raise ValueError(f"Role must be one of: {', '.join(VALID_ROLES)} (got {self.role!r})")
        if not isinstance(self.content, str):
            raise ValueError("Message content must be a string")

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True, slots=True)
class LlmSettings:
    """Everything one generation call needs besides the messages.

    ``api_keys`` maps provider names to either a single key or a list of
    keys; the rotator normalizes the entry for ``provider`` into a pool.
    Optional sampling fields left as None fall back to adapter defaults.
    """

    provider: Provider
    model: str
    api_keys: Mapping[str, RawKeys] = field(default_factory=dict)
    temperature: float | None = None
    top_p: float | None = None
    max_tokens: int | None = None
    site_url: str | None = None
    site_name: str | None = None
    provider_override: str | None = None

    def __post_init__(self) -> None:
        """Validate settings after initialization"""
        # Accept plain strings for the provider and store the enum member
        object.__setattr__(self, "provider", Provider.parse(self.provider))
        if not self.model or not isinstance(self.model, str):
            raise ValueError("Model is required and must be a string")
        if self.temperature is not None and not 0 <= self.temperature <= 2:
            raise ValueError(f"Temperature must be between 0 and 2 (got {self.temperature})")
        if self.top_p is not None and not 0 <= self.top_p <= 1:
            raise ValueError(f"top_p must be between 0 and 1 (got {self.top_p})")
        if self.max_tokens is not None and self.max_tokens < 1:
            raise ValueError(f"max_tokens must be a positive integer (got {self.max_tokens})")

    def keys_for(self, provider: Provider | str) -> RawKeys:
        name = provider.value if isinstance(provider, Provider) else provider
        return self.api_keys.get(name)
