"""Provider enumeration for Rotation Proxy.

The set of upstream services is closed: adding a provider means adding an
adapter in ``rotation_proxy.core.provider.adapters`` and catalog entries in
``rotation_proxy.core.model_catalog``.
"""

from enum import Enum


class Provider(str, Enum):
    """Upstream LLM providers the proxy can route to."""

    GEMINI = "gemini"
    OPENROUTER = "openrouter"
    HUGGINGFACE = "huggingface"
    MISTRAL = "mistral"
    COHERE = "cohere"
    NVIDIA = "nvidia"
    CHUTES = "chutes"
    REQUESTY = "requesty"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: "str | Provider") -> "Provider":
        """Parse a provider name case-insensitively.

        Raises:
            ValueError: If the name is not a known provider.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported LLM provider specified: {value}") from None


SUPPORTED_PROVIDERS: tuple[Provider, ...] = tuple(Provider)
