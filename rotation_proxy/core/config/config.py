"""Configuration object for the rotation proxy.

This module provides a simple object that gives direct access to
configuration values without unnecessary abstraction.

Configuration is organized into focused modules:
- server: Server settings (host, port, log level, environment)
- timeouts: Request deadline
- generation: Sampling defaults and attribution headers
- providers: API key pools per provider
"""

from rotation_proxy.core.config.generation import GenerationConfig, GenerationSettings
from rotation_proxy.core.config.providers import ProviderKeysConfig, ProviderSettings
from rotation_proxy.core.config.server import ServerSettings
from rotation_proxy.core.config.timeouts import TimeoutSettings
from rotation_proxy.core.providers import Provider


class Config:
    """Configuration with direct access to all settings.

    All values are loaded at initialization time from environment variables
    using schema-based validation, so an invalid value fails at startup.
    """

    def __init__(self) -> None:
        self._server = ServerSettings.load()
        self._timeouts = TimeoutSettings.load()
        self._generation = GenerationSettings.load()
        self._providers = ProviderSettings.load()

    # Server settings
    @property
    def host(self) -> str:
        return self._server.host

    @property
    def port(self) -> int:
        return self._server.port

    @property
    def log_level(self) -> str:
        return self._server.log_level

    @property
    def environment(self) -> str:
        return self._server.environment

    @property
    def is_production(self) -> bool:
        return self._server.is_production

    # Timeout settings
    @property
    def request_timeout(self) -> float:
        return self._timeouts.request_timeout

    # Generation defaults
    @property
    def generation(self) -> GenerationConfig:
        return self._generation

    @property
    def default_temperature(self) -> float:
        return self._generation.temperature

    @property
    def default_max_tokens(self) -> int:
        return self._generation.max_tokens

    @property
    def default_top_p(self) -> float:
        return self._generation.top_p

    @property
    def site_url(self) -> str:
        return self._generation.site_url

    @property
    def site_name(self) -> str:
        return self._generation.site_name

    # Provider keys
    @property
    def provider_keys(self) -> ProviderKeysConfig:
        return self._providers

    def api_keys_by_provider(self) -> dict[str, list[str]]:
        """Return key pools in the shape the rotation engine expects."""
        return {name: list(keys) for name, keys in self._providers.api_keys.items()}

    def key_count(self, provider: Provider) -> int:
        return self._providers.key_count(provider)

    def safe_summary(self) -> dict[str, object]:
        """Return a printable view of the configuration with key counts only."""
        return {
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "environment": self.environment,
            "request_timeout": self.request_timeout,
            "default_temperature": self.default_temperature,
            "default_max_tokens": self.default_max_tokens,
            "default_top_p": self.default_top_p,
            "site_url": self.site_url,
            "site_name": self.site_name,
            "api_keys": self._providers.summary(),
        }
