"""Server configuration module.

Handles host, port, log level and deployment environment.
"""

from dataclasses import dataclass

from rotation_proxy.core.config.schema import ConfigSchema
from rotation_proxy.core.config.validation import load_env_var


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the HTTP server.

    Attributes:
        host: Address to bind to
        port: Port to listen on
        log_level: Root logging level name, upper-cased
        environment: development, production or test
    """

    host: str
    port: int
    log_level: str
    environment: str

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class ServerSettings:
    """Manages server configuration from environment variables."""

    @staticmethod
    def load() -> ServerConfig:
        """Load server configuration using schema-based validation.

        Raises:
            ConfigError: If any environment variable fails validation
        """
        return ServerConfig(
            host=load_env_var(ConfigSchema.HOST),
            port=load_env_var(ConfigSchema.PORT),
            log_level=load_env_var(ConfigSchema.LOG_LEVEL).upper(),
            environment=load_env_var(ConfigSchema.ENVIRONMENT),
        )
