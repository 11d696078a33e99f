"""Environment-driven configuration.

``Config()`` reads and validates every setting at construction. The app
factory builds one and keeps it on ``app.state``; nothing here is global.
"""

from rotation_proxy.core.config.config import Config
from rotation_proxy.core.config.schema import ConfigSchema, EnvVarSpec
from rotation_proxy.core.config.validation import ConfigError, load_env_var, validate_all

__all__ = [
    "Config",
    "ConfigError",
    "ConfigSchema",
    "EnvVarSpec",
    "load_env_var",
    "validate_all",
]
