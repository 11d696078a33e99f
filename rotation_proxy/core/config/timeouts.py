"""Timeout configuration module."""

from dataclasses import dataclass

from rotation_proxy.core.config.schema import ConfigSchema
from rotation_proxy.core.config.validation import load_env_var


@dataclass(frozen=True)
class TimeoutConfig:
    # Seconds allowed for one chat completion including every key attempt
    request_timeout: float


class TimeoutSettings:
    @staticmethod
    def load() -> TimeoutConfig:
        return TimeoutConfig(request_timeout=float(load_env_var(ConfigSchema.REQUEST_TIMEOUT)))
