"""Declarative schema for environment variable configuration.

This module provides a single source of truth for all environment variables,
including automatic type coercion, validation, and documentation generation.

Provider API keys are not listed here: they are read per provider by
``rotation_proxy.core.config.providers`` because their names are derived
from the provider enumeration.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ENVIRONMENTS = ("development", "production", "test")


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type for validation (int, str, float, bool)
        description: Human-readable description for docs
        validator: Optional custom validation function
        coerce: Optional function to convert string to target type
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    coerce: Callable[[str], Any] | None = None


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="0.0.0.0",
        type_hint=str,
        description="Server host address to bind to",
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=3000,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=lambda x: x.upper() in LOG_LEVELS,
    )

    ENVIRONMENT = EnvVarSpec(
        name="ENVIRONMENT",
        default="development",
        type_hint=str,
        description="Deployment environment; 'production' hides error details from clients",
        validator=lambda x: x in ENVIRONMENTS,
        coerce=lambda raw: raw.strip().lower(),
    )

    # === Timeout Settings ===

    REQUEST_TIMEOUT = EnvVarSpec(
        name="REQUEST_TIMEOUT",
        default=30.0,
        type_hint=float,
        description="Deadline in seconds for one chat completion, across all key attempts",
        validator=lambda x: x > 0,
    )

    # === Generation Defaults ===

    DEFAULT_TEMPERATURE = EnvVarSpec(
        name="DEFAULT_TEMPERATURE",
        default=0.7,
        type_hint=float,
        description="Temperature used when a request does not set one",
        validator=lambda x: 0 <= x <= 2,
    )

    DEFAULT_MAX_TOKENS = EnvVarSpec(
        name="DEFAULT_MAX_TOKENS",
        default=2048,
        type_hint=int,
        description="max_tokens used when a request does not set one",
        validator=lambda x: x >= 1,
    )

    DEFAULT_TOP_P = EnvVarSpec(
        name="DEFAULT_TOP_P",
        default=0.9,
        type_hint=float,
        description="top_p used when a request does not set one",
        validator=lambda x: 0 <= x <= 1,
    )

    # === Attribution ===

    SITE_URL = EnvVarSpec(
        name="SITE_URL",
        default="http://localhost:3000",
        type_hint=str,
        description="Sent as HTTP-Referer to OpenRouter and Requesty",
    )

    SITE_NAME = EnvVarSpec(
        name="SITE_NAME",
        default="LLM Rotation Server",
        type_hint=str,
        description="Sent as X-Title to OpenRouter and Requesty",
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

    @classmethod
    def get_spec(cls, name: str) -> EnvVarSpec | None:
        for spec in cls.all_specs().values():
            if spec.name == name:
                return spec
        return None

    @classmethod
    def generate_markdown_docs(cls) -> str:
        """Generate Markdown documentation for all environment variables.

        Returns:
            Markdown documentation string
        """
        # Imported here to keep the schema free of provider imports at load time
        from rotation_proxy.core.config.providers import provider_key_env_vars

        lines = ["# Configuration Options\n"]
        lines.extend(
            [
                "This document is auto-generated from `ConfigSchema`.\n",
                "## Environment Variables\n",
            ]
        )

        for _name, spec in sorted(cls.all_specs().items()):
            default_repr = f"`{spec.default}`" if spec.default is not None else "None"
            lines.extend(
                [
                    f"### `{spec.name}`\n",
                    f"- **Type**: `{spec.type_hint.__name__}`",
                    f"- **Default**: {default_repr}",
                    f"- **Description**: {spec.description}\n",
                ]
            )

        lines.append("## Provider API Keys\n")
        lines.append(
            "Each variable may hold several keys separated by commas or whitespace. "
            "Keys are tried in the order given.\n"
        )
        for provider, env_vars in provider_key_env_vars().items():
            names = " or ".join(f"`{name}`" for name in env_vars)
            lines.append(f"- **{provider.display_name}**: {names}")

        return "\n".join(lines) + "\n"
