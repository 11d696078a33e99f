"""Generation defaults and attribution configuration.

These values fill in sampling parameters a client leaves out and identify
this deployment to providers that ask for attribution headers.
"""

from dataclasses import dataclass

from rotation_proxy.core.config.schema import ConfigSchema
from rotation_proxy.core.config.validation import load_env_var


@dataclass(frozen=True)
class GenerationConfig:
    """Defaults applied to chat requests.

    Attributes:
        temperature: Sampling temperature in [0, 2]
        max_tokens: Completion token cap, at least 1
        top_p: Nucleus sampling mass in [0, 1]
        site_url: HTTP-Referer sent to OpenRouter and Requesty
        site_name: X-Title sent to OpenRouter and Requesty
    """

    temperature: float
    max_tokens: int
    top_p: float
    site_url: str
    site_name: str


class GenerationSettings:
    @staticmethod
    def load() -> GenerationConfig:
        """Load generation defaults using schema-based validation.

        Raises:
            ConfigError: If any environment variable fails validation
        """
        return GenerationConfig(
            temperature=float(load_env_var(ConfigSchema.DEFAULT_TEMPERATURE)),
            max_tokens=load_env_var(ConfigSchema.DEFAULT_MAX_TOKENS),
            top_p=float(load_env_var(ConfigSchema.DEFAULT_TOP_P)),
            site_url=load_env_var(ConfigSchema.SITE_URL),
            site_name=load_env_var(ConfigSchema.SITE_NAME),
        )
