"""Configuration management with pydantic-settings for github-repos.

Loads from (in order of precedence):
1. Environment variables with the GITHUB_CLIENT_ prefix (highest priority)
2. .env file in the working directory
3. Default values (lowest priority)

References:
- Pydantic Settings: https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .__version__ import __version__

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "ClientConfig",
    "get_config",
    "reset_config",
]

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_USER_AGENT = f"github-repos/{__version__}"


class ClientConfig(BaseSettings):
    """Configuration for the repository client and CLI.

    Attributes:
        github_token: GitHub token sent as Bearer auth (GITHUB_CLIENT_GITHUB_TOKEN)
        base_url: GitHub API base URL
        user_agent: User-Agent header value
        http_timeout: Per-request timeout in seconds
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json for machines, text for terminals)
    """

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,  # Use defaults instead of empty strings
        case_sensitive=False,
        validate_default=True,
        frozen=True,  # Immutable after creation
        extra="ignore",
    )

    # Token presence is checked by the CLI so the library can load without one
    github_token: SecretStr = Field(
        default=SecretStr(""),
        description="GitHub token (classic or fine-grained PAT)",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="GitHub API base URL. Use https://HOST/api/v3/ for GitHub Enterprise Server.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header (GitHub rejects requests without one)",
    )
    http_timeout: float = Field(
        default=30.0,
        gt=0.0,
        le=600.0,
        description="Timeout in seconds for each HTTP request",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="text",
        description="Log output format: json or text",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Accept only json or text."""
        fmt = v.lower()
        if fmt not in {"json", "text"}:
            raise ValueError(f"log_format must be 'json' or 'text', got: {v}")
        return fmt


@lru_cache(maxsize=1)
def get_config() -> ClientConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Raises:
        ValidationError: If configuration values are invalid.
    """
    return ClientConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code. Production code should not reset config.
    """
    get_config.cache_clear()
