"""
Configuration management for the Anthropic client.

Environment-based settings are loaded with Pydantic Settings; the immutable
ClientConfig a client runs with is resolved from them once, at construction.
"""

import logging
import sys
from typing import Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ValidationError


DEFAULT_BASE_URL = "https://api.anthropic.com"
DEFAULT_TIMEOUT = 600.0


SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=False,
    env_prefix="ANTHROPIC_",
    extra="ignore"
)


class ConnectionSettings(BaseSettings):
    """
    Connection settings read when a client is constructed.

    Only ANTHROPIC_API_KEY, ANTHROPIC_BASE_URL and ANTHROPIC_TIMEOUT are
    consulted, so logging variables never affect client construction.
    """

    api_key: Optional[str] = Field(
        default=None,
        description="API key sent in the X-Api-Key header"
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Messages API"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Transport timeout in seconds"
    )

    model_config = SETTINGS_CONFIG


class ClientSettings(ConnectionSettings):
    """
    Client settings loaded from ANTHROPIC_* environment variables and .env files.

    This class handles:
    - API credentials and endpoint (ANTHROPIC_API_KEY, ANTHROPIC_BASE_URL)
    - Transport timeout
    - Logging configuration
    """

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="text",
        description="Log format (json, text)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate that log_format is either 'json' or 'text'."""
        valid_formats = ["json", "text"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return v_lower

    def setup_loguru(self) -> None:
        """Configure loguru sinks for the client's log output."""
        logger.remove()

        if self.log_format == "json":
            logger.add(
                sys.stderr,
                level=self.log_level,
                serialize=True
            )
        else:
            def text_format(record):
                level = record["level"].name
                extra = record["extra"]

                context_parts = []
                if extra.get("duration_seconds") is not None:
                    context_parts.append(f"{extra['duration_seconds']:.2f}s")
                if extra.get("status_code") is not None:
                    context_parts.append(str(extra["status_code"]))
                if "method" in extra and "path" in extra:
                    context_parts.append(f"{extra['method']} {extra['path']}")

                context_str = ""
                if context_parts:
                    context_str = f" <dim>({' · '.join(context_parts)})</dim>"

                return f"{level:>8} {{message}}{context_str}\n"

            logger.add(
                sys.stderr,
                format=text_format,
                level=self.log_level,
                colorize=True
            )


class ClientConfig(BaseModel):
    """Immutable connection settings of one client."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="API key")
    base_url: str = Field(DEFAULT_BASE_URL, description="Base URL of the Messages API")
    timeout: Optional[float] = Field(DEFAULT_TIMEOUT, description="Transport timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[ConnectionSettings] = None,
    ) -> "ClientConfig":
        """
        Build a config: explicit arguments win, then the environment, then defaults.

        Raises:
            ValidationError: If no usable API key is available or a connection
                variable in the environment is invalid
        """
        if settings is None:
            try:
                settings = ConnectionSettings()
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid client settings in environment: {e}") from e

        api_key = api_key if api_key is not None else settings.api_key
        if not api_key or not api_key.strip():
            raise ValidationError(
                "API key is required. Please provide a valid API key "
                "or set the ANTHROPIC_API_KEY environment variable."
            )

        return cls(
            api_key=api_key,
            base_url=base_url or settings.base_url,
            timeout=timeout if timeout is not None else settings.timeout,
        )


# Global settings instance
_settings: Optional[ClientSettings] = None


def get_settings() -> ClientSettings:
    """
    Get the global settings instance.

    Settings are loaded once and reused until reload_settings is called.

    Returns:
        ClientSettings: The global settings instance
    """
    global _settings
    if _settings is None:
        _settings = ClientSettings()
    return _settings


def reload_settings() -> ClientSettings:
    """
    Reload settings from environment variables and .env files.

    Returns:
        ClientSettings: The newly loaded settings instance
    """
    global _settings
    _settings = ClientSettings()
    return _settings


def configure_logging(settings: Optional[ClientSettings] = None) -> None:
    """
    Enable and configure the client's loguru output.

    Args:
        settings: Settings instance to use for configuration.
                 If None, uses the global settings instance.
    """
    if settings is None:
        settings = get_settings()

    settings.setup_loguru()
    logger.enable("anthropic_light")

    # Silence the transport's own loggers
    for logger_name in ["urllib3", "urllib3.connectionpool"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
