"""Configuration management for the renderer.

This module handles environment variable loading and provides type-safe
configuration access using Pydantic models. Every setting can be provided
through an environment variable prefixed with ``RENDERKIT_`` (for example
``RENDERKIT_DEFAULT_ENGINE=markdown``) or through a ``.env`` file.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Renderer configuration loaded from environment variables and .env file.

    All configuration values are automatically loaded from:
    1. `.env` file in the working directory (if present)
    2. Environment variables prefixed with ``RENDERKIT_``

    Attributes:
        default_engine: Engine used when neither options nor extension decide
        engines: Engines created by the factory when none are requested
        template_paths: Directories searched for templates
        wrapper_template: Layout template wrapping Markdown and Python output
        content_var_name: Context key receiving the wrapped content
        vars_prefix: Prefix of Python template variables exported to the layout
        autoescape: Enable HTML autoescaping in Jinja2 templates
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    model_config = SettingsConfigDict(
        env_prefix="RENDERKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_engine: str = Field(
        default="jinja",
        description="Engine used when no option or extension selects one",
        min_length=1,
    )

    engines: list[str] = Field(
        default_factory=lambda: ["jinja"],
        description="Engines enabled by default in the renderer factory",
    )

    template_paths: list[Path] = Field(
        default_factory=list,
        description="Directories searched for templates, in order",
    )

    wrapper_template: Optional[str] = Field(
        default="html",
        description="Layout template wrapping content rendered by Markdown and Python engines",
    )

    content_var_name: str = Field(
        default="content",
        description="Context key holding the wrapped content inside the layout",
        min_length=1,
    )

    vars_prefix: str = Field(
        default="view_",
        description="Python template variables with this prefix are exported to the layout",
        min_length=1,
    )

    autoescape: bool = Field(
        default=True,
        description="Enable HTML autoescaping for Jinja2 templates",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level is one of the allowed values.

        Args:
            value: Log level string to validate

        Returns:
            Uppercase log level string

        Raises:
            ValueError: If log level is not one of the allowed values
        """
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            raise ValueError(
                f"log_level must be one of {allowed_levels}, got {value}"
            )
        return upper_value

    @field_validator("engines")
    @classmethod
    def validate_engines(cls, value: list[str]) -> list[str]:
        """Normalize engine names to lowercase without duplicates."""
        normalized: list[str] = []
        for name in value:
            name = name.strip().lower()
            if name and name not in normalized:
                normalized.append(name)
        return normalized


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Loads configuration on first call and returns the same instance on
    subsequent calls (singleton pattern).

    Returns:
        Config instance with loaded configuration values

    Raises:
        ValueError: If configuration values are invalid
    """
    global _config
    if _config is None:
        _config = Config()
        logger.debug(
            f"Configuration loaded: "
            f"DEFAULT_ENGINE={_config.default_engine}, "
            f"ENGINES={_config.engines}, "
            f"TEMPLATE_PATHS={[str(p) for p in _config.template_paths]}"
        )
    return _config


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when configuration changes at runtime.

    Returns:
        New Config instance with reloaded configuration values
    """
    global _config
    _config = Config()
    return _config
