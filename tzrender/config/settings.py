"""Settings management using Pydantic for type validation and configuration."""

import logging
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ..models import (
    DEFAULT_DB_TIMEZONE,
    DEFAULT_FORMAT,
    DEFAULT_SLASH_DATE_ORDER,
    DEFAULT_USER_TIMEZONE,
    SlashDateOrder,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "TZRENDER_"

# YAML values for the settings instance being built by from_yaml()
_yaml_values: ContextVar[Optional[dict[str, Any]]] = ContextVar("tzrender_yaml_values", default=None)


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = Field(default="INFO", description="Root log level: DEBUG, INFO, WARNING, ERROR")
    debug: bool = Field(default=False, description="Enable debug logging for tzrender modules")


class CustomFormatSettings(BaseModel):
    """A custom input format declared in configuration.

    ``parser`` names one of the parsers shipped with tzrender (see
    ``tzrender.parsing.SHIPPED_PARSERS``).
    """

    pattern: str = Field(description="Regular expression the timestamp must match")
    parser: str = Field(description="Name of a shipped parser, e.g. dot_format")


class TzRenderSettings(BaseSettings):
    """Conversion defaults with environment variable support."""

    default_db_timezone: str = Field(
        default=DEFAULT_DB_TIMEZONE, description="Timezone that naive stored timestamps are in"
    )
    default_user_timezone: str = Field(
        default=DEFAULT_USER_TIMEZONE, description="Target timezone when none is given"
    )
    default_format: str = Field(
        default=DEFAULT_FORMAT, description="strftime format used when none is given"
    )
    slash_date_order: SlashDateOrder = Field(
        default=DEFAULT_SLASH_DATE_ORDER,
        description="Reading of NN/NN/YYYY strings: strict, us or eu",
    )
    custom_formats: list[CustomFormatSettings] = Field(
        default_factory=list, description="Custom input formats registered at startup"
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order sources: init kwargs, environment, .env, YAML file, secrets."""
        yaml_values = _yaml_values.get()
        if yaml_values is None:
            return init_settings, env_settings, dotenv_settings, file_secret_settings
        yaml_settings = InitSettingsSource(settings_cls, init_kwargs=yaml_values)
        return init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, config_file: Path) -> "TzRenderSettings":
        """Load settings from a YAML file.

        Environment variables (including nested ``TZRENDER_LOGGING__LEVEL``
        style names) and the ``.env`` file take precedence over values in the
        file; nested sections are merged key by key.

        Raises:
            ValueError: If the file does not contain a mapping.
        """
        with config_file.open(encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        token = _yaml_values.set(config_data)
        try:
            settings = cls()
        finally:
            _yaml_values.reset(token)

        logger.debug("Loaded configuration from %s", config_file)
        return settings


def find_config_file() -> Optional[Path]:
    """Find config file, checking project directory first, then user home."""
    project_config = Path(__file__).parent.parent.parent / "config" / "config.yaml"
    if project_config.exists():
        return project_config

    user_config = Path.home() / ".config" / "tzrender" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def load_settings(config_file: Optional[Path] = None, **overrides: Any) -> TzRenderSettings:
    """Load settings from YAML (when found) and the environment.

    Args:
        config_file: Explicit YAML path; searched for when omitted.
        **overrides: Field values that win over both file and environment.
    """
    path = config_file or find_config_file()
    settings = TzRenderSettings.from_yaml(path) if path is not None else TzRenderSettings()
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings
