"""Configuration management with YAML support and Pydantic validation."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SUITE_NAME = "com.apple.menuextra.clock"
DEFAULT_TITLE_TEMPLATE = "EEEMMMdHHmm"
DEFAULT_SETTINGS_PANE = "/System/Library/PreferencePanes/DateAndTime.prefPane"


class PreferencesConfig(BaseModel):
    """Where the clock preferences are read from."""

    suite_name: str = Field(
        default=DEFAULT_SUITE_NAME,
        description="NSUserDefaults suite holding DateFormat, FlashDateSeparators and IsAnalog",
    )


class DisplayConfig(BaseModel):
    """Status bar title and menu configuration."""

    title_template: str = Field(
        default=DEFAULT_TITLE_TEMPLATE,
        description="Date format template used when no custom DateFormat is set",
    )
    monospaced_digits: bool = Field(default=True, description="Render digits with fixed width")
    settings_pane_path: str = Field(
        default=DEFAULT_SETTINGS_PANE,
        description="Preference pane opened by the Date & Time menu item",
    )

    @field_validator("title_template")
    @classmethod
    def validate_title_template(cls, v: str) -> str:
        """Ensure the template has at least one field."""
        if not v.strip():
            raise ValueError("title_template must not be empty")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Root log level")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a known logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MENUCLOCK_",
        env_nested_delimiter="__",
    )

    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to config.yaml in CWD.

    Returns:
        Validated Config object.
    """
    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    config_data: dict[str, Any] = {}

    if config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f)
            if loaded:
                config_data = loaded

    return Config(**config_data)


# Global config instance - initialized lazily
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
