"""Configuration management for the WTII encounter tracker.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from wtii.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.keys.move_down)
    'j'

Environment Variables:
    WTII_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    WTII_LOG_FILE: Path of the log file
    WTII_API_BASE_URL: Base URL of the monster database
    WTII_STORAGE_SEED_ROSTER_PATH: JSON file holding the default player roster
    WTII_KEY_<COMMAND>: Single-character key binding for a command
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wtii.core.constants import DEFAULT_API_BASE_URL, DEFAULT_HOME_DIR_NAME
from wtii.core.exceptions import ConfigurationError


def _home_file(name: str) -> Path:
    return Path.home() / DEFAULT_HOME_DIR_NAME / name


class ApiSettings(BaseSettings):
    """Configuration for the monster database connection.

    Attributes:
        base_url: Base URL of the monster database API.
        timeout_seconds: Per-request timeout.
        max_retries: Extra attempts after a transport failure.
    """

    model_config = SettingsConfigDict(
        env_prefix="WTII_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Monster database base URL",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="API request timeout",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Extra attempts on transport failures",
    )


class StorageSettings(BaseSettings):
    """Configuration for on-disk data.

    Attributes:
        seed_roster_path: JSON file with the players every encounter starts with.
    """

    model_config = SettingsConfigDict(
        env_prefix="WTII_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    seed_roster_path: Path = Field(
        default_factory=lambda: _home_file("default_roster.json"),
        description="Default player roster file",
    )


class KeyBindingSettings(BaseSettings):
    """Single-character key bindings for every roster command."""

    model_config = SettingsConfigDict(
        env_prefix="WTII_KEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    new_encounter: str = Field(default="e", min_length=1, max_length=1)
    set_initiative: str = Field(default="i", min_length=1, max_length=1)
    quit_app: str = Field(default="q", min_length=1, max_length=1)
    unselect_all: str = Field(default="u", min_length=1, max_length=1)
    move_down: str = Field(default="j", min_length=1, max_length=1)
    move_up: str = Field(default="k", min_length=1, max_length=1)
    peek_down: str = Field(default="J", min_length=1, max_length=1)
    peek_up: str = Field(default="K", min_length=1, max_length=1)
    lower_health: str = Field(default="h", min_length=1, max_length=1)
    increase_health: str = Field(default="l", min_length=1, max_length=1)
    search_for_new_creature: str = Field(default="s", min_length=1, max_length=1)
    insert_new_player: str = Field(default="c", min_length=1, max_length=1)
    delete_creature: str = Field(default="D", min_length=1, max_length=1)
    set_creature_description: str = Field(default="d", min_length=1, max_length=1)
    duplicate_creature: str = Field(default="x", min_length=1, max_length=1)

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "KeyBindingSettings":
        """Ensure no key is bound to two commands.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If a key is bound more than once.
        """
        seen: dict[str, str] = {}
        for command, key in self.model_dump().items():
            if key in seen:
                raise ConfigurationError(
                    f"Key {key!r} is bound to both {seen[key]!r} and {command!r}",
                    config_key=command,
                )
            seen[key] = command
        return self

    def command_for(self, key: str) -> str | None:
        """Look up the command bound to a key.

        Args:
            key: The pressed character.

        Returns:
            The command name, or None if the key is unbound.
        """
        for command, bound in self.model_dump().items():
            if bound == key:
                return command
        return None


class UISettings(BaseSettings):
    """Configuration for the terminal UI.

    Attributes:
        poll_interval_seconds: Cadence at which search results are polled.
        health_step: Health change per key press.
    """

    model_config = SettingsConfigDict(
        env_prefix="WTII_UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    poll_interval_seconds: float = Field(
        default=0.1,
        gt=0,
        le=5,
        description="Search result polling interval",
    )
    health_step: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Health change per key press",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode (forces DEBUG logging).
        log_level: Application logging level.
        json_logs: Write logs as JSON lines.
        log_file: Log file path (stdout belongs to the UI).
        api: Monster database settings.
        storage: File storage settings.
        keys: Key bindings.
        ui: UI settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="WTII_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Whose Turn Is It?",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG logging)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Write logs as JSON",
    )
    log_file: Path = Field(
        default_factory=lambda: _home_file("wtii.log"),
        description="Log file path",
    )

    api: ApiSettings = Field(default_factory=ApiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    keys: KeyBindingSettings = Field(default_factory=KeyBindingSettings)
    ui: UISettings = Field(default_factory=UISettings)

    @property
    def effective_log_level(self) -> str:
        """Logging level to run with; debug mode forces DEBUG."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "ApiSettings",
    "StorageSettings",
    "KeyBindingSettings",
    "UISettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
