"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        WtiiError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        DataQualityError: External data that cannot build a combatant.
        SearchError: Creature database search failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        shutdown_logging: Close the log handlers.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from wtii.core.config import (
    ApiSettings,
    KeyBindingSettings,
    Settings,
    StorageSettings,
    UISettings,
    clear_settings_cache,
    get_settings,
)
from wtii.core.exceptions import (
    ConfigurationError,
    DataQualityError,
    DiceRollError,
    SearchError,
    SearchParseError,
    SearchRequestError,
    SearchResponseError,
    WtiiError,
)
from wtii.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    shutdown_logging,
)


__all__ = [
    # Exceptions
    "WtiiError",
    "ConfigurationError",
    "DiceRollError",
    "DataQualityError",
    "SearchError",
    "SearchRequestError",
    "SearchResponseError",
    "SearchParseError",
    # Configuration
    "Settings",
    "ApiSettings",
    "StorageSettings",
    "KeyBindingSettings",
    "UISettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "shutdown_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
