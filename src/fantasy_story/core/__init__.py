"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        FantasyStoryError: Base exception for all application errors.
        StoryError: Recoverable failure of a single command.
        ErrorKind: Classification carried by every StoryError.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from fantasy_story.core.config import (
    CapacitySettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from fantasy_story.core.exceptions import (
    CapacityExceededError,
    CharacterNotFoundError,
    ConfigurationError,
    DuplicateNameError,
    ErrorKind,
    FantasyStoryError,
    InvalidTargetError,
    ItemNotFoundError,
    MalformedCommandError,
    NotFoundError,
    NotOwnedError,
    ScriptFormatError,
    StoryError,
    UnknownArchetypeError,
    UnknownCommandError,
    WrongCapabilityError,
)
from fantasy_story.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "FantasyStoryError",
    "ErrorKind",
    # Story exceptions
    "StoryError",
    "CapacityExceededError",
    "NotFoundError",
    "ItemNotFoundError",
    "CharacterNotFoundError",
    "WrongCapabilityError",
    "DuplicateNameError",
    "UnknownArchetypeError",
    "InvalidTargetError",
    "NotOwnedError",
    "UnknownCommandError",
    "MalformedCommandError",
    # Fatal exceptions
    "ScriptFormatError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "CapacitySettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
