"""Configuration management for the Fantasy Story engine.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.

Example:
    >>> from fantasy_story.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.capacities.capacity_for("fighter", "weapon")
    3

Environment Variables:
    FANTASY_STORY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    FANTASY_STORY_JSON_LOGS: Emit JSON log lines instead of console output
    FANTASY_STORY_STRICT_COMMANDS: Report unknown verbs instead of ignoring them
    FANTASY_STORY_INPUT_PATH: Default script path
    FANTASY_STORY_OUTPUT_PATH: Default output log path
    FANTASY_STORY_CAPACITY_FIGHTER_WEAPONS (and siblings): Container capacities
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fantasy_story.core.exceptions import ConfigurationError


class CapacitySettings(BaseSettings):
    """Container capacities for every archetype and facet.

    A capacity of 0 is allowed (the facet exists but can hold nothing).

    Attributes:
        fighter_weapons: Fighter arsenal size.
        fighter_potions: Fighter medical bag size.
        archer_weapons: Archer arsenal size.
        archer_potions: Archer medical bag size.
        archer_spells: Archer spell book size.
        wizard_potions: Wizard medical bag size.
        wizard_spells: Wizard spell book size.
    """

    model_config = SettingsConfigDict(
        env_prefix="FANTASY_STORY_CAPACITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    fighter_weapons: int = Field(default=3, ge=0, description="Fighter arsenal size")
    fighter_potions: int = Field(default=5, ge=0, description="Fighter medical bag size")
    archer_weapons: int = Field(default=2, ge=0, description="Archer arsenal size")
    archer_potions: int = Field(default=3, ge=0, description="Archer medical bag size")
    archer_spells: int = Field(default=2, ge=0, description="Archer spell book size")
    wizard_potions: int = Field(default=10, ge=0, description="Wizard medical bag size")
    wizard_spells: int = Field(default=10, ge=0, description="Wizard spell book size")

    def capacity_for(self, archetype: str, kind: str) -> int:
        """Look up the capacity of one archetype's facet.

        Args:
            archetype: Archetype name ('fighter', 'archer', 'wizard').
            kind: Item kind ('weapon', 'potion', 'spell').

        Returns:
            The configured maximum capacity.

        Raises:
            ConfigurationError: If no capacity is configured for the pair.
        """
        key = f"{archetype}_{kind}s"
        if key not in type(self).model_fields:
            raise ConfigurationError(
                f"No capacity configured for {archetype} {kind}s",
                config_key=key,
            )
        return getattr(self, key)


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render log lines as JSON.
        strict_commands: Report unrecognized verbs as errors.
        input_path: Default script to read.
        output_path: Default output log to write.
        capacities: Container capacity settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="FANTASY_STORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Fantasy Story",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    strict_commands: bool = Field(
        default=True,
        description="Report unrecognized command verbs instead of ignoring them",
    )
    input_path: Path = Field(
        default=Path("input.txt"),
        description="Default script path",
    )
    output_path: Path = Field(
        default=Path("output.txt"),
        description="Default output log path",
    )

    capacities: CapacitySettings = Field(default_factory=CapacitySettings)

    @model_validator(mode="after")
    def validate_distinct_paths(self) -> "Settings":
        """Ensure the output log never overwrites the input script.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If both paths point at the same file.
        """
        if self.input_path.resolve() == self.output_path.resolve():
            raise ConfigurationError(
                f"input_path and output_path are both {self.input_path}",
                config_key="output_path",
            )
        return self


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
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "CapacitySettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
