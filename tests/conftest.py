"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Fantasy Story test suite.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from fantasy_story.core.config import Settings
    from fantasy_story.engine.story import StoryEngine
    from fantasy_story.models.character import Character


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset the settings cache and strip story env vars around each test."""
    from fantasy_story.core.config import clear_settings_cache

    for key in list(os.environ):
        if key.startswith("FANTASY_STORY_"):
            monkeypatch.delenv(key)

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> Settings:
    """Provide default settings.

    Returns:
        A fresh Settings instance.
    """
    from fantasy_story.core.config import Settings

    return Settings()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def rin() -> Character:
    """Create the fighter Rin with 100 HP and a capacity-3 arsenal.

    Returns:
        Fighter instance.
    """
    from fantasy_story.core.config import CapacitySettings
    from fantasy_story.models import create_character

    return create_character("fighter", "Rin", 100, capacities=CapacitySettings(fighter_weapons=3))


@pytest.fixture
def goblin() -> Character:
    """Create a plain 50 HP character with no facets.

    Returns:
        Character instance.
    """
    from fantasy_story.models import Character

    return Character(name="Goblin", health_points=50)


@pytest.fixture
def merlin() -> Character:
    """Create the wizard Merlin with 80 HP and default capacities.

    Returns:
        Wizard instance.
    """
    from fantasy_story.models import Wizard

    return Wizard(name="Merlin", health_points=80)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def engine(settings: Settings) -> StoryEngine:
    """Provide a story engine with an empty roster.

    Returns:
        StoryEngine instance.
    """
    from fantasy_story.engine.story import StoryEngine

    return StoryEngine(settings=settings)
