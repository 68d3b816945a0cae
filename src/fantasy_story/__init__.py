"""Fantasy Story - a turn-based fantasy simulation driven by command scripts.

Characters (fighters, archers, wizards) carry bounded collections of
weapons, potions and spells, and act on each other through a line-oriented
script.

Example:
    >>> from fantasy_story import ListSink, StoryEngine
    >>> sink = ListSink()
    >>> outcomes = StoryEngine().run(
    ...     ["2", "Create character fighter Rin 100", "Show characters"], sink
    ... )
    >>> sink.lines
    ['A new fighter came to town, Rin.', 'Rin:100']

Modules:
    core: Configuration, logging, and base exceptions.
    models: Characters, items, bounded containers, facets and archetypes.
    engine: Command parsing, the StoryEngine and line I/O.
"""

from __future__ import annotations

# Core
from fantasy_story.core.config import Settings, get_settings
from fantasy_story.core.exceptions import ErrorKind, FantasyStoryError, StoryError
from fantasy_story.core.logging import configure_logging, get_logger

# Engine
from fantasy_story.engine import (
    CommandOutcome,
    EngineState,
    ListSink,
    StoryEngine,
    read_script,
)

# Models
from fantasy_story.models import (
    Archer,
    BoundedContainer,
    Character,
    Fighter,
    Potion,
    Roster,
    Spell,
    Weapon,
    Wizard,
    create_character,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "FantasyStoryError",
    "StoryError",
    "ErrorKind",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Engine
    "StoryEngine",
    "EngineState",
    "CommandOutcome",
    "ListSink",
    "read_script",
    # Models
    "Character",
    "Fighter",
    "Archer",
    "Wizard",
    "create_character",
    "Weapon",
    "Potion",
    "Spell",
    "BoundedContainer",
    "Roster",
]
