"""Story models: characters, items, containers, facets and archetypes.

This package represents all story state. Only the engine mutates it, one
command at a time.
"""

from __future__ import annotations

from fantasy_story.models.archetypes import (
    ARCHETYPES,
    Archer,
    Fighter,
    Wizard,
    create_character,
    resolve_archetype,
)
from fantasy_story.models.capabilities import (
    FACET_TYPES,
    CapabilityFacet,
    PotionUser,
    SpellUser,
    WeaponUser,
)
from fantasy_story.models.character import Character
from fantasy_story.models.container import BoundedContainer
from fantasy_story.models.enums import Archetype, ItemKind, SpellEffect
from fantasy_story.models.items import ITEM_TYPES, Item, PhysicalItem, Potion, Spell, Weapon
from fantasy_story.models.roster import Roster


__all__ = [
    # Enums
    "Archetype",
    "ItemKind",
    "SpellEffect",
    # Items
    "PhysicalItem",
    "Weapon",
    "Potion",
    "Spell",
    "Item",
    "ITEM_TYPES",
    # Containers
    "BoundedContainer",
    # Facets
    "CapabilityFacet",
    "WeaponUser",
    "PotionUser",
    "SpellUser",
    "FACET_TYPES",
    # Characters
    "Character",
    "Fighter",
    "Archer",
    "Wizard",
    "ARCHETYPES",
    "resolve_archetype",
    "create_character",
    "Roster",
]
