"""Enumerations shared across the story models."""

from __future__ import annotations

from enum import StrEnum


class ItemKind(StrEnum):
    """Kinds of physical items; each has its own facet and container."""

    WEAPON = "weapon"
    POTION = "potion"
    SPELL = "spell"

    @property
    def plural(self) -> str:
        """Plural form used by ``Show`` commands ('weapons', ...)."""
        return f"{self.value}s"


class Archetype(StrEnum):
    """Playable character types."""

    FIGHTER = "fighter"
    """Weapons and potions."""

    ARCHER = "archer"
    """Weapons, potions and spells."""

    WIZARD = "wizard"
    """Potions and spells."""


class SpellEffect(StrEnum):
    """What a spell does to its target."""

    DAMAGE = "damage"
    HEAL = "heal"


__all__ = [
    "ItemKind",
    "Archetype",
    "SpellEffect",
]
