"""Playable archetypes built by composing capability facets.

- Fighter: WeaponUser + PotionUser
- Archer: WeaponUser + PotionUser + SpellUser
- Wizard: PotionUser + SpellUser
"""

from __future__ import annotations

from typing import ClassVar

from fantasy_story.core.config import CapacitySettings
from fantasy_story.core.exceptions import UnknownArchetypeError
from fantasy_story.core.logging import get_logger
from fantasy_story.models.capabilities import FACET_TYPES, CapabilityFacet
from fantasy_story.models.character import Character
from fantasy_story.models.enums import Archetype, ItemKind


logger = get_logger(__name__)


class Fighter(Character):
    """Melee character: weapons and potions."""

    archetype: ClassVar[Archetype | None] = Archetype.FIGHTER
    facet_kinds: ClassVar[tuple[ItemKind, ...]] = (ItemKind.WEAPON, ItemKind.POTION)


class Archer(Character):
    """Ranged character: weapons, potions and spells."""

    archetype: ClassVar[Archetype | None] = Archetype.ARCHER
    facet_kinds: ClassVar[tuple[ItemKind, ...]] = (
        ItemKind.WEAPON,
        ItemKind.POTION,
        ItemKind.SPELL,
    )


class Wizard(Character):
    """Caster: potions and spells."""

    archetype: ClassVar[Archetype | None] = Archetype.WIZARD
    facet_kinds: ClassVar[tuple[ItemKind, ...]] = (ItemKind.POTION, ItemKind.SPELL)


ARCHETYPES: dict[Archetype, type[Character]] = {
    Archetype.FIGHTER: Fighter,
    Archetype.ARCHER: Archer,
    Archetype.WIZARD: Wizard,
}


def resolve_archetype(name: str) -> type[Character]:
    """Map an archetype name to its Character class.

    Raises:
        UnknownArchetypeError: If no archetype has that name.
    """
    try:
        return ARCHETYPES[Archetype(name)]
    except ValueError:
        raise UnknownArchetypeError(
            f"Unknown character type {name!r}",
            details={"expected": [a.value for a in Archetype]},
        ) from None


def create_character(
    archetype: str,
    name: str,
    health_points: int,
    capacities: CapacitySettings | None = None,
) -> Character:
    """Create a character of the given archetype with empty containers.

    Args:
        archetype: 'fighter', 'archer' or 'wizard'.
        name: Character name.
        health_points: Starting health.
        capacities: Container capacities; the configured ones when omitted.

    Returns:
        The new character.

    Raises:
        UnknownArchetypeError: If the archetype is not recognized.
    """
    character_type = resolve_archetype(archetype)
    facets: dict[ItemKind, CapabilityFacet] = {}
    if capacities is not None:
        for kind in character_type.facet_kinds:
            facets[kind] = FACET_TYPES[kind].create(
                owner_name=name,
                capacity=capacities.capacity_for(archetype, kind),
            )
    character = character_type(name=name, health_points=health_points, facets=facets)
    logger.debug(
        "Character built",
        archetype=archetype,
        name=name,
        facets=[str(kind) for kind in character.facets],
    )
    return character


__all__ = [
    "Fighter",
    "Archer",
    "Wizard",
    "ARCHETYPES",
    "resolve_archetype",
    "create_character",
]
