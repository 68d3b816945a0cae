"""The Character entity, root of every actor in a story.

A Character is a name and a signed health value plus an explicit set of
capability facets. Health is never clamped: damage may drive it below zero
and healing has no ceiling.
"""

from __future__ import annotations

from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, model_validator

from fantasy_story.core.config import get_settings
from fantasy_story.core.exceptions import WrongCapabilityError
from fantasy_story.models.capabilities import FACET_TYPES, CapabilityFacet
from fantasy_story.models.enums import Archetype, ItemKind
from fantasy_story.models.items import PhysicalItem, Potion, Spell, Weapon


class Character(BaseModel):
    """A named actor with health and zero or more capability facets.

    Subclasses (archetypes) declare ``facet_kinds``; any declared facet not
    passed in explicitly is created empty, with the capacity configured for
    the archetype.

    Attributes:
        name: Unique, immutable character name.
        health_points: Current health, may be negative.
        facets: Capability facets keyed by the item kind they handle.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    archetype: ClassVar[Archetype | None] = None
    facet_kinds: ClassVar[tuple[ItemKind, ...]] = ()

    name: str = Field(min_length=1, frozen=True, description="Character name")
    health_points: int = Field(description="Current health points")
    facets: dict[ItemKind, SerializeAsAny[CapabilityFacet]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def grant_archetype_facets(self) -> Self:
        """Create the facets the archetype declares but that were not given."""
        missing = [kind for kind in self.facet_kinds if kind not in self.facets]
        if missing and self.archetype is not None:
            capacities = get_settings().capacities
            for kind in missing:
                self.facets[kind] = FACET_TYPES[kind].create(
                    owner_name=self.name,
                    capacity=capacities.capacity_for(self.archetype, kind),
                )
        return self

    def __str__(self) -> str:
        return f"{self.name}:{self.health_points}"

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def take_damage(self, amount: int) -> None:
        self.health_points -= amount

    def heal(self, amount: int) -> None:
        self.health_points += amount

    # -------------------------------------------------------------------------
    # Facets
    # -------------------------------------------------------------------------

    def has_capability(self, kind: ItemKind) -> bool:
        return kind in self.facets

    def facet(self, kind: ItemKind) -> CapabilityFacet:
        """Return the facet handling ``kind``.

        Raises:
            WrongCapabilityError: If the character has no such facet.
        """
        try:
            return self.facets[kind]
        except KeyError:
            raise WrongCapabilityError(
                f"{self.name} cannot use {ItemKind(kind).plural}",
                character=self.name,
                capability=str(kind),
            ) from None

    def grant(self, facet: CapabilityFacet) -> None:
        """Attach ``facet``, replacing any facet of the same kind."""
        if facet.owner_name != self.name:
            raise ValueError(f"Facet belongs to {facet.owner_name}, not {self.name}")
        self.facets[facet.kind] = facet

    def obtain(self, item: PhysicalItem) -> None:
        """Store ``item`` in the facet matching its kind."""
        self.facet(item.kind).obtain(self, item)

    def attack(self, target: Character, weapon_name: str) -> Weapon:
        return self.facet(ItemKind.WEAPON).use_item(self, target, weapon_name)  # type: ignore[return-value]

    def drink(self, target: Character, potion_name: str) -> Potion:
        return self.facet(ItemKind.POTION).use_item(self, target, potion_name)  # type: ignore[return-value]

    def cast(self, target: Character, spell_name: str) -> Spell:
        return self.facet(ItemKind.SPELL).use_item(self, target, spell_name)  # type: ignore[return-value]

    def show(self, kind: ItemKind) -> str:
        """Describe the contents of the facet handling ``kind``."""
        return self.facet(kind).describe()


__all__ = [
    "Character",
]
