"""Capability facets attached to characters.

A facet grants a Character one category of action plus the bounded container
holding the items that action consumes:

- WeaponUser: ``attack`` with weapons from its Arsenal.
- PotionUser: ``drink`` potions from its Medical bag.
- SpellUser: ``cast`` spells from its Spell book.

Facets are components, composed onto a character at construction time. They
keep a name back-reference to their owner and receive the owning Character
as ``actor`` on every call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

from fantasy_story.core.exceptions import (
    CapacityExceededError,
    ItemNotFoundError,
    NotOwnedError,
    WrongCapabilityError,
)
from fantasy_story.core.logging import get_logger
from fantasy_story.models.container import BoundedContainer
from fantasy_story.models.enums import ItemKind
from fantasy_story.models.items import PhysicalItem, Potion, Spell, Weapon


if TYPE_CHECKING:
    from collections.abc import Iterator

    from fantasy_story.models.character import Character

logger = get_logger(__name__)


class CapabilityFacet(BaseModel):
    """Base class of all facets.

    Subclasses set ``kind``, ``item_type`` and ``container_label`` and narrow
    the type of ``container``.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    kind: ClassVar[ItemKind]
    item_type: ClassVar[type[PhysicalItem]]
    container_label: ClassVar[str]

    owner_name: str = Field(min_length=1, description="Owning character name")
    container: BoundedContainer[Any]

    @classmethod
    def create(cls, owner_name: str, capacity: int) -> Self:
        """Build a facet with an empty container of the given capacity."""
        container = cls.model_fields["container"].annotation(
            label=cls.container_label,
            max_capacity=capacity,
        )
        return cls(owner_name=owner_name, container=container)

    def _check_actor(self, actor: Character) -> None:
        if actor.name != self.owner_name:
            raise NotOwnedError(
                f"The {self.container_label} of {self.owner_name} "
                f"cannot be used by {actor.name}",
                details={"owner": self.owner_name, "actor": actor.name},
            )

    def obtain(self, actor: Character, item: PhysicalItem) -> None:
        """Claim ``item`` for ``actor`` and store it.

        Raises:
            WrongCapabilityError: If the item is of another kind.
            NotOwnedError: If the item already belongs to someone else.
            CapacityExceededError: If the container is full.
        """
        self._check_actor(actor)
        if not isinstance(item, self.item_type):
            raise WrongCapabilityError(
                f"{actor.name} cannot carry {item.kind} {item.name} "
                f"in their {self.container_label}",
                character=actor.name,
                capability=str(item.kind),
            )
        previous_owner = item.owner
        item.claim(actor.name)
        try:
            self.container.add(item)
        except CapacityExceededError:
            if previous_owner is None:
                item.release()
            raise
        logger.info("Item obtained", owner=actor.name, kind=str(self.kind), item=item.name)

    def use_item(self, actor: Character, target: Character, item_name: str) -> PhysicalItem:
        """Look up ``item_name`` and use it on ``target``.

        Returns:
            The item that was used.

        Raises:
            ItemNotFoundError: If the container has no such item.
        """
        self._check_actor(actor)
        item = self.container.find(item_name)
        if item is None:
            raise ItemNotFoundError(
                f"{actor.name} has no {self.kind} called {item_name}",
                name=item_name,
                details={"container": self.container_label},
            )
        item.use(actor, target, self.container)
        logger.info(
            "Item used",
            actor=actor.name,
            target=target.name,
            item=item_name,
            target_hp=target.health_points,
        )
        return item

    def show(self) -> Iterator[PhysicalItem]:
        return self.container.show()

    def describe(self) -> str:
        return self.container.describe()


class WeaponUser(CapabilityFacet):
    """Facet for characters that fight with weapons."""

    kind: ClassVar[ItemKind] = ItemKind.WEAPON
    item_type: ClassVar[type[PhysicalItem]] = Weapon
    container_label: ClassVar[str] = "Arsenal"

    container: BoundedContainer[Weapon]

    def attack(self, actor: Character, target: Character, weapon_name: str) -> Weapon:
        """Hit ``target`` with the named weapon from the arsenal."""
        return self.use_item(actor, target, weapon_name)  # type: ignore[return-value]

    def show_weapons(self) -> Iterator[Weapon]:
        return self.container.show()


class PotionUser(CapabilityFacet):
    """Facet for characters that carry potions."""

    kind: ClassVar[ItemKind] = ItemKind.POTION
    item_type: ClassVar[type[PhysicalItem]] = Potion
    container_label: ClassVar[str] = "Medical bag"

    container: BoundedContainer[Potion]

    def drink(self, actor: Character, target: Character, potion_name: str) -> Potion:
        """Give the named potion to ``target`` (usually ``actor`` itself)."""
        return self.use_item(actor, target, potion_name)  # type: ignore[return-value]

    def show_potions(self) -> Iterator[Potion]:
        return self.container.show()


class SpellUser(CapabilityFacet):
    """Facet for characters that cast spells."""

    kind: ClassVar[ItemKind] = ItemKind.SPELL
    item_type: ClassVar[type[PhysicalItem]] = Spell
    container_label: ClassVar[str] = "Spell book"

    container: BoundedContainer[Spell]

    def cast(self, actor: Character, target: Character, spell_name: str) -> Spell:
        """Cast the named spell on ``target``."""
        return self.use_item(actor, target, spell_name)  # type: ignore[return-value]

    def show_spells(self) -> Iterator[Spell]:
        return self.container.show()


FACET_TYPES: dict[ItemKind, type[CapabilityFacet]] = {
    ItemKind.WEAPON: WeaponUser,
    ItemKind.POTION: PotionUser,
    ItemKind.SPELL: SpellUser,
}


__all__ = [
    "CapabilityFacet",
    "WeaponUser",
    "PotionUser",
    "SpellUser",
    "FACET_TYPES",
]
