"""Physical items: weapons, potions and spells.

Items form a closed union discriminated by ``kind``. They share one use
protocol:

1. ``check_use`` validates the use condition (ownership, spell targets).
2. ``apply`` performs the variant-specific effect on the target.
3. ``after_use`` removes a single-use item from its container.

Ownership is a name back-reference to a Character in the roster; an item
never holds the Character object itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from fantasy_story.core.exceptions import InvalidTargetError, NotOwnedError
from fantasy_story.models.enums import ItemKind, SpellEffect


if TYPE_CHECKING:
    from fantasy_story.models.character import Character
    from fantasy_story.models.container import BoundedContainer


class PhysicalItem(BaseModel, ABC):
    """Base class of every item a character can carry.

    Attributes:
        kind: Discriminator selecting the variant.
        name: Item name, unique within the container holding it.
        usable_once: Whether the item disappears after a successful use.
        owner: Name of the owning character, if any.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    kind: ItemKind
    name: str = Field(min_length=1, frozen=True, description="Item name")
    usable_once: bool = Field(default=False, description="Removed after one use")
    owner: str | None = Field(default=None, description="Owning character name")

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    def claim(self, owner_name: str) -> None:
        """Make ``owner_name`` the owner of this item.

        Raises:
            NotOwnedError: If another character already owns the item.
        """
        if self.owner is not None and self.owner != owner_name:
            raise NotOwnedError(
                f"{self.name} already belongs to {self.owner}",
                details={"item": self.name, "owner": self.owner, "claimant": owner_name},
            )
        self.owner = owner_name

    def release(self) -> None:
        self.owner = None

    # -------------------------------------------------------------------------
    # Use protocol
    # -------------------------------------------------------------------------

    def use(
        self,
        actor: Character,
        target: Character,
        container: BoundedContainer | None = None,
    ) -> None:
        """Use the item on ``target`` on behalf of ``actor``.

        Args:
            actor: The character using the item. Must be its owner.
            target: The character affected by the item.
            container: The container holding the item; a single-use item
                is removed from it afterwards.

        Raises:
            NotOwnedError: If ``actor`` does not own the item.
            InvalidTargetError: If the item may not affect ``target``.
        """
        self.check_use(actor, target)
        self.apply(actor, target)
        self.after_use(container)

    def check_use(self, actor: Character, target: Character) -> None:
        if self.owner != actor.name:
            raise NotOwnedError(
                f"{actor.name} does not own {self.name}",
                details={"item": self.name, "owner": self.owner, "actor": actor.name},
            )

    @abstractmethod
    def apply(self, actor: Character, target: Character) -> None:
        """Apply the variant-specific effect."""

    def after_use(self, container: BoundedContainer | None) -> None:
        if not self.usable_once:
            return
        if container is not None:
            container.remove(self.name)
        self.release()

    @staticmethod
    def give_damage_to(target: Character, damage: int) -> None:
        target.take_damage(damage)

    @staticmethod
    def give_heal_to(target: Character, heal_value: int) -> None:
        target.heal(heal_value)


class Weapon(PhysicalItem):
    """A reusable (by default) damage dealer."""

    kind: Literal[ItemKind.WEAPON] = ItemKind.WEAPON
    damage: int = Field(ge=0, description="Damage dealt per use")

    def apply(self, actor: Character, target: Character) -> None:
        self.give_damage_to(target, self.damage)

    def __str__(self) -> str:
        return f"{self.name}:{self.damage}"


class Potion(PhysicalItem):
    """A single-use (by default) healing draught."""

    kind: Literal[ItemKind.POTION] = ItemKind.POTION
    usable_once: bool = True
    heal_value: int = Field(ge=0, description="Health restored per use")

    def apply(self, actor: Character, target: Character) -> None:
        self.give_heal_to(target, self.heal_value)

    def __str__(self) -> str:
        return f"{self.name}:{self.heal_value}"


class Spell(PhysicalItem):
    """A single-use (by default) spell restricted to named targets.

    Attributes:
        allowed_targets: Names of the characters the spell may affect.
        effect: Whether the spell damages or heals.
        power: Amount of damage or healing.
    """

    kind: Literal[ItemKind.SPELL] = ItemKind.SPELL
    usable_once: bool = True
    allowed_targets: set[str] = Field(default_factory=set)
    effect: SpellEffect = SpellEffect.DAMAGE
    power: int = Field(default=0, ge=0)

    def check_use(self, actor: Character, target: Character) -> None:
        super().check_use(actor, target)
        if target.name not in self.allowed_targets:
            raise InvalidTargetError(
                f"{self.name} cannot target {target.name}",
                details={"spell": self.name, "target": target.name},
            )

    def apply(self, actor: Character, target: Character) -> None:
        if self.effect == SpellEffect.HEAL:
            self.give_heal_to(target, self.power)
        else:
            self.give_damage_to(target, self.power)

    def __str__(self) -> str:
        return f"{self.name}:{len(self.allowed_targets)}"


Item = Annotated[Weapon | Potion | Spell, Field(discriminator="kind")]
"""Any concrete item, discriminated by ``kind``."""

ITEM_TYPES: dict[ItemKind, type[PhysicalItem]] = {
    ItemKind.WEAPON: Weapon,
    ItemKind.POTION: Potion,
    ItemKind.SPELL: Spell,
}


__all__ = [
    "PhysicalItem",
    "Weapon",
    "Potion",
    "Spell",
    "Item",
    "ITEM_TYPES",
]
