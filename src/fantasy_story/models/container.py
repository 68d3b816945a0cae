"""Capacity-bounded, name-keyed item containers.

Every facet stores its items in a BoundedContainer: weapons in an Arsenal,
potions in a Medical bag, spells in a Spell book.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fantasy_story.core.exceptions import CapacityExceededError, ItemNotFoundError
from fantasy_story.core.logging import get_logger
from fantasy_story.models.items import PhysicalItem


logger = get_logger(__name__)

ItemT = TypeVar("ItemT", bound=PhysicalItem)


class BoundedContainer(BaseModel, Generic[ItemT]):
    """A name-keyed collection holding at most ``max_capacity`` items.

    Invariant: ``len(self) <= max_capacity`` at all times. An ``add`` that
    would break it raises CapacityExceededError and leaves the container
    untouched. Adding an item under a name already present replaces the
    stored item (last write wins).

    Attributes:
        label: Display name used in errors and logs.
        max_capacity: Fixed maximum number of items.
        elements: Stored items keyed by name.

    Example:
        >>> arsenal = BoundedContainer[Weapon](label="Arsenal", max_capacity=3)
        >>> arsenal.add(Weapon(name="Sword", damage=10))
        >>> arsenal.find("Sword")
        Weapon(kind=<ItemKind.WEAPON: 'weapon'>, name='Sword', ...)
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    label: str = Field(default="Container", description="Display name")
    max_capacity: int = Field(ge=0, frozen=True, description="Maximum number of items")
    elements: dict[str, ItemT] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_capacity(self) -> Self:
        if len(self.elements) > self.max_capacity:
            raise ValueError(
                f"{self.label} holds {len(self.elements)} items "
                f"but max_capacity is {self.max_capacity}"
            )
        return self

    def __len__(self) -> int:
        return len(self.elements)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, PhysicalItem):
            key = key.name
        return key in self.elements

    @property
    def is_full(self) -> bool:
        return len(self.elements) >= self.max_capacity

    def add(self, item: ItemT) -> None:
        """Insert ``item`` under its name.

        Raises:
            CapacityExceededError: If the container is already full.
        """
        if self.is_full:
            raise CapacityExceededError(
                f"{self.label} is full",
                container=self.label,
                capacity=self.max_capacity,
                details={"item": item.name},
            )
        self.elements[item.name] = item
        logger.debug("Item stored", container=self.label, item=item.name, size=len(self))

    def remove(self, key: ItemT | str) -> ItemT:
        """Remove an item by instance or name and return it.

        Raises:
            ItemNotFoundError: If the container is empty or lacks the name.
        """
        name = key.name if isinstance(key, PhysicalItem) else key
        if not self.elements or name not in self.elements:
            raise ItemNotFoundError(
                f"{name} is not in the {self.label}",
                name=name,
                details={"container": self.label},
            )
        item = self.elements.pop(name)
        logger.debug("Item removed", container=self.label, item=name, size=len(self))
        return item

    def find(self, key: ItemT | str) -> ItemT | None:
        """Return the stored item with the given name, or None."""
        name = key.name if isinstance(key, PhysicalItem) else key
        return self.elements.get(name)

    def show(self) -> Iterator[ItemT]:
        """Iterate over the current contents ordered by item name.

        Each call returns a fresh iterator over a snapshot, so mutating the
        container while iterating is safe.
        """
        snapshot = sorted(self.elements.values(), key=lambda item: item.name)
        yield from snapshot

    def describe(self) -> str:
        """Render the contents as one space-separated line."""
        return " ".join(str(item) for item in self.show())


__all__ = [
    "BoundedContainer",
    "ItemT",
]
