"""Tests for BoundedContainer."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fantasy_story.core.exceptions import CapacityExceededError, ItemNotFoundError
from fantasy_story.models import BoundedContainer, Weapon


def _weapon(name: str, damage: int = 1) -> Weapon:
    return Weapon(name=name, damage=damage)


@pytest.fixture
def arsenal() -> BoundedContainer[Weapon]:
    return BoundedContainer[Weapon](label="Arsenal", max_capacity=3)


class TestAdd:
    """Tests for add and the capacity invariant."""

    def test_add_and_len(self, arsenal: BoundedContainer[Weapon]) -> None:
        arsenal.add(_weapon("Sword"))
        arsenal.add(_weapon("Axe"))
        assert len(arsenal) == 2
        assert "Sword" in arsenal

    def test_add_beyond_capacity(self, arsenal: BoundedContainer[Weapon]) -> None:
        """A fourth weapon does not fit in a capacity-3 arsenal."""
        for name in ("Sword", "Axe", "Bow"):
            arsenal.add(_weapon(name))

        with pytest.raises(CapacityExceededError) as exc_info:
            arsenal.add(_weapon("Spear"))

        assert len(arsenal) == 3
        assert "Spear" not in arsenal
        assert exc_info.value.details["capacity"] == 3
        assert exc_info.value.details["container"] == "Arsenal"

    def test_overwrite_same_name(self, arsenal: BoundedContainer[Weapon]) -> None:
        """Re-adding a name replaces the stored item."""
        arsenal.add(_weapon("Sword", 5))
        replacement = _weapon("Sword", 9)
        arsenal.add(replacement)

        assert len(arsenal) == 1
        assert arsenal.find("Sword") is replacement

    def test_overwrite_when_full_fails(self) -> None:
        """A full container refuses even a same-name replacement."""
        box = BoundedContainer[Weapon](max_capacity=1)
        original = _weapon("Sword", 5)
        box.add(original)

        with pytest.raises(CapacityExceededError):
            box.add(_weapon("Sword", 9))

        assert box.find("Sword") is original

    def test_zero_capacity(self) -> None:
        box = BoundedContainer[Weapon](max_capacity=0)
        assert box.is_full
        with pytest.raises(CapacityExceededError):
            box.add(_weapon("Sword"))

    def test_negative_capacity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BoundedContainer[Weapon](max_capacity=-1)

    def test_overfull_construction_rejected(self) -> None:
        """Cannot build a container already above its capacity."""
        with pytest.raises(ValidationError):
            BoundedContainer[Weapon](
                max_capacity=1,
                elements={"A": _weapon("A"), "B": _weapon("B")},
            )

    @pytest.mark.parametrize(
        "operations",
        [
            ["+A", "+B", "+C", "+D", "-A", "+D", "+E"],
            ["+A", "-A", "-A", "+A", "+A", "+B", "+C", "+D"],
            ["-X", "+A", "+B", "+C", "-B", "+B", "+B", "+F", "+G"],
        ],
    )
    def test_capacity_invariant_holds(
        self,
        arsenal: BoundedContainer[Weapon],
        operations: list[str],
    ) -> None:
        """After any add/remove sequence, size never exceeds capacity."""
        for operation in operations:
            action, name = operation[0], operation[1:]
            before = dict(arsenal.elements)
            try:
                if action == "+":
                    arsenal.add(_weapon(name))
                else:
                    arsenal.remove(name)
            except (CapacityExceededError, ItemNotFoundError):
                assert arsenal.elements == before
            assert len(arsenal) <= arsenal.max_capacity


class TestRemoveAndFind:
    """Tests for lookup consistency."""

    def test_find_returns_added_item(self, arsenal: BoundedContainer[Weapon]) -> None:
        sword = _weapon("Sword")
        arsenal.add(sword)
        assert arsenal.find("Sword") is sword
        assert arsenal.find(sword) is sword

    def test_find_missing_is_none(self, arsenal: BoundedContainer[Weapon]) -> None:
        assert arsenal.find("Sword") is None

    def test_remove_then_find(self, arsenal: BoundedContainer[Weapon]) -> None:
        """After removal, lookups report absence, not a stale value."""
        sword = _weapon("Sword")
        arsenal.add(sword)

        removed = arsenal.remove("Sword")

        assert removed is sword
        assert arsenal.find("Sword") is None
        assert "Sword" not in arsenal

    def test_remove_by_item(self, arsenal: BoundedContainer[Weapon]) -> None:
        sword = _weapon("Sword")
        arsenal.add(sword)
        arsenal.remove(sword)
        assert len(arsenal) == 0

    def test_remove_from_empty(self, arsenal: BoundedContainer[Weapon]) -> None:
        with pytest.raises(ItemNotFoundError):
            arsenal.remove("Sword")

    def test_remove_missing(self, arsenal: BoundedContainer[Weapon]) -> None:
        arsenal.add(_weapon("Axe"))
        with pytest.raises(ItemNotFoundError) as exc_info:
            arsenal.remove("Sword")
        assert exc_info.value.details["name"] == "Sword"
        assert len(arsenal) == 1


class TestShow:
    """Tests for enumeration."""

    def test_show_is_sorted_by_name(self, arsenal: BoundedContainer[Weapon]) -> None:
        arsenal.add(_weapon("Sword", 10))
        arsenal.add(_weapon("Axe", 7))
        assert [str(w) for w in arsenal.show()] == ["Axe:7", "Sword:10"]
        assert arsenal.describe() == "Axe:7 Sword:10"

    def test_show_is_idempotent(self, arsenal: BoundedContainer[Weapon]) -> None:
        """Two shows without mutation produce identical output."""
        arsenal.add(_weapon("Sword"))
        arsenal.add(_weapon("Bow"))
        assert list(arsenal.show()) == list(arsenal.show())
        assert arsenal.describe() == arsenal.describe()

    def test_show_is_restartable(self, arsenal: BoundedContainer[Weapon]) -> None:
        """Each call to show starts a new iteration."""
        arsenal.add(_weapon("Sword"))
        first = arsenal.show()
        assert list(first) == [arsenal.find("Sword")]
        assert list(first) == []
        assert len(list(arsenal.show())) == 1

    def test_mutation_during_iteration(self, arsenal: BoundedContainer[Weapon]) -> None:
        """Removing while iterating is safe."""
        arsenal.add(_weapon("Sword"))
        arsenal.add(_weapon("Axe"))
        for weapon in arsenal.show():
            arsenal.remove(weapon)
        assert len(arsenal) == 0

    def test_empty_describe(self, arsenal: BoundedContainer[Weapon]) -> None:
        assert arsenal.describe() == ""
