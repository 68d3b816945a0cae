"""Tests for capability facets."""

from __future__ import annotations

import pytest

from fantasy_story.core.exceptions import (
    CapacityExceededError,
    ItemNotFoundError,
    NotOwnedError,
    WrongCapabilityError,
)
from fantasy_story.models import (
    FACET_TYPES,
    Character,
    ItemKind,
    Potion,
    PotionUser,
    Spell,
    SpellUser,
    Weapon,
    WeaponUser,
)


@pytest.fixture
def hero() -> Character:
    character = Character(name="Hero", health_points=30)
    character.grant(WeaponUser.create(owner_name="Hero", capacity=1))
    character.grant(PotionUser.create(owner_name="Hero", capacity=2))
    character.grant(SpellUser.create(owner_name="Hero", capacity=2))
    return character


class TestCreate:
    """Tests for facet construction."""

    @pytest.mark.parametrize(
        "facet_type,label,item_type",
        [
            (WeaponUser, "Arsenal", Weapon),
            (PotionUser, "Medical bag", Potion),
            (SpellUser, "Spell book", Spell),
        ],
    )
    def test_container_label_and_type(
        self,
        facet_type: type,
        label: str,
        item_type: type,
    ) -> None:
        facet = facet_type.create(owner_name="Hero", capacity=4)
        assert facet.container.label == label
        assert facet.container.max_capacity == 4
        assert facet.item_type is item_type
        assert len(facet.container) == 0

    def test_facet_registry(self) -> None:
        assert FACET_TYPES[ItemKind.WEAPON] is WeaponUser
        assert FACET_TYPES[ItemKind.POTION] is PotionUser
        assert FACET_TYPES[ItemKind.SPELL] is SpellUser


class TestObtain:
    """Tests for storing items."""

    def test_obtain_claims_item(self, hero: Character) -> None:
        sword = Weapon(name="Sword", damage=5)
        hero.facet(ItemKind.WEAPON).obtain(hero, sword)
        assert sword.owner == "Hero"
        assert "Sword" in hero.facet(ItemKind.WEAPON).container

    def test_obtain_wrong_kind(self, hero: Character) -> None:
        """A potion does not go into an arsenal."""
        with pytest.raises(WrongCapabilityError):
            hero.facet(ItemKind.WEAPON).obtain(hero, Potion(name="Elixir", heal_value=1))

    def test_obtain_when_full_reverts_claim(self, hero: Character) -> None:
        arsenal = hero.facet(ItemKind.WEAPON)
        arsenal.obtain(hero, Weapon(name="Sword", damage=5))
        axe = Weapon(name="Axe", damage=5)

        with pytest.raises(CapacityExceededError):
            arsenal.obtain(hero, axe)

        assert axe.owner is None
        assert "Axe" not in arsenal.container

    def test_obtain_item_owned_by_other(self, hero: Character) -> None:
        sword = Weapon(name="Sword", damage=5, owner="Orc")
        with pytest.raises(NotOwnedError):
            hero.facet(ItemKind.WEAPON).obtain(hero, sword)
        assert len(hero.facet(ItemKind.WEAPON).container) == 0

    def test_obtain_by_other_actor(self, hero: Character, goblin: Character) -> None:
        """Only the owner of a facet may store items in it."""
        with pytest.raises(NotOwnedError):
            hero.facet(ItemKind.WEAPON).obtain(goblin, Weapon(name="Club", damage=1))


class TestUseItem:
    """Tests for using stored items."""

    def test_attack(self, hero: Character, goblin: Character) -> None:
        arsenal = hero.facet(ItemKind.WEAPON)
        arsenal.obtain(hero, Weapon(name="Sword", damage=10))

        used = arsenal.attack(hero, goblin, "Sword")

        assert used.name == "Sword"
        assert goblin.health_points == 40
        assert "Sword" in arsenal.container

    def test_potion_used_once(self, hero: Character) -> None:
        """A drunk potion is gone; drinking it again fails."""
        bag = hero.facet(ItemKind.POTION)
        bag.obtain(hero, Potion(name="Elixir", heal_value=5))

        bag.drink(hero, hero, "Elixir")

        assert hero.health_points == 35
        with pytest.raises(ItemNotFoundError):
            bag.drink(hero, hero, "Elixir")
        assert hero.health_points == 35

    def test_cast(self, hero: Character, goblin: Character) -> None:
        book = hero.facet(ItemKind.SPELL)
        book.obtain(hero, Spell(name="Bolt", allowed_targets={"Goblin"}, power=7))

        book.cast(hero, goblin, "Bolt")

        assert goblin.health_points == 43
        assert list(book.show_spells()) == []

    def test_missing_item_message(self, hero: Character, goblin: Character) -> None:
        with pytest.raises(ItemNotFoundError) as exc_info:
            hero.facet(ItemKind.WEAPON).use_item(hero, goblin, "Sword")
        assert exc_info.value.message == "Hero has no weapon called Sword"

    def test_use_by_other_actor(self, hero: Character, goblin: Character) -> None:
        arsenal = hero.facet(ItemKind.WEAPON)
        arsenal.obtain(hero, Weapon(name="Sword", damage=10))
        with pytest.raises(NotOwnedError):
            arsenal.use_item(goblin, hero, "Sword")
        assert hero.health_points == 30

    def test_show_sorted(self, hero: Character) -> None:
        bag = hero.facet(ItemKind.POTION)
        bag.obtain(hero, Potion(name="Tonic", heal_value=2))
        bag.obtain(hero, Potion(name="Elixir", heal_value=5))
        assert [p.name for p in bag.show_potions()] == ["Elixir", "Tonic"]
        assert bag.describe() == "Elixir:5 Tonic:2"
