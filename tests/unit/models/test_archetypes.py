"""Tests for archetypes and character creation."""

from __future__ import annotations

import pytest

from fantasy_story.core.config import CapacitySettings, clear_settings_cache
from fantasy_story.core.exceptions import UnknownArchetypeError
from fantasy_story.models import (
    Archer,
    Fighter,
    ItemKind,
    Wizard,
    create_character,
    resolve_archetype,
)


class TestArchetypes:
    """Each archetype is a fixed combination of facets."""

    @pytest.mark.parametrize(
        "archetype,expected_type,kinds",
        [
            ("fighter", Fighter, {ItemKind.WEAPON, ItemKind.POTION}),
            ("archer", Archer, {ItemKind.WEAPON, ItemKind.POTION, ItemKind.SPELL}),
            ("wizard", Wizard, {ItemKind.POTION, ItemKind.SPELL}),
        ],
    )
    def test_facets(self, archetype: str, expected_type: type, kinds: set[ItemKind]) -> None:
        character = create_character(archetype, "Hero", 10)
        assert type(character) is expected_type
        assert set(character.facets) == kinds

    def test_default_capacities(self) -> None:
        archer = create_character("archer", "Legolas", 70)
        assert archer.facet(ItemKind.WEAPON).container.max_capacity == 2
        assert archer.facet(ItemKind.POTION).container.max_capacity == 3
        assert archer.facet(ItemKind.SPELL).container.max_capacity == 2

    def test_explicit_capacities(self) -> None:
        wizard = create_character(
            "wizard",
            "Merlin",
            80,
            capacities=CapacitySettings(wizard_spells=1),
        )
        assert wizard.facet(ItemKind.SPELL).container.max_capacity == 1
        assert wizard.facet(ItemKind.POTION).container.max_capacity == 10

    def test_capacities_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FANTASY_STORY_CAPACITY_FIGHTER_POTIONS", "1")
        clear_settings_cache()

        fighter = Fighter(name="Rin", health_points=100)

        assert fighter.facet(ItemKind.POTION).container.max_capacity == 1

    def test_facets_owned_by_character(self, merlin: Wizard) -> None:
        assert all(facet.owner_name == "Merlin" for facet in merlin.facets.values())


class TestResolveArchetype:
    """Tests for archetype lookup."""

    def test_known(self) -> None:
        assert resolve_archetype("fighter") is Fighter

    @pytest.mark.parametrize("name", ["paladin", "Fighter", ""])
    def test_unknown(self, name: str) -> None:
        with pytest.raises(UnknownArchetypeError):
            resolve_archetype(name)

    def test_create_unknown(self) -> None:
        with pytest.raises(UnknownArchetypeError) as exc_info:
            create_character("rogue", "Shade", 10)
        assert "rogue" in exc_info.value.message
