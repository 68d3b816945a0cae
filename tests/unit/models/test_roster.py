"""Tests for the Roster."""

from __future__ import annotations

import pytest

from fantasy_story.core.exceptions import CharacterNotFoundError, DuplicateNameError
from fantasy_story.models import Character, Roster, create_character


@pytest.fixture
def roster() -> Roster:
    roster = Roster()
    roster.add(create_character("wizard", "Merlin", 80))
    roster.add(create_character("fighter", "Arthur", 120))
    return roster


class TestRoster:
    """Tests for name resolution and listing."""

    def test_add_and_get(self, roster: Roster) -> None:
        assert len(roster) == 2
        assert "Merlin" in roster
        assert roster.get("Arthur").health_points == 120

    def test_duplicate_name(self, roster: Roster) -> None:
        with pytest.raises(DuplicateNameError):
            roster.add(Character(name="Merlin", health_points=1))
        assert roster.get("Merlin").health_points == 80

    def test_get_missing(self, roster: Roster) -> None:
        with pytest.raises(CharacterNotFoundError) as exc_info:
            roster.get("Mordred")
        assert exc_info.value.message == "There is no character called Mordred"

    def test_find(self, roster: Roster) -> None:
        assert roster.find("Mordred") is None
        assert roster.find("Merlin") is roster.get("Merlin")

    def test_describe_in_creation_order(self, roster: Roster) -> None:
        assert roster.describe() == "Merlin:80 Arthur:120"
        assert [c.name for c in roster.members()] == ["Merlin", "Arthur"]

    def test_describe_empty(self) -> None:
        assert Roster().describe() == ""

    def test_subclass_kept(self, roster: Roster) -> None:
        """Archetype instances are stored as-is."""
        assert type(roster.get("Merlin")).__name__ == "Wizard"
