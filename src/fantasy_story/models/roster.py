"""The roster: the arena owning every character in a story.

Items and facets refer to characters by name; the roster is the only place
a name is resolved to a Character object.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

from fantasy_story.core.exceptions import CharacterNotFoundError, DuplicateNameError
from fantasy_story.models.character import Character


class Roster(BaseModel):
    """Name-keyed collection of every character in the story."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    characters: dict[str, SerializeAsAny[Character]] = Field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.characters)

    def __contains__(self, name: object) -> bool:
        return name in self.characters

    def members(self) -> list[Character]:
        """Every character, in creation order."""
        return list(self.characters.values())

    def add(self, character: Character) -> None:
        """Register a new character.

        Raises:
            DuplicateNameError: If the name is already taken.
        """
        if character.name in self.characters:
            raise DuplicateNameError(
                f"A character named {character.name} already exists",
                details={"name": character.name},
            )
        self.characters[character.name] = character

    def get(self, name: str) -> Character:
        """Resolve a name.

        Raises:
            CharacterNotFoundError: If nobody has that name.
        """
        character = self.characters.get(name)
        if character is None:
            raise CharacterNotFoundError(f"There is no character called {name}", name=name)
        return character

    def find(self, name: str) -> Character | None:
        return self.characters.get(name)

    def describe(self) -> str:
        """Render every character as ``name:hp``, in creation order."""
        return " ".join(str(character) for character in self.members())


__all__ = [
    "Roster",
]
